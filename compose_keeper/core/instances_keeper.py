import json
from pathlib import Path
from typing import Iterable

from compose_keeper.core.compose_data_types import RunningInstanceInfo
from compose_keeper.errors.persistence import PersistenceError
from compose_keeper.helpers.jobs_result import JobResult
from compose_keeper.helpers.state_keeper import InstancesState
from compose_keeper.helpers.state_keeper import StateKeeper


class RunningInstancesKeeper:
    """
    Instances started by any invocation of the tool.

    The list is shared by every project through one file in the temp directory. It is read
    on first touch only and written as a whole on `save()`; an empty list removes the file.
    Persistence is best effort: `load()` and `save()` report problems through the returned
    result and never raise.
    """

    def __init__(self, instances_file: str | Path):
        self._instances_file = Path(instances_file)
        self._instances: list[RunningInstanceInfo] = []
        self._state = StateKeeper(InstancesState.UNLOADED)

    @property
    def instances_file(self) -> Path:
        return self._instances_file

    @property
    def state(self) -> InstancesState:
        return self._state.state

    def _update_state(self) -> None:
        self._state.update_state(
            InstancesState.LOADED_POPULATED if self._instances else InstancesState.LOADED_EMPTY
        )

    def _read_instances(self) -> list[RunningInstanceInfo]:
        if not self._instances_file.exists():
            return []
        with open(self._instances_file) as instances_file:
            stored = json.load(instances_file)
        if not isinstance(stored, list):
            raise ValueError(f'Expected list of instances, got {type(stored).__name__}')
        return [RunningInstanceInfo.from_json(instance) for instance in stored]

    def load(self) -> JobResult | PersistenceError:
        if self._state.not_in_state(InstancesState.UNLOADED):
            return JobResult.GOOD

        try:
            self._instances = self._read_instances() + self._instances
        except (OSError, ValueError, KeyError, TypeError) as e:
            return PersistenceError(self._instances_file, e)
        finally:
            self._update_state()
        return JobResult.GOOD

    def save(self) -> JobResult | PersistenceError:
        try:
            if self._instances:
                with open(self._instances_file, 'w') as instances_file:
                    json.dump([instance.as_json() for instance in self._instances], instances_file)
            else:
                self._instances_file.unlink(missing_ok=True)
        except (OSError, TypeError, ValueError) as e:
            return PersistenceError(self._instances_file, e)
        return JobResult.GOOD

    def instances(self) -> list[RunningInstanceInfo]:
        _ = self.load()
        return list(self._instances)

    def record_instance(self, instance: RunningInstanceInfo) -> None:
        _ = self.load()
        self._instances += [instance]
        self._update_state()

    def remove_instance(self, instance_id: str) -> RunningInstanceInfo | None:
        _ = self.load()
        for instance in self._instances:
            if instance.instance_name == instance_id:
                self._instances.remove(instance)
                self._update_state()
                return instance
        return None

    def instance_ids_for_service(self, service_name: str) -> list[str]:
        return [
            instance.instance_name
            for instance in self.instances()
            if instance.compose_service_name.lower() == service_name.lower()
        ]

    def all_instance_ids(self) -> list[str]:
        return [instance.instance_name for instance in self.instances()]

    def matching_instance(self, candidate_ids: Iterable[str] | None) -> RunningInstanceInfo | None:
        if candidate_ids is None:
            return None
        candidates = set(candidate_ids)
        for instance in self.instances():
            if instance.instance_name in candidates:
                return instance
        return None
