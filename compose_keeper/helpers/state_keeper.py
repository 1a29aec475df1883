from enum import Enum
from enum import auto
from typing import TypeVar

T = TypeVar('T')


class InstancesState(Enum):
    UNLOADED = auto()
    LOADED_EMPTY = auto()
    LOADED_POPULATED = auto()


class StateKeeper:
    def __init__(self, state: T | InstancesState = InstancesState.UNLOADED):
        self._state: T | InstancesState = state

    @property
    def state(self) -> T | InstancesState:
        return self._state

    def not_in_state(self, state: T | InstancesState) -> bool:
        return self._state != state

    def update_state(self, new_state: T | InstancesState) -> None:
        self._state = new_state
