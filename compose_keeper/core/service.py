from pathlib import Path
from typing import Callable
from typing import Sequence
from uuid import uuid4

from rich.console import Console
from rich.table import Table
from rich.text import Text

from compose_keeper.core.compose_data_types import ImageSource
from compose_keeper.core.compose_data_types import PortInfo
from compose_keeper.core.compose_data_types import RunningInstanceInfo
from compose_keeper.core.compose_data_types import ServiceInfo
from compose_keeper.core.compose_file import ComposeFileProcessor
from compose_keeper.core.compose_file import SKIP_BUILD_ARG
from compose_keeper.core.compose_file import SKIP_PULL_ARG
from compose_keeper.core.compose_file import contains_arg
from compose_keeper.core.compose_interface import ComposeShellInterface
from compose_keeper.core.config import Config
from compose_keeper.core.instances_keeper import RunningInstancesKeeper
from compose_keeper.core.utils.compose_files import delete_compose_file
from compose_keeper.core.utils.compose_files import read_compose_file
from compose_keeper.core.utils.compose_files import save_compose_file
from compose_keeper.core.utils.ports import DYNAMIC_PORT
from compose_keeper.errors.manifest import ManifestFormatError
from compose_keeper.errors.up import ComposeStopError
from compose_keeper.errors.up import ComposeUpError
from compose_keeper.helpers.jobs_result import JobResult
from compose_keeper.helpers.jobs_result import OperationError
from compose_keeper.output.console import make_console
from compose_keeper.output.styles import Style

DEFAULT_NETWORK = 'default'


def get_new_instance_id() -> str:
    return str(uuid4())[:8]


class ComposeKeeperService:
    def __init__(self,
                 config: Callable[[], Config] = Config,
                 compose_interface: ComposeShellInterface | None = None,
                 instances_keeper: RunningInstancesKeeper | None = None,
                 build_image_task: Callable[[], object] | None = None,
                 console: Console | None = None):
        cfg = config()
        self.service_name = cfg.service_name
        self.service_version = cfg.service_version
        self.compose_file = cfg.compose_file
        self.no_build = cfg.no_build
        self.variables = cfg.variables
        self.remove_containers_on_shutdown = cfg.remove_containers_on_shutdown
        self.remove_network_on_shutdown = cfg.remove_network_on_shutdown
        self.remove_temp_file_on_shutdown = cfg.remove_temp_file_on_shutdown

        self.console = console if console is not None else make_console(cfg.suppress_color_formatting)

        self._compose_interface = compose_interface
        if self._compose_interface is None:
            self._compose_interface = ComposeShellInterface(
                docker_compose_bin=cfg.docker_compose_bin,
                docker_bin=cfg.docker_bin,
                timeout=cfg.container_start_timeout,
                console=self.console,
            )

        self._instances_keeper = instances_keeper
        if self._instances_keeper is None:
            self._instances_keeper = RunningInstancesKeeper(cfg.instances_file)

        self._build_image_task = build_image_task
        self._compose_file_processor = ComposeFileProcessor(
            service_name=self.service_name,
            service_version=self.service_version,
            compose_file=self.compose_file,
            no_build=self.no_build,
        )

    @property
    def instances_keeper(self) -> RunningInstancesKeeper:
        return self._instances_keeper

    def build_image(self, args: Sequence[str] | None = None) -> bool:
        if self.no_build or contains_arg(SKIP_BUILD_ARG, args):
            self.console.print(Text('Skipping Docker image build', style=Style.info))
            return False

        if self._build_image_task is None:
            self.console.print(Text(
                "***Warning: The 'build_image_task' has not been defined. "
                "Please configure it to have Docker images built.***",
                style=Style.warning
            ))
            return False

        self.console.print(Text('Building Docker image for ', style=Style.info)
                           .append(Text(self.service_name, style=Style.mark)))
        self._build_image_task()
        return True

    def pull_images(self, args: Sequence[str] | None, services: Sequence[ServiceInfo]) -> None:
        if contains_arg(SKIP_PULL_ARG, args):
            self.console.print(Text('Skipping Docker Repository Pull for all images.', style=Style.info))
            return

        for service in services:
            if service.image_source != ImageSource.DEFINED:
                self.console.print(Text(f'Skipping Pull of image: {service.image_name}', style=Style.info))
                continue

            self.console.print(Text('Pulling Docker image: ', style=Style.info)
                               .append(Text(service.image_name, style=Style.mark)))
            pull_result = self._compose_interface.docker_pull(service.image_name)
            if pull_result != JobResult.GOOD:
                self.console.print(Text(f"Can't pull image {service.image_name}, "
                                        f"local image will be used if present:\n{pull_result}",
                                        style=Style.bad))

    def _bound_ports(self, instance_id: str, compose_path: str, services: Sequence[ServiceInfo]) -> list[PortInfo]:
        ports = []
        for service in services:
            for port in service.ports:
                if port.host_port != DYNAMIC_PORT:
                    ports += [port]
                    continue
                host_port = self._compose_interface.compose_port(
                    instance_id, compose_path, service.service_name, port.container_port
                )
                ports += [PortInfo(host_port or DYNAMIC_PORT, port.container_port, port.is_debug)]
        return ports

    def up(self, args: Sequence[str] | None = None) -> RunningInstanceInfo:
        _ = self._instances_keeper.load()
        self.build_image(args)

        document = read_compose_file(self.compose_file, self.variables)
        services = self._compose_file_processor.process_custom_tags(document, args)
        compose_path = save_compose_file(document)

        self.pull_images(args, services)

        instance_id = get_new_instance_id()
        self.console.print(Text('Starting instance ', style=Style.info)
                           .append(Text(instance_id, style=Style.mark))
                           .append(Text(f' of {self.compose_file}', style=Style.regular)))
        up_result = self._compose_interface.compose_up(instance_id, compose_path)
        if up_result != JobResult.GOOD:
            delete_compose_file(compose_path)
            raise ComposeUpError(f"Can't up instance {instance_id} of {self.compose_file}:\n{up_result}")

        instance = RunningInstanceInfo(
            instance_name=instance_id,
            compose_service_name=self.service_name,
            compose_file_path=compose_path,
            ports=self._bound_ports(instance_id, compose_path, services),
        )
        self._instances_keeper.record_instance(instance)
        _ = self._instances_keeper.save()

        self.print_instances([instance])
        return instance

    def _cleanup_instance(self, instance: RunningInstanceInfo) -> None:
        try:
            document = read_compose_file(instance.compose_file_path)
        except ManifestFormatError:
            document = None

        if self.remove_containers_on_shutdown:
            _ = self._compose_interface.compose_rm(instance.instance_name, instance.compose_file_path)
            for volume in document.named_volumes() if document else []:
                _ = self._compose_interface.docker_volume_rm(f'{instance.instance_name}_{volume}')

        if self.remove_network_on_shutdown:
            networks = document.internal_network_names() if document else []
            for network in [*networks, DEFAULT_NETWORK]:
                _ = self._compose_interface.docker_network_rm(f'{instance.instance_name}_{network}')

        if self.remove_temp_file_on_shutdown:
            delete_compose_file(instance.compose_file_path)

    def stop_instance(self, instance: RunningInstanceInfo) -> None:
        if not Path(instance.compose_file_path).exists():
            self.console.print(Text(
                f'Compose file {instance.compose_file_path} of instance {instance.instance_name} '
                f'no longer exists, forgetting the instance',
                style=Style.suspicious
            ))
            self._instances_keeper.remove_instance(instance.instance_name)
            return

        self.console.print(Text('Stopping instance ', style=Style.info)
                           .append(Text(instance.instance_name, style=Style.mark)))
        stop_result: JobResult | OperationError = self._compose_interface.compose_stop(
            instance.instance_name, instance.compose_file_path
        )
        if stop_result != JobResult.GOOD:
            raise ComposeStopError(f"Can't stop instance {instance.instance_name}:\n{stop_result}")

        self._cleanup_instance(instance)
        self._instances_keeper.remove_instance(instance.instance_name)

    def stop(self, args: Sequence[str] | None = None) -> list[str]:
        """Stop instances named in `args`, or every instance of this service when none is named."""
        instances = list({
            instance.instance_name: instance
            for arg in args or []
            if (instance := self._instances_keeper.matching_instance([arg])) is not None
        }.values())
        if not instances:
            service_instance_ids = self._instances_keeper.instance_ids_for_service(self.service_name)
            instances = [
                instance for instance in self._instances_keeper.instances()
                if instance.instance_name in service_instance_ids
            ]

        if not instances:
            self.console.print(Text(f'No running instances found for {self.service_name}', style=Style.suspicious))
            return []

        stopped = []
        try:
            for instance in instances:
                self.stop_instance(instance)
                stopped += [instance.instance_name]
        finally:
            _ = self._instances_keeper.save()
        return stopped

    def restart(self, args: Sequence[str] | None = None) -> RunningInstanceInfo:
        self.stop(args)
        return self.up(args)

    def print_instances(self, instances: Sequence[RunningInstanceInfo] | None = None) -> None:
        if instances is None:
            instances = self._instances_keeper.instances()

        if not instances:
            self.console.print(Text('There are no running instances', style=Style.suspicious))
            return

        table = Table(title='Running instances')
        table.add_column('Instance', style=Style.mark)
        table.add_column('Service')
        table.add_column('Host Port', style=Style.good)
        table.add_column('Container Port')
        table.add_column('Debug')
        table.add_column('Compose File', style=Style.context)
        for instance in instances:
            if not instance.ports:
                table.add_row(instance.instance_name, instance.compose_service_name, '', '', '',
                              instance.compose_file_path)
            for port in instance.ports:
                table.add_row(instance.instance_name, instance.compose_service_name, port.host_port,
                              port.container_port, 'yes' if port.is_debug else '', instance.compose_file_path)
        self.console.print(table)
