from copy import deepcopy
from pathlib import Path
from typing import Sequence

from compose_keeper.core.compose_data_types import ServiceInfo
from compose_keeper.core.compose_document import ComposeDocument
from compose_keeper.core.utils.compose_files import compose_file_directory
from compose_keeper.core.utils.ports import StaticPortsRegistry
from compose_keeper.core.utils.ports import resolve_service_ports
from compose_keeper.core.utils.service_fields import IMAGE_KEY
from compose_keeper.core.utils.service_fields import check_unsupported_fields
from compose_keeper.core.utils.service_fields import qualify_env_files
from compose_keeper.core.utils.service_fields import qualify_volumes
from compose_keeper.core.utils.service_fields import resolve_image
from compose_keeper.errors.manifest import ManifestFormatError

SKIP_PULL_ARG = '-skipPull'
SKIP_BUILD_ARG = '-skipBuild'
USE_STATIC_PORTS_ARG = '-useStaticPorts'


def contains_arg(arg: str, args: Sequence[str] | None) -> bool:
    return args is not None and arg in args


class ComposeFileProcessor:
    def __init__(self,
                 service_name: str,
                 service_version: str,
                 compose_file: str | Path,
                 no_build: bool = False):
        self.service_name = service_name
        self.service_version = service_version
        self.compose_file = compose_file
        self.no_build = no_build

    def process_custom_tags(self, document: ComposeDocument, args: Sequence[str] | None = None) -> list[ServiceInfo]:
        """
        Rewrite the manifest so it can be launched from a temporary location.

        Custom image tags are resolved, env files and relative volumes get fully qualified
        paths and ports are expanded (and pinned with `-useStaticPorts`). The document is
        updated only when every service was processed, a failing service leaves it untouched.
        """
        services = document.services()
        for service_name, service in services.items():
            check_unsupported_fields(service_name, service.as_mapping())

        updated_services = deepcopy(services)
        skip_pull = contains_arg(SKIP_PULL_ARG, args)
        use_static = contains_arg(USE_STATIC_PORTS_ARG, args)
        static_ports = StaticPortsRegistry()
        compose_dir = compose_file_directory(self.compose_file)

        services_info = []
        for service_name, service in updated_services.items():
            service = service.as_mapping()
            image = service.get(IMAGE_KEY)
            if image is None:
                raise ManifestFormatError(f"Service '{service_name}' should define '{IMAGE_KEY}:' field")

            updated_image_name, image_source = resolve_image(
                service_name,
                image.as_string(),
                local_service=self.service_name,
                service_version=self.service_version,
                no_build=self.no_build,
                skip_pull=skip_pull,
            )

            qualify_env_files(service, compose_dir)
            qualify_volumes(service_name, service, compose_dir)
            service.put(IMAGE_KEY, updated_image_name)

            ports_info, _ = resolve_service_ports(service_name, service, use_static, static_ports)

            services_info += [ServiceInfo(service_name, updated_image_name, image_source, ports_info)]

        document.replace_services(updated_services)
        return services_info
