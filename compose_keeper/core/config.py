import os
import tempfile
from pathlib import Path

DOCKER_COMPOSE_FILE_NAME = 'docker-compose.yml'
INSTANCES_FILE_NAME = 'dockerComposeInstances.json'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_variables(value: str) -> list[tuple[str, str]]:
    variables = []
    for pair in value.split(','):
        if not pair.strip():
            continue
        name, _, variable_value = pair.partition('=')
        variables += [(name.strip(), variable_value)]
    return variables


def default_compose_file(base_directory: Path) -> Path:
    """Resources folder first, `docker/` folder second, project root otherwise."""
    for candidate in (
        base_directory / 'src' / 'main' / 'resources' / DOCKER_COMPOSE_FILE_NAME,
        base_directory / 'docker' / DOCKER_COMPOSE_FILE_NAME,
    ):
        if candidate.exists():
            return candidate
    return base_directory / DOCKER_COMPOSE_FILE_NAME


class Config:
    def __init__(self):
        base_directory = Path.cwd()
        self.service_name: str = os.environ.get('COMPOSE_KEEPER_SERVICE_NAME', base_directory.name.lower())
        self.service_version: str = os.environ.get('COMPOSE_KEEPER_SERVICE_VERSION', 'latest')
        self.compose_file: Path = Path(os.environ.get(
            'COMPOSE_KEEPER_COMPOSE_FILE',
            default_compose_file(base_directory)
        ))
        self.no_build: bool = _env_flag('COMPOSE_KEEPER_NO_BUILD', False)
        self.remove_containers_on_shutdown: bool = _env_flag('COMPOSE_KEEPER_REMOVE_CONTAINERS_ON_SHUTDOWN', True)
        self.remove_network_on_shutdown: bool = _env_flag('COMPOSE_KEEPER_REMOVE_NETWORK_ON_SHUTDOWN', True)
        self.remove_temp_file_on_shutdown: bool = _env_flag('COMPOSE_KEEPER_REMOVE_TEMP_FILE_ON_SHUTDOWN', True)
        self.container_start_timeout = int(os.environ.get('COMPOSE_KEEPER_CONTAINER_START_TIMEOUT_SECONDS', 500))
        self.suppress_color_formatting: bool = _env_flag('COMPOSE_KEEPER_SUPPRESS_COLOR', False)
        self.variables: list[tuple[str, str]] = _parse_variables(os.environ.get('COMPOSE_KEEPER_VARIABLES', ''))
        self.instances_file: Path = Path(os.environ.get(
            'COMPOSE_KEEPER_INSTANCES_FILE',
            Path(tempfile.gettempdir()) / INSTANCES_FILE_NAME
        ))
        self.docker_compose_bin: str = os.environ.get('DOCKER_COMPOSE_BIN', 'docker-compose')
        self.docker_bin: str = os.environ.get('DOCKER_BIN', 'docker')
