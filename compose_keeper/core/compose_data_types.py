from dataclasses import dataclass
from dataclasses import field
from enum import Enum


class ImageSource(str, Enum):
    BUILD = 'build'
    DEFINED = 'defined'
    CACHE = 'cache'


@dataclass(frozen=True)
class PortInfo:
    host_port: str
    container_port: str
    is_debug: bool = False

    def as_json(self) -> dict:
        return {
            'host_port': self.host_port,
            'container_port': self.container_port,
            'is_debug': self.is_debug,
        }

    @classmethod
    def from_json(cls, data: dict) -> 'PortInfo':
        return cls(
            host_port=str(data['host_port']),
            container_port=str(data['container_port']),
            is_debug=bool(data.get('is_debug', False)),
        )


@dataclass(frozen=True)
class ServiceInfo:
    service_name: str
    image_name: str
    image_source: ImageSource
    ports: list[PortInfo] = field(default_factory=list)


def _text_field(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' should be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class RunningInstanceInfo:
    instance_name: str
    compose_service_name: str
    compose_file_path: str
    ports: list[PortInfo] = field(default_factory=list)

    def as_json(self) -> dict:
        return {
            'instance_name': self.instance_name,
            'compose_service_name': self.compose_service_name,
            'compose_file_path': self.compose_file_path,
            'ports': [port.as_json() for port in self.ports],
        }

    @classmethod
    def from_json(cls, data: dict) -> 'RunningInstanceInfo':
        return cls(
            instance_name=_text_field(data, 'instance_name'),
            compose_service_name=_text_field(data, 'compose_service_name'),
            compose_file_path=_text_field(data, 'compose_file_path'),
            ports=[PortInfo.from_json(port) for port in data.get('ports', [])],
        )

    def __repr__(self):
        return (f'{type(self).__name__}'
                f'(instance_name="{self.instance_name}", '
                f'compose_service_name="{self.compose_service_name}", '
                f'compose_file_path="{self.compose_file_path}", '
                f'ports={self.ports})')
