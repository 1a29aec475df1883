import re
from typing import Iterable
from warnings import warn

from compose_keeper.core.compose_data_types import PortInfo
from compose_keeper.core.yaml_document import MappingNode
from compose_keeper.core.yaml_document import Node
from compose_keeper.core.yaml_document import SequenceNode
from compose_keeper.errors.manifest import InvalidPortRangeError
from compose_keeper.errors.manifest import ManifestFormatError
from compose_keeper.errors.manifest import PortAllocationConflict

PORTS_KEY = 'ports'
ENVIRONMENT_KEY = 'environment'
ENVIRONMENT_DEBUG_KEY = 'JAVA_TOOL_OPTIONS'
DEBUG_ADDRESS_OPTION = 'address'

PORT_RANGE_CHAR = '-'
DYNAMIC_PORT = '0'

DYNAMIC_PORT_MAPPING = re.compile(DYNAMIC_PORT + r':(\d+)(\D*)')
BARE_PORT_MAPPING = re.compile(r'(\d+)(\D*)')


def _debug_options(environment: Node) -> list[str]:
    if isinstance(environment, MappingNode):
        return [
            option
            for key, value in environment.items() if key == ENVIRONMENT_DEBUG_KEY and value.to_native() is not None
            for option in value.as_string().split(',')
        ]
    if isinstance(environment, SequenceNode):
        return [
            option
            for key, _, value in (entry.partition('=') for entry in environment.as_string_list())
            if key == ENVIRONMENT_DEBUG_KEY
            for option in value.split(',')
        ]
    return []


def get_debug_port(service: MappingNode) -> str | None:
    """
    Remote debug port from `JAVA_TOOL_OPTIONS`, e.g.
    `-agentlib:jdwp=transport=dt_socket,server=y,suspend=n,address=*:5005` -> `5005`.
    """
    environment = service.get(ENVIRONMENT_KEY)
    if environment is None:
        return None

    for option in _debug_options(environment):
        key, _, address = option.strip().partition('=')
        if key == DEBUG_ADDRESS_OPTION and address:
            return address.rsplit(':', 1)[-1]
    return None


def _split_protocol(port: str) -> tuple[str, str]:
    port, slash, protocol = port.partition('/')
    return port, f'{slash}{protocol}'


def _parse_range(port_range: str, entry: str) -> tuple[int, int]:
    start, _, end = port_range.partition(PORT_RANGE_CHAR)
    try:
        start_port = int(start)
        end_port = int(end) if end else start_port
    except ValueError:
        raise InvalidPortRangeError(f'Invalid port range mapping specified for {entry}') from None
    if end_port < start_port:
        raise InvalidPortRangeError(f'Invalid port range mapping specified for {entry}')
    return start_port, end_port


def expand_port_range(entry: str) -> list[str]:
    ports, protocol = _split_protocol(re.sub(r'^0:', '', entry))
    port_parts = ports.split(':')

    host_ip = ''
    if len(port_parts) == 3:
        host_ip = f'{port_parts.pop(0)}:'
    if len(port_parts) not in (1, 2):
        raise InvalidPortRangeError(f'Invalid port range mapping specified for {entry}')

    start_l, end_l = _parse_range(port_parts[0], entry)
    range_l = end_l - start_l

    if len(port_parts) == 1:
        return [f'{host_ip}{start_l + i}{protocol}' for i in range(range_l + 1)]

    is_range_r = PORT_RANGE_CHAR in port_parts[1]
    start_r, end_r = _parse_range(port_parts[1], entry)
    range_r = end_r - start_r

    if not is_range_r:
        return [f'{host_ip}{start_l + i}:{start_r}{protocol}' for i in range(range_l + 1)]

    if range_l != range_r:
        raise InvalidPortRangeError(f'Invalid port range mapping specified for {entry}')

    return [f'{host_ip}{start_l + i}:{start_r + i}{protocol}' for i in range(range_r + 1)]


def expand_port_ranges(ports: Iterable[str]) -> list[str]:
    needs_expansion = []
    no_expansion = []
    for port in ports:
        if PORT_RANGE_CHAR in port:
            needs_expansion += [port]
        else:
            no_expansion += [port]

    expanded_ports = [
        expanded
        for port in needs_expansion
        for expanded in expand_port_range(port)
    ]
    return expanded_ports + no_expansion


def get_static_port_mappings(ports: Iterable[str]) -> list[str]:
    static_ports = []
    for port in ports:
        if match := (DYNAMIC_PORT_MAPPING.fullmatch(port) or BARE_PORT_MAPPING.fullmatch(port)):
            container_port, protocol = match.groups()
            static_ports += [f'{container_port}:{container_port}{protocol}']
        else:
            static_ports += [port]
    return static_ports


def _host_and_container(port_mapping: str) -> tuple[str, str]:
    port_parts = port_mapping.split(':')
    if len(port_parts) == 1:
        return DYNAMIC_PORT, port_parts[0]
    return port_parts[-2], port_parts[-1]


def parse_port_info(port_mapping: str, debug_port: str | None) -> PortInfo:
    host_port, container_port = _host_and_container(port_mapping)
    is_debug = debug_port is not None and debug_port in (
        _split_protocol(host_port)[0], _split_protocol(container_port)[0]
    )
    return PortInfo(host_port, container_port, is_debug)


class StaticPortsRegistry:
    """Host ports pinned so far across the services of one manifest."""

    def __init__(self):
        self._used_ports: set[str] = set()

    def claim(self, service_name: str, port_info: PortInfo, port_mapping: str) -> tuple[PortInfo, str]:
        if port_info.host_port == DYNAMIC_PORT:
            return port_info, port_mapping

        container_port, protocol = _split_protocol(port_info.container_port)
        used_port = f'{port_info.host_port}{protocol}'
        if used_port not in self._used_ports:
            self._used_ports.add(used_port)
            return port_info, port_mapping

        warn(
            f"Could not define a static host port '{port_info.host_port}' for service '{service_name}' "
            f"because port '{port_info.host_port}' was already in use. "
            f"A dynamically assigned port will be used instead.",
            PortAllocationConflict,
        )
        return (
            PortInfo(DYNAMIC_PORT, port_info.container_port, port_info.is_debug),
            f'{DYNAMIC_PORT}:{port_info.container_port}',
        )


def resolve_service_ports(service_name: str,
                          service: MappingNode,
                          use_static: bool,
                          static_ports: StaticPortsRegistry) -> tuple[list[PortInfo], list[str]]:
    """
    Expand port ranges, pin static ports if requested and write the result back
    into the service `ports` field.
    """
    ports = service.get(PORTS_KEY)
    if ports is None:
        return [], []

    for port in ports.as_sequence():
        if isinstance(port, MappingNode):
            raise ManifestFormatError(
                f"Long port syntax `{port.path}` of service '{service_name}' is not supported, "
                f"use 'HOST:CONTAINER' strings"
            )

    debug_port = get_debug_port(service)
    port_mappings = expand_port_ranges(ports.as_string_list())
    if use_static:
        port_mappings = get_static_port_mappings(port_mappings)

    ports_info = []
    updated_port_mappings = []
    for port_mapping in port_mappings:
        port_info = parse_port_info(port_mapping, debug_port)
        if use_static:
            port_info, port_mapping = static_ports.claim(service_name, port_info, port_mapping)
        ports_info += [port_info]
        updated_port_mappings += [port_mapping]

    service.put(PORTS_KEY, updated_port_mappings)
    return ports_info, updated_port_mappings
