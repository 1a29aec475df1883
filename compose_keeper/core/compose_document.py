from compose_keeper.core.yaml_document import MappingNode
from compose_keeper.core.yaml_document import Node
from compose_keeper.core.yaml_document import dump_document

SERVICES_KEY = 'services'
NETWORKS_KEY = 'networks'
VOLUMES_KEY = 'volumes'
EXTERNAL_KEY = 'external'


class ComposeDocument:
    """
    Parsed compose manifest.

    Version 1 manifests are a flat `service -> fields` mapping, version 2+ manifests keep
    the same mapping under `services`. The version is detected once here, everything
    downstream works with `services()` only.
    """

    def __init__(self, root: Node):
        self._root = root.as_mapping()
        self.version = 2 if SERVICES_KEY in self._root else 1

    @property
    def root(self) -> MappingNode:
        return self._root

    def services(self) -> MappingNode:
        if self.version == 1:
            return self._root
        services = self._root.get(SERVICES_KEY)
        if services is None or services.to_native() is None:
            return MappingNode({}, SERVICES_KEY)
        return services.as_mapping()

    def replace_services(self, services: MappingNode) -> None:
        if self.version == 1:
            self._root = MappingNode({}, self._root.path)
            for name, service in services.items():
                self._root.put(name, service)
        else:
            self._root.put(SERVICES_KEY, services)

    def _top_level_section(self, key: str) -> MappingNode | None:
        if self.version == 1:
            return None
        section = self._root.get(key)
        if section is None or section.to_native() is None:
            return None
        return section.as_mapping()

    def internal_network_names(self) -> list[str]:
        networks = self._top_level_section(NETWORKS_KEY)
        if networks is None:
            return []
        return [
            name for name, network in networks.items()
            if not (isinstance(network, MappingNode) and EXTERNAL_KEY in network)
        ]

    def named_volumes(self) -> list[str]:
        volumes = self._top_level_section(VOLUMES_KEY)
        if volumes is None:
            return []
        return volumes.keys()

    def dump(self) -> str:
        return dump_document(self._root)
