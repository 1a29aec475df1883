"""
Tree model of a parsed compose manifest.

Nodes are one of three kinds (mapping, sequence, scalar). Every node knows its dotted
path inside the document, so a wrong shape can be reported like
`services.web.ports[2] should be a string, got mapping`.
"""
from typing import Any
from typing import Iterator

import yaml

from compose_keeper.errors.manifest import ManifestFormatError

ROOT_PATH = '<root>'


def _child_path(path: str, key: str | int) -> str:
    if isinstance(key, int):
        return f'{path}[{key}]'
    if path == ROOT_PATH:
        return str(key)
    return f'{path}.{key}'


class Node:
    kind = 'node'

    def __init__(self, path: str = ROOT_PATH):
        self.path = path

    def _wrong_kind(self, expected: str) -> ManifestFormatError:
        return ManifestFormatError(f'`{self.path}` should be a {expected}, got {self.kind}')

    def as_mapping(self) -> 'MappingNode':
        raise self._wrong_kind(MappingNode.kind)

    def as_sequence(self) -> 'SequenceNode':
        raise self._wrong_kind(SequenceNode.kind)

    def as_string(self) -> str:
        raise self._wrong_kind('string')

    def as_string_list(self) -> list[str]:
        raise self._wrong_kind('string or list of strings')

    def to_native(self) -> Any:
        raise NotImplementedError()


class ScalarNode(Node):
    kind = 'scalar'

    def __init__(self, value: Any, path: str = ROOT_PATH):
        super().__init__(path)
        self.value = value

    def as_string(self) -> str:
        if self.value is None:
            raise self._wrong_kind('string')
        if isinstance(self.value, bool):
            return 'true' if self.value else 'false'
        return str(self.value)

    def as_string_list(self) -> list[str]:
        return [self.as_string()]

    def to_native(self) -> Any:
        return self.value

    def __eq__(self, other):
        if isinstance(other, ScalarNode):
            return self.value == other.value
        return self.value == other

    def __repr__(self):
        return f'ScalarNode({self.value!r})'


class SequenceNode(Node):
    kind = 'sequence'

    def __init__(self, items: list[Node], path: str = ROOT_PATH):
        super().__init__(path)
        self.items = items

    def as_sequence(self) -> 'SequenceNode':
        return self

    def as_string_list(self) -> list[str]:
        return [item.as_string() for item in self.items]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_native(self) -> list:
        return [item.to_native() for item in self.items]

    def __repr__(self):
        return f'SequenceNode({self.items!r})'


class MappingNode(Node):
    kind = 'mapping'

    def __init__(self, entries: dict[str, Node], path: str = ROOT_PATH):
        super().__init__(path)
        self.entries = entries

    def as_mapping(self) -> 'MappingNode':
        return self

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return list(self.entries)

    def items(self) -> Iterator[tuple[str, Node]]:
        return iter(self.entries.items())

    def get(self, key: str) -> Node | None:
        return self.entries.get(key)

    def put(self, key: str, value: Any) -> None:
        """Set `key` to a node or to a native value, which is wrapped into a node."""
        path = _child_path(self.path, key)
        if isinstance(value, Node):
            self.entries[key] = from_native(value.to_native(), path)
        else:
            self.entries[key] = from_native(value, path)

    def to_native(self) -> dict:
        return {key: node.to_native() for key, node in self.entries.items()}

    def __repr__(self):
        return f'MappingNode({self.entries!r})'


def from_native(value: Any, path: str = ROOT_PATH) -> Node:
    if isinstance(value, dict):
        return MappingNode({
            str(key): from_native(item, _child_path(path, str(key)))
            for key, item in value.items()
        }, path)
    if isinstance(value, (list, tuple)):
        return SequenceNode([
            from_native(item, _child_path(path, index))
            for index, item in enumerate(value)
        ], path)
    return ScalarNode(value, path)


def load_document(text: str) -> Node:
    try:
        return from_native(yaml.load(text, Loader=yaml.FullLoader))
    except yaml.YAMLError as e:
        raise ManifestFormatError(f'Compose file is not a valid YAML document:\n{e}') from None


def dump_document(node: Node) -> str:
    return yaml.dump(node.to_native(), sort_keys=False)
