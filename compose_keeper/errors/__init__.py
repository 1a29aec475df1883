from compose_keeper.errors.manifest import InvalidPortRangeError
from compose_keeper.errors.manifest import ManifestFormatError
from compose_keeper.errors.manifest import PortAllocationConflict
from compose_keeper.errors.persistence import PersistenceError
from compose_keeper.errors.up import ComposeStopError
from compose_keeper.errors.up import ComposeUpError

__all__ = (
    'ManifestFormatError', 'InvalidPortRangeError', 'PortAllocationConflict',
    'PersistenceError', 'ComposeUpError', 'ComposeStopError',
)
