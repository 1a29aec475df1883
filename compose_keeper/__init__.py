from compose_keeper.core.compose_data_types import ImageSource
from compose_keeper.core.compose_data_types import PortInfo
from compose_keeper.core.compose_data_types import RunningInstanceInfo
from compose_keeper.core.compose_data_types import ServiceInfo
from compose_keeper.core.compose_file import ComposeFileProcessor
from compose_keeper.core.compose_file import SKIP_BUILD_ARG
from compose_keeper.core.compose_file import SKIP_PULL_ARG
from compose_keeper.core.compose_file import USE_STATIC_PORTS_ARG
from compose_keeper.core.config import Config
from compose_keeper.core.instances_keeper import RunningInstancesKeeper
from compose_keeper.core.service import ComposeKeeperService
from compose_keeper.core.utils.compose_files import read_compose_file
from compose_keeper.core.utils.variables import process_variable_substitution
from compose_keeper.version import get_version

__version__ = get_version()
__all__ = (
    'ComposeKeeperService', 'ComposeFileProcessor', 'RunningInstancesKeeper', 'Config',
    'ServiceInfo', 'PortInfo', 'RunningInstanceInfo', 'ImageSource',
    'SKIP_PULL_ARG', 'SKIP_BUILD_ARG', 'USE_STATIC_PORTS_ARG',
    'read_compose_file', 'process_variable_substitution',
)
