import tempfile
from pathlib import Path

import vedro


class Config(vedro.Config):
    TMP_PATH = Path(tempfile.gettempdir()) / 'compose-keeper-tests'
    SERVICE_NAME = 'testservice'
    SERVICE_VERSION = '2.0.0'
