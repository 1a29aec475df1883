import json
import tempfile
from pathlib import Path

import vedro

from compose_keeper import RunningInstanceInfo
from config import Config


def _remove(path: Path):
    path.unlink(missing_ok=True)


def instances_file() -> Path:
    Config.TMP_PATH.mkdir(parents=True, exist_ok=True)
    directory = Path(tempfile.mkdtemp(prefix='instances-', dir=Config.TMP_PATH))
    path = directory / 'dockerComposeInstances.json'
    vedro.defer(_remove, path)
    return path


def instances_persisted(path: Path, *instances: RunningInstanceInfo) -> Path:
    with open(path, 'w') as file:
        json.dump([instance.as_json() for instance in instances], file)
    return path


def raw_instances_file(path: Path, content: str) -> Path:
    with open(path, 'w') as file:
        file.write(content)
    return path
