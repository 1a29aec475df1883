import os
import tempfile
from pathlib import Path
from typing import Iterable

from compose_keeper.core.compose_document import ComposeDocument
from compose_keeper.core.utils.variables import process_variable_substitution
from compose_keeper.core.yaml_document import load_document

UPDATED_COMPOSE_PREFIX = 'compose-updated'
UPDATED_COMPOSE_SUFFIX = '.yml'


def read_compose_file(filename: str | Path, variables: Iterable[tuple[str, str]] = ()) -> ComposeDocument:
    with open(filename) as f:
        yaml_string = f.read()
    return ComposeDocument(load_document(process_variable_substitution(yaml_string, variables)))


def save_compose_file(document: ComposeDocument) -> str:
    fd, path = tempfile.mkstemp(prefix=UPDATED_COMPOSE_PREFIX, suffix=UPDATED_COMPOSE_SUFFIX)
    with os.fdopen(fd, 'w') as f:
        f.write(document.dump())
    return path


def delete_compose_file(filename: str | Path) -> bool:
    try:
        Path(filename).unlink()
    except OSError:
        return False
    return True


def compose_file_directory(filename: str | Path) -> Path:
    return Path(filename).absolute().parent
