from pathlib import Path

from compose_keeper.helpers.jobs_result import OperationError


class PersistenceError(OperationError):
    def __init__(self, path: str | Path, reason: Exception):
        super().__init__(f'{type(reason).__name__}: {reason}', command=f'access {path}')
        self.path = path
        self.reason = reason
