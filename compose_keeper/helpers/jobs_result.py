from enum import Enum
from enum import auto


class JobResult(Enum):
    GOOD = auto()
    BAD = auto()


class OperationError:
    def __init__(self, log: str, command: str | None = None):
        self.log = log
        self.command = command

    def __eq__(self, other):
        return other == JobResult.BAD

    def __repr__(self):
        if self.command:
            return f'Operation `{self.command}` finished unsuccessful:\n{self.log}'
        return f'Operation finished unsuccessful:\n{self.log}'
