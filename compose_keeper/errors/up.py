class ComposeUpError(Exception):
    ...


class ComposeStopError(Exception):
    ...
