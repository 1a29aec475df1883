class ManifestFormatError(ValueError):
    ...


class InvalidPortRangeError(ManifestFormatError):
    ...


class PortAllocationConflict(UserWarning):
    ...
