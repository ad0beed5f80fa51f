"""
Errors that reach the caller. Transport and protocol failures never do:
they are absorbed into ServiceStatus by the probers and the pipeline.
"""


class ScanInputError(ValueError):
    """Request rejected before any probing started."""


class InvalidTargetError(ScanInputError):
    pass


class TargetNotAllowedError(ScanInputError):
    pass
