"""Exceptions raised by the sink."""


class SinkError(Exception):
    """Base class for rotation and archival failures."""


class RotationError(SinkError):
    """Raised when the numbered slots could not be shifted.

    The live file has already been truncated when this is raised.
    """

    def __init__(self, message: str, src: str | None = None, dst: str | None = None):
        super().__init__(message)
        self.src = src
        self.dst = dst


class ArchiveError(SinkError):
    """Raised when aging or evicting compressed archives fails."""

    def __init__(self, message: str, src: str | None = None, dst: str | None = None):
        super().__init__(message)
        self.src = src
        self.dst = dst
