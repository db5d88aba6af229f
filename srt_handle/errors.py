"""Errors raised by srt_handle tools."""


class SrtHandleError(Exception):
    """Base error for srt_handle."""


class FileReadError(SrtHandleError):
    """Raised when an input or config file cannot be read."""

    def __init__(self, path, message="Failed to read file"):
        self.path = path
        super().__init__(f"{message}: {path}")


class FileWriteError(SrtHandleError):
    """Raised when an output file cannot be written."""

    def __init__(self, path, message="Failed to write file"):
        self.path = path
        super().__init__(f"{message}: {path}")


class SlotManifestError(SrtHandleError):
    """Raised when a batch slot manifest is malformed."""
