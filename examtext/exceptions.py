class ProcessingError(Exception):
    """Base class for exam loading failures."""


class UnsupportedFileError(ProcessingError):
    """Raised when a file extension is unsupported."""


class ParseError(ProcessingError):
    """Raised when a caller insists on at least one parsed question."""
