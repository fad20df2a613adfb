class KvsError(Exception):
    """Base class for every error raised by kvs."""


class IoError(KvsError):
    """Raised when the log file cannot be opened, written or read."""


class SerializationError(KvsError):
    """Raised when a command record cannot be encoded or decoded."""


class MalformedRecord(SerializationError):
    """Raised when a log line is not a valid command record.

    Attributes:
        line: The offending text, without its line terminator.
        lineno: 1-based line number in the log, when known.
    """

    def __init__(self, line: str, reason: str, lineno: int | None = None) -> None:
        self.line = line
        self.lineno = lineno
        where = f" at line {lineno}" if lineno is not None else ""
        super().__init__(f"Malformed record{where}: {reason}")


class KeyNotFound(KvsError, KeyError):
    """Raised by remove when the key is not in the store."""

    def __str__(self) -> str:
        return "Key not found"


class GeneralError(KvsError):
    """Something went wrong."""
