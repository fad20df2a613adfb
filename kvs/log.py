import logging
import os
from pathlib import Path
from typing import Iterator

from .command import Command, decode, encode
from .errors import IoError, MalformedRecord

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "log.txt"


def resolve_path(path: str | os.PathLike) -> Path:
    path = Path(path).expanduser()
    if path.is_dir():
        path = path / LOG_FILE_NAME
    return path


class CommandLog:
    """An append-only sequence of command records.

    Records are written one per line through a buffered text writer, which is
    flushed (and by default fsynced) before ``append`` returns. Reads go
    through a separate handle, so iterating never moves the append position.
    """

    def __init__(self, path: Path, sync: bool = True) -> None:
        self._path = path
        self._sync = sync
        try:
            self._file = path.open("a+", encoding="utf-8", newline="\n")
        except OSError as e:
            raise IoError(f"Cannot open log {path}: {e}") from e
        logger.debug("Opened log %s", path)

    @classmethod
    def open(cls, path: str | os.PathLike, sync: bool = True) -> "CommandLog":
        return cls(resolve_path(path), sync=sync)

    def __repr__(self) -> str:
        return f"<CommandLog@{self._path}>"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def append(self, record: Command) -> None:
        line = encode(record) + "\n"
        if self._file.closed:
            raise IoError(f"Log {self._path} is closed")
        try:
            self._file.write(line)
            self._file.flush()
            if self._sync:
                os.fsync(self._file.fileno())
        except OSError as e:
            raise IoError(f"Cannot append to log {self._path}: {e}") from e

    def read_all(self) -> Iterator[Command]:
        """Yield every record from the start of the log to its current end.

        Blank lines are skipped. A line that does not decode, including one
        that is not valid UTF-8, raises ``MalformedRecord``.
        """
        try:
            with self._path.open("rb") as f:
                for lineno, raw in enumerate(f, start=1):
                    try:
                        line = raw.decode("utf-8")
                    except UnicodeDecodeError as e:
                        text = raw.decode("utf-8", errors="replace").strip()
                        raise MalformedRecord(text, "invalid UTF-8", lineno) from e
                    if not line.strip():
                        continue
                    yield decode(line, lineno=lineno)
        except OSError as e:
            raise IoError(f"Cannot read log {self._path}: {e}") from e

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "CommandLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
