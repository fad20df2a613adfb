import os
from typing import Iterator

from .base import KVStore
from .command import Remove, Set
from .errors import KeyNotFound
from .log import CommandLog
from .replay import replay


class KvStore(KVStore):
    """Key-value store persisted as an append-only log of commands.

    The mapping is rebuilt from the log once on open and then kept in step
    with every append, so reads never touch the file. Each mutation is
    appended (and flushed) before the mapping changes; if the append fails,
    the mapping is left as it was.
    """

    def __init__(self, *args, **kwargs):
        self._sync = kwargs.pop("sync", True)
        super().__init__(*args, **kwargs)

    @classmethod
    def open(cls, path: str | os.PathLike, **kwargs) -> "KvStore":
        return cls(path, **kwargs)

    def setup(self):
        self._log = CommandLog.open(self._path, sync=self._sync)
        try:
            self._store = replay(self._log)
        except Exception:
            self._log.close()
            raise

    def __repr__(self) -> str:
        return f"({len(self._store)})<{type(self).__name__}@{self._log.path}>"

    @property
    def path(self):
        return self._log.path

    def reload(self):
        self._store = replay(self._log)

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str):
        self._log.append(Set(key, value))
        self._store[key] = value

    def remove(self, key: str):
        if key not in self._store:
            raise KeyNotFound(key)
        self._log.append(Remove(key))
        del self._store[key]

    def keys(self) -> Iterator[str]:
        return iter(self._store)

    def close(self):
        self._log.close()


class ReplayOnReadKvStore(KvStore):
    """A ``KvStore`` that replays the log before every read.

    This picks up records appended to the file behind the store's back, at
    the price of a full replay (proportional to the log length, not the
    number of keys) on each ``get``, ``remove`` and key listing.
    """

    def get(self, key: str) -> str | None:
        self.reload()
        return super().get(key)

    def remove(self, key: str):
        self.reload()
        super().remove(key)

    def keys(self) -> Iterator[str]:
        self.reload()
        return super().keys()
