from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Iterator


class KVStore(metaclass=ABCMeta):
    def __init__(self, path: str | Path, **kwargs):
        self._path = Path(path)
        self.setup(**kwargs)

    @abstractmethod
    def setup(self, **kwargs):
        ...

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str):
        ...

    @abstractmethod
    def remove(self, key: str):
        ...

    @abstractmethod
    def keys(self) -> Iterator[str]:
        ...

    def close(self):
        """Release any resources held by the store"""

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str):
        return self.set(key, value)

    def __delitem__(self, key: str):
        return self.remove(key)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.keys()))

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
