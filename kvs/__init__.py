__version__ = "0.1.0"

from .command import Command, Remove, Set, decode, encode
from .errors import (
    GeneralError,
    IoError,
    KeyNotFound,
    KvsError,
    MalformedRecord,
    SerializationError,
)
from .base import KVStore
from .log import LOG_FILE_NAME, CommandLog
from .replay import replay
from .store import KvStore, ReplayOnReadKvStore

__all__ = [
    "Command",
    "CommandLog",
    "GeneralError",
    "IoError",
    "KVStore",
    "KeyNotFound",
    "KvStore",
    "KvsError",
    "LOG_FILE_NAME",
    "MalformedRecord",
    "Remove",
    "ReplayOnReadKvStore",
    "SerializationError",
    "Set",
    "decode",
    "encode",
    "replay",
]
