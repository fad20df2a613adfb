import logging
from typing import Iterable, Protocol

from .command import Command, Remove, Set
from .errors import GeneralError

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    def read_all(self) -> Iterable[Command]:
        ...


def apply(mapping: dict[str, str], record: Command) -> None:
    if isinstance(record, Set):
        mapping[record.key] = record.value
    elif isinstance(record, Remove):
        # A remove of a key that is already gone is stale history, not an error.
        mapping.pop(record.key, None)
    else:
        raise GeneralError(f"Cannot apply {record!r}")


def replay(log: RecordSource) -> dict[str, str]:
    """Apply every record in ``log`` in order to a fresh mapping.

    Any error while reading aborts the replay; a partial mapping is never
    returned. Runs in time proportional to the length of the log, not the
    number of live keys.
    """
    mapping: dict[str, str] = {}
    count = 0
    for record in log.read_all():
        apply(mapping, record)
        count += 1
    logger.debug("Replayed %d records into %d keys from %r", count, len(mapping), log)
    return mapping
