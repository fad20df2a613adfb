import json
from dataclasses import dataclass
from typing import Union

from .errors import MalformedRecord, SerializationError


@dataclass(frozen=True)
class Set:
    key: str
    value: str


@dataclass(frozen=True)
class Remove:
    key: str


Command = Union[Set, Remove]

# Variant tag -> (record class, field names)
_VARIANTS = {
    "Set": (Set, ("key", "value")),
    "Remove": (Remove, ("key",)),
}


def encode(record: Command) -> str:
    """Encode a record as a single line of JSON, without the trailing newline.

    Control characters (newlines included) are escaped by the encoder, so a
    record never spans more than one line.
    """
    if isinstance(record, Set):
        fields = {"key": record.key, "value": record.value}
    elif isinstance(record, Remove):
        fields = {"key": record.key}
    else:
        raise SerializationError(f"Not a command record: {record!r}")
    for name, value in fields.items():
        if not isinstance(value, str):
            raise SerializationError(
                f"Expected str for {name}, got {type(value).__name__}"
            )
    text = json.dumps(
        {type(record).__name__: fields}, ensure_ascii=False, separators=(",", ":")
    )
    # The log is UTF-8; lone surrogates have no encoding there.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationError(f"Cannot encode {record!r} as UTF-8: {e}") from e
    return text


def decode(text: str, lineno: int | None = None) -> Command:
    line = text.strip()
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRecord(line, f"invalid JSON ({e.msg})", lineno) from e
    except RecursionError as e:
        raise MalformedRecord(line, "nested too deeply", lineno) from e

    if not isinstance(obj, dict) or len(obj) != 1:
        raise MalformedRecord(line, "expected exactly one variant tag", lineno)
    [(tag, fields)] = obj.items()
    if tag not in _VARIANTS:
        raise MalformedRecord(line, f"unknown variant {tag!r}", lineno)

    cls, names = _VARIANTS[tag]
    if not isinstance(fields, dict) or set(fields) != set(names):
        raise MalformedRecord(
            line, f"{tag} takes fields {', '.join(names)}", lineno
        )
    if not all(isinstance(fields[name], str) for name in names):
        raise MalformedRecord(line, f"{tag} fields must be strings", lineno)
    return cls(**fields)
