"""Scan bracketed project records and pull exactly-anchored Tag=value fields out of them."""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator

# "[" ObjTp=<type> ... "]"; the body runs non-greedily to the next closing bracket
_RECORD_PATTERN = re.compile(
    r"\[\s*ObjTp=(?P<type>\w+)(?P<body>.*?)\]",
    re.DOTALL,
)

# A tag only counts when it is not the tail of a longer tag (nI= must not hit n1I= or mnI=)
_TAG_BOUNDARY = r"(?<![A-Za-z0-9_])"

# I<index>=<handle> / O<index>=<handle>
_JOIN_PATTERNS = {
    "I": re.compile(_TAG_BOUNDARY + r"I(\d+)=(\d+)"),
    "O": re.compile(_TAG_BOUNDARY + r"O(\d+)=(\d+)"),
}

# Value of a Tag=value field: up to end of line, "]", or whitespace before another Tag=
_FIELD_VALUE = r"([^\r\n\]]*?)(?=[ \t]+[A-Za-z_]\w*=|[ \t]*(?:[\r\n\]]|\Z))"


@dataclass(frozen=True)
class RecordSpan:
    """A raw record located in the document: its ObjTp tag, body text and offsets."""

    obj_type: str
    body: str
    start: int
    end: int


def iter_records(text: str, obj_type: str | None = None) -> Iterator[RecordSpan]:
    """
    Yield every record in document order, optionally only those of one ObjTp.

    The scan is lazy and starts over on each call.
    """
    for m in _RECORD_PATTERN.finditer(text):
        if obj_type is not None and m.group("type") != obj_type:
            continue
        yield RecordSpan(
            obj_type=m.group("type"),
            body=m.group("body"),
            start=m.start(),
            end=m.end(),
        )


@lru_cache(maxsize=None)
def _field_pattern(tag: str, value: str) -> re.Pattern[str]:
    return re.compile(_TAG_BOUNDARY + re.escape(tag) + "=" + value)


def find_field(body: str, tag: str) -> str | None:
    """
    Return the stripped value of the first `tag=` field, or None if absent.

    The value ends at the line end, the closing bracket, or the next Tag= field
    on the same line, so one-line records read the same as multi-line ones.
    """
    m = _field_pattern(tag, _FIELD_VALUE).search(body)
    if m is None:
        return None
    return m.group(1).strip()


def find_digits(body: str, tag: str) -> str | None:
    """Return the digit string of the first `tag=<digits>` field, or None."""
    m = _field_pattern(tag, r"(\d+)").search(body)
    return m.group(1) if m else None


def find_hex(body: str, tag: str) -> str | None:
    """Return the hex digit string of the first `tag=<hex>` field (case preserved), or None."""
    m = _field_pattern(tag, r"([0-9A-Fa-f]+)").search(body)
    return m.group(1) if m else None


def find_int(body: str, tag: str, default: int = 0) -> int:
    """Return `tag=<digits>` as an int, or `default` when the field is missing."""
    digits = find_digits(body, tag)
    return int(digits) if digits is not None else default


def iter_join_assignments(body: str, side: str) -> Iterator[tuple[int, str]]:
    """
    Yield (raw join index, signal handle) for each I<k>=<h> (side "I") or O<k>=<h> (side "O").

    Handles stay digit strings so lookups match the signal table exactly.
    """
    try:
        pattern = _JOIN_PATTERNS[side]
    except KeyError:
        raise ValueError(f"Unknown join side: {side!r}") from None
    for m in pattern.finditer(body):
        yield int(m.group(1)), m.group(2)
