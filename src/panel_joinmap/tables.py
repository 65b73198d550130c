"""SignalTable and AddressTable: first-wins handle lookups built once from the whole document."""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .records import find_digits, find_hex, iter_records

logger = logging.getLogger(__name__)

SIGNAL_RECORD_TYPE = "Sg"
ADDRESS_RECORD_TYPE = "Dv"

# Name runs non-greedily up to the optional SgTp qualifier or the end of the record body
_SIGNAL_NAME_PATTERN = re.compile(
    r"(?<![A-Za-z0-9_])Nm=(?P<name>.*?)\s*(?:(?<![A-Za-z0-9_])SgTp=\d+.*)?\Z",
    re.DOTALL,
)


def _first_wins(pairs: Iterable[tuple[str, str]], kind: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for handle, value in pairs:
        if handle in out:
            logger.debug("Ignoring duplicate %s handle %s (%r); keeping %r", kind, handle, value, out[handle])
            continue
        out[handle] = value
    return out


class _HandleTable(Mapping[str, str]):
    """Read-only handle -> value mapping shared by the signal and address tables."""

    _kind = "handle"

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._by_handle: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, handle: str) -> str:
        return self._by_handle[handle]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_handle)

    def __len__(self) -> int:
        return len(self._by_handle)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} {self._kind}s)"


class SignalTable(_HandleTable):
    """
    Signal handle -> signal name, from every ObjTp=Sg record.

    Handles are kept as digit strings; the earliest declaration of a handle wins.
    """

    _kind = "signal"

    @classmethod
    def from_text(cls, text: str) -> "SignalTable":
        table = cls(_first_wins(_iter_signals(text), cls._kind))
        logger.debug("SignalTable built: %d signals", len(table))
        return table

    def resolve(self, handle: str, default: str) -> str:
        """Return the signal name for handle, or default when the handle is not declared."""
        return self._by_handle.get(handle, default)


class AddressTable(_HandleTable):
    """
    Device handle -> hexadecimal address, from every ObjTp=Dv record.

    H= and Ad= are located independently, so either field order is accepted.
    """

    _kind = "address"

    @classmethod
    def from_text(cls, text: str) -> "AddressTable":
        table = cls(_first_wins(_iter_addresses(text), cls._kind))
        logger.debug("AddressTable built: %d addresses", len(table))
        return table


def _iter_signals(text: str) -> Iterator[tuple[str, str]]:
    for record in iter_records(text, SIGNAL_RECORD_TYPE):
        handle = find_digits(record.body, "H")
        m = _SIGNAL_NAME_PATTERN.search(record.body)
        if handle is None or m is None:
            logger.debug("Skipping signal record at offset %d: missing H= or Nm=", record.start)
            continue
        yield handle, m.group("name").strip()


def _iter_addresses(text: str) -> Iterator[tuple[str, str]]:
    for record in iter_records(text, ADDRESS_RECORD_TYPE):
        handle = find_digits(record.body, "H")
        address = find_hex(record.body, "Ad")
        if handle is None or address is None:
            continue
        yield handle, address
