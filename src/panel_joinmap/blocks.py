"""Locate device blocks by exact model name; built-in list of known panel models."""

import logging
from typing import Iterator

from .joins import TOTAL_INPUT_TAG, extract_counts
from .records import find_digits, find_field, iter_records
from .types import DeviceBlock

logger = logging.getLogger(__name__)

DEVICE_RECORD_TYPE = "Sm"
VERSION_TAG = "SmVr"
ACCEPTED_VERSIONS = frozenset({1, 2, 3})

# Scanned in this order when no model is requested
KNOWN_MODELS: tuple[str, ...] = (
    "TSW-552",
    "TSW-560",
    "TSW-560-NAV",
    "TSW-570",
    "TSW-752",
    "TSW-760",
    "TSW-770",
    "TSW-1052",
    "TSW-1060",
    "TSW-1070",
    "TS-770",
    "TS-1070",
    "TST-902",
    "TPMC-8X",
)


def _version_accepted(body: str) -> bool:
    version = find_digits(body, VERSION_TAG)
    return version is not None and int(version) in ACCEPTED_VERSIONS


def locate_blocks(text: str, model: str) -> Iterator[DeviceBlock]:
    """
    Yield every ObjTp=Sm block whose Nm equals model exactly.

    A block also needs an accepted SmVr and a declared nI field. Each call
    rescans the whole document.
    """
    instance = 0
    for record in iter_records(text, DEVICE_RECORD_TYPE):
        # exact comparison: "TSW-560" must not pick up "TSW-560-NAV" or "TSW-5601"
        if find_field(record.body, "Nm") != model:
            continue
        if not _version_accepted(record.body):
            logger.debug("Skipping %s block at offset %d: version not accepted", model, record.start)
            continue
        if find_digits(record.body, TOTAL_INPUT_TAG) is None:
            logger.debug("Skipping %s block at offset %d: no %s= field", model, record.start, TOTAL_INPUT_TAG)
            continue
        instance += 1
        block = DeviceBlock(
            model=model,
            counts=extract_counts(record.body),
            text=record.body,
            start=record.start,
            end=record.end,
            instance=instance,
            handle=find_digits(record.body, "H"),
            device_handle=find_digits(record.body, "DvH"),
        )
        logger.debug("Matched %s block %d at offsets %d-%d", model, instance, block.start, block.end)
        yield block
