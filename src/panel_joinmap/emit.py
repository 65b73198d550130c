"""Write join tables as CSV and derive default output file names."""

import csv
import logging
from pathlib import Path
from typing import Iterable

from .types import JoinRecord

logger = logging.getLogger(__name__)

HEADER = ("Join_Direction", "Join_Number", "Signal_Type", "Signal_Name")

MAP_SUFFIX = "_map.csv"
SIGNAL_MAP_SUFFIX = "_signal_map.csv"


def default_output_name(
    input_path: str | Path,
    model: str,
    address: str | None = None,
    required: bool = False,
) -> str:
    """
    Build {stem}_{model}[_{address}]_map.csv from the input file's base name.

    The address part is only present when the device resolved to an address.
    Required-model conversions use the _signal_map.csv suffix instead.
    """
    stem = Path(input_path).stem
    address_part = f"_{address}" if address else ""
    suffix = SIGNAL_MAP_SUFFIX if required else MAP_SUFFIX
    return f"{stem}_{model}{address_part}{suffix}"


def write_join_table(rows: Iterable[JoinRecord], path: str | Path) -> int:
    """
    Write rows as UTF-8 CSV with a header row; return the number of rows written.

    Nothing is written (and 0 is returned) when there are no rows, so an empty
    block never leaves a header-only file behind.
    """
    rows = list(rows)
    if not rows:
        logger.debug("No rows for %s; skipping write", path)
        return 0
    out_path = Path(path)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for row in rows:
            writer.writerow(row.as_row())
    logger.debug("Wrote %d rows to %s", len(rows), out_path)
    return len(rows)
