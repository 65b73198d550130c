"""Join extraction: declared counts, range classification and re-basing of raw join indices."""

import logging

from .records import find_int, iter_join_assignments
from .tables import SignalTable
from .types import DeviceBlock, JoinCounts, JoinDirection, JoinRecord, SignalType

logger = logging.getLogger(__name__)

UNKNOWN_SIGNAL = "unknown signal"

DIGITAL_INPUT_TAG = "n1I"
ANALOG_INPUT_TAG = "n2I"
TOTAL_INPUT_TAG = "nI"
DIGITAL_OUTPUT_TAG = "n1O"


def extract_counts(text: str) -> JoinCounts:
    """Read n1I/n2I/nI/n1O from a block; any missing field counts as 0."""
    return JoinCounts(
        digital_inputs=find_int(text, DIGITAL_INPUT_TAG),
        analog_inputs=find_int(text, ANALOG_INPUT_TAG),
        total_inputs=find_int(text, TOTAL_INPUT_TAG),
        digital_outputs=find_int(text, DIGITAL_OUTPUT_TAG),
    )


def classify(index: int, digital: int, analog: int, total: int) -> tuple[SignalType, int]:
    """
    Classify a 1-based raw join index and re-base it within its type's sub-range.

    - Digital: 1..digital, number unchanged
    - Analog: digital+1..digital+analog, number - digital
    - Serial: digital+analog+1..total, number - (digital + analog)
    - Unmapped: above total, raw index kept as-is
    """
    digital_end = digital
    analog_end = digital + analog
    if 1 <= index <= digital_end:
        return SignalType.DIGITAL, index
    if digital_end < index <= analog_end:
        return SignalType.ANALOG, index - digital_end
    if analog_end < index <= total:
        return SignalType.SERIAL, index - analog_end
    return SignalType.UNMAPPED, index


def _ranges_for(direction: JoinDirection, counts: JoinCounts) -> tuple[int, int, int]:
    if direction == JoinDirection.INPUT:
        return counts.digital_inputs, counts.analog_inputs, counts.total_inputs
    return counts.digital_outputs, counts.analog_outputs, counts.total_outputs


def extract_joins(block: DeviceBlock, signals: SignalTable) -> list[JoinRecord]:
    """
    Return one JoinRecord per I<k>=<h> and O<k>=<h> assignment in the block.

    Inputs come first, then outputs, each in document order. Handles missing from
    the signal table resolve to UNKNOWN_SIGNAL.
    """
    rows: list[JoinRecord] = []
    for direction, side in ((JoinDirection.INPUT, "I"), (JoinDirection.OUTPUT, "O")):
        digital, analog, total = _ranges_for(direction, block.counts)
        for index, handle in iter_join_assignments(block.text, side):
            signal_type, number = classify(index, digital, analog, total)
            if signal_type == SignalType.UNMAPPED:
                logger.debug(
                    "%s %s join %d is beyond declared total %d",
                    block.model,
                    direction.value,
                    index,
                    total,
                )
            rows.append(
                JoinRecord(
                    direction=direction,
                    number=number,
                    signal_type=signal_type,
                    signal_name=signals.resolve(handle, UNKNOWN_SIGNAL),
                )
            )
    return rows
