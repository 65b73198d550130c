"""Core data model: join direction/type enums, declared counts, device blocks and join rows."""

from dataclasses import dataclass
from enum import Enum


class JoinDirection(str, Enum):
    """Side of the device a join sits on."""

    INPUT = "Input"
    OUTPUT = "Output"


class SignalType(str, Enum):
    """Signal type a join index falls into after range classification."""

    DIGITAL = "Digital"
    ANALOG = "Analog"
    SERIAL = "Serial"
    UNMAPPED = "Unmapped"


@dataclass(frozen=True)
class JoinCounts:
    """
    Declared join counts of a device block.

    Only the input side and the digital output count are read from the document.
    Analog and total output counts mirror the inputs; a declared output total is
    never consulted.
    """

    digital_inputs: int = 0
    analog_inputs: int = 0
    total_inputs: int = 0
    digital_outputs: int = 0

    @property
    def serial_inputs(self) -> int:
        return self.total_inputs - (self.digital_inputs + self.analog_inputs)

    @property
    def analog_outputs(self) -> int:
        return self.analog_inputs

    @property
    def total_outputs(self) -> int:
        return self.total_inputs

    @property
    def serial_outputs(self) -> int:
        return self.total_outputs - (self.digital_outputs + self.analog_outputs)


@dataclass(frozen=True)
class DeviceBlock:
    """One matched device record: model, handles, counts and the raw record text."""

    model: str
    counts: JoinCounts
    text: str
    start: int
    end: int
    instance: int = 1
    handle: str | None = None
    device_handle: str | None = None

    def __post_init__(self) -> None:
        if self.instance < 1:
            raise ValueError(f"instance must be >= 1, got {self.instance}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not precede start ({self.start})")


@dataclass(frozen=True)
class JoinRecord:
    """One output row: direction, re-based join number, signal type, resolved name."""

    direction: JoinDirection
    number: int
    signal_type: SignalType
    signal_name: str

    def as_row(self) -> list[str]:
        return [self.direction.value, str(self.number), self.signal_type.value, self.signal_name]
