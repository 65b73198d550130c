"""panel-joinmap: extract touch-panel join definitions from project files into CSV join maps."""

__version__ = "0.1.0"

from .blocks import ACCEPTED_VERSIONS, KNOWN_MODELS, locate_blocks
from .converter import BlockOutcome, ConversionResult, ConvertOptions, JoinMapConverter, read_document
from .emit import default_output_name, write_join_table
from .errors import InputUnreadableError, JoinMapError, ModelNotFoundError, ZeroCountError
from .joins import UNKNOWN_SIGNAL, classify, extract_counts, extract_joins
from .tables import AddressTable, SignalTable
from .types import DeviceBlock, JoinCounts, JoinDirection, JoinRecord, SignalType

__all__ = [
    "__version__",
    "ACCEPTED_VERSIONS",
    "KNOWN_MODELS",
    "locate_blocks",
    "BlockOutcome",
    "ConversionResult",
    "ConvertOptions",
    "JoinMapConverter",
    "read_document",
    "default_output_name",
    "write_join_table",
    "InputUnreadableError",
    "JoinMapError",
    "ModelNotFoundError",
    "ZeroCountError",
    "UNKNOWN_SIGNAL",
    "classify",
    "extract_counts",
    "extract_joins",
    "AddressTable",
    "SignalTable",
    "DeviceBlock",
    "JoinCounts",
    "JoinDirection",
    "JoinRecord",
    "SignalType",
]
