"""JoinMapConverter: read a project file once, then map each requested model's blocks to CSV join tables."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .blocks import KNOWN_MODELS, locate_blocks
from .emit import default_output_name, write_join_table
from .errors import InputUnreadableError, ModelNotFoundError, ZeroCountError
from .joins import extract_joins
from .tables import AddressTable, SignalTable
from .types import DeviceBlock, JoinRecord

logger = logging.getLogger(__name__)

SKIP_NO_JOINS = "no joins"
SKIP_ZERO_COUNT = "zero total input count"


def read_document(path: str | Path) -> str:
    """Read the whole project file as text; raise InputUnreadableError on any OS error."""
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputUnreadableError(p, cause=e) from e


@dataclass(frozen=True)
class ConvertOptions:
    """
    Settings for one conversion run.

    require_model selects the single-required-model behaviour: model must be set,
    and a missing block or a zero input count is fatal instead of skipped.
    """

    model: str | None = None
    output: Path | None = None
    output_dir: Path | None = None
    require_model: bool = False


@dataclass(frozen=True)
class BlockOutcome:
    """What happened to one matched block: where it went and how many rows it had."""

    model: str
    instance: int
    address: str | None
    rows: int
    path: Path | None = None
    skipped: str | None = None


@dataclass
class ConversionResult:
    """Per-block outcomes, models without a match, and operator-facing warnings."""

    outcomes: list[BlockOutcome] = field(default_factory=list)
    missing_models: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def written(self) -> list[BlockOutcome]:
        return [o for o in self.outcomes if o.path is not None]


class JoinMapConverter:
    """
    Holds one project document and its signal/address tables.

    Both tables are built once in the constructor and only read afterwards; every
    model and block is processed independently against them.
    """

    def __init__(self, text: str, source_path: str | Path = "project") -> None:
        self._text = text
        self._source_path = Path(source_path)
        self._signals = SignalTable.from_text(text)
        self._addresses = AddressTable.from_text(text)

    @classmethod
    def from_file(cls, path: str | Path) -> "JoinMapConverter":
        return cls(read_document(path), source_path=path)

    @property
    def signals(self) -> SignalTable:
        return self._signals

    @property
    def addresses(self) -> AddressTable:
        return self._addresses

    @property
    def source_path(self) -> Path:
        return self._source_path

    def blocks(self, model: str) -> Iterator[DeviceBlock]:
        return locate_blocks(self._text, model)

    def address_for(self, block: DeviceBlock) -> str | None:
        """Return the block's device address, or None when its handle is absent or unresolved."""
        if block.device_handle is None:
            return None
        return self._addresses.get(block.device_handle)

    def rows_for(self, block: DeviceBlock) -> list[JoinRecord]:
        return extract_joins(block, self._signals)

    def output_path_for(self, block: DeviceBlock, options: ConvertOptions) -> Path:
        if options.output is not None:
            return Path(options.output)
        directory = options.output_dir if options.output_dir is not None else self._source_path.parent
        name = default_output_name(
            self._source_path,
            block.model,
            self.address_for(block),
            required=options.require_model,
        )
        return Path(directory) / name

    def convert(self, options: ConvertOptions | None = None) -> ConversionResult:
        """
        Convert every matched block of the requested model(s) into a CSV file.

        Without a model, KNOWN_MODELS are scanned and absent ones skipped silently.
        A named model that is absent is a warning, or ModelNotFoundError when
        options.require_model is set. In that mode a zero input count on any
        instance raises ZeroCountError before any file for the model is written.
        """
        options = options or ConvertOptions()
        if options.require_model and not options.model:
            raise ValueError("A model name is required when require_model is set")

        models = (options.model,) if options.model else KNOWN_MODELS
        result = ConversionResult()
        seen_paths: set[Path] = set()

        for model in models:
            blocks = list(self.blocks(model))
            if options.require_model:
                # every instance must declare inputs before any file is written
                for block in blocks:
                    if block.counts.total_inputs == 0:
                        raise ZeroCountError(block.model, block.instance)
            for block in blocks:
                outcome = self._convert_block(block, options, seen_paths, result)
                result.outcomes.append(outcome)
            if not blocks:
                result.missing_models.append(model)
                if options.require_model:
                    raise ModelNotFoundError(model)
                if options.model:
                    result.warnings.append(f"No device block found for model {model!r}")
                logger.debug("Model %s not present", model)
        return result

    def _convert_block(
        self,
        block: DeviceBlock,
        options: ConvertOptions,
        seen_paths: set[Path],
        result: ConversionResult,
    ) -> BlockOutcome:
        address = self.address_for(block)
        if block.counts.total_inputs == 0:
            return BlockOutcome(block.model, block.instance, address, rows=0, skipped=SKIP_ZERO_COUNT)

        rows = self.rows_for(block)
        if not rows:
            return BlockOutcome(block.model, block.instance, address, rows=0, skipped=SKIP_NO_JOINS)

        path = self.output_path_for(block, options)
        if path in seen_paths:
            # later blocks overwrite earlier ones at the same path
            result.warnings.append(f"{path} already written in this run; overwriting with {block.model} block {block.instance}")
        written = write_join_table(rows, path)
        seen_paths.add(path)
        return BlockOutcome(block.model, block.instance, address, rows=written, path=path)
