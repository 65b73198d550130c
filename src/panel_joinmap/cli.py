#!/usr/bin/env python3
"""Command-line interface for panel-joinmap using Typer."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from . import __version__  # type: ignore
from .blocks import KNOWN_MODELS
from .converter import ConversionResult, ConvertOptions, JoinMapConverter
from .errors import InputUnreadableError, ModelNotFoundError, ZeroCountError

app = typer.Typer(
    name="joinmap",
    help="Extract touch-panel join maps from project files into CSV tables.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Shared options and helpers
# ============================================================================

InputArgument = Annotated[
    Path,
    typer.Argument(help="Project file to read"),
]
ModelOption = Annotated[
    Optional[str],
    typer.Option("--model", "-m", help="Model name to extract (default: scan all known models)", envvar="JOINMAP_MODEL"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON"),
]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if not verbose else "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_converter(input_file: Path) -> JoinMapConverter:
    """Read the project file and build its lookup tables; exit 3 if it cannot be read."""
    try:
        return JoinMapConverter.from_file(input_file)
    except InputUnreadableError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(3)


def summarize(result: ConversionResult) -> dict:
    """Plain-dict view of a conversion result for --json output."""
    return {
        "written": [
            {
                "model": o.model,
                "instance": o.instance,
                "address": o.address,
                "rows": o.rows,
                "path": str(o.path),
            }
            for o in result.written
        ],
        "skipped": [
            {"model": o.model, "instance": o.instance, "reason": o.skipped}
            for o in result.outcomes
            if o.skipped is not None
        ],
        "missing_models": result.missing_models,
        "warnings": result.warnings,
    }


# ============================================================================
# Commands
# ============================================================================

@app.command()
def convert(
    input_file: InputArgument,
    model: ModelOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Explicit output CSV path (every matched block is written here)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory for default output names (default: next to the input file)",
            envvar="JOINMAP_OUTPUT_DIR",
        ),
    ] = None,
    require_model: Annotated[
        bool,
        typer.Option(
            "--require-model",
            help="Require exactly one --model; a missing block or zero input count is fatal",
            envvar="JOINMAP_REQUIRE_MODEL",
        ),
    ] = False,
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Convert device join definitions into CSV join maps.

    Without --model, every known model is tried and absent ones are skipped.
    With --model, only that model is extracted; a missing block is a warning
    unless --require-model is given, in which case it is an error.
    """
    setup_logging(verbose)

    if require_model and not model:
        typer.echo("Error: --model is required with --require-model", err=True)
        raise typer.Exit(2)

    converter = load_converter(input_file)
    options = ConvertOptions(
        model=model,
        output=output,
        output_dir=output_dir,
        require_model=require_model,
    )

    try:
        result = converter.convert(options)
    except ModelNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    except ZeroCountError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    except OSError as e:
        typer.echo(f"Error: Cannot write output: {e}", err=True)
        raise typer.Exit(3)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if json_output:
        typer.echo(json.dumps(summarize(result), indent=2))
        return

    for outcome in result.outcomes:
        if outcome.path is not None:
            typer.echo(f"OK: wrote {outcome.rows} rows to {outcome.path}")
        else:
            typer.echo(
                f"Info: {outcome.model} block {outcome.instance}: {outcome.skipped}; no file written",
                err=True,
            )
    if not result.outcomes:
        typer.echo("Info: no matching device blocks; no files written", err=True)


@app.command()
def inspect(
    input_file: InputArgument,
    model: ModelOption = None,
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Show matched device blocks, their declared and derived counts, and join totals.

    Does not write any files.
    """
    setup_logging(verbose)

    converter = load_converter(input_file)
    models = (model,) if model else KNOWN_MODELS

    blocks_info = []
    for name in models:
        for block in converter.blocks(name):
            rows = converter.rows_for(block)
            counts = block.counts
            blocks_info.append(
                {
                    "model": block.model,
                    "instance": block.instance,
                    "handle": block.handle,
                    "address": converter.address_for(block),
                    "inputs": {
                        "digital": counts.digital_inputs,
                        "analog": counts.analog_inputs,
                        "serial": counts.serial_inputs,
                        "total": counts.total_inputs,
                    },
                    "outputs": {
                        "digital": counts.digital_outputs,
                        "analog": counts.analog_outputs,
                        "serial": counts.serial_outputs,
                        "total": counts.total_outputs,
                    },
                    "joins": len(rows),
                }
            )

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "signals": len(converter.signals),
                    "addresses": len(converter.addresses),
                    "blocks": blocks_info,
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Signals:   {len(converter.signals)}")
    typer.echo(f"Addresses: {len(converter.addresses)}")
    if not blocks_info:
        if model:
            typer.echo(f"Warning: No device block found for model {model!r}", err=True)
        else:
            typer.echo("No known device models found")
        return
    for info in blocks_info:
        ins, outs = info["inputs"], info["outputs"]
        typer.echo(f"{info['model']} #{info['instance']} (address: {info['address'] or '-'})")
        typer.echo(f"  Inputs:  {ins['digital']} digital, {ins['analog']} analog, {ins['serial']} serial ({ins['total']} total)")
        typer.echo(f"  Outputs: {outs['digital']} digital, {outs['analog']} analog, {outs['serial']} serial ({outs['total']} total)")
        typer.echo(f"  Joins:   {info['joins']}")


@app.command()
def models() -> None:
    """List the built-in model names scanned when no --model is given."""
    for name in KNOWN_MODELS:
        typer.echo(name)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"panel-joinmap {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """joinmap - Extract touch-panel join maps from project files into CSV tables."""
    pass


if __name__ == "__main__":
    app()
