"""Tests for CLI module - command structure, exit codes and messages."""

import json
from pathlib import Path

from typer.testing import CliRunner

from panel_joinmap.blocks import KNOWN_MODELS
from panel_joinmap.cli import app

runner = CliRunner()


# ============================================================================
# convert
# ============================================================================


def test_convert_scans_known_models(sample_file: Path) -> None:
    """Test convert without --model writes one file per matched block."""
    result = runner.invoke(app, ["convert", str(sample_file)])

    assert result.exit_code == 0
    expected = sample_file.parent / "Lobby_TSW-560_1F_map.csv"
    assert expected.exists()
    assert f"OK: wrote 4 rows to {expected}" in result.output


def test_convert_explicit_output(sample_file: Path, tmp_path: Path) -> None:
    """Test --output overrides the default file name."""
    out = tmp_path / "custom.csv"
    result = runner.invoke(app, ["convert", str(sample_file), "--model", "TSW-560", "--output", str(out)])

    assert result.exit_code == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Join_Direction,Join_Number,Signal_Type,Signal_Name"
    assert lines[1:] == [
        "Input,1,Digital,Mute",
        "Input,1,Analog,unknown signal",
        "Input,1,Serial,Mute",
        "Output,1,Digital,Mute",
    ]


def test_convert_missing_model_is_warning(sample_file: Path) -> None:
    """Test a named but absent model warns and exits 0 in list mode."""
    result = runner.invoke(app, ["convert", str(sample_file), "--model", "TSW-1070"])

    assert result.exit_code == 0
    assert "Warning: No device block found for model 'TSW-1070'" in result.output
    assert list(sample_file.parent.glob("*.csv")) == []


def test_convert_missing_model_is_fatal_when_required(sample_file: Path) -> None:
    """Test --require-model turns an absent model into an error."""
    result = runner.invoke(app, ["convert", str(sample_file), "--model", "TSW-1070", "--require-model"])

    assert result.exit_code == 2
    assert "Error: No device block found for model 'TSW-1070'" in result.output
    assert list(sample_file.parent.glob("*.csv")) == []


def test_convert_required_model_file_name(sample_file: Path) -> None:
    """Test required-model conversions use the _signal_map.csv suffix."""
    result = runner.invoke(app, ["convert", str(sample_file), "-m", "TSW-560", "--require-model"])

    assert result.exit_code == 0
    assert (sample_file.parent / "Lobby_TSW-560_1F_signal_map.csv").exists()


def test_convert_require_model_needs_model(sample_file: Path) -> None:
    """Test --require-model without --model is a usage error."""
    result = runner.invoke(app, ["convert", str(sample_file), "--require-model"])

    assert result.exit_code == 2
    assert "--model is required" in result.output


def test_convert_zero_count_required_is_fatal(tmp_path: Path) -> None:
    """Test a zero nI is fatal with --require-model."""
    path = tmp_path / "Zero.smw"
    path.write_text("[\nObjTp=Sm\nNm=TSW-760\nSmVr=2\nnI=0\n]\n", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(path), "-m", "TSW-760", "--require-model"])

    assert result.exit_code == 2
    assert "total input count of 0" in result.output


def test_convert_empty_block_reports_info(tmp_path: Path) -> None:
    """Test a block without joins writes no file and reports it."""
    path = tmp_path / "Empty.smw"
    path.write_text("[\nObjTp=Sm\nNm=TSW-760\nSmVr=2\nn1I=2\nnI=2\n]\n", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(path)])

    assert result.exit_code == 0
    assert "Info: TSW-760 block 1: no joins; no file written" in result.output
    assert list(tmp_path.glob("*.csv")) == []


def test_convert_no_known_models_reports_info(tmp_path: Path) -> None:
    """Test a scan that matches no known model exits 0 and writes nothing."""
    path = tmp_path / "Other.smw"
    path.write_text("[\nObjTp=Sm\nNm=CUSTOM-PANEL\nSmVr=2\nn1I=1\nnI=1\nI1=1\n]\n", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(path)])

    assert result.exit_code == 0
    assert "Info: no matching device blocks; no files written" in result.output
    assert list(tmp_path.glob("*.csv")) == []


def test_convert_unreadable_input(tmp_path: Path) -> None:
    """Test a missing input file exits 3."""
    result = runner.invoke(app, ["convert", str(tmp_path / "missing.smw")])

    assert result.exit_code == 3
    assert "Error: Cannot read input file" in result.output


def test_convert_json_summary(sample_file: Path) -> None:
    """Test convert --json output."""
    result = runner.invoke(app, ["convert", str(sample_file), "-m", "TSW-560", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["written"][0]["model"] == "TSW-560"
    assert data["written"][0]["address"] == "1F"
    assert data["written"][0]["rows"] == 4
    assert data["missing_models"] == []


def test_convert_model_from_env(sample_file: Path) -> None:
    """Test JOINMAP_MODEL supplies the model name."""
    result = runner.invoke(app, ["convert", str(sample_file)], env={"JOINMAP_MODEL": "TSW-1070"})

    assert result.exit_code == 0
    assert "TSW-1070" in result.output


# ============================================================================
# inspect / models / version
# ============================================================================


def test_inspect_text(sample_file: Path) -> None:
    """Test inspect prints declared and derived counts without writing files."""
    result = runner.invoke(app, ["inspect", str(sample_file)])

    assert result.exit_code == 0
    assert "TSW-560 #1 (address: 1F)" in result.stdout
    assert "Inputs:  2 digital, 1 analog, 0 serial (3 total)" in result.stdout
    assert "Outputs: 1 digital, 1 analog, 1 serial (3 total)" in result.stdout
    assert "Joins:   4" in result.stdout
    assert list(sample_file.parent.glob("*.csv")) == []


def test_inspect_json(sample_file: Path) -> None:
    """Test inspect --json output."""
    result = runner.invoke(app, ["inspect", str(sample_file), "--model", "TSW-560", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["signals"] == 1
    assert data["addresses"] == 1
    assert data["blocks"][0]["handle"] == "40"
    assert data["blocks"][0]["outputs"] == {"digital": 1, "analog": 1, "serial": 1, "total": 3}


def test_models_command() -> None:
    """Test models lists every built-in model name."""
    result = runner.invoke(app, ["models"])

    assert result.exit_code == 0
    assert result.stdout.split() == list(KNOWN_MODELS)


def test_command_help() -> None:
    """Test that help text is available for all commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.stdout
    assert "inspect" in result.stdout
    assert "models" in result.stdout


def test_version_flag() -> None:
    """Test --version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "panel-joinmap" in result.stdout
