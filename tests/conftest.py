"""Shared project-file fixtures."""

from pathlib import Path

import pytest

# One signal (10 = Mute), one device address (5 = 1F), one TSW-560 block
SAMPLE_PROJECT = """\
[
ObjTp=Sg
H=10
Nm=Mute
SgTp=2
]
[
ObjTp=Dv
H=5
Ad=1F
]
[
ObjTp=Sm
H=40
DvH=5
Nm=TSW-560
SmVr=2
n1I=2
n2I=1
nI=3
n1O=1
I1=10
I2=99
I3=10
O1=10
]
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_PROJECT


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "Lobby.smw"
    path.write_text(SAMPLE_PROJECT, encoding="utf-8")
    return path
