"""Shared pytest fixtures for Ember tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_PROGRAM = """\
{
    x = 12 / 8;
    y = x - 4;
    z = (x + y) * 12;
    result = z - 8
}
"""


@pytest.fixture
def programs_dir(tmp_path: Path) -> Path:
    """Return a scratch directory for program files."""
    path = tmp_path / "programs"
    path.mkdir()
    return path


@pytest.fixture
def write_program(programs_dir: Path) -> Callable[[str], Path]:
    """Return a helper that writes source text to a fresh .em file."""
    counter = 0

    def _write(source: str) -> Path:
        nonlocal counter
        counter += 1
        path = programs_dir / f"program_{counter}.em"
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_program(write_program: Callable[[str], Path]) -> Path:
    """Return path to a program whose result is -20."""
    return write_program(SAMPLE_PROGRAM)
