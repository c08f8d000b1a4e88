from __future__ import annotations

from pathlib import Path

import pytest

from jsondoc.models import ClassEntity
from tests._fixtures.models import color_enum, comparable_box


@pytest.fixture
def box_class() -> ClassEntity:
    """Provide ``class Box<T extends Comparable<T>>``."""
    box, _ = comparable_box()
    return box


@pytest.fixture
def enum_class() -> ClassEntity:
    return color_enum()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    target = tmp_path / "out"
    target.mkdir()
    return target
