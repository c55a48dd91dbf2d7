import os
import sys
from pathlib import Path

import pytest

# Add project root to path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("MPLBACKEND", "Agg")

from core.parsing import parse_tiles  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def example_path():
    return DATA_DIR / "example_tiles.txt"


@pytest.fixture
def example_tiles(example_path):
    return parse_tiles(example_path.read_text())
