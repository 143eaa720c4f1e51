import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the project sources importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from paledit.domain.models import Rgba  # noqa: E402
from paledit.domain.palette import Palette  # noqa: E402


@pytest.fixture
def four_entry_palette() -> Palette:
    """Palette of four distinct, opaque entries."""

    return Palette.from_colors(
        [
            Rgba(200, 140, 140, 255),  # HSV s = 0.3
            Rgba(10, 20, 30, 255),
            Rgba(200, 100, 100, 255),  # HSV s = 0.5
            Rgba(0, 0, 0, 255),
        ]
    )
