"""Default configuration values for paledit."""

from __future__ import annotations

from typing import Final

# Interval of the redraw/coalescing timer.  Edits that keep arriving before two
# consecutive timer firings are implanted into the same undo command.
COALESCE_WINDOW_MS: Final[int] = 250

# Label used for slider and hex-entry edits.  Implanting only happens when the
# last executed undo command carries the same label.
DEFAULT_OPERATION_LABEL: Final[str] = "Color Change"

DEFAULT_HISTORY_LIMIT: Final[int] = 100

# Relative saturation/value/lightness deltas arrive in percent points.
PERCENT_DELTA_SCALE: Final[float] = 100.0

# Every relative delta, alpha included, is cleared whenever the colorspace
# changes unless this is switched off.
RESET_ALPHA_DELTA_ON_COLORSPACE_CHANGE: Final[bool] = True

SETTINGS_DIR_NAME: Final[str] = "paledit"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
