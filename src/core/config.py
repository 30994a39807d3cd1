"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("CALENDAR_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "calendar-api.db"))
)

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

GRID_WEEKS = 6
GRID_SIZE = GRID_WEEKS * 7  # 42 cells, constant height regardless of month

DEFAULT_PALETTE = [
    "#fb0021",  # brand red
    "#10b981",  # green
    "#3b82f6",  # blue
    "#f59e0b",  # yellow
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#84cc16",  # lime
    "#f97316",  # orange
    "#6366f1",  # indigo
]

FALLBACK_COLOR = os.environ.get("CALENDAR_FALLBACK_COLOR", "#fb0021")
EVENT_TEXT_COLOR = "#ffffff"


def _parse_palette(raw: str | None) -> list[str]:
    """Parse a comma-separated palette, falling back to the default palette."""
    if raw is None:
        return list(DEFAULT_PALETTE)
    return [color.strip() for color in raw.split(",") if color.strip()]


# An explicitly empty CALENDAR_PALETTE is kept empty so the engine rejects it
CALENDAR_PALETTE = _parse_palette(os.environ.get("CALENDAR_PALETTE"))
CALENDAR_WEEK_START = os.environ.get("CALENDAR_WEEK_START", "monday").strip().lower()
CALENDAR_VISIBLE_CAP = int(os.environ.get("CALENDAR_VISIBLE_CAP", "3"))

# Year picker spans this many years either side of the current one
YEAR_PICKER_SPAN = 5

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
