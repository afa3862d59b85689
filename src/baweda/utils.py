"""Shared constants and utility helpers for Baweda Escape."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import json
import random

SCREEN_WIDTH = 420
SCREEN_HEIGHT = 760
FPS = 60
LANE_COUNT = 3

SKY_TOP = (13, 13, 26)
SKY_BOTTOM = (26, 26, 62)
ROAD_COLOR = (37, 37, 56)
SIDEWALK_COLOR = (48, 44, 70)
LANE_LINE = (58, 123, 213)
TEXT_COLOR = (235, 235, 245)
SHADOW_COLOR = (10, 10, 20)

RED = (244, 67, 54)
ORANGE = (255, 109, 0)
YELLOW = (255, 214, 0)
GOLD = (255, 193, 7)
CYAN = (0, 188, 212)
TEAL = (0, 137, 123)
SLATE = (55, 71, 79)
SHIRT = (255, 107, 107)
SKIN = (255, 218, 185)
OFFICER = (21, 101, 192)

DATA_DIR = Path(".baweda")
SETTINGS_FILE = DATA_DIR / "settings.json"
SCORES_FILE = DATA_DIR / "scores.json"


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def rand_range(rng: random.Random, minimum: float, maximum: float) -> float:
    """Uniform float in [minimum, maximum)."""
    return rng.random() * (maximum - minimum) + minimum


def rand_int(rng: random.Random, minimum: int, maximum: int) -> int:
    """Uniform integer in [minimum, maximum], both ends inclusive."""
    return rng.randint(minimum, maximum)


@dataclass(slots=True, frozen=True)
class Box:
    """Axis-aligned rectangle in playfield units."""

    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def overlaps(self, other: Box) -> bool:
        """Strict overlap test; boxes that only share an edge do not overlap."""
        return (
            self.x < other.x + other.w
            and self.x + self.w > other.x
            and self.y < other.y + other.h
            and self.y + self.h > other.y
        )

    def inset(self, amount: float) -> Box:
        """Return a copy shrunk by amount on every side."""
        return Box(self.x + amount, self.y + amount, self.w - amount * 2, self.h - amount * 2)


@dataclass(slots=True)
class Playfield:
    """Lane geometry derived from the window size.

    The road takes at most 72% of the width, capped at 260 units, and is
    centred horizontally. The runner's feet rest at 62% of the height.
    """

    width: float
    height: float
    lane_count: int = LANE_COUNT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"playfield must have a positive size, got {self.width}x{self.height}")
        if self.lane_count < 2:
            raise ValueError(f"at least two lanes are required, got {self.lane_count}")

    @property
    def road_width(self) -> float:
        return min(self.width * 0.72, 260.0)

    @property
    def lane_offset_x(self) -> float:
        return (self.width - self.road_width) / 2

    @property
    def lane_width(self) -> float:
        return self.road_width / self.lane_count

    @property
    def ground_y(self) -> float:
        return self.height * 0.62

    def lane_center(self, lane: int) -> float:
        """Horizontal centre of a lane."""
        return self.lane_offset_x + lane * self.lane_width + self.lane_width / 2


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
