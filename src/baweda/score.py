"""Score accumulation, survival multiplier, and best-score persistence."""

from __future__ import annotations

from pathlib import Path
import logging
import math

from .utils import SCORES_FILE, load_json, save_json

logger = logging.getLogger(__name__)

DISTANCE_SCORE_FACTOR = 0.05


def multiplier_for(seconds: float) -> float:
    """Score multiplier after surviving the given number of seconds."""
    return 1 + math.floor(seconds / 10) * 0.5


class BestScoreStore:
    """Reads and writes the single best-score integer."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else SCORES_FILE

    def load(self) -> int:
        """Return the stored best score, or 0 when absent or unreadable."""
        raw = load_json(self.path, {})
        value = raw.get("best_score", 0) if isinstance(raw, dict) else 0
        try:
            best = int(value)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Discarding malformed best score %r", value)
            return 0
        return max(0, best)

    def save(self, best: int) -> None:
        """Persist the best score; write failures are logged and dropped."""
        try:
            save_json(self.path, {"best_score": int(best)})
        except OSError as exc:
            logger.warning("Could not save best score to %s: %s", self.path, exc)


class ScoreTracker:
    """Distance-based score with a time-stepped multiplier."""

    def __init__(self, store: BestScoreStore | None = None) -> None:
        self.store = store
        self.score = 0.0
        self.distance = 0.0
        self.multiplier = 1.0
        self.best = store.load() if store is not None else 0

    def reset(self) -> None:
        """Clear run-scoped values; the best score is kept."""
        self.score = 0.0
        self.distance = 0.0
        self.multiplier = 1.0

    def add_distance(self, amount: float) -> None:
        self.distance += amount
        self.score += amount * self.multiplier

    def add_bonus(self, value: float) -> float:
        """Add a multiplied bonus and return the points awarded."""
        points = value * self.multiplier
        self.score += points
        return points

    def update_multiplier(self, seconds: float) -> None:
        self.multiplier = multiplier_for(seconds)

    @property
    def display(self) -> int:
        return math.floor(self.score)

    def commit_best(self) -> bool:
        """Record the current run as the best when it beats it.

        Returns True when the best score changed.
        """
        if self.display <= self.best:
            return False
        self.best = self.display
        if self.store is not None:
            self.store.save(self.best)
        logger.info("New best score: %d", self.best)
        return True
