"""Pursuer distance dynamics."""

from __future__ import annotations

from dataclasses import dataclass, field

from .settings import Tuning


@dataclass(slots=True)
class Chaser:
    """How far the pursuer trails the runner; zero means caught."""

    tuning: Tuning = field(default_factory=Tuning)
    distance: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.reset()

    @property
    def base_distance(self) -> float:
        return self.tuning.chaser_base_distance

    def reset(self) -> None:
        self.distance = self.base_distance

    def creep(self, elapsed_ms: float) -> float:
        """Per-second closing rate that kicks in after the grace period."""
        ramp = max(0.0, (elapsed_ms - self.tuning.chaser_grace_ms) / 60000)
        return ramp * self.tuning.chaser_creep

    def advance(self, dt: float, collided: bool, elapsed_ms: float) -> None:
        seconds = dt / 1000
        if collided:
            self.distance -= self.tuning.chaser_catch_rate * seconds * 60
        else:
            self.distance = min(self.base_distance, self.distance + self.tuning.chaser_recover_rate * seconds)
        self.distance -= self.creep(elapsed_ms) * seconds
        self.distance = max(0.0, self.distance)

    def caught(self) -> bool:
        return self.distance <= 0
