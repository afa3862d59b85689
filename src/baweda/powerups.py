"""Power-up definitions, spawning, and the active timed effect."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
import random

from .settings import Tuning
from .utils import CYAN, GOLD, YELLOW, Playfield, rand_int

logger = logging.getLogger(__name__)

POWERUP_RADIUS = 16
SPAWN_Y = -30
DESPAWN_MARGIN = 80


class PowerUpKind(str, Enum):
    """Supported power-up variants."""

    SPEED = "speed"
    SLOW = "slow"
    COIN = "coin"

    @property
    def timed(self) -> bool:
        return self is not PowerUpKind.COIN


POWERUP_COLORS = {
    PowerUpKind.SPEED: YELLOW,
    PowerUpKind.SLOW: CYAN,
    PowerUpKind.COIN: GOLD,
}


@dataclass(slots=True)
class PowerUp:
    """Collectible power-up entity; x and y are its centre."""

    kind: PowerUpKind
    lane: int
    x: float
    y: float
    radius: float = POWERUP_RADIUS


@dataclass(slots=True)
class PowerUpField:
    """Spawner and effect timer for power-ups.

    At most one timed effect is active. Picking up another timed power-up
    replaces it and restarts the countdown; the instant coin bonus never
    touches the active slot.
    """

    playfield: Playfield
    tuning: Tuning = field(default_factory=Tuning)
    rng: random.Random = field(default_factory=random.Random)
    powerups: list[PowerUp] = field(default_factory=list, init=False)
    active: PowerUpKind | None = field(default=None, init=False)
    active_timer: float = field(default=0.0, init=False)
    spawn_timer: float = field(default=0.0, init=False)

    def reset(self) -> None:
        self.powerups.clear()
        self.active = None
        self.active_timer = 0.0
        self.spawn_timer = 0.0

    def advance(self, dt: float, speed: float) -> bool:
        """Spawn, scroll, and tick the active effect.

        Returns True when the active timed effect ran out this frame.
        """
        self.spawn_timer += dt
        if self.spawn_timer >= self.tuning.powerup_interval_ms:
            self.spawn_timer = 0.0
            self.spawn()

        shift = speed * (dt / 1000)
        for powerup in self.powerups:
            powerup.y += shift
        limit = self.playfield.height + DESPAWN_MARGIN
        self.powerups = [p for p in self.powerups if p.y - p.radius < limit]

        if self.active is None:
            return False
        self.active_timer -= dt
        if self.active_timer > 0:
            return False
        logger.debug("Power-up %s expired", self.active.value)
        self.active = None
        self.active_timer = 0.0
        return True

    def spawn(self) -> PowerUp:
        kind = self.rng.choice(list(PowerUpKind))
        lane = rand_int(self.rng, 0, self.playfield.lane_count - 1)
        powerup = PowerUp(kind=kind, lane=lane, x=self.playfield.lane_center(lane), y=SPAWN_Y)
        self.powerups.append(powerup)
        logger.debug("Spawned power-up %s in lane %d", kind.value, lane)
        return powerup

    def remove(self, powerup: PowerUp) -> None:
        self.powerups.remove(powerup)

    def activate(self, kind: PowerUpKind) -> None:
        """Start a timed effect; instant kinds are ignored here."""
        if not kind.timed:
            return
        self.active = kind
        self.active_timer = self.tuning.powerup_duration_ms

    def remaining_seconds(self) -> int:
        return max(0, math.ceil(self.active_timer / 1000)) if self.active else 0

    def active_label(self) -> str | None:
        """HUD text for the active effect, such as ``SPEED 3s``."""
        if self.active is None:
            return None
        return f"{self.active.value.upper()} {self.remaining_seconds()}s"
