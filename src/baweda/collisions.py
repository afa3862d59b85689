"""Geometry tests between the runner and everything on the road."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable
import math

from .coins import Coin, CoinField
from .obstacles import Hazard
from .powerups import PowerUp, PowerUpField
from .utils import Box

HAZARD_INSET = 4
POWERUP_REACH = 20
COIN_REACH = 22


@dataclass(slots=True)
class FrameCollisions:
    """Everything the runner touched in one frame."""

    hazard: Hazard | None = None
    powerups: list[PowerUp] = field(default_factory=list)
    coins: list[Coin] = field(default_factory=list)

    @property
    def collided(self) -> bool:
        return self.hazard is not None


def within_reach(hitbox: Box, x: float, y: float, reach: float) -> bool:
    """Circular proximity test from the hitbox centre."""
    cx, cy = hitbox.center
    return math.hypot(cx - x, cy - y) < reach


def find_hazard_hit(
    hitbox: Box,
    hazards: Iterable[Hazard],
    airborne: bool,
    sliding: bool,
) -> Hazard | None:
    """Return the first overlapping hazard the runner's pose does not clear."""
    for hazard in hazards:
        if not hitbox.overlaps(hazard.box().inset(HAZARD_INSET)):
            continue
        if hazard.avoided_by(airborne, sliding):
            continue
        return hazard
    return None


def collect_powerups(hitbox: Box, field_: PowerUpField) -> list[PowerUp]:
    """Remove and return every power-up within reach."""
    taken = [p for p in field_.powerups if within_reach(hitbox, p.x, p.y, p.radius + POWERUP_REACH)]
    for powerup in taken:
        field_.remove(powerup)
    return taken


def collect_coins(hitbox: Box, field_: CoinField) -> list[Coin]:
    """Collect and return every coin within reach."""
    taken = [
        c for c in field_.coins if not c.collected and within_reach(hitbox, c.x, c.y, c.radius + COIN_REACH)
    ]
    for coin in taken:
        field_.collect(coin)
    return taken


def resolve_frame(
    hitbox: Box,
    hazards: Iterable[Hazard],
    powerup_field: PowerUpField,
    coin_field: CoinField,
    airborne: bool,
    sliding: bool,
    cooldown: float,
) -> FrameCollisions:
    """Run every per-frame contact test.

    Hazards are skipped entirely while the post-hit cooldown is running.
    Pickups are removed from their fields; applying their effects is left
    to the caller.
    """
    result = FrameCollisions()
    if cooldown <= 0:
        result.hazard = find_hazard_hit(hitbox, hazards, airborne, sliding)
    result.powerups = collect_powerups(hitbox, powerup_field)
    result.coins = collect_coins(hitbox, coin_field)
    return result
