"""Collectible coins."""

from __future__ import annotations

from dataclasses import dataclass, field
import random

from .settings import Tuning
from .utils import Playfield, rand_int

COIN_RADIUS = 10
SPAWN_Y = -20
DESPAWN_MARGIN = 40


@dataclass(slots=True)
class Coin:
    lane: int
    x: float
    y: float
    radius: float = COIN_RADIUS
    collected: bool = False


@dataclass(slots=True)
class CoinField:
    """Spawns a coin in a random lane on a fixed interval."""

    playfield: Playfield
    tuning: Tuning = field(default_factory=Tuning)
    rng: random.Random = field(default_factory=random.Random)
    coins: list[Coin] = field(default_factory=list, init=False)
    spawn_timer: float = field(default=0.0, init=False)

    def reset(self) -> None:
        self.coins.clear()
        self.spawn_timer = 0.0

    def advance(self, dt: float, speed: float) -> None:
        self.spawn_timer += dt
        if self.spawn_timer >= self.tuning.coin_interval_ms:
            self.spawn_timer = 0.0
            self.spawn()

        shift = speed * (dt / 1000)
        for coin in self.coins:
            coin.y += shift
        limit = self.playfield.height + DESPAWN_MARGIN
        self.coins = [c for c in self.coins if not c.collected and c.y < limit]

    def spawn(self) -> Coin:
        lane = rand_int(self.rng, 0, self.playfield.lane_count - 1)
        coin = Coin(lane=lane, x=self.playfield.lane_center(lane), y=SPAWN_Y)
        self.coins.append(coin)
        return coin

    def collect(self, coin: Coin) -> None:
        """Mark a coin collected and drop it from the field at once."""
        coin.collected = True
        self.coins.remove(coin)
