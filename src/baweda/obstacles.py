"""Hazard catalog and the lane-based obstacle spawner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import random

from .settings import Tuning
from .utils import ORANGE, RED, SLATE, TEAL, Box, Playfield

logger = logging.getLogger(__name__)

SPAWN_GAP = 20
DESPAWN_MARGIN = 100


class ObstacleKind(str, Enum):
    """Supported hazard variants."""

    CONE = "cone"
    BARRIER = "barrier"
    BIN = "bin"
    VEHICLE = "vehicle"


@dataclass(slots=True, frozen=True)
class ObstacleSpec:
    """Footprint and avoidance rules for one hazard kind."""

    width: float
    height: float
    jumpable: bool
    slidable: bool
    color: tuple[int, int, int]


OBSTACLE_SPECS: dict[ObstacleKind, ObstacleSpec] = {
    ObstacleKind.CONE: ObstacleSpec(28, 36, jumpable=True, slidable=False, color=ORANGE),
    ObstacleKind.BARRIER: ObstacleSpec(50, 28, jumpable=False, slidable=True, color=RED),
    ObstacleKind.BIN: ObstacleSpec(32, 44, jumpable=True, slidable=False, color=SLATE),
    ObstacleKind.VEHICLE: ObstacleSpec(54, 38, jumpable=False, slidable=False, color=TEAL),
}


@dataclass(slots=True)
class Hazard:
    """A single obstacle scrolling toward the runner."""

    kind: ObstacleKind
    lane: int
    x: float
    y: float

    @property
    def spec(self) -> ObstacleSpec:
        return OBSTACLE_SPECS[self.kind]

    @property
    def width(self) -> float:
        return self.spec.width

    @property
    def height(self) -> float:
        return self.spec.height

    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def avoided_by(self, airborne: bool, sliding: bool) -> bool:
        """Whether the runner's current pose clears this hazard."""
        spec = self.spec
        return (spec.jumpable and airborne) or (spec.slidable and sliding)


@dataclass(slots=True)
class ObstacleField:
    """Spawner and scroller for hazards."""

    playfield: Playfield
    tuning: Tuning = field(default_factory=Tuning)
    rng: random.Random = field(default_factory=random.Random)
    hazards: list[Hazard] = field(default_factory=list, init=False)
    spawn_timer: float = field(default=0.0, init=False)
    spawn_interval: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.hazards.clear()
        self.spawn_timer = 0.0
        self.spawn_interval = self.tuning.obstacle_interval_ms

    def advance(self, dt: float, speed: float) -> None:
        """Run the spawn countdown, scroll, and drop hazards past the bottom."""
        self.spawn_timer += dt
        if self.spawn_timer >= self.spawn_interval:
            self.spawn_timer = 0.0
            self.spawn()

        shift = speed * (dt / 1000)
        for hazard in self.hazards:
            hazard.y += shift

        limit = self.playfield.height + DESPAWN_MARGIN
        self.hazards = [hazard for hazard in self.hazards if hazard.y - hazard.height < limit]

    def spawn(self) -> list[Hazard]:
        """Place one or two hazards on distinct lanes, leaving one clear."""
        count = 2 if self.rng.random() < self.tuning.double_obstacle_chance else 1
        count = min(count, self.playfield.lane_count - 1)
        lanes = self.rng.sample(range(self.playfield.lane_count), count)

        spawned = []
        for lane in lanes:
            kind = self.rng.choice(list(ObstacleKind))
            spec = OBSTACLE_SPECS[kind]
            hazard = Hazard(
                kind=kind,
                lane=lane,
                x=self.playfield.lane_center(lane) - spec.width / 2,
                y=-spec.height - SPAWN_GAP,
            )
            spawned.append(hazard)
        self.hazards.extend(spawned)
        logger.debug("Spawned %s", ", ".join(f"{h.kind.value}@{h.lane}" for h in spawned))
        return spawned
