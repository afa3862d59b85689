"""Run orchestration: phases, the per-frame pipeline, and render snapshots."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
import logging
import random

from .chaser import Chaser
from .coins import Coin, CoinField
from .collisions import resolve_frame
from .obstacles import Hazard, ObstacleField
from .particles import FloatingText, Particle, ParticleSystem
from .player import Runner
from .powerups import POWERUP_COLORS, PowerUp, PowerUpField, PowerUpKind
from .score import DISTANCE_SCORE_FACTOR, BestScoreStore, ScoreTracker
from .settings import Tuning
from .utils import GOLD, RED, SCREEN_HEIGHT, SCREEN_WIDTH, YELLOW, Box, Playfield, clamp

logger = logging.getLogger(__name__)

ROAD_DASH_PERIOD = 80
SKYLINE_PERIOD = 200
SKYLINE_PARALLAX = 0.15


class RunPhase(Enum):
    """Finite states of a run."""

    START = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class Intent(Enum):
    """Player and meta intents produced by input adapters."""

    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    JUMP = auto()
    SLIDE = auto()
    TOGGLE_PAUSE = auto()
    START = auto()


class SimEvent(Enum):
    """Feedback cues for the presentation layer."""

    START = auto()
    HIT = auto()
    COIN = auto()
    POWERUP = auto()
    GAME_OVER = auto()


@dataclass(slots=True)
class RunState:
    """Mutable run-level state."""

    phase: RunPhase = RunPhase.START
    elapsed_ms: float = 0.0
    speed: float = 0.0
    collision_cooldown: float = 0.0
    collision_flash: float = 0.0
    collided: bool = False


@dataclass(slots=True)
class RoadScroll:
    """Offsets for the dashed lane lines and the slower skyline."""

    offset: float = 0.0
    skyline_offset: float = 0.0

    def reset(self) -> None:
        self.offset = 0.0
        self.skyline_offset = 0.0

    def advance(self, dt: float, speed: float) -> None:
        seconds = dt / 1000
        self.offset = (self.offset + speed * seconds) % ROAD_DASH_PERIOD
        self.skyline_offset = (self.skyline_offset + speed * SKYLINE_PARALLAX * seconds) % SKYLINE_PERIOD


@dataclass(slots=True, frozen=True)
class RunnerPose:
    lane: int
    x: float
    y: float
    jumping: bool
    sliding: bool
    anim_frame: int
    wobble: float
    body: Box


@dataclass(slots=True, frozen=True)
class HudValues:
    """Strings and numbers shown on the heads-up display."""

    score: int
    chaser_label: str
    powerup_label: str | None


@dataclass(slots=True, frozen=True)
class RenderSnapshot:
    """Read-only copy of everything a renderer needs for one frame."""

    phase: RunPhase
    elapsed_ms: float
    speed: float
    runner: RunnerPose
    chaser_distance: float
    hazards: tuple[Hazard, ...]
    powerups: tuple[PowerUp, ...]
    coins: tuple[Coin, ...]
    particles: tuple[Particle, ...]
    texts: tuple[FloatingText, ...]
    score: int
    multiplier: float
    best_score: int
    flash: float
    road_offset: float
    skyline_offset: float
    hud: HudValues


class Simulation:
    """Owns every subsystem of a run and advances them in a fixed order.

    The host calls :meth:`frame` with a monotonic timestamp once per loop
    iteration; tests call :meth:`step` with synthetic deltas. Run-scoped
    objects are built once and reset in place on every start.
    """

    def __init__(
        self,
        width: float = SCREEN_WIDTH,
        height: float = SCREEN_HEIGHT,
        tuning: Tuning | None = None,
        rng: random.Random | None = None,
        store: BestScoreStore | None = None,
    ) -> None:
        self.tuning = tuning if tuning is not None else Tuning()
        self.rng = rng if rng is not None else random.Random()
        self.playfield = Playfield(width, height)

        self.state = RunState(speed=self.tuning.base_speed)
        self.score = ScoreTracker(store)
        self.runner = Runner(self.playfield, self.tuning)
        self.chaser = Chaser(self.tuning)
        self.obstacles = ObstacleField(self.playfield, self.tuning, self.rng)
        self.powerups = PowerUpField(self.playfield, self.tuning, self.rng)
        self.coins = CoinField(self.playfield, self.tuning, self.rng)
        self.effects = ParticleSystem(self.rng)
        self.road = RoadScroll()

        self.last_timestamp: float | None = None
        self.events: list[SimEvent] = []

    @property
    def phase(self) -> RunPhase:
        return self.state.phase

    # Phase transitions -------------------------------------------------

    def start(self) -> None:
        """Begin a fresh run, resetting every subsystem in place."""
        self.state.phase = RunPhase.PLAYING
        self.state.elapsed_ms = 0.0
        self.state.speed = self.tuning.base_speed
        self.state.collision_cooldown = 0.0
        self.state.collision_flash = 0.0
        self.state.collided = False
        self.last_timestamp = None

        self.effects.clear()
        self.score.reset()
        self.runner.reset(self.playfield)
        self.obstacles.reset()
        self.powerups.reset()
        self.coins.reset()
        self.chaser.reset()
        self.road.reset()

        self.events.append(SimEvent.START)
        logger.info("Run started (best %d)", self.score.best)

    def pause(self) -> None:
        if self.state.phase != RunPhase.PLAYING:
            return
        self.state.phase = RunPhase.PAUSED
        logger.debug("Paused at %.0f ms", self.state.elapsed_ms)

    def resume(self) -> None:
        if self.state.phase != RunPhase.PAUSED:
            return
        self.state.phase = RunPhase.PLAYING
        self.last_timestamp = None

    def toggle_pause(self) -> None:
        if self.state.phase == RunPhase.PLAYING:
            self.pause()
        elif self.state.phase == RunPhase.PAUSED:
            self.resume()

    def game_over(self) -> None:
        self.state.phase = RunPhase.GAME_OVER
        self.score.commit_best()
        self.events.append(SimEvent.GAME_OVER)
        logger.info(
            "Caught after %.1fs with score %d (best %d)",
            self.state.elapsed_ms / 1000,
            self.score.display,
            self.score.best,
        )

    def apply_intent(self, intent: Intent) -> None:
        """Route an input intent; gameplay intents only act while playing."""
        phase = self.state.phase
        if intent is Intent.START:
            if phase in (RunPhase.START, RunPhase.GAME_OVER):
                self.start()
            return
        if intent is Intent.TOGGLE_PAUSE:
            self.toggle_pause()
            return
        if phase != RunPhase.PLAYING:
            return
        if intent is Intent.MOVE_LEFT:
            self.runner.move_left()
        elif intent is Intent.MOVE_RIGHT:
            self.runner.move_right()
        elif intent is Intent.JUMP:
            self.runner.jump()
        elif intent is Intent.SLIDE:
            self.runner.slide()

    def resize(self, width: float, height: float) -> None:
        """Re-lay out lanes for a new window size."""
        self.playfield = Playfield(width, height, self.playfield.lane_count)
        for part in (self.obstacles, self.powerups, self.coins):
            part.playfield = self.playfield
        if self.state.phase in (RunPhase.PLAYING, RunPhase.PAUSED):
            self.runner.relayout(self.playfield)
        else:
            self.runner.reset(self.playfield)

    # Frame pipeline ----------------------------------------------------

    def frame(self, timestamp_ms: float) -> None:
        """Advance using a host timestamp; the first frame uses a nominal delta."""
        if self.state.phase != RunPhase.PLAYING:
            return
        if self.last_timestamp is None:
            dt = self.tuning.default_frame_ms
        else:
            dt = timestamp_ms - self.last_timestamp
        self.last_timestamp = timestamp_ms
        self.step(dt)

    def step(self, dt: float) -> None:
        """Advance one frame by dt milliseconds, clamped to the frame cap."""
        if self.state.phase != RunPhase.PLAYING:
            return
        tuning = self.tuning
        state = self.state
        dt = clamp(dt, 0.0, tuning.max_frame_ms)

        state.elapsed_ms += dt
        if self.powerups.active is None:
            target = tuning.target_speed(state.elapsed_ms)
            state.speed += (target - state.speed) * tuning.speed_smoothing

        self.score.add_distance(state.speed * (dt / 1000) * DISTANCE_SCORE_FACTOR)
        self.score.update_multiplier(state.elapsed_ms / 1000)

        self.road.advance(dt, state.speed)
        self.runner.advance(dt)
        self.obstacles.advance(dt, state.speed)
        if self.powerups.advance(dt, state.speed):
            state.speed = tuning.target_speed(state.elapsed_ms)
        self.coins.advance(dt, state.speed)
        self.effects.advance(dt)

        if state.collision_cooldown > 0:
            state.collision_cooldown -= dt
        if state.collision_flash > 0:
            state.collision_flash -= dt

        if self.runner.steps_dust():
            self.effects.emit_dust(self.runner.x + self.runner.width / 2, self.runner.ground_y + self.runner.height)

        self._resolve_contacts()

        self.chaser.advance(dt, state.collided, state.elapsed_ms)
        if self.chaser.caught():
            self.game_over()
            return

        self.obstacles.spawn_interval = tuning.obstacle_interval(state.elapsed_ms)

    def _resolve_contacts(self) -> None:
        state = self.state
        runner = self.runner
        hitbox = runner.hitbox()
        contacts = resolve_frame(
            hitbox,
            self.obstacles.hazards,
            self.powerups,
            self.coins,
            airborne=runner.airborne,
            sliding=runner.is_sliding,
            cooldown=state.collision_cooldown,
        )

        state.collided = contacts.collided
        if contacts.hazard is not None:
            state.collision_cooldown = self.tuning.collision_cooldown_ms
            state.collision_flash = self.tuning.collision_flash_ms
            cx = runner.x + runner.width / 2
            self.effects.show_text("OUCH!", cx, runner.y, RED)
            self.effects.emit_burst(cx, runner.y + runner.height / 2, contacts.hazard.spec.color)
            self.events.append(SimEvent.HIT)
            logger.debug("Hit %s in lane %d", contacts.hazard.kind.value, contacts.hazard.lane)

        for powerup in contacts.powerups:
            self._apply_powerup(powerup)

        for coin in contacts.coins:
            self.score.add_bonus(self.tuning.coin_value)
            self.effects.show_text(f"+{self.tuning.coin_value}", coin.x, coin.y, YELLOW)
            self.events.append(SimEvent.COIN)

    def _apply_powerup(self, powerup: PowerUp) -> None:
        tuning = self.tuning
        self.events.append(SimEvent.POWERUP)
        color = POWERUP_COLORS[powerup.kind]
        if powerup.kind is PowerUpKind.COIN:
            self.score.add_bonus(tuning.bonus_coin_value)
            self.effects.show_text(f"+{tuning.bonus_coin_value} COIN!", powerup.x, powerup.y, GOLD)
            return

        self.powerups.activate(powerup.kind)
        if powerup.kind is PowerUpKind.SPEED:
            self.state.speed = min(self.state.speed * 1.5, tuning.max_speed)
        elif powerup.kind is PowerUpKind.SLOW:
            self.state.speed *= 0.5
        self.effects.show_text(f"{powerup.kind.value.upper()}!", powerup.x, powerup.y, color)
        logger.debug("Power-up %s active, speed now %.1f", powerup.kind.value, self.state.speed)

    # Read side ---------------------------------------------------------

    def drain_events(self) -> list[SimEvent]:
        """Return and clear the feedback cues raised since the last call."""
        events, self.events = self.events, []
        return events

    def hud(self) -> HudValues:
        distance = max(0, int(self.chaser.distance))
        return HudValues(
            score=self.score.display,
            chaser_label=f"{distance}m",
            powerup_label=self.powerups.active_label(),
        )

    def snapshot(self) -> RenderSnapshot:
        runner = self.runner
        return RenderSnapshot(
            phase=self.state.phase,
            elapsed_ms=self.state.elapsed_ms,
            speed=self.state.speed,
            runner=RunnerPose(
                lane=runner.lane,
                x=runner.x,
                y=runner.y,
                jumping=runner.is_jumping,
                sliding=runner.is_sliding,
                anim_frame=runner.anim_frame,
                wobble=runner.wobble,
                body=runner.drawn_box(),
            ),
            chaser_distance=self.chaser.distance,
            hazards=tuple(replace(h) for h in self.obstacles.hazards),
            powerups=tuple(replace(p) for p in self.powerups.powerups),
            coins=tuple(replace(c) for c in self.coins.coins),
            particles=tuple(replace(p) for p in self.effects.particles),
            texts=tuple(replace(t) for t in self.effects.texts),
            score=self.score.display,
            multiplier=self.score.multiplier,
            best_score=self.score.best,
            flash=clamp(self.state.collision_flash / max(self.tuning.collision_flash_ms, 1.0), 0.0, 1.0),
            road_offset=self.road.offset,
            skyline_offset=self.road.skyline_offset,
            hud=self.hud(),
        )
