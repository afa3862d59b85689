"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
import logging
import math
import pygame

from .utils import SETTINGS_FILE, ensure_data_dirs, load_json, save_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Tuning:
    """Feel constants for the simulation.

    Speeds are in playfield units per second and every duration is in
    milliseconds. ``speed_smoothing`` is applied once per frame and
    ``lane_ease`` is the fraction of the lane gap left after one second.
    """

    base_speed: float = 280.0
    max_speed: float = 700.0
    speed_ramp: float = 15.0
    speed_smoothing: float = 0.01
    lane_ease: float = 0.005

    gravity: float = 2800.0
    jump_velocity: float = -800.0
    slide_duration_ms: float = 600.0

    chaser_base_distance: float = 200.0
    chaser_catch_rate: float = 60.0
    chaser_recover_rate: float = 10.0
    chaser_grace_ms: float = 10000.0
    chaser_creep: float = 50.0

    obstacle_interval_ms: float = 1800.0
    obstacle_interval_floor: float = 0.4
    double_obstacle_chance: float = 0.35
    powerup_interval_ms: float = 8000.0
    powerup_duration_ms: float = 5000.0
    coin_interval_ms: float = 3000.0
    coin_value: int = 10
    bonus_coin_value: int = 50

    collision_cooldown_ms: float = 800.0
    collision_flash_ms: float = 400.0
    max_frame_ms: float = 50.0
    default_frame_ms: float = 16.0

    def target_speed(self, elapsed_ms: float) -> float:
        """Ramp speed for a run that has lasted elapsed_ms."""
        return min(self.base_speed + (elapsed_ms / 1000) * self.speed_ramp, self.max_speed)

    def obstacle_interval(self, elapsed_ms: float) -> float:
        """Obstacle spawn interval, shrinking to a floor as the run goes on."""
        factor = max(self.obstacle_interval_floor, 1 - (elapsed_ms / 60000) * 0.5)
        return self.obstacle_interval_ms * factor


def _positive(value: float) -> bool:
    return value > 0


def _non_negative(value: float) -> bool:
    return value >= 0


# Fields not listed here must be strictly positive.
TUNING_CHECKS = {
    "speed_ramp": _non_negative,
    "speed_smoothing": lambda value: 0 < value <= 1,
    "lane_ease": lambda value: 0 < value < 1,
    "jump_velocity": lambda value: value < 0,
    "chaser_recover_rate": _non_negative,
    "chaser_creep": _non_negative,
    "obstacle_interval_floor": lambda value: 0 < value <= 1,
    "double_obstacle_chance": lambda value: 0 <= value <= 1,
    "coin_value": _non_negative,
    "bonus_coin_value": _non_negative,
    "collision_cooldown_ms": _non_negative,
    "collision_flash_ms": _non_negative,
}


def tuning_value_ok(name: str, value: float) -> bool:
    """Whether a tuning value is finite and inside its allowed range."""
    if not math.isfinite(value):
        return False
    return TUNING_CHECKS.get(name, _positive)(value)


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    screen_shake: bool = True
    show_particles: bool = True


@dataclass(slots=True)
class ControlScheme:
    """Keyboard bindings for the four runner intents and pause."""

    left: int = pygame.K_LEFT
    right: int = pygame.K_RIGHT
    jump: int = pygame.K_UP
    slide: int = pygame.K_DOWN
    pause: int = pygame.K_p


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    master_volume: float = 0.8
    music_volume: float = 0.6
    sfx_volume: float = 0.8
    display: DisplaySettings = field(default_factory=DisplaySettings)
    controls: ControlScheme = field(default_factory=ControlScheme)
    tuning: Tuning = field(default_factory=Tuning)


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self) -> None:
        ensure_data_dirs()
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(SETTINGS_FILE, {})
        settings = GameSettings()
        if not isinstance(raw, dict):
            logger.info("Ignoring malformed settings file %s", SETTINGS_FILE)
            return settings

        settings.master_volume = self._float(raw, "master_volume", settings.master_volume)
        settings.music_volume = self._float(raw, "music_volume", settings.music_volume)
        settings.sfx_volume = self._float(raw, "sfx_volume", settings.sfx_volume)

        display = raw.get("display", {})
        if isinstance(display, dict):
            settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
            settings.display.screen_shake = bool(display.get("screen_shake", settings.display.screen_shake))
            settings.display.show_particles = bool(display.get("show_particles", settings.display.show_particles))

        controls = raw.get("controls", {})
        if isinstance(controls, dict):
            settings.controls = self._load_controls(controls, settings.controls)

        tuning = raw.get("tuning", {})
        if isinstance(tuning, dict):
            settings.tuning = self._load_tuning(tuning, settings.tuning)
        return settings

    @staticmethod
    def _float(payload: dict, key: str, default: float) -> float:
        try:
            return float(payload.get(key, default))
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _load_controls(payload: dict[str, int], defaults: ControlScheme) -> ControlScheme:
        scheme = ControlScheme()
        for item in fields(ControlScheme):
            try:
                setattr(scheme, item.name, int(payload.get(item.name, getattr(defaults, item.name))))
            except (TypeError, ValueError):
                setattr(scheme, item.name, getattr(defaults, item.name))
        return scheme

    @staticmethod
    def _load_tuning(payload: dict[str, float], defaults: Tuning) -> Tuning:
        tuning = Tuning()
        for item in fields(Tuning):
            default = getattr(defaults, item.name)
            value = payload.get(item.name, default)
            try:
                converted = type(default)(value)
            except (TypeError, ValueError, OverflowError):
                converted = None
            if converted is None or not tuning_value_ok(item.name, converted):
                logger.debug("Invalid tuning value for %s: %r", item.name, value)
                converted = default
            setattr(tuning, item.name, converted)
        if tuning.max_speed < tuning.base_speed:
            logger.debug("max_speed below base_speed, restoring speed defaults")
            tuning.base_speed = defaults.base_speed
            tuning.max_speed = defaults.max_speed
        return tuning

    def save(self) -> None:
        """Persist settings to disk."""
        save_json(SETTINGS_FILE, asdict(self.settings))

    def toggle_display(self, field_name: str) -> bool:
        """Flip a boolean display option and save."""
        value = not bool(getattr(self.settings.display, field_name))
        setattr(self.settings.display, field_name, value)
        self.save()
        return value

    def adjust_volume(self, field_name: str, delta: float) -> None:
        """Adjust a volume setting and save."""
        value = float(getattr(self.settings, field_name))
        setattr(self.settings, field_name, max(0.0, min(1.0, value + delta)))
        self.save()
