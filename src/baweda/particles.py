"""Footstep dust, hit sparks, and floating score text."""

from __future__ import annotations

from dataclasses import dataclass, field
import random

from .utils import rand_range

FLOATING_TEXT_LIFE = 1.2
FLOATING_TEXT_RISE = 40


@dataclass(slots=True)
class Particle:
    """Short-lived dot; life and velocity are in seconds and units/sec."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    radius: float
    color: tuple[int, int, int] = (150, 140, 130)

    @property
    def alpha(self) -> float:
        return max(0.0, min(1.0, self.life / self.max_life))

    def advance(self, seconds: float, gravity: float) -> None:
        self.x += self.vx * seconds
        self.y += self.vy * seconds
        self.vy += gravity * seconds
        self.life -= seconds


@dataclass(slots=True)
class FloatingText:
    """Label that drifts upward and fades out."""

    text: str
    x: float
    y: float
    color: tuple[int, int, int]
    life: float = FLOATING_TEXT_LIFE
    max_life: float = FLOATING_TEXT_LIFE

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)

    @property
    def rise(self) -> float:
        return (1 - self.alpha) * FLOATING_TEXT_RISE


@dataclass(slots=True)
class ParticleSystem:
    """Owns particles and floating text plus helper emitters."""

    rng: random.Random = field(default_factory=random.Random)
    particles: list[Particle] = field(default_factory=list)
    texts: list[FloatingText] = field(default_factory=list)

    def clear(self) -> None:
        self.particles.clear()
        self.texts.clear()

    def emit_dust(self, x: float, y: float) -> None:
        """Kick up a little dust where a foot lands."""
        for _ in range(3):
            self.particles.append(
                Particle(
                    x=x + rand_range(self.rng, -8, 8),
                    y=y + rand_range(self.rng, -4, 4),
                    vx=rand_range(self.rng, -30, 30),
                    vy=rand_range(self.rng, -40, -10),
                    life=rand_range(self.rng, 0.3, 0.6),
                    max_life=0.5,
                    radius=rand_range(self.rng, 2, 5),
                )
            )

    def emit_burst(self, x: float, y: float, color: tuple[int, int, int], count: int = 14) -> None:
        """Emit a burst of sparks when the runner clips a hazard."""
        for _ in range(count):
            self.particles.append(
                Particle(
                    x=x,
                    y=y,
                    vx=rand_range(self.rng, -140, 140),
                    vy=rand_range(self.rng, -160, 40),
                    life=rand_range(self.rng, 0.25, 0.5),
                    max_life=0.5,
                    radius=rand_range(self.rng, 1.5, 3.5),
                    color=color,
                )
            )

    def show_text(self, text: str, x: float, y: float, color: tuple[int, int, int]) -> None:
        self.texts.append(FloatingText(text=text, x=x, y=y, color=color))

    def advance(self, dt: float) -> None:
        """Age everything by dt milliseconds and drop what has faded."""
        seconds = dt / 1000
        for particle in self.particles:
            particle.advance(seconds, gravity=60)
        self.particles = [p for p in self.particles if p.life > 0]

        for text in self.texts:
            text.life -= seconds
        self.texts = [t for t in self.texts if t.life > 0]
