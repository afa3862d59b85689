"""Runner kinematics: lanes, jump arc, slide, and hitbox."""

from __future__ import annotations

from dataclasses import dataclass, field

from .settings import Tuning
from .utils import Box, Playfield

RUNNER_WIDTH = 32
RUNNER_HEIGHT = 56
HITBOX_INSET = 4
WALK_FRAME_MS = 150
WALK_FRAMES = 4
WOBBLE_LIMIT = 4.0
WOBBLE_STEP = 0.12
NOMINAL_FRAME_MS = 16.0


@dataclass(slots=True, eq=False)
class Runner:
    """State and behavior for the player-controlled runner."""

    playfield: Playfield
    tuning: Tuning = field(default_factory=Tuning)
    width: float = RUNNER_WIDTH
    height: float = RUNNER_HEIGHT

    lane: int = field(default=1, init=False)
    x: float = field(default=0.0, init=False)
    target_x: float = field(default=0.0, init=False)
    y: float = field(default=0.0, init=False)
    velocity_y: float = field(default=0.0, init=False)
    is_jumping: bool = field(default=False, init=False)
    is_sliding: bool = field(default=False, init=False)
    slide_timer: float = field(default=0.0, init=False)
    anim_frame: int = field(default=0, init=False)
    anim_timer: float = field(default=0.0, init=False)
    wobble: float = field(default=0.0, init=False)
    wobble_dir: int = field(default=1, init=False)

    def __post_init__(self) -> None:
        self.reset()

    @property
    def ground_y(self) -> float:
        return self.playfield.ground_y

    @property
    def airborne(self) -> bool:
        return self.is_jumping

    def lane_x(self, lane: int) -> float:
        """Left edge of the runner when standing centred in a lane."""
        return self.playfield.lane_center(lane) - self.width / 2

    def reset(self, playfield: Playfield | None = None) -> None:
        """Put the runner back in the middle lane on the ground."""
        if playfield is not None:
            self.playfield = playfield
        self.lane = self.playfield.lane_count // 2
        self.x = self.lane_x(self.lane)
        self.target_x = self.x
        self.y = self.ground_y
        self.velocity_y = 0.0
        self.is_jumping = False
        self.is_sliding = False
        self.slide_timer = 0.0
        self.anim_frame = 0
        self.anim_timer = 0.0
        self.wobble = 0.0
        self.wobble_dir = 1

    def relayout(self, playfield: Playfield) -> None:
        """Adopt a new playfield mid-run, snapping to the current lane."""
        self.playfield = playfield
        self.lane = min(self.lane, playfield.lane_count - 1)
        self.x = self.lane_x(self.lane)
        self.target_x = self.x
        if not self.is_jumping:
            self.y = self.ground_y

    def shift_lane(self, direction: int) -> bool:
        """Move one lane left (-1) or right (+1); ignored at the road edge."""
        step = 1 if direction > 0 else -1
        destination = self.lane + step
        if not 0 <= destination < self.playfield.lane_count:
            return False
        self.lane = destination
        self.target_x = self.lane_x(destination)
        return True

    def move_left(self) -> bool:
        return self.shift_lane(-1)

    def move_right(self) -> bool:
        return self.shift_lane(1)

    def jump(self) -> bool:
        """Start a jump from the ground; cancels any slide."""
        if self.is_jumping:
            return False
        self.is_jumping = True
        self.velocity_y = self.tuning.jump_velocity
        self.is_sliding = False
        self.slide_timer = 0.0
        return True

    def slide(self) -> bool:
        """Start or restart a slide; only possible on the ground."""
        if self.is_jumping:
            return False
        self.is_sliding = True
        self.slide_timer = self.tuning.slide_duration_ms
        return True

    def advance(self, dt: float) -> None:
        """Integrate one frame of motion."""
        seconds = dt / 1000
        self.x += (self.target_x - self.x) * (1 - self.tuning.lane_ease**seconds)

        if self.is_jumping:
            self.velocity_y += self.tuning.gravity * seconds
            self.y += self.velocity_y * seconds
            if self.y >= self.ground_y:
                self.y = self.ground_y
                self.velocity_y = 0.0
                self.is_jumping = False

        if self.is_sliding:
            self.slide_timer -= dt
            if self.slide_timer <= 0:
                self.slide_timer = 0.0
                self.is_sliding = False

        self.wobble += self.wobble_dir * WOBBLE_STEP * (dt / NOMINAL_FRAME_MS)
        if abs(self.wobble) > WOBBLE_LIMIT:
            self.wobble = max(-WOBBLE_LIMIT, min(WOBBLE_LIMIT, self.wobble))
            self.wobble_dir *= -1

        if not self.is_jumping and not self.is_sliding:
            self.anim_timer += dt
            if self.anim_timer >= WALK_FRAME_MS:
                self.anim_timer = 0.0
                self.anim_frame = (self.anim_frame + 1) % WALK_FRAMES

    def hitbox(self) -> Box:
        """Collision box, smaller than the drawn body."""
        if self.is_sliding:
            half = self.height * 0.5
            return Box(self.x + 2, self.ground_y + half, self.width - 4, half)
        return Box(self.x, self.y, self.width, self.height).inset(HITBOX_INSET)

    def drawn_box(self) -> Box:
        """Box the renderer draws the body in."""
        if self.is_sliding:
            half = self.height * 0.5
            return Box(self.x, self.ground_y + half, self.width, half)
        return Box(self.x, self.y, self.width, self.height)

    def steps_dust(self) -> bool:
        """Whether a footstep lands this frame."""
        return (
            not self.is_jumping
            and not self.is_sliding
            and self.anim_frame % 2 == 0
            and self.anim_timer < 20
        )
