from __future__ import annotations

import pytest

from baweda.player import Runner
from baweda.settings import Tuning
from baweda.utils import Box, Playfield


def _runner() -> Runner:
    return Runner(Playfield(420, 760))


def test_runner_starts_in_middle_lane_on_ground() -> None:
    runner = _runner()
    assert runner.lane == 1
    assert runner.y == runner.ground_y
    assert runner.x == runner.target_x == runner.lane_x(1)


def test_lane_shift_stops_at_road_edges() -> None:
    runner = _runner()
    assert runner.move_left()
    assert not runner.move_left()
    assert runner.lane == 0
    assert runner.move_right()
    assert runner.move_right()
    assert not runner.move_right()
    assert runner.lane == 2
    assert runner.target_x == runner.lane_x(2)


def test_lane_ease_does_not_depend_on_frame_split() -> None:
    split = _runner()
    whole = _runner()
    split.move_right()
    whole.move_right()
    split.advance(10)
    split.advance(10)
    whole.advance(20)
    assert split.x == pytest.approx(whole.x)
    assert split.lane_x(1) < whole.x < whole.target_x


def test_jump_arc_lands_back_on_ground() -> None:
    runner = _runner()
    assert runner.jump()
    assert runner.velocity_y == Tuning().jump_velocity
    assert not runner.jump()

    frames = 0
    while runner.is_jumping:
        runner.advance(16)
        assert runner.y <= runner.ground_y
        frames += 1
        assert frames < 60
    assert runner.y == runner.ground_y
    assert runner.velocity_y == 0


def test_jump_cancels_slide_and_slide_needs_ground() -> None:
    runner = _runner()
    runner.slide()
    assert runner.is_sliding
    runner.jump()
    assert runner.is_jumping
    assert not runner.is_sliding
    assert not runner.slide()
    assert not runner.is_sliding


def test_slide_expires_after_duration() -> None:
    runner = _runner()
    runner.slide()
    for _ in range(37):
        runner.advance(16)
    assert runner.is_sliding
    runner.advance(16)
    assert not runner.is_sliding


def test_hitbox_shapes() -> None:
    runner = _runner()
    assert runner.hitbox() == Box(runner.x + 4, runner.y + 4, 24, 48)

    runner.slide()
    box = runner.hitbox()
    assert box.h == pytest.approx(28)
    assert box.y == pytest.approx(runner.ground_y + 28)
    assert box.x == pytest.approx(runner.x + 2)


def test_walk_cycle_wraps() -> None:
    runner = _runner()
    for _ in range(4):
        runner.advance(150)
    assert runner.anim_frame == 0
    runner.advance(150)
    assert runner.anim_frame == 1


def test_relayout_snaps_to_lane() -> None:
    runner = _runner()
    runner.move_left()
    wider = Playfield(800, 600)
    runner.relayout(wider)
    assert runner.x == wider.lane_center(0) - runner.width / 2
    assert runner.y == wider.ground_y
