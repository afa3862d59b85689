from __future__ import annotations

import random

import pytest

from baweda.coins import Coin, CoinField
from baweda.obstacles import OBSTACLE_SPECS, Hazard, ObstacleField, ObstacleKind
from baweda.powerups import PowerUpField, PowerUpKind
from baweda.settings import Tuning
from baweda.utils import Playfield


def _playfield() -> Playfield:
    return Playfield(420, 760)


def test_obstacle_spawn_leaves_a_lane_clear() -> None:
    field = ObstacleField(_playfield(), rng=random.Random(7))
    doubles = 0
    for _ in range(2000):
        spawned = field.spawn()
        lanes = [hazard.lane for hazard in spawned]
        assert len(lanes) in (1, 2)
        assert len(set(lanes)) == len(lanes)
        assert all(0 <= lane < 3 for lane in lanes)
        doubles += len(lanes) == 2
    assert 0.3 < doubles / 2000 < 0.4


def test_spawned_hazard_sits_above_field_centred_in_lane() -> None:
    playfield = _playfield()
    field = ObstacleField(playfield, rng=random.Random(3))
    for hazard in field.spawn():
        assert hazard.y == -hazard.height - 20
        assert hazard.x + hazard.width / 2 == pytest.approx(playfield.lane_center(hazard.lane))


def test_obstacles_scroll_and_despawn() -> None:
    field = ObstacleField(_playfield(), rng=random.Random(0))
    keep = Hazard(ObstacleKind.VEHICLE, lane=0, x=0, y=850)
    gone = Hazard(ObstacleKind.VEHICLE, lane=1, x=0, y=900)
    field.hazards.extend([keep, gone])
    field.advance(16, speed=280)
    assert field.hazards == [keep]
    assert keep.y == pytest.approx(850 + 280 * 0.016)


def test_obstacle_countdown_spawns_on_interval() -> None:
    field = ObstacleField(_playfield(), rng=random.Random(0))
    field.advance(1790, speed=0)
    assert field.hazards == []
    field.advance(10, speed=0)
    assert field.hazards
    assert field.spawn_timer == 0


@pytest.mark.parametrize(
    ("kind", "airborne", "sliding", "avoided"),
    [
        (ObstacleKind.CONE, True, False, True),
        (ObstacleKind.CONE, False, True, False),
        (ObstacleKind.BARRIER, False, True, True),
        (ObstacleKind.BARRIER, True, False, False),
        (ObstacleKind.BIN, True, False, True),
        (ObstacleKind.VEHICLE, True, False, False),
        (ObstacleKind.VEHICLE, False, True, False),
    ],
)
def test_avoidance_rules(kind: ObstacleKind, airborne: bool, sliding: bool, avoided: bool) -> None:
    hazard = Hazard(kind, lane=0, x=0, y=0)
    assert hazard.avoided_by(airborne, sliding) is avoided


def test_catalog_footprints() -> None:
    assert (OBSTACLE_SPECS[ObstacleKind.CONE].width, OBSTACLE_SPECS[ObstacleKind.CONE].height) == (28, 36)
    assert (OBSTACLE_SPECS[ObstacleKind.VEHICLE].width, OBSTACLE_SPECS[ObstacleKind.VEHICLE].height) == (54, 38)


def test_timed_powerup_replaces_and_expires() -> None:
    field = PowerUpField(_playfield(), rng=random.Random(0))
    field.activate(PowerUpKind.SPEED)
    field.advance(3000, speed=0)
    field.activate(PowerUpKind.SLOW)
    assert field.active is PowerUpKind.SLOW
    assert field.active_timer == 5000
    assert field.active_label() == "SLOW 5s"

    assert not field.advance(4000, speed=0)
    assert field.active_label() == "SLOW 1s"
    assert field.advance(1000, speed=0)
    assert field.active is None
    assert field.active_label() is None


def test_coin_powerup_does_not_take_active_slot() -> None:
    field = PowerUpField(_playfield(), rng=random.Random(0))
    field.activate(PowerUpKind.COIN)
    assert field.active is None


def test_powerup_spawn_interval_is_fixed() -> None:
    field = PowerUpField(_playfield(), tuning=Tuning(), rng=random.Random(0))
    field.advance(7999, speed=0)
    assert field.powerups == []
    field.advance(1, speed=0)
    assert len(field.powerups) == 1
    assert field.powerups[0].y == -30


def test_coin_field_spawns_scrolls_and_collects() -> None:
    field = CoinField(_playfield(), rng=random.Random(0))
    field.advance(3000, speed=0)
    assert len(field.coins) == 1
    coin = field.coins[0]
    field.collect(coin)
    assert coin.collected
    assert field.coins == []

    field.coins.append(Coin(lane=0, x=0, y=795))
    field.advance(16, speed=400)
    assert field.coins == []


def test_pickups_spawn_centred_in_every_lane() -> None:
    playfield = _playfield()
    powerups = PowerUpField(playfield, tuning=Tuning(), rng=random.Random(4))
    coins = CoinField(playfield, rng=random.Random(4))
    spawned = [powerups.spawn() for _ in range(60)] + [coins.spawn() for _ in range(60)]
    assert {item.lane for item in spawned} == {0, 1, 2}
    for item in spawned:
        assert item.x == pytest.approx(playfield.lane_center(item.lane))
