from __future__ import annotations

import random

from baweda.coins import Coin, CoinField
from baweda.collisions import find_hazard_hit, resolve_frame, within_reach
from baweda.obstacles import Hazard, ObstacleKind
from baweda.powerups import PowerUp, PowerUpField, PowerUpKind
from baweda.utils import Box, Playfield

HITBOX = Box(100, 100, 24, 48)


def _hazard(kind: ObstacleKind) -> Hazard:
    return Hazard(kind, lane=1, x=95, y=110)


def test_box_overlap_is_strict() -> None:
    assert Box(0, 0, 10, 10).overlaps(Box(5, 5, 10, 10))
    assert not Box(0, 0, 10, 10).overlaps(Box(10, 0, 10, 10))


def test_airborne_clears_any_jumpable_overlap() -> None:
    for kind in (ObstacleKind.CONE, ObstacleKind.BIN):
        assert find_hazard_hit(HITBOX, [_hazard(kind)], airborne=True, sliding=False) is None
        assert find_hazard_hit(HITBOX, [_hazard(kind)], airborne=False, sliding=False) is not None


def test_vehicle_is_never_avoidable() -> None:
    vehicle = _hazard(ObstacleKind.VEHICLE)
    assert find_hazard_hit(HITBOX, [vehicle], airborne=True, sliding=False) is vehicle
    assert find_hazard_hit(HITBOX, [vehicle], airborne=False, sliding=True) is vehicle


def test_hazard_box_is_inset_before_testing() -> None:
    # Touches the drawn box by 3 units, which the 4 unit inset removes.
    grazing = Hazard(ObstacleKind.VEHICLE, lane=1, x=124 - 3, y=110)
    assert find_hazard_hit(HITBOX, [grazing], airborne=False, sliding=False) is None


def test_pickups_use_distance_from_hitbox_centre() -> None:
    cx, cy = HITBOX.center
    assert within_reach(HITBOX, cx + 35, cy, 36)
    assert not within_reach(HITBOX, cx + 36, cy, 36)


def test_resolve_frame_skips_hazards_during_cooldown() -> None:
    playfield = Playfield(420, 760)
    powerups = PowerUpField(playfield, rng=random.Random(0))
    coins = CoinField(playfield, rng=random.Random(0))
    cx, cy = HITBOX.center
    powerups.powerups.append(PowerUp(PowerUpKind.SLOW, lane=1, x=cx, y=cy + 30))
    coins.coins.append(Coin(lane=1, x=cx, y=cy - 20))
    coins.coins.append(Coin(lane=0, x=cx - 200, y=cy))

    result = resolve_frame(
        HITBOX,
        [_hazard(ObstacleKind.VEHICLE)],
        powerups,
        coins,
        airborne=False,
        sliding=False,
        cooldown=120,
    )
    assert not result.collided
    assert [p.kind for p in result.powerups] == [PowerUpKind.SLOW]
    assert len(result.coins) == 1
    assert powerups.powerups == []
    assert len(coins.coins) == 1
