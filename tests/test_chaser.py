from __future__ import annotations

import pytest

from baweda.chaser import Chaser


def test_collision_closes_distance_at_fixed_rate() -> None:
    chaser = Chaser()
    chaser.advance(16, collided=True, elapsed_ms=0)
    assert chaser.distance == pytest.approx(200 - 60 * 0.016 * 60)


def test_recovery_is_capped_at_base() -> None:
    chaser = Chaser()
    chaser.distance = 150
    chaser.advance(1000, collided=False, elapsed_ms=0)
    assert chaser.distance == pytest.approx(160)
    chaser.distance = 199.9
    chaser.advance(1000, collided=False, elapsed_ms=5000)
    assert chaser.distance == 200


def test_creep_starts_after_grace_period() -> None:
    chaser = Chaser()
    assert chaser.creep(9999) == 0
    assert chaser.creep(70000) == pytest.approx(50)

    chaser.distance = 100
    chaser.advance(1000, collided=False, elapsed_ms=70000)
    assert chaser.distance == pytest.approx(100 + 10 - 50)


def test_distance_never_negative_and_caught_at_zero() -> None:
    chaser = Chaser()
    chaser.distance = 5
    assert not chaser.caught()
    chaser.advance(50, collided=True, elapsed_ms=90000)
    assert chaser.distance == 0
    assert chaser.caught()
    chaser.reset()
    assert chaser.distance == chaser.base_distance
