from __future__ import annotations

import tempfile
from pathlib import Path

import pygame

from baweda.settings import ControlScheme, SettingsManager
from baweda.simulation import Intent, RunPhase
from baweda.utils import load_json, save_json


def _patch_data_dir(monkeypatch, tmp: Path) -> None:
    from baweda import settings, utils

    monkeypatch.setattr(utils, "DATA_DIR", tmp)
    monkeypatch.setattr(settings, "SETTINGS_FILE", tmp / "settings.json")


def test_settings_load_save_round_trip(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        _patch_data_dir(monkeypatch, Path(tmp))

        mgr = SettingsManager()
        mgr.settings.tuning.base_speed = 320.0
        mgr.settings.controls.jump = pygame.K_w
        mgr.save()

        loaded = SettingsManager()
        assert loaded.settings.tuning.base_speed == 320.0
        assert loaded.settings.controls.jump == pygame.K_w


def test_settings_fall_back_on_bad_values(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        _patch_data_dir(monkeypatch, Path(tmp))
        save_json(
            Path(tmp) / "settings.json",
            {"master_volume": "loud", "tuning": {"base_speed": "300", "lane_ease": "smooth"}},
        )

        settings = SettingsManager().settings
        assert settings.master_volume == 0.8
        assert settings.tuning.base_speed == 300.0
        assert settings.tuning.lane_ease == 0.005


def test_json_helpers() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        p = Path(tmp) / "x.json"
        save_json(p, {"ok": True})
        assert load_json(p, {}) == {"ok": True}
        assert load_json(Path(tmp) / "missing.json", 7) == 7


def test_key_mapping_respects_phase() -> None:
    from baweda.game import intent_for_key

    controls = ControlScheme()
    assert intent_for_key(pygame.K_UP, controls, RunPhase.PLAYING) is Intent.JUMP
    assert intent_for_key(pygame.K_DOWN, controls, RunPhase.PLAYING) is Intent.SLIDE
    assert intent_for_key(pygame.K_UP, controls, RunPhase.PAUSED) is None
    assert intent_for_key(pygame.K_p, controls, RunPhase.PAUSED) is Intent.TOGGLE_PAUSE
    assert intent_for_key(pygame.K_ESCAPE, controls, RunPhase.START) is None


def test_integration_start_move_and_render(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)

    from baweda.game import RunnerGame

    game = RunnerGame(root=tmp_path, seed=3)
    assert game.sim.phase is RunPhase.START

    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))
    assert game._handle_events()
    assert game.sim.phase is RunPhase.PLAYING

    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT))
    assert game._handle_events()
    assert game.sim.runner.lane == 2

    for _ in range(30):
        game.sim.step(16)
        game._handle_sim_events(game.sim.drain_events())
    game._render()

    game.sim.pause()
    game._render()
    assert game._active_menu() is game.pause_menu
    pygame.quit()


def test_out_of_range_tuning_falls_back_to_defaults(monkeypatch) -> None:
    import random

    from baweda.simulation import Simulation

    with tempfile.TemporaryDirectory() as tmp:
        _patch_data_dir(monkeypatch, Path(tmp))
        save_json(
            Path(tmp) / "settings.json",
            {
                "tuning": {
                    "lane_ease": -0.5,
                    "max_frame_ms": -1,
                    "speed_smoothing": 2,
                    "jump_velocity": 800,
                    "double_obstacle_chance": 1.5,
                    "coin_value": 1e999,
                    "gravity": "nan",
                    "chaser_creep": 0,
                }
            },
        )

        tuning = SettingsManager().settings.tuning
        assert tuning.lane_ease == 0.005
        assert tuning.max_frame_ms == 50.0
        assert tuning.speed_smoothing == 0.01
        assert tuning.jump_velocity == -800.0
        assert tuning.double_obstacle_chance == 0.35
        assert tuning.coin_value == 10
        assert tuning.gravity == 2800.0
        assert tuning.chaser_creep == 0.0

        sim = Simulation(tuning=tuning, rng=random.Random(1))
        sim.start()
        sim.step(16)
        assert sim.state.elapsed_ms == 16


def test_speed_cap_below_base_restores_speed_defaults(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        _patch_data_dir(monkeypatch, Path(tmp))
        save_json(Path(tmp) / "settings.json", {"tuning": {"base_speed": 500, "max_speed": 300}})

        tuning = SettingsManager().settings.tuning
        assert tuning.base_speed == 280.0
        assert tuning.max_speed == 700.0


def test_focus_loss_pauses_a_running_game(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)

    from baweda.game import RunnerGame

    game = RunnerGame(root=tmp_path, seed=8)
    game.sim.start()
    assert game.sim.phase is RunPhase.PLAYING

    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.WINDOWFOCUSLOST))
    assert game._handle_events()
    assert game.sim.phase is RunPhase.PAUSED

    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.WINDOWFOCUSLOST))
    assert game._handle_events()
    assert game.sim.phase is RunPhase.PAUSED
    pygame.quit()
