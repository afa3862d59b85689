"""Pygame host: event loop, input mapping, and rendering of simulation snapshots."""

from __future__ import annotations

from pathlib import Path
import logging
import math
import random
import pygame

from .audio import AudioManager
from .menu import Menu, MenuItem
from .obstacles import Hazard, ObstacleKind
from .powerups import POWERUP_COLORS, PowerUp, PowerUpKind
from .score import BestScoreStore
from .settings import ControlScheme, GameSettings, SettingsManager
from .simulation import Intent, RenderSnapshot, RunPhase, SimEvent, Simulation
from .utils import (
    FPS,
    GOLD,
    LANE_LINE,
    OFFICER,
    RED,
    ROAD_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHADOW_COLOR,
    SHIRT,
    SIDEWALK_COLOR,
    SKIN,
    SKY_BOTTOM,
    SKY_TOP,
    TEXT_COLOR,
    YELLOW,
    Playfield,
)

logger = logging.getLogger(__name__)

POWERUP_GLYPHS = {
    PowerUpKind.SPEED: ">>",
    PowerUpKind.SLOW: "<<",
    PowerUpKind.COIN: "$",
}

SKYLINE = (
    (0, 40, 120),
    (45, 55, 90),
    (105, 35, 140),
    (-45, 45, 110),
    (-95, 44, 85),
    (-145, 44, 130),
)


def intent_for_key(key: int, controls: ControlScheme, phase: RunPhase) -> Intent | None:
    """Translate a key press into an intent for the current phase."""
    if key in (controls.pause, pygame.K_ESCAPE):
        if phase in (RunPhase.PLAYING, RunPhase.PAUSED):
            return Intent.TOGGLE_PAUSE
        return None
    if phase != RunPhase.PLAYING:
        return None
    mapping = {
        controls.left: Intent.MOVE_LEFT,
        controls.right: Intent.MOVE_RIGHT,
        controls.jump: Intent.JUMP,
        controls.slide: Intent.SLIDE,
    }
    return mapping.get(key)


class RunnerGame:
    """Windowed front end around a :class:`Simulation`."""

    def __init__(self, root: Path, seed: int | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.root = root
        self.settings_manager = SettingsManager()
        self.settings: GameSettings = self.settings_manager.settings

        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else pygame.RESIZABLE
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        pygame.display.set_caption("Baweda Escape")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 44, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 24, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)

        width, height = self.screen.get_size()
        self.sim = Simulation(
            width=width,
            height=height,
            tuning=self.settings.tuning,
            rng=random.Random(seed),
            store=BestScoreStore(),
        )

        self.start_menu = Menu(
            title="BAWEDA ESCAPE",
            items=[
                MenuItem("Start Run", "start"),
                MenuItem("Settings", "settings"),
                MenuItem("Exit", "exit"),
            ],
        )
        self.pause_menu = Menu(
            title="PAUSED",
            items=[
                MenuItem("Resume", "resume"),
                MenuItem("Restart Run", "restart"),
                MenuItem("Settings", "settings"),
                MenuItem("Exit", "exit"),
            ],
        )
        self.game_over_menu = Menu(
            title="CAUGHT!",
            items=[
                MenuItem("Run Again", "restart"),
                MenuItem("Exit", "exit"),
            ],
        )
        self.in_settings = False

        self.audio = AudioManager(self.root)
        self.audio.load_assets()
        self.audio.set_volumes(
            self.settings.master_volume,
            self.settings.music_volume,
            self.settings.sfx_volume,
        )
        self.audio.play_music()

        self.screen_shake_frames = 0
        self.screen_shake_magnitude = 0

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break

            self.sim.frame(pygame.time.get_ticks())
            self._handle_sim_events(self.sim.drain_events())
            self._render()

        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.WINDOWFOCUSLOST:
                if self.sim.phase == RunPhase.PLAYING:
                    logger.debug("Window lost focus, pausing")
                self.sim.pause()
                continue
            if event.type == pygame.VIDEORESIZE:
                logger.debug("Resized to %dx%d", event.w, event.h)
                self.sim.resize(max(1, event.w), max(1, event.h))
                continue
            if event.type != pygame.KEYDOWN:
                continue

            if self.in_settings:
                self._handle_settings_input(event.key)
                continue

            intent = intent_for_key(event.key, self.settings.controls, self.sim.phase)
            if intent is not None:
                self.sim.apply_intent(intent)
                continue

            menu = self._active_menu()
            if menu is not None and not self._handle_menu_input(menu, event.key):
                return False
        return True

    def _active_menu(self) -> Menu | None:
        phase = self.sim.phase
        if phase == RunPhase.START:
            return self.start_menu
        if phase == RunPhase.PAUSED:
            return self.pause_menu
        if phase == RunPhase.GAME_OVER:
            return self.game_over_menu
        return None

    def _handle_menu_input(self, menu: Menu, key: int) -> bool:
        """Navigate a menu; returns False when the player chose to exit."""
        if key == pygame.K_UP:
            menu.move(-1)
            self.audio.play("menu")
            return True
        if key == pygame.K_DOWN:
            menu.move(1)
            self.audio.play("menu")
            return True
        if key not in (pygame.K_RETURN, pygame.K_SPACE):
            return True

        action = menu.current_action()
        self.audio.play("menu")
        if action == "start":
            self.sim.apply_intent(Intent.START)
        elif action == "restart":
            self.sim.start()
        elif action == "resume":
            self.sim.resume()
        elif action == "settings":
            self.in_settings = True
        elif action == "exit":
            return False
        menu.selected_index = 0
        return True

    def _handle_settings_input(self, key: int) -> None:
        if key == pygame.K_1:
            self.settings_manager.adjust_volume("master_volume", -0.05)
        elif key == pygame.K_2:
            self.settings_manager.adjust_volume("master_volume", 0.05)
        elif key == pygame.K_3:
            self.settings_manager.adjust_volume("music_volume", -0.05)
        elif key == pygame.K_4:
            self.settings_manager.adjust_volume("music_volume", 0.05)
        elif key == pygame.K_5:
            self.settings_manager.adjust_volume("sfx_volume", -0.05)
        elif key == pygame.K_6:
            self.settings_manager.adjust_volume("sfx_volume", 0.05)
        elif key == pygame.K_h:
            self.settings_manager.toggle_display("screen_shake")
        elif key == pygame.K_d:
            self.settings_manager.toggle_display("show_particles")
        elif key == pygame.K_f:
            self.settings_manager.toggle_display("fullscreen")
        elif key in (pygame.K_BACKSPACE, pygame.K_ESCAPE):
            self.in_settings = False

        self.settings = self.settings_manager.settings
        self.audio.set_volumes(
            self.settings.master_volume,
            self.settings.music_volume,
            self.settings.sfx_volume,
        )

    def _handle_sim_events(self, events: list[SimEvent]) -> None:
        self.audio.play_events(events)
        if SimEvent.HIT in events and self.settings.display.screen_shake:
            self.screen_shake_frames = 12
            self.screen_shake_magnitude = 6
        if SimEvent.GAME_OVER in events:
            self.game_over_menu.subtitle = (
                f"Score {self.sim.score.display}\nBest {self.sim.score.best}"
            )

    # Rendering ---------------------------------------------------------

    def _render(self) -> None:
        shake_x = shake_y = 0
        if self.screen_shake_frames > 0:
            self.screen_shake_frames -= 1
            shake_x = int(pygame.time.get_ticks() % self.screen_shake_magnitude) - self.screen_shake_magnitude // 2
            shake_y = int((pygame.time.get_ticks() // 2) % self.screen_shake_magnitude) - self.screen_shake_magnitude // 2

        snapshot = self.sim.snapshot()
        frame = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        self._render_playfield(frame, snapshot)

        if self.in_settings:
            self._render_settings(frame)
        else:
            menu = self._active_menu()
            if menu is not None:
                menu.render(frame, self.title_font, self.body_font)
                self._render_best(frame, snapshot)

        self.screen.fill((0, 0, 0))
        self.screen.blit(frame, (shake_x, shake_y))
        pygame.display.flip()

    def _render_playfield(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        playfield = self.sim.playfield
        self._draw_backdrop(surface, playfield, snapshot)

        if self.settings.display.show_particles:
            for particle in snapshot.particles:
                alpha = int(200 * particle.alpha)
                pygame.draw.circle(
                    surface, (*particle.color, alpha), (int(particle.x), int(particle.y)), max(1, int(particle.radius))
                )

        for coin in snapshot.coins:
            center = (int(coin.x), int(coin.y))
            pygame.draw.circle(surface, GOLD, center, int(coin.radius))
            pygame.draw.circle(surface, YELLOW, center, int(coin.radius * 0.55), width=2)

        for hazard in snapshot.hazards:
            self._draw_hazard(surface, hazard)
        for powerup in snapshot.powerups:
            self._draw_powerup(surface, powerup)

        self._draw_runner(surface, snapshot)
        if snapshot.phase != RunPhase.START:
            self._draw_chaser(surface, playfield, snapshot)

        if snapshot.flash > 0:
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill((*RED, int(90 * snapshot.flash)))
            surface.blit(overlay, (0, 0))

        for text in snapshot.texts:
            label = self.body_font.render(text.text, True, text.color)
            label.set_alpha(int(255 * text.alpha))
            surface.blit(label, (int(text.x) - label.get_width() // 2, int(text.y - text.rise)))

        if snapshot.phase in (RunPhase.PLAYING, RunPhase.PAUSED):
            self._render_hud(surface, snapshot)

    def _draw_backdrop(self, surface: pygame.Surface, playfield: Playfield, snapshot: RenderSnapshot) -> None:
        width, height = surface.get_size()
        horizon = int(height * 0.35)
        surface.fill(SKY_BOTTOM)
        pygame.draw.rect(surface, SKY_TOP, (0, 0, width, horizon // 2))

        for x, w, h in SKYLINE:
            left = x if x >= 0 else width + x
            top = horizon - h + int(snapshot.skyline_offset * 0.1)
            pygame.draw.rect(surface, (26, 21, 53), (left, top, w, h))
            for wy in range(top + 10, horizon - 10, 18):
                for wx in range(left + 4, left + w - 4, 12):
                    if math.sin(left + wx + wy) > 0:
                        pygame.draw.rect(surface, (255, 235, 140), (wx, wy, 5, 7))

        road_left = int(playfield.lane_offset_x)
        road_width = int(playfield.road_width)
        pygame.draw.rect(surface, SIDEWALK_COLOR, (0, horizon, width, height - horizon))
        pygame.draw.rect(surface, ROAD_COLOR, (road_left, horizon, road_width, height - horizon))

        dash, gap = 20, 20
        for lane in range(1, playfield.lane_count):
            lx = int(playfield.lane_offset_x + lane * playfield.lane_width)
            y = horizon - dash - gap + int(snapshot.road_offset) % (dash + gap)
            while y < height:
                top = max(y, horizon)
                if y + dash > top:
                    pygame.draw.line(surface, LANE_LINE, (lx, top), (lx, y + dash), 2)
                y += dash + gap
        pygame.draw.line(surface, TEXT_COLOR, (road_left, horizon), (road_left, height), 3)
        pygame.draw.line(surface, TEXT_COLOR, (road_left + road_width, horizon), (road_left + road_width, height), 3)

    @staticmethod
    def _draw_hazard(surface: pygame.Surface, hazard: Hazard) -> None:
        spec = hazard.spec
        x, y, w, h = int(hazard.x), int(hazard.y), int(spec.width), int(spec.height)
        if hazard.kind is ObstacleKind.CONE:
            pygame.draw.polygon(surface, spec.color, [(x + w // 2, y), (x + w, y + h), (x, y + h)])
            pygame.draw.line(surface, (255, 255, 255), (x + w // 4, y + h // 2), (x + 3 * w // 4, y + h // 2), 3)
        elif hazard.kind is ObstacleKind.BARRIER:
            pygame.draw.rect(surface, spec.color, (x, y, w, h), border_radius=5)
            for i in range(3):
                sx = x + 6 + i * 14
                pygame.draw.line(surface, (255, 255, 255), (sx, y + h - 4), (sx + 8, y + 4), 3)
        elif hazard.kind is ObstacleKind.BIN:
            pygame.draw.rect(surface, spec.color, (x + 2, y + 8, w - 4, h - 8), border_radius=4)
            pygame.draw.rect(surface, (120, 144, 156), (x, y, w, 10), border_radius=3)
        else:
            pygame.draw.rect(surface, spec.color, (x, y + 8, w, h - 8), border_radius=6)
            pygame.draw.rect(surface, (128, 203, 196), (x + 8, y, w - 16, int(h * 0.55)), border_radius=4)
            for wx in (x + 4, x + w - 12):
                pygame.draw.rect(surface, (20, 20, 20), (wx, y + h - 6, 8, 6))

    def _draw_powerup(self, surface: pygame.Surface, powerup: PowerUp) -> None:
        color = POWERUP_COLORS[powerup.kind]
        center = (int(powerup.x), int(powerup.y))
        glow = pygame.Surface((int(powerup.radius * 4), int(powerup.radius * 4)), pygame.SRCALPHA)
        pygame.draw.circle(glow, (*color, 60), glow.get_rect().center, int(powerup.radius * 2))
        surface.blit(glow, glow.get_rect(center=center))
        pygame.draw.circle(surface, color, center, int(powerup.radius))
        glyph = self.small_font.render(POWERUP_GLYPHS[powerup.kind], True, SHADOW_COLOR)
        surface.blit(glyph, glyph.get_rect(center=center))

    @staticmethod
    def _draw_runner(surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        pose = snapshot.runner
        body = pose.body
        cx = int(body.x + body.w / 2 + pose.wobble)
        cy = int(body.y + body.h / 2)
        if pose.sliding:
            pygame.draw.rect(surface, SHIRT, (cx - 14, cy - 10, 28, 20), border_radius=4)
            pygame.draw.circle(surface, SKIN, (cx + 12, cy - 6), 9)
            return

        swing = int(math.sin(pose.anim_frame * math.pi / 2) * 8 * 0.6)
        pygame.draw.line(surface, (93, 64, 55), (cx - 5, cy + 14), (cx - 5 + swing, cy + 28), 6)
        pygame.draw.line(surface, (93, 64, 55), (cx + 5, cy + 14), (cx + 5 - swing, cy + 28), 6)
        pygame.draw.rect(surface, SHIRT, (cx - 10, cy - 8, 20, 22), border_radius=4)
        pygame.draw.line(surface, SKIN, (cx - 10, cy), (cx - 18 - swing, cy + 14), 5)
        pygame.draw.line(surface, SKIN, (cx + 10, cy), (cx + 18 + swing, cy + 14), 5)
        pygame.draw.circle(surface, SKIN, (cx, cy - 18), 13)
        pygame.draw.circle(surface, (62, 39, 35), (cx, cy - 26), 9, draw_top_left=True, draw_top_right=True)
        for ex in (cx - 4, cx + 4):
            pygame.draw.circle(surface, (17, 17, 17), (ex, cy - 19), 2)

    @staticmethod
    def _draw_chaser(surface: pygame.Surface, playfield: Playfield, snapshot: RenderSnapshot) -> None:
        # Closer chaser means drawn nearer to the runner.
        cx = int(playfield.width / 2 - 40)
        cy = int(playfield.ground_y + 56 + 24 + snapshot.chaser_distance * 0.5)
        pygame.draw.rect(surface, OFFICER, (cx - 10, cy - 8, 20, 22), border_radius=4)
        pygame.draw.rect(surface, (13, 71, 161), (cx - 12, cy - 30, 24, 10), border_radius=2)
        pygame.draw.circle(surface, SKIN, (cx, cy - 20), 11)
        for ex in (cx - 4, cx + 4):
            pygame.draw.circle(surface, (17, 17, 17), (ex, cy - 22), 2)
        pygame.draw.line(surface, (17, 17, 17), (cx - 6, cy - 26), (cx - 2, cy - 24), 2)
        pygame.draw.line(surface, (17, 17, 17), (cx + 6, cy - 26), (cx + 2, cy - 24), 2)

    def _render_hud(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        hud = snapshot.hud
        lines = [
            (f"SCORE {hud.score}", YELLOW),
            (f"x{snapshot.multiplier:g}", TEXT_COLOR),
            (f"CHASER {hud.chaser_label}", RED if snapshot.chaser_distance < 60 else TEXT_COLOR),
        ]
        for idx, (line, color) in enumerate(lines):
            shadow = self.small_font.render(line, True, SHADOW_COLOR)
            text = self.small_font.render(line, True, color)
            surface.blit(shadow, (14, 14 + idx * 22))
            surface.blit(text, (12, 12 + idx * 22))

        if hud.powerup_label:
            label = self.body_font.render(hud.powerup_label, True, GOLD)
            surface.blit(label, (surface.get_width() - label.get_width() - 12, 12))

        helper = self.small_font.render("Arrows move/jump/slide | P pause", True, TEXT_COLOR)
        surface.blit(helper, (12, surface.get_height() - 26))

    def _render_best(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        best = self.small_font.render(f"BEST {snapshot.best_score}", True, GOLD)
        surface.blit(best, (surface.get_width() // 2 - best.get_width() // 2, surface.get_height() - 60))

    def _render_settings(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((4, 4, 14, 220))
        surface.blit(overlay, (0, 0))
        title = self.title_font.render("SETTINGS", True, YELLOW)
        surface.blit(title, (surface.get_width() // 2 - title.get_width() // 2, 56))

        lines = [
            f"Master [1/2]: {self.settings.master_volume:.2f}",
            f"Music  [3/4]: {self.settings.music_volume:.2f}",
            f"SFX    [5/6]: {self.settings.sfx_volume:.2f}",
            f"Shake  [H]: {self.settings.display.screen_shake}",
            f"Dust   [D]: {self.settings.display.show_particles}",
            f"Fullscreen [F]: {self.settings.display.fullscreen}",
            "(fullscreen applies on restart)",
            "Back: ESC or Backspace",
        ]
        for idx, line in enumerate(lines):
            text = self.small_font.render(line, True, TEXT_COLOR)
            surface.blit(text, (40, 160 + idx * 36))
