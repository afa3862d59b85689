"""Audio loading and playback wrappers."""

from __future__ import annotations

from pathlib import Path
import logging
import pygame

from .simulation import SimEvent

logger = logging.getLogger(__name__)

EVENT_SOUNDS = {
    SimEvent.START: "start",
    SimEvent.HIT: "hit",
    SimEvent.COIN: "coin",
    SimEvent.POWERUP: "powerup",
    SimEvent.GAME_OVER: "caught",
}


class AudioManager:
    """Loads and plays music/sfx with graceful fallback when assets are absent."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.sound_enabled = False
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init()
            self.sound_enabled = True
        except pygame.error as exc:
            logger.info("Audio disabled: %s", exc)
            self.sound_enabled = False

    def load_assets(self) -> None:
        """Load available audio files from assets folders."""
        if not self.sound_enabled:
            return
        sounds_dir = self.root / "assets" / "sounds"
        for key in (*EVENT_SOUNDS.values(), "menu"):
            path = sounds_dir / f"{key}.wav"
            if not path.exists():
                continue
            try:
                self.sounds[key] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.debug("Skipping sound %s: %s", path, exc)

    def set_volumes(self, master: float, music: float, sfx: float) -> None:
        """Apply current volume settings."""
        if not self.sound_enabled:
            return
        pygame.mixer.music.set_volume(master * music)
        for sound in self.sounds.values():
            sound.set_volume(master * sfx)

    def play_music(self) -> None:
        """Play looping background music if file exists."""
        if not self.sound_enabled:
            return
        music_path = self.root / "assets" / "music" / "theme.ogg"
        if not music_path.exists():
            return
        try:
            pygame.mixer.music.load(str(music_path))
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            logger.debug("Music unavailable: %s", exc)

    def play(self, key: str) -> None:
        """Play a named sound effect."""
        if not self.sound_enabled:
            return
        sound = self.sounds.get(key)
        if sound:
            sound.play()

    def play_events(self, events: list[SimEvent]) -> None:
        """Play the cue for each simulation event."""
        for event in events:
            self.play(EVENT_SOUNDS[event])
