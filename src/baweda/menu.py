"""Menu rendering and navigation helpers."""

from __future__ import annotations

from dataclasses import dataclass
import pygame

from .utils import SHADOW_COLOR, TEXT_COLOR, YELLOW


@dataclass(slots=True)
class MenuItem:
    """Single selectable menu row."""

    label: str
    action: str


class Menu:
    """Simple vertical keyboard-driven menu drawn over the playfield."""

    def __init__(self, title: str, items: list[MenuItem], subtitle: str = "") -> None:
        self.title = title
        self.items = items
        self.subtitle = subtitle
        self.selected_index = 0

    def move(self, delta: int) -> None:
        """Move menu selection by delta."""
        self.selected_index = (self.selected_index + delta) % len(self.items)

    def current_action(self) -> str:
        """Return selected action key."""
        return self.items[self.selected_index].action

    def render(self, surface: pygame.Surface, title_font: pygame.font.Font, body_font: pygame.font.Font) -> None:
        """Draw the menu on a dimmed backdrop."""
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((4, 4, 14, 170))
        surface.blit(overlay, (0, 0))

        center_x = surface.get_width() // 2
        title_shadow = title_font.render(self.title, True, SHADOW_COLOR)
        title = title_font.render(self.title, True, YELLOW)
        surface.blit(title_shadow, (center_x - title.get_width() // 2 + 3, 143))
        surface.blit(title, (center_x - title.get_width() // 2, 140))

        start_y = 240
        if self.subtitle:
            for idx, line in enumerate(self.subtitle.splitlines()):
                text = body_font.render(line, True, TEXT_COLOR)
                surface.blit(text, (center_x - text.get_width() // 2, 210 + idx * 32))
            start_y = 230 + 32 * (len(self.subtitle.splitlines()) + 1)

        for idx, item in enumerate(self.items):
            selected = idx == self.selected_index
            color = YELLOW if selected else TEXT_COLOR
            prefix = "> " if selected else "  "
            line = body_font.render(f"{prefix}{item.label}", True, color)
            surface.blit(line, (center_x - line.get_width() // 2, start_y + idx * 42))
