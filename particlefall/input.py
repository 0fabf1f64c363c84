"""Keyboard and mouse state gathered once per frame."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Sequence

import pygame


class Key(enum.IntEnum):
    """Keys the application reacts to, valued as pygame key codes."""

    ESCAPE = pygame.K_ESCAPE
    LEFT = pygame.K_LEFT
    RIGHT = pygame.K_RIGHT


@dataclass
class InputState:
    """The pressed keys, mouse buttons and a mouse cursor kept on the screen."""

    screen_width: int
    screen_height: int
    mouse_x: int = 0
    mouse_y: int = 0
    pressed_keys: frozenset[int] = frozenset()
    mouse_buttons: tuple[bool, ...] = ()

    def read(
        self,
        keys: Iterable[int],
        mouse_delta: Sequence[int] = (0, 0),
        buttons: Iterable[bool] = (),
    ) -> None:
        """Take in this frame's pressed keys, mouse movement and mouse buttons.

        The cursor moves by ``mouse_delta`` and is held within the screen.
        """
        self.pressed_keys = frozenset(int(key) for key in keys)
        self.mouse_buttons = tuple(bool(button) for button in buttons)

        dx, dy = mouse_delta
        x = max(self.mouse_x + int(dx), 0)
        y = max(self.mouse_y + int(dy), 0)
        self.mouse_x = min(x, self.screen_width)
        self.mouse_y = min(y, self.screen_height)

    @property
    def mouse_location(self) -> tuple[int, int]:
        """The cursor position in screen pixels."""
        return (self.mouse_x, self.mouse_y)

    def is_escape_pressed(self) -> bool:
        return Key.ESCAPE in self.pressed_keys

    def is_left_arrow_pressed(self) -> bool:
        return Key.LEFT in self.pressed_keys

    def is_right_arrow_pressed(self) -> bool:
        return Key.RIGHT in self.pressed_keys

    def is_mouse_pressed(self) -> bool:
        """Whether the left mouse button is held."""
        return bool(self.mouse_buttons) and self.mouse_buttons[0]