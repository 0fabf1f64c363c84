"""The render target: back buffer, depth buffer, blend and depth state, and matrices."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pygame

from particlefall.transforms import (
    Matrix,
    identity,
    orthographic_lh,
    perspective_fov_lh,
)

FIELD_OF_VIEW = math.pi / 4.0
DEFAULT_REFRESH_RATE = 60


class DisplayError(RuntimeError):
    """Raised when the display cannot be created or is used after closing."""


class BlendMode(enum.Enum):
    """How drawn pixels combine with the back buffer."""

    ADDITIVE = "additive"
    OPAQUE = "opaque"

    @property
    def blend_flags(self) -> int:
        """The pygame blit flags that produce this blend."""
        return pygame.BLEND_RGB_ADD if self is BlendMode.ADDITIVE else 0


@dataclass(frozen=True)
class Viewport:
    """The area of the back buffer that is rendered to."""

    width: float
    height: float
    min_depth: float = 0.0
    max_depth: float = 1.0
    top_left_x: float = 0.0
    top_left_y: float = 0.0


def _channel(value: float) -> int:
    return int(round(min(max(float(value), 0.0), 1.0) * 255))


class Display:
    """A back buffer with a depth buffer and the matrices used to draw into it.

    With ``window`` set, the back buffer is a pygame window; otherwise it is an
    off-screen surface.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        vsync: bool = True,
        fullscreen: bool = False,
        screen_depth: float = 1000.0,
        screen_near: float = 0.3,
        window: bool = True,
        refresh_rate: int = DEFAULT_REFRESH_RATE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise DisplayError("screen width and height must be positive")
        self.width = int(width)
        self.height = int(height)
        self.vsync = vsync
        self.fullscreen = fullscreen
        self.refresh_rate = refresh_rate
        self.windowed = window
        self._clock: Optional[pygame.time.Clock] = None

        if window:
            try:
                pygame.display.init()
                flags = pygame.FULLSCREEN if fullscreen else 0
                self.surface = pygame.display.set_mode((self.width, self.height), flags)
            except pygame.error as exc:
                raise DisplayError(f"could not open the display: {exc}") from exc
            self.video_card_description = pygame.display.get_driver()
            self._clock = pygame.time.Clock()
        else:
            self.surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            self.video_card_description = "software"

        self.depth_buffer = np.ones((self.height, self.width), dtype=np.float32)
        self.viewport = Viewport(width=float(self.width), height=float(self.height))
        self.projection_matrix: Matrix = perspective_fov_lh(
            FIELD_OF_VIEW, self.width / self.height, screen_near, screen_depth
        )
        self.world_matrix: Matrix = identity()
        self.ortho_matrix: Matrix = orthographic_lh(
            float(self.width), float(self.height), screen_near, screen_depth
        )
        self.blend_mode = BlendMode.OPAQUE
        self.depth_enabled = True
        self.frames_presented = 0
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise DisplayError("display has been closed")

    def begin_scene(self, red: float, green: float, blue: float, alpha: float) -> None:
        """Clear the back buffer to the given colour and the depth buffer to 1."""
        self._check_open()
        self.surface.fill((_channel(red), _channel(green), _channel(blue), _channel(alpha)))
        self.depth_buffer.fill(1.0)

    def end_scene(self) -> None:
        """Present the back buffer, holding to the refresh rate when vsync is on."""
        self._check_open()
        if self.windowed:
            pygame.display.flip()
            if self.vsync and self._clock is not None:
                self._clock.tick(self.refresh_rate)
        self.frames_presented += 1

    def enable_alpha_blending(self) -> None:
        self._check_open()
        self.blend_mode = BlendMode.ADDITIVE

    def disable_alpha_blending(self) -> None:
        self._check_open()
        self.blend_mode = BlendMode.OPAQUE

    def turn_z_buffer_on(self) -> None:
        self._check_open()
        self.depth_enabled = True

    def turn_z_buffer_off(self) -> None:
        self._check_open()
        self.depth_enabled = False

    def close(self) -> None:
        """Release the window; further drawing raises :class:`DisplayError`."""
        if self.closed:
            return
        if self.windowed:
            pygame.display.quit()
        self.closed = True

    def __enter__(self) -> "Display":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()