"""The particle demo: a falling shower of coloured stars drawn each frame."""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from typing import Callable, Optional, Sequence, Union

import pygame

from particlefall.camera import Camera
from particlefall.display import Display, DisplayError
from particlefall.input import InputState, Key
from particlefall.particles import ParticleSystem
from particlefall.shader import ParticleShader
from particlefall.texture import TargaError, TargaImage, load_targa
from particlefall.timer import Timer

FULL_SCREEN = False
VSYNC_ENABLED = True
SCREEN_DEPTH = 1000.0
SCREEN_NEAR = 0.3
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
DEFAULT_TEXTURE = "./data/star01.tga"
CAMERA_POSITION = (0.0, -1.0, -10.0)
CLEAR_COLOR = (0.0, 0.0, 0.0, 1.0)

TextureSource = Union[TargaImage, str, os.PathLike, None]


class Application:
    """Owns the display, camera, timer, particle system and shader, and runs frames."""

    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        *,
        texture: TextureSource = DEFAULT_TEXTURE,
        window: bool = True,
        vsync: bool = VSYNC_ENABLED,
        fullscreen: bool = FULL_SCREEN,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        # The texture is read first so a missing file never opens a window.
        if texture is None or isinstance(texture, TargaImage):
            self.texture = texture
        else:
            self.texture = load_targa(texture)

        self.display = Display(
            width,
            height,
            vsync=vsync,
            fullscreen=fullscreen,
            screen_depth=SCREEN_DEPTH,
            screen_near=SCREEN_NEAR,
            window=window,
        )

        self.camera = Camera()
        self.camera.set_position(*CAMERA_POSITION)
        self.camera.render()

        self.timer = Timer(clock)
        self.timer.start()

        self.particle_system = ParticleSystem(rng=rng if rng is not None else random.Random())
        self.shader = ParticleShader()

    def frame(self, input_state: InputState) -> bool:
        """Run one frame; return False when the application should stop."""
        self.timer.frame()
        if input_state.is_escape_pressed():
            return False
        self.particle_system.frame(self.timer.frame_time)
        self.render()
        return True

    def render(self) -> int:
        """Draw the particles and present the scene; return how many quads were drawn."""
        display = self.display
        display.begin_scene(*CLEAR_COLOR)
        display.enable_alpha_blending()
        drawn = self.shader.render(
            display,
            self.particle_system.vertices,
            self.particle_system.index_count,
            display.world_matrix,
            self.camera.view_matrix,
            display.projection_matrix,
            self.texture,
        )
        display.disable_alpha_blending()
        display.end_scene()
        return drawn

    def close(self) -> None:
        """Release the display."""
        self.display.close()

    def __enter__(self) -> "Application":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="particlefall", description="Show a falling particle shower."
    )
    parser.add_argument("--width", type=int, default=WINDOW_WIDTH, help="window width")
    parser.add_argument("--height", type=int, default=WINDOW_HEIGHT, help="window height")
    parser.add_argument(
        "--texture", default=DEFAULT_TEXTURE, help="32-bit Targa image used for each particle"
    )
    parser.add_argument(
        "--fullscreen", action="store_true", default=FULL_SCREEN, help="run full screen"
    )
    parser.add_argument(
        "--no-vsync", dest="vsync", action="store_false", default=VSYNC_ENABLED,
        help="present frames as fast as possible",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the window and run frames until the window closes or Escape is pressed."""
    args = _parse_args(argv)
    try:
        app = Application(
            args.width,
            args.height,
            texture=args.texture,
            vsync=args.vsync,
            fullscreen=args.fullscreen,
        )
    except (TargaError, DisplayError) as exc:
        print(f"particlefall: {exc}", file=sys.stderr)
        return 1

    input_state = InputState(args.width, args.height)
    pygame.mouse.set_visible(False)
    try:
        while True:
            if any(event.type == pygame.QUIT for event in pygame.event.get()):
                break
            pressed = pygame.key.get_pressed()
            input_state.read(
                [key for key in Key if pressed[key]],
                pygame.mouse.get_rel(),
                pygame.mouse.get_pressed(),
            )
            if not app.frame(input_state):
                break
    finally:
        pygame.mouse.set_visible(True)
        app.close()
    return 0