"""A camera that turns a position and rotation into view matrices."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from particlefall.transforms import (
    Matrix,
    identity,
    look_at_lh,
    rotation_roll_pitch_yaw,
    transform_coord,
)

DEGREES_TO_RADIANS = 0.0174532925

_UP = (0.0, 1.0, 0.0)
_FORWARD = (0.0, 0.0, 1.0)


def _view_matrix(position, pitch_deg: float, yaw_deg: float, roll_deg: float) -> Matrix:
    rotation = rotation_roll_pitch_yaw(
        pitch_deg * DEGREES_TO_RADIANS,
        yaw_deg * DEGREES_TO_RADIANS,
        roll_deg * DEGREES_TO_RADIANS,
    )
    look_at = transform_coord(_FORWARD, rotation)
    up = transform_coord(_UP, rotation)
    eye = np.asarray(position, dtype=np.float64)
    return look_at_lh(eye, eye + look_at, up)


@dataclass
class Camera:
    """Camera position and rotation (in degrees) with the matrices built from them."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    view_matrix: Matrix = field(default_factory=identity)
    reflection_view_matrix: Matrix = field(default_factory=identity)

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = (float(x), float(y), float(z))

    def set_rotation(self, x: float, y: float, z: float) -> None:
        self.rotation = (float(x), float(y), float(z))

    def render(self) -> Matrix:
        """Rebuild and return the view matrix."""
        pitch, yaw, roll = self.rotation
        self.view_matrix = _view_matrix(self.position, pitch, yaw, roll)
        return self.view_matrix

    def render_reflection(self, height: float) -> Matrix:
        """Rebuild and return the view matrix mirrored about the plane y = ``height``."""
        x, y, z = self.position
        pitch, yaw, roll = self.rotation
        mirrored = (x, -y + height * 2.0, z)
        self.reflection_view_matrix = _view_matrix(mirrored, -pitch, yaw, roll)
        return self.reflection_view_matrix