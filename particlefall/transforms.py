"""4x4 matrix helpers using the row-vector, left-handed convention.

Points are row vectors multiplied on the left of a matrix (``v @ M``).
Translation is held in the bottom row.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Matrix = np.ndarray
Vector = Sequence[float]

_EPSILON = 1e-12


def identity() -> Matrix:
    """Return the 4x4 identity matrix."""
    return np.eye(4, dtype=np.float64)


def _rotation_x(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, s, 0.0],
            [0.0, -s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def _rotation_y(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [c, 0.0, -s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def _rotation_z(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [c, s, 0.0, 0.0],
            [-s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> Matrix:
    """Rotation applying roll (Z), then pitch (X), then yaw (Y); angles in radians."""
    return _rotation_z(roll) @ _rotation_x(pitch) @ _rotation_y(yaw)


def transform_coord(vector: Vector, matrix: Matrix) -> np.ndarray:
    """Transform a 3D point by ``matrix`` and project it back to w = 1."""
    x, y, z = (float(c) for c in vector)
    result = np.array([x, y, z, 1.0]) @ np.asarray(matrix, dtype=np.float64)
    w = result[3]
    if abs(w) < _EPSILON:
        raise ZeroDivisionError("transformed point has w of zero")
    return result[:3] / w


def _normalize(vector: np.ndarray, what: str) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length < _EPSILON:
        raise ValueError(f"{what} must not be zero length")
    return vector / length


def look_at_lh(eye: Vector, focus: Vector, up: Vector) -> Matrix:
    """View matrix for a camera at ``eye`` looking at ``focus``."""
    eye_v = np.asarray(eye, dtype=np.float64)
    direction = np.asarray(focus, dtype=np.float64) - eye_v
    up_v = np.asarray(up, dtype=np.float64)

    z_axis = _normalize(direction, "view direction")
    x_axis = _normalize(np.cross(_normalize(up_v, "up vector"), z_axis), "right vector")
    y_axis = np.cross(z_axis, x_axis)

    view = identity()
    view[:3, 0] = x_axis
    view[:3, 1] = y_axis
    view[:3, 2] = z_axis
    view[3, :3] = [-x_axis @ eye_v, -y_axis @ eye_v, -z_axis @ eye_v]
    return view


def perspective_fov_lh(fov: float, aspect: float, near: float, far: float) -> Matrix:
    """Perspective projection mapping depth ``near`` to 0 and ``far`` to 1."""
    if fov <= 0.0 or fov >= math.pi:
        raise ValueError("field of view must lie strictly between 0 and pi")
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if near <= 0.0 or far <= 0.0 or near == far:
        raise ValueError("near and far planes must be positive and distinct")
    height = 1.0 / math.tan(fov / 2.0)
    width = height / aspect
    depth = far / (far - near)
    return np.array(
        [
            [width, 0.0, 0.0, 0.0],
            [0.0, height, 0.0, 0.0],
            [0.0, 0.0, depth, 1.0],
            [0.0, 0.0, -depth * near, 0.0],
        ]
    )


def orthographic_lh(width: float, height: float, near: float, far: float) -> Matrix:
    """Orthographic projection of a ``width`` by ``height`` view volume."""
    if width == 0.0 or height == 0.0:
        raise ValueError("view width and height must not be zero")
    if near == far:
        raise ValueError("near and far planes must be distinct")
    depth = 1.0 / (far - near)
    return np.array(
        [
            [2.0 / width, 0.0, 0.0, 0.0],
            [0.0, 2.0 / height, 0.0, 0.0],
            [0.0, 0.0, depth, 0.0],
            [0.0, 0.0, -depth * near, 1.0],
        ]
    )