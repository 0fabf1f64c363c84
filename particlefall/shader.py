"""Software rasteriser for textured, coloured particle quads."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

import numpy as np
import pygame

from particlefall.display import BlendMode, Display, DisplayError
from particlefall.texture import TargaImage
from particlefall.transforms import Matrix

VERTICES_PER_QUAD = 6
_EPSILON = 1e-9

Texture = Union[TargaImage, np.ndarray, None]


def project_vertices(
    vertices: Sequence, world: Matrix, view: Matrix, projection: Matrix, width: float, height: float
) -> np.ndarray:
    """Project vertex positions to screen space.

    Returns an ``(n, 3)`` array of pixel x, pixel y (down from the top) and
    depth. Vertices at or behind the eye get NaN in every column.
    """
    positions = np.array([v.position for v in vertices], dtype=np.float64).reshape(-1, 3)
    homogeneous = np.hstack([positions, np.ones((len(positions), 1))])
    transform = (
        np.asarray(world, dtype=np.float64)
        @ np.asarray(view, dtype=np.float64)
        @ np.asarray(projection, dtype=np.float64)
    )
    clip = homogeneous @ transform
    w = clip[:, 3]
    visible = w > _EPSILON

    result = np.full((len(positions), 3), np.nan)
    ndc = clip[visible, :3] / w[visible, None]
    result[visible, 0] = (ndc[:, 0] + 1.0) * 0.5 * width
    result[visible, 1] = (1.0 - ndc[:, 1]) * 0.5 * height
    result[visible, 2] = ndc[:, 2]
    return result


def _texture_array(texture: Texture) -> np.ndarray:
    if texture is None:
        return np.full((1, 1, 4), 255, dtype=np.uint8)
    if isinstance(texture, TargaImage):
        return texture.to_array()
    array = np.asarray(texture, dtype=np.uint8)
    if array.ndim != 3 or array.shape[2] != 4 or array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError("texture must be a non-empty (height, width, 4) array")
    return array


def _pixel_span(low: float, high: float, limit: int) -> tuple[int, int]:
    """Pixels whose centres lie in ``[low, high)``, clipped to ``[0, limit)``."""
    first = max(math.ceil(low - 0.5), 0)
    last = min(math.ceil(high - 0.5), limit)
    return first, last


class ParticleShader:
    """Draws particle quads: texture colour times vertex colour, blended into the display."""

    def render(
        self,
        display: Display,
        vertices: Sequence,
        index_count: int,
        world: Matrix,
        view: Matrix,
        projection: Matrix,
        texture: Texture,
    ) -> int:
        """Draw the first ``index_count`` vertices as quads; return how many were drawn."""
        if display.closed:
            raise DisplayError("display has been closed")
        vertices = list(vertices)
        if not 0 <= index_count <= len(vertices):
            raise ValueError(
                f"index count {index_count} outside 0..{len(vertices)}"
            )
        used = vertices[: index_count - index_count % VERTICES_PER_QUAD]
        texels = _texture_array(texture).astype(np.float64) / 255.0
        screen = project_vertices(used, world, view, projection, display.width, display.height)

        pixels = pygame.surfarray.pixels3d(display.surface)
        try:
            drawn = 0
            for start in range(0, len(used), VERTICES_PER_QUAD):
                end = start + VERTICES_PER_QUAD
                if self._draw_quad(display, pixels, used[start:end], screen[start:end], texels):
                    drawn += 1
        finally:
            del pixels
        return drawn

    @staticmethod
    def _draw_quad(
        display: Display,
        pixels: np.ndarray,
        quad: Sequence,
        corners: np.ndarray,
        texels: np.ndarray,
    ) -> bool:
        if np.isnan(corners).any():
            return False
        xs, ys, depths = corners[:, 0], corners[:, 1], corners[:, 2]
        x0, x1 = float(xs.min()), float(xs.max())
        y0, y1 = float(ys.min()), float(ys.max())
        if x1 - x0 < _EPSILON or y1 - y0 < _EPSILON:
            return False
        depth = float(depths.mean())
        if not 0.0 <= depth <= 1.0:
            return False

        ix0, ix1 = _pixel_span(x0, x1, display.width)
        iy0, iy1 = _pixel_span(y0, y1, display.height)
        if ix0 >= ix1 or iy0 >= iy1:
            return False

        u_left = quad[int(np.argmin(xs))].texture[0]
        u_right = quad[int(np.argmax(xs))].texture[0]
        v_top = quad[int(np.argmin(ys))].texture[1]
        v_bottom = quad[int(np.argmax(ys))].texture[1]
        u = u_left + (np.arange(ix0, ix1) + 0.5 - x0) / (x1 - x0) * (u_right - u_left)
        v = v_top + (np.arange(iy0, iy1) + 0.5 - y0) / (y1 - y0) * (v_bottom - v_top)

        tex_height, tex_width = texels.shape[:2]
        cols = np.floor(u * tex_width).astype(int) % tex_width
        rows = np.floor(v * tex_height).astype(int) % tex_height
        sampled = texels[rows[:, None], cols[None, :], :3]
        source = sampled * np.asarray(quad[0].color[:3], dtype=np.float64)

        depth_region = display.depth_buffer[iy0:iy1, ix0:ix1]
        if display.depth_enabled:
            mask = depth < depth_region
            depth_region[mask] = depth
        else:
            mask = np.ones(depth_region.shape, dtype=bool)
        if not mask.any():
            return False

        target = pixels[ix0:ix1, iy0:iy1].swapaxes(0, 1)
        if display.blend_mode is BlendMode.ADDITIVE:
            result = target.astype(np.float64) / 255.0 + source
        else:
            result = source
        result = np.rint(np.clip(result, 0.0, 1.0) * 255.0).astype(np.uint8)
        target[mask] = result[mask]
        return True