import math

import numpy as np
import pytest

from particlefall.display import Display, DisplayError
from particlefall.particles import Vertex
from particlefall.shader import ParticleShader, project_vertices
from particlefall.texture import TargaImage
from particlefall.transforms import identity, perspective_fov_lh

WHITE = np.full((1, 1, 4), 255, dtype=np.uint8)


def _quad(x0, y0, x1, y1, z, color):
    rgba = (*color, 1.0)
    corners = [
        ((x0, y0, z), (0.0, 1.0)),
        ((x0, y1, z), (0.0, 0.0)),
        ((x1, y0, z), (1.0, 1.0)),
        ((x1, y0, z), (1.0, 1.0)),
        ((x0, y1, z), (0.0, 0.0)),
        ((x1, y1, z), (1.0, 0.0)),
    ]
    return [Vertex(position=p, texture=t, color=rgba) for p, t in corners]


@pytest.fixture
def display():
    d = Display(4, 4, window=False)
    d.begin_scene(0.0, 0.0, 0.0, 1.0)
    yield d
    d.close()


def _render(display, vertices, texture=WHITE, count=None):
    shader = ParticleShader()
    m = identity()
    return shader.render(
        display, vertices, len(vertices) if count is None else count, m, m, m, texture
    )


def _rgb(display, x, y):
    return tuple(display.surface.get_at((x, y)))[:3]


def test_project_identity_maps_ndc_to_pixels():
    vertices = [
        Vertex(position=(-1.0, 1.0, 0.0)),
        Vertex(position=(1.0, -1.0, 1.0)),
        Vertex(position=(0.0, 0.0, 0.5)),
    ]
    m = identity()
    result = project_vertices(vertices, m, m, m, 8, 6)
    np.testing.assert_allclose(result[0], [0.0, 0.0, 0.0])
    np.testing.assert_allclose(result[1], [8.0, 6.0, 1.0])
    np.testing.assert_allclose(result[2], [4.0, 3.0, 0.5])


def test_project_behind_camera_is_nan():
    projection = perspective_fov_lh(math.pi / 4.0, 1.0, 0.3, 1000.0)
    vertices = [Vertex(position=(0.0, 0.0, -1.0)), Vertex(position=(0.0, 0.0, 5.0))]
    m = identity()
    result = project_vertices(vertices, m, m, projection, 100, 100)
    assert np.isnan(result[0]).all()
    assert np.isfinite(result[1]).all()
    assert 0.0 < result[1][2] < 1.0


def test_quad_is_drawn_inside_only(display):
    drawn = _render(display, _quad(-0.5, -0.5, 0.5, 0.5, 0.5, (1.0, 0.0, 0.0)))
    assert drawn == 1
    for x, y in [(1, 1), (1, 2), (2, 1), (2, 2)]:
        assert _rgb(display, x, y) == (255, 0, 0)
    for x, y in [(0, 0), (3, 3), (0, 2), (3, 1)]:
        assert _rgb(display, x, y) == (0, 0, 0)


def test_depth_buffer_written(display):
    _render(display, _quad(-0.5, -0.5, 0.5, 0.5, 0.5, (1.0, 1.0, 1.0)))
    assert display.depth_buffer[1, 1] == pytest.approx(0.5)
    assert display.depth_buffer[0, 0] == pytest.approx(1.0)


def test_empty_padding_vertices_draw_nothing(display):
    before = pygame_bytes(display)
    assert _render(display, [Vertex()] * 12) == 0
    assert pygame_bytes(display) == before


def pygame_bytes(display):
    return bytes(np.asarray([_rgb(display, x, y) for x in range(4) for y in range(4)]).ravel())


def test_additive_blending_accumulates(display):
    display.enable_alpha_blending()
    quad = _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (0.2, 0.2, 0.2))
    display.turn_z_buffer_off()
    _render(display, quad)
    once = _rgb(display, 2, 2)
    _render(display, quad)
    twice = _rgb(display, 2, 2)
    assert once[0] > 0
    assert all(abs(t - 2 * o) <= 1 for t, o in zip(twice, once))


def test_opaque_replaces(display):
    display.turn_z_buffer_off()
    quad = _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (0.2, 0.2, 0.2))
    _render(display, quad)
    once = _rgb(display, 2, 2)
    _render(display, quad)
    assert _rgb(display, 2, 2) == once


def test_depth_test_keeps_nearer(display):
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.2, (0.0, 1.0, 0.0)))
    drawn = _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.8, (1.0, 0.0, 0.0)))
    assert drawn == 0
    assert _rgb(display, 1, 1) == (0, 255, 0)


def test_back_to_front_overwrites(display):
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.8, (1.0, 0.0, 0.0)))
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.2, (0.0, 1.0, 0.0)))
    assert _rgb(display, 1, 1) == (0, 255, 0)


def test_z_buffer_off_ignores_depth(display):
    display.turn_z_buffer_off()
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.2, (0.0, 1.0, 0.0)))
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.8, (1.0, 0.0, 0.0)))
    assert _rgb(display, 1, 1) == (255, 0, 0)


def test_outside_depth_range_not_drawn(display):
    assert _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 2.0, (1.0, 1.0, 1.0))) == 0
    assert _rgb(display, 1, 1) == (0, 0, 0)


def test_index_count_limits_quads(display):
    vertices = _quad(-1.0, -1.0, 0.0, 0.0, 0.5, (1.0, 1.0, 1.0)) + _quad(
        0.0, 0.0, 1.0, 1.0, 0.5, (1.0, 1.0, 1.0)
    )
    assert _render(display, vertices, count=6) == 1
    assert _rgb(display, 0, 3) == (255, 255, 255)
    assert _rgb(display, 3, 0) == (0, 0, 0)


def test_index_count_out_of_range(display):
    quad = _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (1.0, 1.0, 1.0))
    with pytest.raises(ValueError):
        _render(display, quad, count=7)
    with pytest.raises(ValueError):
        _render(display, quad, count=-1)


def test_texture_sampled_left_to_right():
    display = Display(4, 2, window=False)
    display.begin_scene(0.0, 0.0, 0.0, 1.0)
    texture = np.array([[[255, 0, 0, 255], [0, 0, 255, 255]]], dtype=np.uint8)
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (1.0, 1.0, 1.0)), texture=texture)
    for y in range(2):
        assert _rgb(display, 0, y) == (255, 0, 0)
        assert _rgb(display, 1, y) == (255, 0, 0)
        assert _rgb(display, 2, y) == (0, 0, 255)
        assert _rgb(display, 3, y) == (0, 0, 255)


def test_targa_image_texture_modulated_by_colour(display):
    image = TargaImage(width=1, height=1, data=bytes([255, 255, 255, 255]))
    _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (0.0, 0.0, 1.0)), texture=image)
    assert _rgb(display, 2, 2) == (0, 0, 255)


def test_bad_texture_shape(display):
    with pytest.raises(ValueError):
        _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (1.0, 1.0, 1.0)),
                texture=np.zeros((2, 2, 3), dtype=np.uint8))


def test_closed_display_raises():
    display = Display(4, 4, window=False)
    display.close()
    with pytest.raises(DisplayError):
        _render(display, _quad(-1.0, -1.0, 1.0, 1.0, 0.5, (1.0, 1.0, 1.0)))