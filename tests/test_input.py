import pygame
import pytest

from particlefall.input import InputState, Key


@pytest.fixture
def state():
    return InputState(screen_width=800, screen_height=600)


def test_starts_with_nothing_pressed(state):
    assert state.mouse_location == (0, 0)
    assert not state.is_escape_pressed()
    assert not state.is_left_arrow_pressed()
    assert not state.is_right_arrow_pressed()
    assert not state.is_mouse_pressed()


def test_escape_key(state):
    state.read({Key.ESCAPE}, (0, 0), ())
    assert state.is_escape_pressed()
    assert not state.is_left_arrow_pressed()
    assert not state.is_right_arrow_pressed()


def test_raw_pygame_codes_are_recognised(state):
    state.read([pygame.K_LEFT, pygame.K_RIGHT], (0, 0), ())
    assert state.is_left_arrow_pressed()
    assert state.is_right_arrow_pressed()
    assert not state.is_escape_pressed()


def test_keys_are_replaced_each_read(state):
    state.read({Key.ESCAPE}, (0, 0), ())
    state.read(set(), (0, 0), ())
    assert not state.is_escape_pressed()
    assert state.pressed_keys == frozenset()


def test_mouse_moves_by_delta(state):
    state.read((), (10, 20), ())
    state.read((), (5, -3), ())
    assert state.mouse_location == (15, 17)


def test_mouse_clamped_at_zero(state):
    state.read((), (-50, -70), ())
    assert state.mouse_location == (0, 0)


def test_mouse_clamped_at_screen_size(state):
    state.read((), (10_000, 10_000), ())
    assert state.mouse_location == (800, 600)


def test_left_button(state):
    state.read((), (0, 0), (True, False, False))
    assert state.is_mouse_pressed()
    state.read((), (0, 0), (False, True, False))
    assert not state.is_mouse_pressed()


def test_defaults_for_delta_and_buttons(state):
    state.read({Key.RIGHT})
    assert state.is_right_arrow_pressed()
    assert state.mouse_location == (0, 0)
    assert not state.is_mouse_pressed()