import random

import pygame
import pytest
from PIL import Image

from chladni import render
from chladni.app import KEY_BINDINGS, handle_key
from chladni.controls import ControlInputs
from chladni.simulation import SimulationState


@pytest.fixture
def state(canvas):
    return SimulationState(
        canvas,
        capacity=50,
        inputs=ControlInputs(5, 5, 5),
        particle_count=20,
        rng=random.Random(2),
    )


def test_frame_wipes_maps_and_steps(state, canvas):
    state.mapper.push("surveillance", 9)
    state.frame()

    assert canvas.wipes == 1
    assert state.tick == 1
    assert state.config.surveillance == 9
    assert state.config.active_count == 20
    assert len(canvas.points) == 20 * 4
    assert len(canvas.lines) == 20 * 4
    assert len(state.pool) == 50


def test_nodal_overlay(state, canvas):
    state.show_nodes = True
    state.frame()
    assert canvas.overlaid.shape == (canvas.height, canvas.width, 3)


def test_reset_reseeds_without_resizing(state):
    before = list(state.pool.particles)
    state.frame()
    state.reset()
    assert state.tick == 0
    assert len(state.pool) == 50
    assert not set(map(id, before)) & set(map(id, state.pool.particles))


def test_summary_mentions_controls(state):
    text = state.summary()
    assert "equity=5.0" in text
    assert "particles=20/50" in text


def test_keys_push_into_channels(state):
    assert handle_key(state, pygame.K_e)
    assert handle_key(state, pygame.K_x)
    assert handle_key(state, pygame.K_UP)
    cfg = state.mapper.update()
    assert cfg.equity == 5.5
    assert cfg.climate == 4.5
    assert cfg.active_count == 50


def test_keys_toggle_nodes_and_quit(state):
    handle_key(state, pygame.K_f)
    assert state.show_nodes
    assert handle_key(state, pygame.K_ESCAPE) is False


def test_every_binding_targets_a_channel(state):
    for name, _ in KEY_BINDINGS.values():
        assert name in state.mapper.channels


def test_offline_render_writes_png_and_gif(tmp_path):
    png = tmp_path / "field.png"
    gif = tmp_path / "field.gif"
    render.main(
        [
            "--steps", "12",
            "--particles", "60",
            "--width", "64",
            "--height", "48",
            "--surveillance", "9",
            "--nodes",
            "--seed", "4",
            "--output", str(png),
            "--gif", str(gif),
        ]
    )
    with Image.open(png) as img:
        assert img.size == (64, 48)
    assert gif.exists()


def test_repeated_keys_within_one_frame_accumulate(state):
    handle_key(state, pygame.K_e)
    handle_key(state, pygame.K_e)
    handle_key(state, pygame.K_a)
    handle_key(state, pygame.K_a)
    handle_key(state, pygame.K_a)
    cfg = state.mapper.update()
    assert cfg.equity == 6.0
    assert cfg.surveillance == 3.5


def test_repeated_keys_stop_at_range_limits(state):
    for _ in range(30):
        handle_key(state, pygame.K_e)
        handle_key(state, pygame.K_DOWN)
    # one step back down from the top, not from an overshoot
    handle_key(state, pygame.K_d)
    cfg = state.mapper.update()
    assert cfg.equity == 9.5
    assert cfg.active_count == 0
