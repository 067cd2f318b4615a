import numpy as np
import pygame
import pytest

from chladni import canvas as canvas_module
from chladni.canvas import BACKGROUND, Canvas, ImageCanvas, PygameCanvas, hsba_to_rgba


def test_hsba_to_rgba_primaries():
    assert hsba_to_rgba((0, 100, 100, 100)) == (255, 0, 0, 255)
    assert hsba_to_rgba((120, 100, 100, 100)) == (0, 255, 0, 255)
    assert hsba_to_rgba((0, 0, 0, 100)) == (0, 0, 0, 255)


def test_hsba_to_rgba_clamps_out_of_range():
    assert hsba_to_rgba((-5, 150, 120, 200)) == (255, 0, 0, 255)


def test_canvas_rejects_empty_size():
    with pytest.raises(ValueError):
        ImageCanvas(0, 10)


@pytest.fixture
def surface():
    return pygame.Surface((40, 30))


def test_pygame_canvas_starts_on_background(surface):
    canvas = PygameCanvas(surface)
    assert (canvas.width, canvas.height) == (40, 30)
    assert tuple(surface.get_at((5, 5)))[:3] == BACKGROUND


def test_pygame_canvas_point_and_line(surface):
    canvas = PygameCanvas(surface)
    canvas.stroke((0, 100, 100, 100))
    canvas.stroke_weight(1)
    canvas.point(3, 4)
    assert tuple(surface.get_at((3, 4)))[:3] == (255, 0, 0)

    canvas.stroke((240, 100, 100, 100))
    canvas.stroke_weight(3)
    canvas.line(0, 20, 39, 20)
    assert tuple(surface.get_at((20, 20)))[:3] == (0, 0, 255)


def test_pygame_canvas_point_off_surface_is_ignored(surface):
    canvas = PygameCanvas(surface)
    canvas.point(40, 30)


def test_pygame_canvas_wipe_fades(surface):
    canvas = PygameCanvas(surface)
    canvas.stroke((0, 0, 100, 100))
    canvas.point(10, 10)
    before = surface.get_at((10, 10)).r
    canvas.wipe()
    after = surface.get_at((10, 10)).r
    assert after < before


def test_pygame_canvas_frame_array_shape(surface):
    canvas = PygameCanvas(surface)
    frame = canvas.frame_array()
    assert frame.shape == (30, 40, 3)


def test_pygame_canvas_overlay_adds(surface):
    canvas = PygameCanvas(surface)
    rgb = np.full((30, 40, 3), 20, dtype=np.uint8)
    canvas.overlay(rgb)
    assert tuple(surface.get_at((0, 0)))[:3] == (30, 30, 30)


def test_image_canvas_draws_points_lines_and_fades(tmp_path):
    canvas = ImageCanvas(40, 30)
    canvas.stroke((0, 100, 100, 100))
    canvas.stroke_weight(1)
    canvas.point(5, 5)
    assert canvas.image.getpixel((5, 5)) == (255, 0, 0)

    canvas.stroke_weight(6)
    canvas.point(20, 15)
    assert canvas.image.getpixel((21, 15)) == (255, 0, 0)

    canvas.stroke((120, 100, 100, 100))
    canvas.stroke_weight(1)
    canvas.line(0, 25, 39, 25)
    assert canvas.image.getpixel((10, 25)) == (0, 255, 0)

    canvas.wipe()
    r, _, _ = canvas.image.getpixel((5, 5))
    assert r < 255

    canvas.save(tmp_path / "out.png")
    assert (tmp_path / "out.png").exists()
    assert canvas.frame_array().shape == (30, 40, 3)


def test_base_canvas_declares_every_draw_call():
    canvas = Canvas(4, 4)
    for call, args in (
        (canvas.wipe, ()),
        (canvas.point, (0, 0)),
        (canvas.line, (0, 0, 1, 1)),
        (canvas.overlay, (np.zeros((4, 4, 3), dtype=np.uint8),)),
    ):
        with pytest.raises(NotImplementedError):
            call(*args)


def test_pygame_canvas_converts_color_once_per_stroke(surface, monkeypatch):
    canvas = PygameCanvas(surface)
    calls = []

    def counting(color):
        calls.append(color)
        return hsba_to_rgba(color)

    monkeypatch.setattr(canvas_module, "hsba_to_rgba", counting)
    canvas.stroke((120, 100, 100, 100))
    canvas.stroke_weight(1)
    for x in range(4):
        canvas.point(x, 1)
    canvas.line(0, 10, 39, 10)

    assert len(calls) == 1
    assert canvas.rgba == (0, 255, 0, 255)
    assert tuple(surface.get_at((2, 1)))[:3] == (0, 255, 0)
