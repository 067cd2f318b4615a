"""Draw surfaces for the particle field.

The simulation only issues draw calls: stroke color (HSB + alpha), stroke
weight, point and line. A canvas turns them into pixels:

  - PygameCanvas draws onto a pygame Surface (the realtime window)
  - ImageCanvas draws onto a Pillow image (headless / offline rendering)

Each frame starts with wipe(), which lays a near-black layer at low alpha
over the previous frame so motion leaves fading trails.
"""

import functools

import numpy as np
import pygame
from PIL import Image, ImageColor, ImageDraw

# --- Background ---
BACKGROUND = (10, 10, 10)
FADE_ALPHA = 10  # out of 255; lower keeps more history

# --- Default stroke ---
DEFAULT_COLOR = (0, 0, 100, 100)
DEFAULT_WEIGHT = 1


def _clamp_hsba(color):
    h, s, b, a = color
    return (
        min(max(h, 0.0), 360.0),
        min(max(s, 0.0), 100.0),
        min(max(b, 0.0), 100.0),
        min(max(a, 0.0), 100.0),
    )


def hsba_to_rgba(color):
    """HSB(A) with hue 0-360 and the rest 0-100 -> 8-bit RGBA."""
    c = pygame.Color(0, 0, 0, 0)
    c.hsva = _clamp_hsba(color)
    return (c.r, c.g, c.b, c.a)


@functools.lru_cache(maxsize=4096)
def _pil_rgb(h, s, b):
    return ImageColor.getrgb(f"hsv({h:.1f},{s:.1f}%,{b:.1f}%)")


class Canvas:
    """Stroke state plus the primitive draw calls. Subclasses draw pixels."""

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.color = DEFAULT_COLOR
        self.weight = DEFAULT_WEIGHT

    def stroke(self, color):
        self.color = color

    def stroke_weight(self, weight):
        self.weight = weight

    def wipe(self):
        raise NotImplementedError

    def point(self, x, y):
        raise NotImplementedError

    def line(self, x0, y0, x1, y1):
        raise NotImplementedError

    def overlay(self, rgb):
        """Add an (height, width, 3) uint8 image on top of the drawing."""
        raise NotImplementedError


class PygameCanvas(Canvas):
    def __init__(self, surface):
        width, height = surface.get_size()
        super().__init__(width, height)
        self.surface = surface
        self.surface.fill(BACKGROUND)
        self._fade = pygame.Surface((width, height), pygame.SRCALPHA, 32)
        self._fade.fill((*BACKGROUND, FADE_ALPHA))
        self.rgba = hsba_to_rgba(self.color)

    def stroke(self, color):
        super().stroke(color)
        self.rgba = hsba_to_rgba(color)

    def wipe(self):
        self.surface.blit(self._fade, (0, 0))

    def clear(self):
        self.surface.fill(BACKGROUND)

    def point(self, x, y):
        if self.weight <= 1:
            self.surface.set_at((int(x), int(y)), self.rgba)
        else:
            pygame.draw.circle(self.surface, self.rgba, (x, y), self.weight / 2)

    def line(self, x0, y0, x1, y1):
        pygame.draw.line(self.surface, self.rgba, (x0, y0), (x1, y1), max(1, int(self.weight)))

    def overlay(self, rgb):
        layer = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
        self.surface.blit(layer, (0, 0), special_flags=pygame.BLEND_ADD)

    def frame_array(self):
        """Current pixels as an (height, width, 3) uint8 array."""
        frame = pygame.surfarray.array3d(self.surface)
        return np.transpose(frame, (1, 0, 2))  # pygame is (width, height)


class ImageCanvas(Canvas):
    def __init__(self, width, height):
        super().__init__(width, height)
        self.image = Image.new("RGB", (width, height), BACKGROUND)
        self._fade = Image.new("RGB", (width, height), BACKGROUND)
        self._draw = ImageDraw.Draw(self.image)

    def _rgb(self):
        h, s, b, _ = _clamp_hsba(self.color)
        return _pil_rgb(round(h, 1), round(s, 1), round(b, 1))

    def wipe(self):
        self.image = Image.blend(self.image, self._fade, FADE_ALPHA / 255)
        self._draw = ImageDraw.Draw(self.image)

    def point(self, x, y):
        fill = self._rgb()
        if self.weight <= 1:
            self._draw.point((x, y), fill=fill)
        else:
            r = self.weight / 2
            self._draw.ellipse([x - r, y - r, x + r, y + r], fill=fill)

    def line(self, x0, y0, x1, y1):
        self._draw.line([(x0, y0), (x1, y1)], fill=self._rgb(), width=max(1, int(self.weight)))

    def overlay(self, rgb):
        layer = Image.fromarray(rgb, "RGB")
        summed = np.clip(
            np.asarray(self.image, dtype=np.uint16) + np.asarray(layer, dtype=np.uint16),
            0,
            255,
        ).astype(np.uint8)
        self.image = Image.fromarray(summed, "RGB")
        self._draw = ImageDraw.Draw(self.image)

    def frame_array(self):
        return np.asarray(self.image, dtype=np.uint8).copy()

    def save(self, path):
        self.image.save(path)
