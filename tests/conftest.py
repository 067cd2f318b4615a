import random

import pytest

from chladni.canvas import Canvas
from chladni.controls import ControlInputs, map_controls


class RecordingCanvas(Canvas):
    """Canvas that records draw calls instead of drawing."""

    def __init__(self, width=640, height=500):
        super().__init__(width, height)
        self.points = []
        self.lines = []
        self.weights = []
        self.wipes = 0

    def stroke_weight(self, weight):
        super().stroke_weight(weight)
        self.weights.append(weight)

    def wipe(self):
        self.wipes += 1

    def point(self, x, y):
        self.points.append((x, y, self.weight, self.color))

    def line(self, x0, y0, x1, y1):
        self.lines.append((x0, y0, x1, y1, self.weight))

    def overlay(self, rgb):
        self.overlaid = rgb


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_config():
    def factory(equity=5.0, climate=5.0, surveillance=5.0, active=100, capacity=100):
        return map_controls(ControlInputs(equity, climate, surveillance), active, capacity)

    return factory
