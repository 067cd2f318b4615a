"""Particles random-walking on the Chladni field.

Each frame a particle:
  - looks up the field value at its position, with wave numbers that grow
    away from the canvas origin
  - takes a random step whose size is walk_gain * |field| (never below
    MIN_WALK), so particles settle near the nodes
  - ages by stroke_factor * equity, dying at DEATH_AGE
  - drifts its hue toward the climate hue and fades saturation with age
  - draws four mirrored marks, one per canvas quadrant

Positions live in the unit square. Screen offsets span half the canvas so
the four mirrored copies tile the whole surface.
"""

import random
from enum import Enum

from chladni.controls import CONTROL_MAX, CONTROL_MIN, MAX_HUE, clamp, remap
from chladni.field import A, B, chladni
from chladni.strokes import stroke_width

# --- Motion ---
MIN_WALK = 0.002

# --- Aging ---
AGE_RANGE = (1000, 5000)
AGE_FLOOR = -10
DEATH_AGE = -5

# --- Color (HSB, hue 0-360, others 0-100) ---
HUE_SPREAD = 5
# False: the upward pull always follows the downward one. True: only one
# of the two pulls runs per frame.
EXCLUSIVE_HUE_BRANCHES = False
SATURATION_RANGE = (75, 100)
BRIGHTNESS_RANGE = (75, 100)
SATURATION_AGE = 500
ALPHA = 100

# --- Render mode thresholds (surveillance) ---
HIGH_TRAIL_THRESHOLD = 8.5
LOW_TRAIL_THRESHOLD = 2.5


class RenderMode(Enum):
    POINTS = "points"
    POINTS_AND_TRAILS = "points_and_trails"


def select_render_mode(surveillance):
    if surveillance > HIGH_TRAIL_THRESHOLD or surveillance < LOW_TRAIL_THRESHOLD:
        return RenderMode.POINTS_AND_TRAILS
    return RenderMode.POINTS


class Particle:
    def __init__(self, width, height, climate, rng=random):
        self.width = width
        self.height = height
        self.rng = rng

        self.x = rng.uniform(0, 1)
        self.y = rng.uniform(0, 1)
        self.prev_x = self.x
        self.prev_y = self.y
        self.step_size = MIN_WALK

        self.age = rng.uniform(*AGE_RANGE)
        self.stroke_factor = remap(self.age, AGE_RANGE[1], AGE_RANGE[0], 0, 1)

        birth_hue = remap(climate, CONTROL_MIN, CONTROL_MAX, 0, MAX_HUE)
        self.hue = rng.uniform(abs(birth_hue - HUE_SPREAD), abs(birth_hue + HUE_SPREAD))
        self.hue_offset = birth_hue - self.hue
        self.saturation = rng.uniform(*SATURATION_RANGE)
        self.brightness = rng.uniform(*BRIGHTNESS_RANGE)

        self.update_offsets()

    @property
    def color(self):
        return (self.hue, self.saturation, self.brightness, ALPHA)

    @property
    def is_dead(self):
        return self.age <= DEATH_AGE

    def local_wave_numbers(self, config):
        """Wave numbers at this particle, rising from 1 toward the global ones."""
        scale = self.width / 2
        m_local = remap(abs(self.width / 4 * self.x), 0, scale, 1, config.wave_m)
        n_local = remap(abs(self.width / 4 * self.y), 0, scale, 1, config.wave_n)
        return m_local, n_local

    def move(self, config):
        m_local, n_local = self.local_wave_numbers(config)
        vibration = chladni(self.x, self.y, A, B, m_local, n_local)

        self.step_size = max(config.walk_gain * abs(vibration), MIN_WALK)

        self.prev_x = self.x
        self.prev_y = self.y
        self.x += self.rng.uniform(-self.step_size, self.step_size)
        self.y += self.rng.uniform(-self.step_size, self.step_size)

        if self.age > AGE_FLOOR:
            self.age -= 1 * self.stroke_factor * config.equity

        self.update_offsets()

    def update_offsets(self):
        self.x = clamp(self.x, 0.0, 1.0)
        self.y = clamp(self.y, 0.0, 1.0)

        self.x_off = self.width / 2 * self.x
        self.y_off = self.height / 2 * self.y
        self.prev_x_off = self.width / 2 * self.prev_x
        self.prev_y_off = self.height / 2 * self.prev_y

    def drift_hue(self, config):
        """Pull the hue to the target hue, offset by the birth offset.

        Low surveillance amplifies the offset tenfold, high surveillance keeps
        it at one times.
        """
        target = config.target_hue
        change = self.hue_offset * remap(
            config.surveillance, CONTROL_MIN, CONTROL_MAX, 10, 1
        )

        if self.hue > target:
            self.hue = clamp(abs(self.hue - abs(target - self.hue) + change), 0, MAX_HUE)
            if EXCLUSIVE_HUE_BRANCHES:
                return
        elif EXCLUSIVE_HUE_BRANCHES and self.hue == target:
            return

        # Also runs after the above-target pull: with a positive change a hue
        # that started above the target ends at target + 3 * change.
        self.hue = clamp(abs(self.hue + abs(target - self.hue) + change), 0, MAX_HUE)

    def stroke_width(self, equity):
        return stroke_width(equity, self.stroke_factor * equity)

    def mirrored(self, x, y):
        """The four quadrant-symmetric copies of a screen point."""
        return [
            (x, y),
            (self.width - x, y),
            (x, self.height - y),
            (self.width - x, self.height - y),
        ]

    def show(self, canvas, config):
        self.drift_hue(config)
        self.saturation = clamp(remap(self.age, 0, SATURATION_AGE, 0, 100), 0, 100)

        weight = self.stroke_width(config.equity)
        canvas.stroke(self.color)

        if select_render_mode(config.surveillance) is RenderMode.POINTS_AND_TRAILS:
            canvas.stroke_weight(max(1, weight // 2))
            current = self.mirrored(self.x_off, self.y_off)
            previous = self.mirrored(self.prev_x_off, self.prev_y_off)
            for (x0, y0), (x1, y1) in zip(current, previous):
                canvas.line(x0, y0, x1, y1)

        canvas.stroke_weight(weight)
        for x, y in self.mirrored(self.x_off, self.y_off):
            canvas.point(x, y)
