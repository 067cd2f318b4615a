"""Chladni plate field: the closed-form 2D standing wave.

The value at (x, y) is a local vibration intensity between -2 and 2. Zeros of
the function are the nodes where particles move least.

    chladni(x, y, a, b, m, n) =
        a * sin(pi * n * x) * sin(pi * m * y) + b * sin(pi * m * x) * sin(pi * n * y)
"""

import math

import numpy as np

# --- Amplitudes of the two wave terms ---
A = 1.0
B = 1.0


def chladni(x, y, a, b, m, n):
    """Evaluate the field at a single point of the unit square."""
    return a * math.sin(math.pi * n * x) * math.sin(math.pi * m * y) + b * math.sin(
        math.pi * m * x
    ) * math.sin(math.pi * n * y)


def field_grid(width, height, m, n, a=A, b=B):
    """Evaluate the field over a height x width grid spanning the unit square.

    Returns a float32 array indexed [row, col] like the trail grids in the
    rendering code.
    """
    xs = np.linspace(0.0, 1.0, width, dtype=np.float32)
    ys = np.linspace(0.0, 1.0, height, dtype=np.float32)
    gx, gy = np.meshgrid(xs, ys)
    return (
        a * np.sin(np.pi * n * gx) * np.sin(np.pi * m * gy)
        + b * np.sin(np.pi * m * gx) * np.sin(np.pi * n * gy)
    ).astype(np.float32)


def nodal_image(width, height, m, n, brightness=60):
    """Map a field grid to a gray RGB image where nodes are dark.

    Returns a uint8 array of shape (height, width, 3).
    """
    grid = np.abs(field_grid(width, height, m, n)) / (A + B)
    gray = np.clip(grid * brightness, 0, 255).astype(np.uint8)
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)
