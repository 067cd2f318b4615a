"""One installation frame: wipe, refresh the controls, step the pool."""

from chladni.controls import ControlMapper
from chladni.field import nodal_image
from chladni.pool import ParticlePool

# --- Defaults ---
NUM_PARTICLES = 10_000
CANVAS_SIZE = (640, 500)


class SimulationState:
    """Everything the frame loop mutates, passed around explicitly.

    The mapper's channels are the only way new control values get in; the
    SimulationConfig returned by each frame is an immutable snapshot.
    """

    def __init__(self, canvas, capacity=NUM_PARTICLES, inputs=None, particle_count=None, rng=None):
        self.canvas = canvas
        self.mapper = ControlMapper(capacity, inputs=inputs, particle_count=particle_count)
        self.pool = ParticlePool(
            capacity, canvas.width, canvas.height, self.mapper.inputs.climate, rng=rng
        )
        self.config = None
        self.tick = 0
        self.show_nodes = False

    def frame(self):
        self.canvas.wipe()
        self.config = self.mapper.update()
        replaced = self.pool.step(self.config, self.canvas)
        if self.show_nodes:
            self.canvas.overlay(
                nodal_image(
                    self.canvas.width,
                    self.canvas.height,
                    self.config.wave_m,
                    self.config.wave_n,
                )
            )
        self.tick += 1
        return replaced

    def reset(self):
        self.pool.initialize(self.mapper.inputs.climate)
        self.tick = 0

    def summary(self):
        inputs = self.mapper.inputs
        return (
            f"equity={inputs.equity:.1f}  climate={inputs.climate:.1f}  "
            f"surveillance={inputs.surveillance:.1f}  "
            f"particles={self.mapper.particle_count}/{self.pool.capacity}"
        )
