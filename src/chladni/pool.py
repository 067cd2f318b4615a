"""Fixed-capacity particle pool.

Only the first active_count particles move and draw each frame; the rest wait.
A particle that dies is removed and a fresh one appended in the same step, so
the pool never changes size.
"""

import random

from chladni.particle import Particle


class ParticlePool:
    def __init__(self, capacity, width, height, climate, rng=None):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.capacity = capacity
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.particles = []
        self.deaths = 0
        self.initialize(climate)

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, climate):
        return Particle(self.width, self.height, climate, self.rng)

    def initialize(self, climate):
        """(Re)seed every particle."""
        self.particles = [self.spawn(climate) for _ in range(self.capacity)]

    def step(self, config, canvas):
        """Move and draw the active particles, replacing any that die.

        Walks indices downward so that removing particles[i] never shifts an
        index still to be visited; replacements land past the active window.
        Returns the number of particles replaced.
        """
        active = min(config.active_count, len(self.particles))
        replaced = 0

        for i in range(active - 1, -1, -1):
            p = self.particles[i]
            p.move(config)
            p.show(canvas, config)
            if p.is_dead:
                del self.particles[i]
                self.particles.append(self.spawn(config.climate))
                replaced += 1

        self.deaths += replaced
        return replaced
