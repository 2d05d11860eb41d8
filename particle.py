# particle.py

import numpy as np
from color import Color, round_half_away
from constants import PARTICLE_LIFETIME, PARTICLE_FADING

class Particle:
    """
    A single drawn rectangle that moves under constant acceleration and fades.

    Data Contract:
    - Inputs:
        - x, y (float): Top-left corner of the rectangle, in surface pixels.
        - width, height (int): Rectangle size in surface pixels.
        - color (Color): Base color, drawn at full brightness when fresh.
    - Invariants:
        - dimensions never change after creation.
        - acceleration is constant for the particle's life.
        - Once lifetime <= 0 the particle is dead: it is never drawn and
          update() leaves its state untouched.
    """
    def __init__(self, x: float, y: float, width: int, height: int, color: Color):
        self.position = np.array([x, y], dtype=float)
        self.dimensions = (int(width), int(height))
        self.lifetime = PARTICLE_LIFETIME
        self.fading = PARTICLE_FADING
        self.velocity = np.zeros(2, dtype=float)
        self.acceleration = np.zeros(2, dtype=float)
        self.color = color

    # --- Builder helpers, chainable at construction time ---

    def with_fading(self, fading: float) -> "Particle":
        """A fading of 0 makes the particle immortal."""
        self.fading = fading
        return self

    def with_velocity(self, x: float, y: float) -> "Particle":
        self.velocity = np.array([x, y], dtype=float)
        return self

    def with_acceleration(self, x: float, y: float) -> "Particle":
        self.acceleration = np.array([x, y], dtype=float)
        return self

    def is_dead(self) -> bool:
        return self.lifetime <= 0.0

    def update(self):
        """
        Advances the particle by one tick using semi-implicit Euler.
        v_new = v_old + a
        p_new = p_old + v_new
        """
        if self.is_dead():
            return
        self.velocity += self.acceleration
        self.lifetime -= self.fading
        self.position += self.velocity

    def draw(self, canvas):
        """
        Draws the particle's rectangle, its color dimmed by the remaining lifetime.
        """
        if self.is_dead():
            return
        x, y = round_half_away(self.position)
        width, height = self.dimensions
        canvas.filled_rect(int(x), int(y), width, height, self.color.scaled(self.lifetime))

    def __repr__(self):
        return (
            f"Particle(position={self.position.tolist()}, velocity={self.velocity.tolist()}, "
            f"lifetime={self.lifetime:.3f})"
        )
