# simulation.py

import logging
import numpy as np

import constants
from color import Color
from firework import Firework

logger = logging.getLogger("particle_sim")

class SimulationState:
    """
    Owns every live firework and applies the spawn policy once per tick.

    Data Contract:
    - Inputs:
        - spawn_probability (float): Chance in [0, 1] that a tick launches one
          new firework. Defaults to constants.SPAWN_PROBABILITY.
    - Outputs: None. This class modifies its internal state.
    - Side Effects: tick() consumes samples from the RNG it is given.
    - Invariants:
        - Each tick runs reap -> spawn -> advance, in that order.
        - After a tick, no dead firework remains in `fireworks`.
        - `fireworks` order only affects draw layering (later draws on top).
    """
    def __init__(self, spawn_probability: float = constants.SPAWN_PROBABILITY):
        self.fireworks = []
        self.spawn_probability = spawn_probability

        # --- Counters for throttled logging ---
        self.ticks = 0
        self.spawned_total = 0
        self.reaped_total = 0

        logger.info(f"SimulationState created with spawn probability {self.spawn_probability}.")

    def reap(self) -> int:
        """
        Drops every dead firework in a single filtering pass.
        Returns the number of fireworks removed.
        """
        before = len(self.fireworks)
        self.fireworks = [firework for firework in self.fireworks if not firework.is_dead()]
        reaped = before - len(self.fireworks)
        self.reaped_total += reaped
        return reaped

    def spawn(self, rng: np.random.Generator, width: int, height: int) -> Firework:
        """
        Launches one firework from a random column on the bottom edge, with a
        random upward speed and a random seed color.
        """
        x = int(rng.integers(0, 2**32)) % width
        y_speed = constants.LAUNCH_SPEED_MIN + rng.random() * constants.LAUNCH_SPEED_RANGE
        seed_color = Color.from_rgb(*rng.integers(0, 256, size=3))

        firework = Firework(x, height, y_speed, seed_color)
        self.fireworks.append(firework)
        self.spawned_total += 1
        logger.debug(f"Spawned firework at x={x} with speed {y_speed:.3f} and seed color {tuple(seed_color)}.")
        return firework

    def tick(self, rng: np.random.Generator, width: int, height: int):
        """
        Advances the whole simulation by one tick.
        The ordering (reap, then maybe spawn, then advance) fixes the
        steady-state density of fireworks on screen and must not change.
        """
        self.reap()

        if rng.random() < self.spawn_probability:
            self.spawn(rng, width, height)

        for firework in self.fireworks:
            firework.update(rng)

        self.ticks += 1

    def draw(self, canvas):
        for firework in self.fireworks:
            firework.draw(canvas)

    def live_particle_count(self) -> int:
        return sum(firework.live_particle_count() for firework in self.fireworks)

    def stats(self) -> dict:
        """A snapshot of the counters used by the throttled log line and the caption."""
        return {
            "tick": self.ticks,
            "fireworks": len(self.fireworks),
            "particles": self.live_particle_count(),
            "spawned": self.spawned_total,
            "reaped": self.reaped_total,
        }
