# firework.py

"""
Firework lifecycle.

A firework starts as a single white rocket climbing against gravity. Once
gravity has slowed the climb enough, the rocket detonates: it is replaced by a
burst of small particles colored around the firework's base hue, which then
fall and fade out on their own.

Data Contract:
- Inputs: launch position, initial vertical speed (negative is upward) and an
  RGB seed color.
- Side Effects: update() consumes samples from the supplied RNG on the tick
  the rocket detonates, and on no other tick.
- Invariants:
    - The phase only ever moves Ascending -> Exploded.
    - `effect` is empty while ascending, holds exactly BURST_COUNT particles
      after detonation, and never grows afterwards.
    - A firework is dead iff it has exploded and every effect particle is dead.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

import constants
from color import Color, HslColor, round_half_away
from particle import Particle

logger = logging.getLogger("particle_sim")


@dataclass
class Ascending:
    rocket: Particle


@dataclass(frozen=True)
class Exploded:
    pass


Phase = Union[Ascending, Exploded]


class Firework:
    def __init__(self, x: float, y: float, y_speed: float, effect_color: Color):
        rocket = (
            Particle(x, y, *constants.ROCKET_DIMENSIONS, Color(*constants.ROCKET_COLOR))
            .with_acceleration(0.0, constants.GRAVITY)
            .with_velocity(0.0, y_speed)
            .with_fading(0.0)
        )
        self.phase: Phase = Ascending(rocket)
        self.effect: List[Particle] = []
        self.base_color: HslColor = effect_color.as_hsl()

    @property
    def rocket(self) -> Optional[Particle]:
        """The climbing rocket, or None once the firework has exploded."""
        if isinstance(self.phase, Ascending):
            return self.phase.rocket
        return None

    def _burst_color(self, rng: np.random.Generator) -> Color:
        """
        Jitters the base saturation and lightness independently, keeping the hue.
        """
        saturation = self.base_color.s + (rng.random() - 0.5) * 2.0 * constants.BURST_SATURATION_JITTER
        lightness = self.base_color.l + (rng.random() - 0.5) * 2.0 * constants.BURST_LIGHTNESS_JITTER
        return HslColor(
            self.base_color.h,
            float(np.clip(saturation, 0.0, 100.0)),
            float(np.clip(lightness, 0.0, 100.0)),
        ).as_rgb()

    def _detonate(self, rocket: Particle, rng: np.random.Generator):
        x, y = round_half_away(rocket.position)
        for _ in range(constants.BURST_COUNT):
            color = self._burst_color(rng)
            self.effect.append(
                Particle(x, y, *constants.BURST_PARTICLE_DIMENSIONS, color)
                .with_acceleration(0.0, constants.GRAVITY)
                .with_velocity(
                    constants.BURST_SPEED_SCALE * (rng.random() - constants.BURST_X_BIAS),
                    constants.BURST_SPEED_SCALE * (rng.random() - constants.BURST_Y_BIAS),
                )
            )
        self.phase = Exploded()
        logger.debug(f"Firework detonated at ({x:.0f}, {y:.0f}) with hue {self.base_color.h:.1f}.")

    def update(self, rng: np.random.Generator):
        """
        Advances the firework by one tick. The rocket moves first; if it has
        slowed past the detonation speed, the burst is spawned and the rocket
        discarded within the same tick. Then every effect particle moves,
        including any that were just spawned.
        """
        if isinstance(self.phase, Ascending):
            rocket = self.phase.rocket
            rocket.update()
            if rocket.velocity[1] > constants.DETONATION_SPEED:
                self._detonate(rocket, rng)

        for particle in self.effect:
            particle.update()

    def draw(self, canvas):
        """Draws the rocket (if any) first, then the burst on top."""
        rocket = self.rocket
        if rocket is not None:
            rocket.draw(canvas)

        for particle in self.effect:
            particle.draw(canvas)

    def is_dead(self) -> bool:
        return isinstance(self.phase, Exploded) and all(p.is_dead() for p in self.effect)

    def live_particle_count(self) -> int:
        """Rocket plus every effect particle that is still visible."""
        count = 1 if self.rocket is not None else 0
        return count + sum(1 for p in self.effect if not p.is_dead())
