# engine.py

"""
Fixed-timestep driver.

Runs the update callback at a fixed logical rate and the render callback once
per loop iteration (the canvas applies its own refresh limit), so simulation
speed does not depend on how fast frames can be drawn.

Data Contract:
- update(env, state, input_state, canvas) -> bool: one simulation tick.
  Returning False stops the loop.
- render(env, state, input_state, canvas, dt) -> None: one frame. `dt` is the
  wall time in seconds since the previous frame, for diagnostics only.
- Side Effects: polls the pygame event queue once per loop iteration.
- Invariants: the driver never calls update and render concurrently, and
  never terminates the process; it simply returns.
"""

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Set

import numpy as np
import pygame

from constants import MAX_CATCH_UP_TICKS

logger = logging.getLogger("particle_sim")


class KeyboardKey(enum.Enum):
    Q = pygame.K_q
    ESCAPE = pygame.K_ESCAPE
    SPACE = pygame.K_SPACE


class InputState:
    """
    Keyboard and window state gathered from the pygame event queue.
    Keys count as pressed if a KEYDOWN for them arrived since the last poll.
    """
    def __init__(self):
        self.pressed: Set[int] = set()
        self.window_closed = False

    def poll(self):
        self.pressed.clear()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.window_closed = True
            elif event.type == pygame.KEYDOWN:
                self.pressed.add(event.key)

    def is_key_pressed(self, key: KeyboardKey) -> bool:
        return key.value in self.pressed

    def quit_requested(self) -> bool:
        return self.window_closed or self.is_key_pressed(KeyboardKey.Q)


@dataclass
class EngineEnvironment:
    """Shared per-run context handed to every callback."""
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    ticks: int = 0
    frames: int = 0


UpdateFn = Callable[[EngineEnvironment, object, InputState, object], bool]
RenderFn = Callable[[EngineEnvironment, object, InputState, object, float], None]


def run(
    updates_per_second: int,
    state,
    input_state: InputState,
    canvas,
    update: UpdateFn,
    render: RenderFn,
    rng: Optional[np.random.Generator] = None,
    max_ticks: Optional[int] = None,
) -> EngineEnvironment:
    """
    Drives the simulation until update returns False or max_ticks is reached.
    Returns the environment so callers can inspect the final counters.
    """
    env = EngineEnvironment(rng=rng if rng is not None else np.random.default_rng())
    step = 1.0 / updates_per_second

    # Caps catch-up after a long stall (window drag, debugger).
    max_frame_time = step * MAX_CATCH_UP_TICKS

    logger.info(f"Engine loop starting at {updates_per_second} updates per second.")

    accumulator = 0.0
    last_time = time.perf_counter()
    running = True
    while running:
        now = time.perf_counter()
        frame_time = now - last_time
        last_time = now
        accumulator += min(frame_time, max_frame_time)

        input_state.poll()

        while running and accumulator >= step:
            running = update(env, state, input_state, canvas)
            env.ticks += 1
            accumulator -= step
            if max_ticks is not None and env.ticks >= max_ticks:
                logger.info(f"Reached max_ticks={max_ticks}.")
                running = False

        render(env, state, input_state, canvas, frame_time)
        env.frames += 1

        # Yield the CPU briefly; the accumulator absorbs the jitter.
        pygame.time.wait(1)

    logger.info(f"Engine loop stopped after {env.ticks} ticks and {env.frames} frames.")
    return env
