# main.py

import cProfile
import functools
import logging
import pstats
import sys

import numpy as np
import pygame

import constants
import engine
import logger_setup
from config_loader import ConfigError, load_config
from simulation import SimulationState
from surface import PygameCanvas

# Get the application's dedicated logger
logger = logging.getLogger("particle_sim")


def update(env, state, input_state, canvas, log_throttle_ticks: int = 100) -> bool:
    """
    One fixed simulation tick. Returns False when the user asked to quit;
    stopping the process is left to the caller.
    """
    if input_state.quit_requested():
        logger.info("Quit requested.")
        return False

    state.tick(env.rng, canvas.width, canvas.height)

    # --- Logging (throttled) ---
    if state.ticks % log_throttle_ticks == 0:
        stats = state.stats()
        logger.debug(
            f"Tick={stats['tick']}, "
            f"Fireworks={stats['fireworks']}, "
            f"Particles={stats['particles']}, "
            f"Spawned={stats['spawned']}, "
            f"Reaped={stats['reaped']}"
        )
    return True


def render(env, state, input_state, canvas, dt: float):
    """
    One frame: clear, draw every firework in order, present.
    `dt` only feeds the frame-rate readout in the window caption.
    """
    canvas.clear_screen(constants.BACKGROUND_COLOR)
    state.draw(canvas)
    canvas.render()

    if env.frames % constants.REFRESH_LIMIT == 0 and dt > 0:
        pygame.display.set_caption(
            f"{constants.TITLE} - {1.0 / dt:.0f} fps - {len(state.fireworks)} fireworks"
        )


def run_simulation(config: dict) -> engine.EngineEnvironment:
    sim_config = config['simulation']

    # No seed means a fresh, unreproducible stream each run.
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"RNG initialized with seed: {config['master_seed']}")

    state = SimulationState(spawn_probability=sim_config['spawn_probability'])
    canvas = PygameCanvas(
        sim_config['width'],
        sim_config['height'],
        scale=sim_config['pixel_scale'],
        title=constants.TITLE,
    )
    canvas.set_refresh_limit(sim_config['refresh_limit'])
    input_state = engine.InputState()

    return engine.run(
        sim_config['updates_per_second'],
        state,
        input_state,
        canvas,
        functools.partial(update, log_throttle_ticks=sim_config['log_throttle_ticks']),
        render,
        rng=rng,
        max_ticks=sim_config['max_ticks'],
    )


def main(config_path: str = 'config.json') -> int:
    """
    Loads configuration, sets up logging and runs the fireworks until the
    user quits. Returns a process exit code.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        # Logging is not set up yet, so we print this one error.
        print(f"FATAL: {e}", file=sys.stderr)
        return 1

    logger_setup.setup_logging(config)
    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    pygame.init()
    try:
        if config['simulation']['profile']:
            profiler = cProfile.Profile()
            profiler.enable()
            run_simulation(config)
            profiler.disable()
            logger.info("Profiling complete. Printing stats...")
            stats = pstats.Stats(profiler).sort_stats('cumtime')
            stats.print_stats(20)  # Print the top 20 time-consuming functions
        else:
            run_simulation(config)
    except pygame.error:
        logger.exception("Fatal pygame error.")
        return 1
    finally:
        logger.info("Application shutting down.")
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
