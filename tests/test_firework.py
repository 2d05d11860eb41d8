import numpy as np
import pytest

import constants
from color import Color
from conftest import ScriptedRng
from firework import Ascending, Exploded, Firework


def run_until_detonation(firework, rng, max_ticks=500):
    for tick in range(1, max_ticks + 1):
        firework.update(rng)
        if firework.rocket is None:
            return tick
    raise AssertionError("rocket never detonated")


def test_new_firework_is_an_ascending_rocket():
    firework = Firework(10, 100, -1.5, Color(255, 0, 0))
    rocket = firework.rocket
    assert isinstance(firework.phase, Ascending)
    assert rocket.position.tolist() == [10.0, 100.0]
    assert rocket.dimensions == (1, 3)
    assert rocket.color == Color(255, 255, 255)
    assert rocket.fading == 0.0
    assert rocket.velocity.tolist() == [0.0, -1.5]
    assert rocket.acceleration.tolist() == [0.0, 0.02]
    assert firework.effect == []
    assert firework.base_color == pytest.approx((0.0, 100.0, 50.0))


def test_rocket_climbs_then_detonates_once(rng):
    firework = Firework(10, 100, -1.5, Color(255, 0, 0))
    last_y = firework.rocket.position[1]

    detonations = 0
    for _ in range(300):
        had_rocket = firework.rocket is not None
        firework.update(rng)
        rocket = firework.rocket

        if rocket is not None:
            # Still climbing: moving up and not yet slow enough to burst.
            assert rocket.velocity[1] <= constants.DETONATION_SPEED
            assert rocket.position[1] < last_y
            assert rocket.lifetime == 1.0
            assert firework.effect == []
            last_y = rocket.position[1]
        elif had_rocket:
            detonations += 1
            assert isinstance(firework.phase, Exploded)
            assert len(firework.effect) == constants.BURST_COUNT
        else:
            assert len(firework.effect) == constants.BURST_COUNT

    assert detonations == 1


def test_detonation_tick_matches_gravity():
    # -1.5 + 0.02 * n first exceeds -0.3 around n = 60.
    tick = run_until_detonation(Firework(10, 100, -1.5, Color(255, 0, 0)), ScriptedRng())
    assert tick in (60, 61)


def test_burst_spawns_at_rounded_rocket_position_and_moves_same_tick():
    firework = Firework(10, 100, -1.5, Color(255, 0, 0))
    rng = ScriptedRng(floats=(0.5,))

    for _ in range(500):
        rocket = firework.rocket
        firework.update(rng)
        if firework.rocket is None:
            break
    burst_origin = np.copysign(np.floor(np.abs(rocket.position) + 0.5), rocket.position)

    # U = 0.5 gives no color jitter, vx = 0 and vy = 1.5 * (0.5 - 0.9) = -0.6.
    for particle in firework.effect:
        assert particle.dimensions == (1, 1)
        assert particle.color == Color(255, 0, 0)
        assert particle.acceleration.tolist() == [0.0, 0.02]
        assert particle.velocity.tolist() == pytest.approx([0.0, -0.58])
        assert particle.position.tolist() == pytest.approx([burst_origin[0], burst_origin[1] - 0.58])
        assert particle.lifetime == pytest.approx(1.0 - constants.PARTICLE_FADING)


def test_burst_uses_four_samples_per_particle():
    firework = Firework(0, 50, -0.31, Color(0, 0, 255))
    rng = ScriptedRng()
    firework.update(rng)
    # -0.31 + 0.02 = -0.29, detonates on the first tick.
    assert firework.rocket is None
    assert rng.random_calls == 4 * constants.BURST_COUNT

    firework.update(rng)
    assert rng.random_calls == 4 * constants.BURST_COUNT


def test_burst_color_jitter_is_clamped():
    firework = Firework(0, 50, -0.31, Color(255, 0, 0))
    # Minimum samples: saturation 100 - 20, lightness 50 - 40.
    firework.update(ScriptedRng(floats=(0.0,)))
    assert {p.color for p in firework.effect} == {Color(46, 5, 5)}

    bright = Firework(0, 50, -0.31, Color(255, 255, 255))
    # White has lightness 100; jitter upwards must not exceed it.
    bright.update(ScriptedRng(floats=(0.999,)))
    assert {p.color for p in bright.effect} == {Color(255, 255, 255)}


def test_burst_velocity_ranges(rng):
    firework = Firework(40, 80, -0.31, Color(10, 200, 30))
    firework.update(rng)
    for particle in firework.effect:
        # Undo this tick's gravity to recover the launch velocity.
        vx, vy = particle.velocity - particle.acceleration
        assert -0.75 <= vx < 0.75
        assert -1.35 <= vy < 0.15


def test_effect_never_grows_after_detonation(rng):
    firework = Firework(5, 60, -1.0, Color(0, 255, 0))
    run_until_detonation(firework, rng)
    for _ in range(200):
        firework.update(rng)
        assert len(firework.effect) == constants.BURST_COUNT


def test_firework_dies_after_burst_fades_and_stays_dead(rng):
    firework = Firework(5, 60, -1.0, Color(0, 255, 0))
    assert not firework.is_dead()
    run_until_detonation(firework, rng)
    assert not firework.is_dead()

    for _ in range(150):
        firework.update(rng)
        if firework.is_dead():
            break
    assert firework.is_dead()
    assert firework.live_particle_count() == 0

    for _ in range(10):
        firework.update(rng)
        assert firework.is_dead()


def test_draw_order_rocket_then_effect(canvas, rng):
    firework = Firework(3, 40, -1.2, Color(255, 0, 0))
    firework.draw(canvas)
    assert canvas.rects == [("rect", 3, 40, 1, 3, (255, 255, 255))]

    run_until_detonation(firework, rng)
    canvas.calls.clear()
    firework.draw(canvas)
    assert len(canvas.rects) == constants.BURST_COUNT
    assert all(call[3:5] == (1, 1) for call in canvas.rects)


def test_live_particle_count(rng):
    firework = Firework(3, 40, -1.2, Color(255, 0, 0))
    assert firework.live_particle_count() == 1
    run_until_detonation(firework, rng)
    assert firework.live_particle_count() == constants.BURST_COUNT
