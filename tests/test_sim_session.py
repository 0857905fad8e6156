import math

import pytest

from double_pendulum.config import PhysicalParameters, SimulationConfig
from double_pendulum.physics import State
from double_pendulum.sim_session import FrameClock, SimulationSession

DT = 1.0 / 240.0
INITIAL = State(120 * math.pi / 180, 0.0, -10 * math.pi / 180, 0.0)


@pytest.fixture
def sim():
    return SimulationSession()


# --- Session ---


def test_starts_at_initial_condition(sim):
    assert sim.state == INITIAL
    assert sim.trail_points == []
    assert sim.sim_time == 0.0


def test_reset_restores_initial_condition_exactly(sim):
    for _ in range(50):
        sim.step(1 / 60)
    assert sim.state != INITIAL
    assert sim.trail_points

    sim.reset()

    assert sim.state == INITIAL
    assert sim.trail_points == []
    assert sim.sim_time == 0.0


def test_long_frame_is_capped(sim):
    """5 s of wall clock only advances 10 sub-steps of simulated time."""
    steps = sim.step(5.0)
    assert steps == 10
    assert sim.sim_time == pytest.approx(10 * DT)
    assert sim.sim_time < 0.0417
    assert len(sim.trail_points) == 1


def test_trail_records_second_tip(sim):
    sim.step(1 / 60)
    pos = sim.get_positions()
    assert sim.trail_points[-1] == (pos["x2"], pos["y2"])


def test_trail_is_appended_even_without_elapsed_time(sim):
    assert sim.step(0.0) == 0
    assert len(sim.trail_points) == 1
    assert sim.state == INITIAL


def test_trail_bound_evicts_oldest_first(sim):
    emitted = []
    for _ in range(3005):
        sim.step(DT)
        emitted.append(sim.trail_points[-1])

    assert len(sim.trail_points) == 3000
    assert sim.trail_points == emitted[5:]


def test_custom_trail_capacity():
    sim = SimulationSession(config=SimulationConfig(trail_max_points=3))
    for _ in range(10):
        sim.step(DT)
    assert len(sim.trail_points) == 3


def test_clear_trail_keeps_state(sim):
    for _ in range(10):
        sim.step(1 / 60)
    state = sim.state
    sim.clear_trail()
    assert sim.trail_points == []
    assert sim.state == state


def test_sessions_are_deterministic():
    frames = [1 / 60, 1 / 59, 0.2, 1 / 120] * 25
    a = SimulationSession()
    b = SimulationSession()
    for f in frames:
        a.step(f)
        b.step(f)
    assert a.state == b.state
    assert a.trail_points == b.trail_points


def test_parameters_are_immutable(sim):
    with pytest.raises(AttributeError):
        sim.params.g = 1.0


def test_pivot_position_follows_canvas_size():
    sim = SimulationSession(config=SimulationConfig(width=900, height=300))
    assert sim.config.origin == (450.0, 100.0)
    pos = SimulationSession(params=PhysicalParameters(L1=10.0, L2=10.0), config=sim.config)
    pos.state = State(0.0, 0.0, 0.0, 0.0)
    assert pos.get_positions() == {"x1": 450.0, "y1": 110.0, "x2": 450.0, "y2": 120.0}


# --- Frame clock ---


def test_first_tick_reports_no_elapsed_time():
    clock = FrameClock()
    assert clock.tick(100.0) == 0.0
    assert clock.tick(100.25) == pytest.approx(0.25)


def test_clock_going_backwards_is_clamped():
    clock = FrameClock()
    clock.tick(10.0)
    assert clock.tick(9.0) == 0.0


def test_paused_frame_skips_step(sim):
    clock = FrameClock(running=False)
    clock.frame(sim, 0.0)
    assert clock.frame(sim, 1.0) == 0
    assert sim.state == INITIAL
    assert sim.trail_points == []


def test_resume_does_not_integrate_pause_duration(sim):
    clock = FrameClock()
    clock.frame(sim, 0.0)
    clock.toggle()
    assert clock.running is False
    clock.frame(sim, 30.0)
    clock.toggle()

    # first frame after resuming sees zero elapsed time
    assert clock.frame(sim, 60.0) == 0
    assert sim.sim_time == 0.0
    assert clock.frame(sim, 60.0 + 1 / 60) > 0
    assert sim.sim_time == pytest.approx(1 / 60)


def test_explicit_state_is_kept():
    s = State(0.1, 0.2, 0.3, 0.4)
    sim = SimulationSession(state=s)
    assert sim.state == s
    sim.reset()
    assert sim.state == INITIAL
