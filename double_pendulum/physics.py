"""
Numerical physics for the double pendulum.

This module provides:
- The State and Derivative vectors as fixed, named 4-tuples
- The derivative function (Lagrangian equations of motion)
- A classical RK4 step and a capped sub-stepping driver
- Energy computation and position helpers for visualization

Angles are measured from the vertical (downwards is 0 rad) and are never
wrapped, they keep accumulating while the pendulum spins.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple

from double_pendulum.config import PhysicalParameters

Point = Tuple[float, float]


class State(NamedTuple):
    theta1: float
    omega1: float
    theta2: float
    omega2: float

    def offset(self, d: "Derivative", h: float) -> "State":
        """Return state + h * d, componentwise."""
        return State(
            self.theta1 + d.dtheta1 * h,
            self.omega1 + d.alpha1 * h,
            self.theta2 + d.dtheta2 * h,
            self.omega2 + d.alpha2 * h,
        )


class Derivative(NamedTuple):
    dtheta1: float
    alpha1: float
    dtheta2: float
    alpha2: float


def _divide(num: float, den: float) -> float:
    """IEEE-754 division: a zero denominator yields +-inf, or nan for 0/0."""
    try:
        return num / den
    except ZeroDivisionError:
        if num == 0.0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)


def derivatives(state: State, params: PhysicalParameters, dt: Optional[float] = None) -> Derivative:
    """Return (dtheta1, alpha1, dtheta2, alpha2) for a double pendulum.

    `dt` is accepted so the signature matches the stepper but is not used.
    The damping factor only scales the reported angular velocities, the
    accelerations are undamped. The singular configuration
    2*m1 + m2 == m2*cos(2*th1 - 2*th2) is not guarded and gives non-finite
    accelerations.
    """
    th1, w1, th2, w2 = state
    if not (math.isfinite(th1) and math.isfinite(th2)):
        # math.sin/cos raise on infinities, keep propagating instead
        return Derivative(math.nan, math.nan, math.nan, math.nan)
    g = params.g
    l1 = params.L1
    l2 = params.L2
    m1 = params.m1
    m2 = params.m2

    delta = th1 - th2
    sin_delta = math.sin(delta)
    cos_delta = math.cos(delta)
    denom = 2.0 * m1 + m2 - m2 * math.cos(2.0 * th1 - 2.0 * th2)

    # First mass angular acceleration
    num1 = -g * (2.0 * m1 + m2) * math.sin(th1)
    num2 = -m2 * g * math.sin(th1 - 2.0 * th2)
    num3 = -2.0 * sin_delta * m2 * (w2 * w2 * l2 + w1 * w1 * l1 * cos_delta)
    a1 = _divide(num1 + num2 + num3, l1 * denom)

    # Second mass angular acceleration
    num4 = 2.0 * sin_delta
    num5 = w1 * w1 * l1 * (m1 + m2)
    num6 = g * (m1 + m2) * math.cos(th1)
    num7 = w2 * w2 * l2 * m2 * cos_delta
    a2 = _divide(num4 * (num5 + num6 + num7), l2 * denom)

    return Derivative(w1 * params.damping, a1, w2 * params.damping, a2)


def rk4_step(state: State, dt: float, params: PhysicalParameters) -> State:
    """Perform one classical RK4 step of size dt."""
    k1 = derivatives(state, params, dt)
    k2 = derivatives(state.offset(k1, 0.5 * dt), params, dt)
    k3 = derivatives(state.offset(k2, 0.5 * dt), params, dt)
    k4 = derivatives(state.offset(k3, dt), params, dt)
    return State(*(
        s + (a + 2.0 * b + 2.0 * c + d) * dt / 6.0
        for s, a, b, c, d in zip(state, k1, k2, k3, k4)
    ))


def advance(
    state: State,
    available_time: float,
    params: PhysicalParameters,
    dt: float = 1.0 / 240.0,
    max_steps: int = 10,
) -> Tuple[State, float, int]:
    """Integrate up to available_time seconds in RK4 sub-steps of at most dt.

    At most `max_steps` sub-steps are taken, so a long frame (e.g. after the
    page was hidden) falls behind real time instead of doing unbounded work.
    Returns (new_state, integrated_time, steps_taken).
    """
    remaining = float(available_time)
    integrated = 0.0
    steps = 0
    s = state
    while remaining > 0 and steps < max_steps:
        h = min(remaining, dt)
        s = rk4_step(s, h, params)
        remaining -= h
        integrated += h
        steps += 1
    return s, integrated, steps


def total_energy(state: State, params: PhysicalParameters) -> float:
    """Total mechanical energy (kinetic + potential).

    Potential is measured with height pointing up and zero at the pivot,
    in the same units as the lengths (pixels).
    """
    th1, w1, th2, w2 = state
    m1 = params.m1 ; m2 = params.m2
    l1 = params.L1 ; l2 = params.L2
    g = params.g
    # velocities
    x1dot = l1 * w1 * math.cos(th1)
    y1dot = -l1 * w1 * math.sin(th1)
    x2dot = x1dot + l2 * w2 * math.cos(th2)
    y2dot = y1dot - l2 * w2 * math.sin(th2)
    KE = 0.5 * m1 * (x1dot * x1dot + y1dot * y1dot) + 0.5 * m2 * (x2dot * x2dot + y2dot * y2dot)
    # potential (upwards positive)
    h1 = -l1 * math.cos(th1)
    h2 = h1 - l2 * math.cos(th2)
    PE = m1 * g * h1 + m2 * g * h2
    return KE + PE


def positions_from_state(
    state: State, params: PhysicalParameters, origin: Point = (0.0, 0.0)
) -> Tuple[Point, Point]:
    """Compute both bob positions in screen space (y grows downwards).

    Returns ((x1, y1), (x2, y2)) relative to the pivot at `origin`.
    """
    cx, cy = origin
    th1, _, th2, _ = state
    x1 = cx + params.L1 * math.sin(th1)
    y1 = cy + params.L1 * math.cos(th1)
    x2 = x1 + params.L2 * math.sin(th2)
    y2 = y1 + params.L2 * math.cos(th2)
    return (x1, y1), (x2, y2)
