from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from double_pendulum.config import PhysicalParameters, SimulationConfig
from double_pendulum.physics import State, advance, positions_from_state

logger = logging.getLogger(__name__)


def initial_state(config: SimulationConfig) -> State:
    theta1, theta2 = config.initial_angles()
    return State(theta1, 0.0, theta2, 0.0)


@dataclass
class SimulationSession:
    """Holds the per-session simulation state, trail and parameters."""

    params: PhysicalParameters = field(default_factory=PhysicalParameters)
    config: SimulationConfig = field(default_factory=SimulationConfig)
    state: Optional[State] = None
    sim_time: float = 0.0
    trail_points: List[Tuple[float, float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.state is None:
            self.state = initial_state(self.config)

    def step(self, available_time: float) -> int:
        """Advance the simulation by up to available_time seconds.

        Sub-steps are capped per call; whatever does not fit is dropped.
        The rod-2 tip is appended to the trail once per call. Returns the
        number of sub-steps taken.
        """
        self.state, integrated, steps = advance(
            self.state,
            available_time,
            self.params,
            dt=self.config.dt,
            max_steps=self.config.max_steps_per_frame,
        )
        self.sim_time += integrated
        if available_time - integrated > self.config.dt:
            logger.debug("dropped %.4fs of frame time after %d sub-steps", available_time - integrated, steps)

        _, (x2, y2) = positions_from_state(self.state, self.params, self.config.origin)
        self._append_trail_point(x2, y2)
        return steps

    def get_positions(self) -> Dict[str, float]:
        (x1, y1), (x2, y2) = positions_from_state(self.state, self.params, self.config.origin)
        return {"x1": x1, "y1": y1, "x2": x2, "y2": y2}

    def reset(self) -> None:
        self.state = initial_state(self.config)
        self.sim_time = 0.0
        self.trail_points.clear()
        logger.debug("session reset")

    def clear_trail(self) -> None:
        self.trail_points.clear()
        logger.debug("trail cleared")

    def _append_trail_point(self, x: float, y: float) -> None:
        self.trail_points.append((float(x), float(y)))
        if len(self.trail_points) > self.config.trail_max_points:
            self.trail_points.pop(0)


@dataclass
class FrameClock:
    """Run/pause flag plus the last-frame marker shared with the input handler.

    `tick` turns the host's wall-clock timestamps into elapsed seconds. The
    first tick after construction, reset or resume reports 0 so a pause
    never shows up as one huge frame.
    """

    running: bool = True
    last_time: Optional[float] = None

    def tick(self, now: float) -> float:
        if self.last_time is None:
            self.last_time = now
        elapsed = max(0.0, now - self.last_time)
        self.last_time = now
        return elapsed

    def toggle(self) -> bool:
        self.running = not self.running
        self.last_time = None
        logger.debug("running=%s", self.running)
        return self.running

    def reset(self) -> None:
        self.last_time = None

    def frame(self, session: SimulationSession, now: float) -> int:
        """Run one host frame: measure elapsed time and step unless paused."""
        elapsed = self.tick(now)
        if not self.running:
            return 0
        return session.step(elapsed)
