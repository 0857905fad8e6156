from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PhysicalParameters:
    """Physical constants of one pendulum; fixed for the lifetime of a session.

    Lengths are in screen pixels, so the default 120 px rods swing slowly
    under g = 9.81. Values are taken as given, no range checks.
    """

    g: float = 9.81
    L1: float = 120.0
    L2: float = 120.0
    m1: float = 1.0
    m2: float = 1.0
    damping: float = 0.9999  # multiplier on dtheta, 1.0 disables it


@dataclass(frozen=True)
class SimulationConfig:
    dt: float = 1.0 / 240.0
    max_steps_per_frame: int = 10
    trail_max_points: int = 3000

    width: int = 800
    height: int = 600

    theta1_deg: float = 120.0
    theta2_deg: float = -10.0

    @property
    def origin(self) -> Tuple[float, float]:
        """Pivot position on screen."""
        return (self.width / 2, self.height / 3)

    def initial_angles(self) -> Tuple[float, float]:
        return (self.theta1_deg * math.pi / 180, self.theta2_deg * math.pi / 180)
