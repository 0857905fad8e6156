"""Keyboard commands: toggle run/pause, reset, clear trail."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from double_pendulum.sim_session import FrameClock, SimulationSession

logger = logging.getLogger(__name__)

TOGGLE = "toggle"
RESET = "reset"
CLEAR = "clear"

KEY_BINDINGS: Dict[str, str] = {
    "space": TOGGLE,
    " ": TOGGLE,
    "r": RESET,
    "c": CLEAR,
}

# keyboard shortcuts the page can attach to its buttons; Streamlit keeps
# "r" and "c" for itself, so reset and clear stay button-only there
BUTTON_SHORTCUTS: Dict[str, str] = {
    TOGGLE: "Space",
}


def command_for_key(key: str) -> Optional[str]:
    return KEY_BINDINGS.get((key or "").lower())


def apply_command(command: str, session: SimulationSession, clock: FrameClock) -> None:
    if command == TOGGLE:
        clock.toggle()
    elif command == RESET:
        session.reset()
        clock.reset()
    elif command == CLEAR:
        session.clear_trail()
    else:
        raise ValueError(f"unknown command: {command!r}")


def handle_key(key: str, session: SimulationSession, clock: FrameClock) -> Optional[str]:
    """Apply the command bound to `key`. Unbound keys are ignored and return None."""
    command = command_for_key(key)
    if command is None:
        logger.debug("ignoring key %r", key)
        return None
    apply_command(command, session, clock)
    return command
