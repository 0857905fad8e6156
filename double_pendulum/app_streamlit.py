from __future__ import annotations

import logging
import time

import streamlit as st

from double_pendulum.config import PhysicalParameters
from double_pendulum.controls import BUTTON_SHORTCUTS, CLEAR, RESET, TOGGLE, apply_command
from double_pendulum.presentation import build_figure, status_lines
from double_pendulum.sim_session import FrameClock, SimulationSession

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 1.0 / 60.0


def _ensure_session() -> SimulationSession:
    if "sim" not in st.session_state:
        st.session_state.sim = SimulationSession()
    if "clock" not in st.session_state:
        st.session_state.clock = FrameClock()
    return st.session_state.sim


def _params_from_sidebar(sim: SimulationSession) -> None:
    p = sim.params
    st.sidebar.header("Parameters")
    with st.sidebar.form("params"):
        g = st.number_input("Gravity g", value=float(p.g), step=0.1)
        l1 = st.number_input("Length 1 (px)", value=float(p.L1), step=5.0)
        l2 = st.number_input("Length 2 (px)", value=float(p.L2), step=5.0)
        m1 = st.number_input("Mass 1", value=float(p.m1), step=0.1)
        m2 = st.number_input("Mass 2", value=float(p.m2), step=0.1)
        damping = st.number_input("Velocity damping", value=float(p.damping), step=0.0001, format="%.4f")
        applied = st.form_submit_button("Apply (restarts)")

    # parameters are fixed per session, so applying them starts a new one
    if applied:
        params = PhysicalParameters(g=g, L1=l1, L2=l2, m1=m1, m2=m2, damping=damping)
        if params != p:
            st.session_state.sim = SimulationSession(params=params, config=sim.config)
            st.session_state.clock.reset()
            logger.info("new session with %s", params)


def _controls(sim: SimulationSession, clock: FrameClock) -> None:
    col_a, col_b, col_c = st.columns([1, 1, 1])
    with col_a:
        label = "Pause [Space]" if clock.running else "Run [Space]"
        if st.button(label, type="primary", shortcut=BUTTON_SHORTCUTS[TOGGLE], key="toggle"):
            apply_command(TOGGLE, sim, clock)
    with col_b:
        if st.button("Reset [R]"):
            apply_command(RESET, sim, clock)
    with col_c:
        if st.button("Clear trace [C]"):
            apply_command(CLEAR, sim, clock)


@st.fragment(run_every=FRAME_INTERVAL)
def _frame() -> None:
    sim: SimulationSession = st.session_state.sim
    clock: FrameClock = st.session_state.clock
    try:
        clock.frame(sim, time.time())
    except Exception:
        # pause so a broken frame does not rerun forever
        logger.exception("simulation step failed, pausing")
        clock.running = False

    st.plotly_chart(build_figure(sim, clock.running), use_container_width=True, config={"staticPlot": True, "displayModeBar": False})
    st.caption("  |  ".join(status_lines(sim, clock.running)))


def main() -> None:
    st.set_page_config(page_title="Double Pendulum", layout="wide")
    sim = _ensure_session()

    st.title("Double Pendulum")
    st.caption("RK4 at 1/240 s, at most 10 sub-steps per frame")

    _params_from_sidebar(sim)
    _controls(st.session_state.sim, st.session_state.clock)
    _frame()


if __name__ == "__main__":
    main()
