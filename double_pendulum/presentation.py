from __future__ import annotations

import math
from typing import List

import plotly.graph_objects as go

from double_pendulum.sim_session import SimulationSession

MASS_MARKER_SCALE = 2.0  # marker radius per unit mass, in px


def status_lines(sim: SimulationSession, running: bool) -> List[str]:
    theta1_deg = sim.state.theta1 * 180 / math.pi
    theta2_deg = sim.state.theta2 * 180 / math.pi
    return [
        f"Status: {'Running' if running else 'Paused'}",
        f"Trace points: {len(sim.trail_points)}",
        f"θ1: {theta1_deg:.1f}°, θ2: {theta2_deg:.1f}°",
    ]


def build_figure(sim: SimulationSession, running: bool = True) -> go.Figure:
    """Draw pivot, rods, bobs and the trail in screen coordinates."""
    pos = sim.get_positions()
    x1, y1, x2, y2 = pos["x1"], pos["y1"], pos["x2"], pos["y2"]
    ox, oy = sim.config.origin

    fig = go.Figure()

    # trail first so the pendulum is drawn on top
    if len(sim.trail_points) > 1:
        trail_x = [p[0] for p in sim.trail_points]
        trail_y = [p[1] for p in sim.trail_points]
        fig.add_trace(go.Scatter(x=trail_x, y=trail_y, mode="lines", line=dict(color="rgba(100,200,255,0.5)", width=1), hoverinfo="skip", showlegend=False, name="trail"))

    # pivot
    fig.add_trace(go.Scatter(x=[ox], y=[oy], mode="markers", marker=dict(size=10, color="#FFFFFF"), hoverinfo="skip", showlegend=False, name="pivot"))

    # rods
    fig.add_trace(go.Scatter(x=[ox, x1], y=[oy, y1], mode="lines", line=dict(color="#666666", width=2), hoverinfo="skip", showlegend=False, name="rod1"))
    fig.add_trace(go.Scatter(x=[x1, x2], y=[y1, y2], mode="lines", line=dict(color="#666666", width=2), hoverinfo="skip", showlegend=False, name="rod2"))

    # bobs, sized by mass
    size1 = max(4.0, 2 * sim.params.m1 * MASS_MARKER_SCALE)
    size2 = max(4.0, 2 * sim.params.m2 * MASS_MARKER_SCALE)
    fig.add_trace(go.Scatter(x=[x1], y=[y1], mode="markers", marker=dict(size=size1, color="#FF6666", line=dict(color="#CC4444", width=1)), hoverinfo="skip", showlegend=False, name="mass1"))
    fig.add_trace(go.Scatter(x=[x2], y=[y2], mode="markers", marker=dict(size=size2, color="#66FF66", line=dict(color="#44CC44", width=1)), hoverinfo="skip", showlegend=False, name="mass2"))

    if not running:
        fig.add_annotation(x=sim.config.width / 2, y=24, text="PAUSED", showarrow=False, font=dict(size=18, color="#AAAAAA"), name="paused")

    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor="#0A0A0A",
        plot_bgcolor="#0A0A0A",
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis=dict(range=[0, sim.config.width], visible=False, scaleanchor="y", scaleratio=1.0),
        # screen space: y grows downwards
        yaxis=dict(range=[sim.config.height, 0], visible=False),
        dragmode=False,
        uirevision="pendulum",
    )
    return fig
