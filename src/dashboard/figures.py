"""Plotly figures for schedule results. Pure: results in, figures out."""

import plotly.graph_objects as go

from src.models.results import ScheduleResult


def balance_figure(result: ScheduleResult, baseline: ScheduleResult | None = None) -> go.Figure:
    """Remaining balance by month, optionally against the baseline plan."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r.idx for r in result.rows],
        y=[float(p.balance) for p in result.chart],
        mode="lines",
        name="With Extras",
        line=dict(color="#1a1a2e", width=3),
    ))
    if baseline is not None:
        fig.add_trace(go.Scatter(
            x=[r.idx for r in baseline.rows],
            y=[float(p.balance) for p in baseline.chart],
            mode="lines",
            name="Baseline",
            line=dict(color="#e94560", width=2, dash="dash"),
        ))
    fig.update_layout(
        title="Loan Balance",
        xaxis_title="Month",
        yaxis_title="Balance ($)",
        hovermode="x unified",
    )
    return fig


def cumulative_figure(result: ScheduleResult) -> go.Figure:
    """Cumulative interest, principal and forgiveness over the life of the loan."""
    months = [r.idx for r in result.rows]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=months,
        y=[float(p.cumulative_principal) for p in result.chart],
        mode="lines",
        name="Principal Paid",
        line=dict(color="#1a1a2e", width=2),
    ))
    fig.add_trace(go.Scatter(
        x=months,
        y=[float(p.cumulative_interest) for p in result.chart],
        mode="lines",
        name="Interest Paid",
        line=dict(color="#e94560", width=2),
    ))
    if result.total_forgiveness > 0:
        fig.add_trace(go.Scatter(
            x=months,
            y=[float(p.cumulative_forgiveness) for p in result.chart],
            mode="lines",
            name="Forgiven",
            line=dict(color="#2ecc71", width=2),
        ))
    fig.update_layout(title="Cumulative Totals", xaxis_title="Month", yaxis_title="$")
    return fig
