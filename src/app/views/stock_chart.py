"""Price chart rendering.

Pure visualization functions using Plotly for the start-vs-end price chart.
"""

import plotly.graph_objects as go
import streamlit as st

from src.app.logic.stock_chart import StockChartContext
from src.app.views.colors import GRID_COLOR, Colors, direction_color

GLOBAL_MARGINS = dict(t=10, l=20, r=5, b=0)


def build_price_figure(context: StockChartContext, height: int = 300) -> go.Figure:
    """Build the close-price line chart for a prepared chart context.

    Args:
        context: Chart context with points, axis domain and change
        height: Figure height in pixels

    Returns:
        Plotly figure; empty (no traces) when the context has no points
    """
    fig = go.Figure()
    if context.is_empty:
        return fig

    direction = context.change.direction if context.change else None
    fig.add_trace(
        go.Scatter(
            x=[p.date_label for p in context.points],
            y=[p.value for p in context.points],
            mode="lines",
            line=dict(color=direction_color(direction), width=2),
            hovertemplate=f"<b>{context.currency_symbol}%{{y}}</b>  %{{x}}<extra></extra>",
            name=context.ticker,
        )
    )

    if context.reference_value is not None:
        fig.add_hline(
            y=context.reference_value,
            line_dash="dot",
            line_color=Colors.gray,
            line_width=1,
        )

    if context.domain is not None:
        fig.update_yaxes(range=[context.domain.min, context.domain.max])

    fig.update_yaxes(showticklabels=False, showgrid=True, gridcolor=GRID_COLOR, zeroline=False)
    fig.update_xaxes(showgrid=False, showline=False, nticks=6)
    fig.update_layout(
        template="plotly_white",
        height=height,
        margin=GLOBAL_MARGINS,
        showlegend=False,
        hovermode="x",
    )
    return fig


def render_price_header(context: StockChartContext) -> None:
    """Render ticker, latest close and change as a metric."""
    header = context.header
    if header is None:
        return

    delta = None
    if header.change_label is not None:
        delta = " ".join(label for label in (header.change_label, header.percent_label) if label)

    st.metric(
        label=header.ticker,
        value=header.last_price_label,
        delta=delta,
        delta_color="normal" if header.direction != "flat" else "off",
    )


def render_stock_chart(context: StockChartContext, height: int = 300) -> None:
    """Render header and chart; nothing but a notice when there is no data."""
    if context.is_empty:
        st.info(f"No price data available for {context.ticker}")
        return

    render_price_header(context)
    st.plotly_chart(build_price_figure(context, height=height), use_container_width=True)
