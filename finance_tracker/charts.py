"""Bar and pie chart rendering for the Stats page.

Chart functions do not draw anything themselves.  They compute geometry on a
:class:`ChartSurface` and return a list of draw commands (rectangles, pie
wedges and text) in canvas coordinates: origin at the top left, y growing
downwards, angles in radians measured clockwise from the positive x axis.

:func:`to_figure` is the only place that knows about Plotly.  It turns a
command list into a ``plotly.graph_objects.Figure`` so Streamlit can render it
via ``st.plotly_chart``.  Keeping the two apart lets the geometry be tested
without a browser.

Neither renderer raises on degenerate input: zero totals give flat bars, and
a pie chart without expenses shows a short message instead.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import numpy as np
import plotly.graph_objects as go

from .calculations import format_money
from .config import CHART_HEIGHT, CHART_WIDTH, MAX_CHART_WIDTH
from .models import Category, Record
from .reporting import category_name, expense_totals_by_category, month_totals

PALETTE = (
    "#2563eb",
    "#ef4444",
    "#22c55e",
    "#f59e0b",
    "#8b5cf6",
    "#06b6d4",
    "#64748b",
    "#e11d48",
)
INCOME_COLOR = "#2563eb"
EXPENSE_COLOR = "#ef4444"
TEXT_COLOR = "#111827"
FRAME_COLOR = "#e5e7eb"

LEGEND_LIMIT = 8
NO_DATA_MESSAGE = "No expense data for pie chart."

# Bar layout
BAR_PADDING = 50
BAR_WIDTH = 120
BAR_GAP = 90


# ---------------------------------------------------------------------------
# Surface and draw commands
# ---------------------------------------------------------------------------


@dataclass
class ChartSurface:
    """Drawing area in pixels. Width is capped at ``MAX_CHART_WIDTH``."""

    width: int = CHART_WIDTH
    height: int = CHART_HEIGHT

    def __post_init__(self) -> None:
        self.width = max(0, int(min(self.width, MAX_CHART_WIDTH)))
        self.height = max(0, int(self.height))


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: str = FRAME_COLOR
    line_width: float = 1


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class Wedge:
    """A filled pie slice from the centre out to ``radius``."""

    cx: float
    cy: float
    radius: float
    start_angle: float
    end_angle: float
    color: str

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class Text:
    """Text whose baseline starts at ``(x, y)``."""

    x: float
    y: float
    text: str
    color: str = TEXT_COLOR
    font: str = "14px Arial"


DrawCommand = Union[Clear, StrokeRect, FillRect, Wedge, Text]


def _frame(surface: ChartSurface) -> List[DrawCommand]:
    return [Clear(), StrokeRect(10, 10, surface.width - 20, surface.height - 20)]


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def bar_height(value: float, max_value: float, max_bar_height: float) -> float:
    return value / max_value * max_bar_height


def render_bar_chart(income: float, expense: float, surface: ChartSurface) -> List[DrawCommand]:
    """Income and expense as two bars sharing one scale.

    Both values are scaled by ``max(income, expense, 1)`` so a month with no
    activity draws two flat bars rather than dividing by zero.
    """
    commands = _frame(surface)
    w, h = surface.width, surface.height
    base_y = h - BAR_PADDING
    max_value = max(income, expense, 1)
    max_bar_height = h - BAR_PADDING * 2
    start_x = max(BAR_PADDING, (w - (BAR_WIDTH * 2 + BAR_GAP)) / 2)
    expense_x = start_x + BAR_WIDTH + BAR_GAP

    income_h = bar_height(income, max_value, max_bar_height)
    expense_h = bar_height(expense, max_value, max_bar_height)

    commands.append(FillRect(start_x, base_y - income_h, BAR_WIDTH, income_h, INCOME_COLOR))
    commands.append(FillRect(expense_x, base_y - expense_h, BAR_WIDTH, expense_h, EXPENSE_COLOR))

    commands.append(Text(start_x, base_y + 22, "Income"))
    commands.append(Text(expense_x, base_y + 22, "Expense"))
    commands.append(Text(start_x, base_y - income_h - 8, format_money(income)))
    commands.append(Text(expense_x, base_y - expense_h - 8, format_money(expense)))
    return commands


def render_pie_chart(
    records: Iterable[Record],
    surface: ChartSurface,
    categories: Sequence[Category] = (),
) -> List[DrawCommand]:
    """Expense share per category as a pie with a legend.

    Slices follow the ranking of
    :func:`~finance_tracker.reporting.expense_totals_by_category` and are
    laid out clockwise from twelve o'clock.  The legend shows at most
    ``LEGEND_LIMIT`` categories followed by the total.
    """
    commands = _frame(surface)
    totals = expense_totals_by_category(records)
    total = float(totals.sum()) if not totals.empty else 0.0

    if total <= 0 or totals.empty:
        commands.append(Text(30, 60, NO_DATA_MESSAGE, font="16px Arial"))
        return commands

    cx = math.floor(surface.width * 0.32)
    cy = math.floor(surface.height * 0.52)
    radius = min(surface.width, surface.height) * 0.28

    angle = -math.pi / 2
    for rank, amount in enumerate(totals.values):
        sweep = float(amount) / total * math.pi * 2
        commands.append(Wedge(cx, cy, radius, angle, angle + sweep, PALETTE[rank % len(PALETTE)]))
        angle += sweep

    x = math.floor(surface.width * 0.62)
    y = 60
    for rank, (category_id, amount) in enumerate(totals.head(LEGEND_LIMIT).items()):
        name = category_name(categories, str(category_id))
        commands.append(FillRect(x, y - 10, 12, 12, PALETTE[rank % len(PALETTE)]))
        commands.append(Text(x + 18, y, f"{name}: {format_money(amount)}", font="13px Arial"))
        y += 22

    commands.append(Text(x, y + 12, f"Total expense: {format_money(total)}", font="13px Arial"))
    return commands


def render_chart(
    mode: str,
    records: Sequence[Record],
    surface: ChartSurface,
    categories: Sequence[Category] = (),
) -> List[DrawCommand]:
    """Render ``records`` as a ``"bar"`` chart or, for any other mode, a pie."""
    if mode == "bar":
        income, expense = month_totals(records)
        return render_bar_chart(income, expense, surface)
    return render_pie_chart(records, surface, categories)


# ---------------------------------------------------------------------------
# Plotly adapter
# ---------------------------------------------------------------------------

_FONT_SIZE = re.compile(r"(\d+(?:\.\d+)?)px")


def _font_size(font: str) -> float:
    match = _FONT_SIZE.search(font)
    return float(match.group(1)) if match else 14.0


def wedge_path(wedge: Wedge, step: float = math.pi / 90) -> str:
    """SVG path for a wedge, with the arc approximated by line segments."""
    segments = max(2, int(math.ceil(abs(wedge.sweep) / step)))
    angles = np.linspace(wedge.start_angle, wedge.end_angle, segments + 1)
    xs = wedge.cx + wedge.radius * np.cos(angles)
    ys = wedge.cy + wedge.radius * np.sin(angles)
    points = " ".join(f"L {x:.2f},{y:.2f}" for x, y in zip(xs, ys))
    return f"M {wedge.cx},{wedge.cy} {points} Z"


def to_figure(commands: Iterable[DrawCommand], surface: ChartSurface) -> go.Figure:
    """Build a Plotly figure that reproduces the draw commands."""
    fig = go.Figure()
    for command in commands:
        if isinstance(command, Clear):
            fig.layout.shapes = ()
            fig.layout.annotations = ()
        elif isinstance(command, StrokeRect):
            fig.add_shape(
                type="rect",
                x0=command.x,
                y0=command.y,
                x1=command.x + command.width,
                y1=command.y + command.height,
                line=dict(color=command.color, width=command.line_width),
                fillcolor="rgba(0,0,0,0)",
            )
        elif isinstance(command, FillRect):
            fig.add_shape(
                type="rect",
                x0=command.x,
                y0=command.y,
                x1=command.x + command.width,
                y1=command.y + command.height,
                line=dict(width=0),
                fillcolor=command.color,
            )
        elif isinstance(command, Wedge):
            fig.add_shape(
                type="path",
                path=wedge_path(command),
                line=dict(width=0),
                fillcolor=command.color,
            )
        elif isinstance(command, Text):
            fig.add_annotation(
                x=command.x,
                y=command.y,
                text=command.text,
                showarrow=False,
                xanchor="left",
                yanchor="bottom",
                font=dict(size=_font_size(command.font), color=command.color),
            )

    fig.update_xaxes(range=[0, surface.width], visible=False)
    # Canvas coordinates grow downwards
    fig.update_yaxes(range=[surface.height, 0], visible=False)
    fig.update_layout(
        width=surface.width,
        height=surface.height,
        margin=dict(l=0, r=0, t=0, b=0),
        plot_bgcolor="white",
        showlegend=False,
    )
    return fig
