"""Chart preparation for the Streamlit dashboard.

This module holds pure transformations from a ``DashboardSummary`` to
chart-ready data (Altair values and a Plotly figure). The UI is
responsible for loading the summary; no IO happens here.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from biyu.domain.models import (
    BudgetProgressItem,
    CategoryBreakdownItem,
    TrendPoint,
)
from biyu.domain.policies.budget_thresholds import (
    classify_budget_usage,
    usage_ratio,
)
from biyu.domain.services.formatting import format_money

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


OTHER_LABEL = "Other"

TONE_COLORS = {
    "neutral": "#9CA3AF",
    "ok": "#22C55E",
    "warning": "#F59E0B",
    "danger": "#EF4444",
}

CATEGORY_PALETTE = [
    "#7C3AED",
    "#A855F7",
    "#6366F1",
    "#EC4899",
    "#F97316",
    "#22C55E",
    "#06B6D4",
    "#EAB308",
    "#9CA3AF",
]


def densify_trend(
    points: list[TrendPoint],
    start: date,
    end: date,
) -> list[dict[str, str | float]]:
    """Fill the sparse trend with zero days between ``start`` and ``end``.

    Args:
        points: Sparse daily totals.
        start: First day to include.
        end: Last day to include.

    Returns:
        List of Altair-ready rows, one per day, ascending.
    """
    totals = {point.date: point.total for point in points}
    rows: list[dict[str, str | float]] = []
    day = start
    while day <= end:
        total = totals.get(day, Decimal("0"))
        rows.append(
            {
                "date": day.isoformat(),
                "label": day.strftime("%m-%d"),
                "total": float(total),
            }
        )
        day += timedelta(days=1)
    return rows


def prepare_category_chart_data(
    breakdown: list[CategoryBreakdownItem],
    currency_code: str,
    monthly_expense: Decimal | None = None,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data, adding an Other slice for the remainder.

    Args:
        breakdown: Top categories by expense.
        currency_code: Currency used for labels.
        monthly_expense: Total expense of the month; when larger than the
            breakdown sum, the difference is shown as Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    slices: list[tuple[str, Decimal]] = [
        (item.category_name, item.total) for item in breakdown
    ]
    shown = sum((amount for _, amount in slices), start=Decimal("0"))
    if monthly_expense is not None and monthly_expense > shown:
        slices.append((OTHER_LABEL, monthly_expense - shown))
    total_amount = sum((amount for _, amount in slices), start=Decimal("0"))

    data: list[dict[str, str | float]] = []
    for name, amount in slices:
        share = (
            (amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": name,
                "amount": float(amount),
                "amount_label": format_money(amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def progress_status(item: BudgetProgressItem) -> tuple[str, str]:
    """Return the tone and status label of a category limit.

    The label uses the raw usage ratio, so overspending shows above 100%
    even though ``item.percentage`` is clamped.
    """
    tone = classify_budget_usage(item.spent, item.limit)
    ratio = usage_ratio(item.spent, item.limit)
    if ratio is None:
        return tone, "No limit"
    pct = round(ratio * Decimal("100"))
    if tone == "danger":
        return tone, f"Exceeded ({pct}%)"
    if tone == "warning":
        return tone, f"Close ({pct}%)"
    return tone, f"OK ({pct}%)"


def build_budget_progress_figure(
    progress: list[BudgetProgressItem],
    currency_code: str,
) -> "go.Figure":
    """Build a horizontal bar chart of category limit usage.

    Args:
        progress: Budget progress items.
        currency_code: Currency used in hover labels.

    Returns:
        Plotly figure with one bar per category, coloured by tone.
    """
    ordered = sorted(progress, key=lambda item: item.percentage, reverse=True)
    names = [item.category_name for item in ordered]
    values = [float(item.percentage) for item in ordered]
    colors = []
    hover = []
    for item in ordered:
        tone, status = progress_status(item)
        colors.append(TONE_COLORS[tone])
        hover.append(
            f"{format_money(item.spent, currency_code)} / "
            f"{format_money(item.limit, currency_code)} · {status}"
        )

    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Bar(
                x=values,
                y=names,
                orientation="h",
                marker=dict(color=colors),
                hovertext=hover,
                hoverinfo="text",
            )
        ]
    )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=max(160, 48 * len(ordered)),
        xaxis=dict(range=[0, 100], ticksuffix="%"),
        yaxis=dict(autorange="reversed"),
    )
    return fig


__all__ = [
    "OTHER_LABEL",
    "TONE_COLORS",
    "CATEGORY_PALETTE",
    "densify_trend",
    "prepare_category_chart_data",
    "progress_status",
    "build_budget_progress_figure",
]
