"""Charts, PDF reports and CSV exports."""

from __future__ import annotations

import csv
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Iterable, Sequence

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..logging_config import get_logger
from .debts import Debt, SimulationResult, money_float
from .metrics import compute_metrics, goal_progress, section_breakdown

logger = get_logger(__name__)

_LINE_COLOR = "#EF4444"
_INCOME_COLOR = "#10B981"
_EXPENSE_COLOR = "#F59E0B"
_TEXT_COLOR = "#1F2937"
_MUTED_COLOR = "#6B7280"


def _label(field_name: str) -> str:
    return field_name.replace("_", " ").title()


def _currency(amount: float | None) -> str:
    return f"${(amount or 0.0):,.2f}"


def _empty(ax, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color="#666")
    ax.axis("off")


def build_payoff_chart(result: SimulationResult) -> Figure:
    """Line chart of the total remaining balance by month."""

    fig = Figure(figsize=(10, 6))
    ax = fig.add_subplot()

    months = [entry.month for entry in result.schedule]
    balances = [money_float(entry.total_balance) for entry in result.schedule]
    if months:
        ax.plot(months, balances, color=_LINE_COLOR, linewidth=2, label="Remaining Balance")
        ax.fill_between(months, balances, color=_LINE_COLOR, alpha=0.1)
        ax.set_xlabel("Months")
        ax.set_ylabel("Balance ($)")
        ax.yaxis.set_major_formatter(lambda value, _pos: f"${value:,.0f}")
        ax.set_xlim(left=1)
        ax.set_ylim(bottom=0)
        ax.grid(alpha=0.3)
        ax.set_title(
            f"Debt Payoff Progress ({result.strategy.value.title()})",
            fontsize=16,
            fontweight="bold",
        )
    else:
        _empty(ax, "No debts to chart")

    fig.tight_layout()
    return fig


def build_debt_breakdown_chart(debts: Sequence[Debt]) -> Figure:
    """Pie chart of current balances per debt."""

    fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot()

    items = [(debt.name, money_float(debt.balance)) for debt in debts if debt.balance > 0]
    if items:
        labels = [name for name, _ in items]
        sizes = [value for _, value in items]
        ax.pie(sizes, labels=labels, autopct="%1.1f%%", startangle=90)
        ax.axis("equal")
        ax.set_title("Current Debt Breakdown", fontsize=16, fontweight="bold")
    else:
        _empty(ax, "No outstanding balances")

    fig.tight_layout()
    return fig


def build_cash_flow_chart(analysis: Any) -> Figure:
    """Horizontal bars for each income and expense line item."""

    fig = Figure(figsize=(10, 6))
    ax = fig.add_subplot()

    income = {k: v for k, v in section_breakdown(analysis, "income").items() if v > 0}
    expenses = {k: v for k, v in section_breakdown(analysis, "expenses").items() if v > 0}
    if income or expenses:
        labels = [_label(k) for k in income] + [_label(k) for k in expenses]
        values = list(income.values()) + list(expenses.values())
        colors = [_INCOME_COLOR] * len(income) + [_EXPENSE_COLOR] * len(expenses)
        positions = range(len(labels))
        ax.barh(list(positions), values, color=colors)
        ax.set_yticks(list(positions), labels=labels)
        ax.invert_yaxis()
        ax.xaxis.set_major_formatter(lambda value, _pos: f"${value:,.0f}")
        ax.grid(axis="x", alpha=0.3)
        ax.set_title("Annual Income and Expenses", fontsize=16, fontweight="bold")
    else:
        _empty(ax, "No income or expense data")

    fig.tight_layout()
    return fig


def build_assets_chart(analysis: Any) -> Figure:
    """Donut chart of asset allocation with the total in the centre."""

    fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot()

    assets = {k: v for k, v in section_breakdown(analysis, "assets").items() if v > 0}
    total = sum(assets.values())
    if assets:
        ax.pie(
            list(assets.values()),
            labels=[_label(k) for k in assets],
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            pctdistance=0.78,
        )
        ax.text(0, 0.08, "Total Assets", ha="center", va="center", fontsize=11, color="#666")
        ax.text(0, -0.08, f"${total:,.0f}", ha="center", va="center", fontsize=16,
                fontweight="bold", color=_TEXT_COLOR)
        ax.axis("equal")
        ax.set_title("Assets Breakdown", fontsize=16, fontweight="bold")
    else:
        _empty(ax, "No asset data")

    fig.tight_layout()
    return fig


def figure_to_png(figure: Figure, *, dpi: int = 120) -> bytes:
    buffer = BytesIO()
    figure.savefig(buffer, format="png", bbox_inches="tight", dpi=dpi)
    return buffer.getvalue()


def _summary_page(
    *, client: Any, analysis: Any, goals: Sequence[Any], policies: Sequence[Any]
) -> Figure:
    """First report page: client header, key metrics, goals and policies as text."""

    metrics = compute_metrics(analysis, policies=policies)
    fig = Figure(figsize=(8.27, 11.69))  # A4 portrait

    lines: list[tuple[str, dict]] = [
        ("Financial Analysis Report", {"fontsize": 20, "fontweight": "bold"}),
        (f"{client.first_name} {client.last_name}".strip(), {"fontsize": 14}),
        (f"Generated on {date.today().isoformat()}", {"fontsize": 10, "color": _MUTED_COLOR}),
        ("", {}),
        ("Client Information", {"fontsize": 14, "fontweight": "bold"}),
        (f"Email: {client.email or 'N/A'}    Phone: {client.phone or 'N/A'}", {}),
        (f"Occupation: {client.occupation or 'N/A'}    Employer: {client.employer or 'N/A'}", {}),
        (f"Marital status: {(client.marital_status or 'single').title()}", {}),
        ("", {}),
        ("Financial Summary", {"fontsize": 14, "fontweight": "bold"}),
        (f"Total Income: {_currency(metrics.total_income)}", {}),
        (f"Total Expenses: {_currency(metrics.total_expenses)}", {}),
        (f"Net Income: {_currency(metrics.net_income)}"
         f"  ({_currency(metrics.monthly_net_income)} / month)", {}),
        (f"Total Assets: {_currency(metrics.total_assets)}", {}),
        (f"Total Liabilities: {_currency(metrics.total_liabilities)}", {}),
        (f"Net Worth: {_currency(metrics.net_worth)}", {"fontweight": "bold"}),
        (f"Debt-to-Asset Ratio: {metrics.debt_to_asset_ratio:.1f}%", {}),
        (
            "Savings Rate: "
            + (f"{metrics.savings_rate:.1f}%" if metrics.total_income > 0 else "N/A"),
            {},
        ),
        ("", {}),
        ("Financial Goals", {"fontsize": 14, "fontweight": "bold"}),
    ]
    if goals:
        for goal in goals:
            progress = goal_progress(goal.current_amount, goal.target_amount)
            lines.append(
                (
                    f"{goal.name or 'Unnamed goal'}: {_currency(goal.current_amount)} of "
                    f"{_currency(goal.target_amount)} ({progress:.0f}% complete)",
                    {},
                )
            )
    else:
        lines.append(("No goals recorded.", {"color": _MUTED_COLOR}))

    lines.append(("", {}))
    lines.append(("Life Insurance", {"fontsize": 14, "fontweight": "bold"}))
    if policies:
        for policy in policies:
            lines.append(
                (
                    f"{(policy.policy_type or 'policy').title()} - "
                    f"{policy.insurance_company or 'Unknown insurer'}: "
                    f"{_currency(policy.coverage_amount)} coverage",
                    {},
                )
            )
        lines.append(
            (f"Total coverage: {_currency(metrics.total_coverage)}", {"fontweight": "bold"})
        )
    else:
        lines.append(("No policies recorded.", {"color": _MUTED_COLOR}))

    y = 0.95
    for text, style in lines:
        if text:
            fig.text(0.08, y, text, va="top", color=style.pop("color", _TEXT_COLOR),
                     fontsize=style.pop("fontsize", 10), **style)
        y -= 0.03 if text else 0.015
    return fig


def build_pdf_report(
    *,
    client: Any,
    analysis: Any,
    goals: Iterable[Any] = (),
    policies: Iterable[Any] = (),
    output: str | Path | IO[bytes],
) -> None:
    """Write a multi-page PDF: summary page followed by the analysis charts."""

    goals = list(goals)
    policies = list(policies)
    pages = [
        _summary_page(client=client, analysis=analysis, goals=goals, policies=policies),
        build_cash_flow_chart(analysis),
        build_assets_chart(analysis),
    ]
    title = f"Financial Analysis - {client.first_name} {client.last_name}".strip()
    with PdfPages(output, metadata={"Title": title, "Creator": "FinCounsel"}) as pdf:
        for page in pages:
            pdf.savefig(page)
    logger.info(
        "PDF report generated",
        extra={"client_id": getattr(client, "id", None), "pages": len(pages)},
    )


def export_schedule_csv(*, result: SimulationResult, output_path: Path) -> Path:
    """Write one row per month and debt.

    Columns are deterministic: month, debt_id, debt_name, balance, total_balance.
    Returns the path written.
    """

    headers = ["month", "debt_id", "debt_name", "balance", "total_balance"]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in result.schedule:
            for snapshot in entry.debts:
                writer.writerow(
                    {
                        "month": entry.month,
                        "debt_id": "" if snapshot.id is None else snapshot.id,
                        "debt_name": snapshot.name,
                        "balance": f"{money_float(snapshot.balance):.2f}",
                        "total_balance": f"{money_float(entry.total_balance):.2f}",
                    }
                )
    return output_path


__all__ = [
    "build_assets_chart",
    "build_cash_flow_chart",
    "build_debt_breakdown_chart",
    "build_payoff_chart",
    "build_pdf_report",
    "export_schedule_csv",
    "figure_to_png",
]
