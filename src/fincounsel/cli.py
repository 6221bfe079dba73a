"""Flask CLI commands for FinCounsel."""

from __future__ import annotations

from decimal import InvalidOperation
from pathlib import Path

import click

from .logging_config import get_logger

logger = get_logger(__name__)


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("fincounsel-seed")
    def fincounsel_seed() -> None:
        """Load the demo clients and analyses (safe to run twice)."""

        from .extensions import session_factory
        from .services.seed import seed_demo

        summary = seed_demo(session_factory())
        click.echo(
            f"Seeded {summary.clients} clients, {summary.analyses} analyses, "
            f"{summary.goals} goals, {summary.policies} policies."
        )

    @app.cli.command("fincounsel-payoff")
    @click.option(
        "--csv",
        "csv_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="CSV of debts (name, balance, min_payment, interest_rate).",
    )
    @click.option("--extra", "extra_payment", default="200", show_default=True,
                  help="Extra monthly payment.")
    @click.option("--strategy", type=click.Choice(["avalanche", "snowball"]),
                  default="avalanche", show_default=True)
    @click.option("--chart-dir", type=click.Path(file_okay=False, path_type=Path),
                  default=None, help="Write payoff and breakdown PNG charts here.")
    @click.option("--schedule-csv", type=click.Path(dir_okay=False, path_type=Path),
                  default=None, help="Write the month-by-month schedule as CSV.")
    def fincounsel_payoff(
        csv_path: Path | None,
        extra_payment: str,
        strategy: str,
        chart_dir: Path | None,
        schedule_csv: Path | None,
    ) -> None:
        """Simulate a debt payoff plan from a CSV or the example debts."""

        from .services import reports
        from .services.debts import default_debts, schedule_summary, simulate, to_money
        from .services.import_csv import load_debts_csv

        try:
            extra = to_money(extra_payment)
        except InvalidOperation as exc:
            raise click.BadParameter(
                f"{extra_payment!r} is not an amount.", param_hint="--extra"
            ) from exc

        debts = load_debts_csv(csv_path) if csv_path else default_debts()
        result = simulate(debts, extra, strategy)
        if result is None:
            raise click.ClickException("No debts to simulate.")

        months, interest, paid = schedule_summary(result)
        click.echo(f"Strategy: {result.strategy.value}")
        click.echo(f"Months to payoff: {months}")
        click.echo(f"Total interest: ${interest:,.2f}")
        click.echo(f"Total paid: ${paid:,.2f}")
        if not result.paid_off:
            click.echo("Warning: debts are not paid off within the simulation limit.")

        if chart_dir is not None:
            chart_dir.mkdir(parents=True, exist_ok=True)
            charts = {
                "payoff.png": reports.build_payoff_chart(result),
                "breakdown.png": reports.build_debt_breakdown_chart(debts),
            }
            for filename, figure in charts.items():
                (chart_dir / filename).write_bytes(reports.figure_to_png(figure))
            click.echo(f"Charts written: {chart_dir}")

        if schedule_csv is not None:
            path = reports.export_schedule_csv(result=result, output_path=schedule_csv)
            click.echo(f"Schedule written: {path}")

    @app.cli.command("fincounsel-report")
    @click.argument("client_id", type=int)
    @click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
                  help="PDF path; defaults to the reports directory.")
    def fincounsel_report(client_id: int, output: Path | None) -> None:
        """Render the PDF analysis report for a client."""

        from flask import current_app

        from .extensions import session_factory
        from .infra.repositories import SQLModelAnalysisRepository, SQLModelClientRepository
        from .services.reports import build_pdf_report

        factory = session_factory()
        client = SQLModelClientRepository(factory).get_by_id(client_id)
        if client is None:
            raise click.ClickException(f"Client {client_id} not found.")
        analyses = SQLModelAnalysisRepository(factory)
        analysis = analyses.get_for_client(client_id)
        if analysis is None:
            raise click.ClickException(f"Client {client_id} has no financial analysis.")

        if output is None:
            reports_dir = current_app.config["FINCOUNSEL_CONFIG"].REPORTS_DIR
            output = reports_dir / f"client-{client_id}-analysis.pdf"
        output.parent.mkdir(parents=True, exist_ok=True)

        build_pdf_report(
            client=client,
            analysis=analysis,
            goals=analyses.list_goals(analysis.id),
            policies=analyses.list_policies(analysis.id),
            output=output,
        )
        logger.info("Report written", extra={"client_id": client_id, "path": str(output)})
        click.echo(f"Report written: {output}")
