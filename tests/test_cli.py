"""Flask CLI commands."""

from __future__ import annotations


def test_seed_command_is_idempotent(runner):
    first = runner.invoke(args=["fincounsel-seed"])
    second = runner.invoke(args=["fincounsel-seed"])

    assert first.exit_code == 0, first.output
    assert "Seeded 2 clients, 2 analyses, 3 goals, 1 policies." in first.output
    assert "Seeded 0 clients" in second.output


def test_payoff_with_example_debts(runner):
    result = runner.invoke(args=["fincounsel-payoff"])

    assert result.exit_code == 0, result.output
    assert "Strategy: avalanche" in result.output
    assert "Months to payoff:" in result.output
    assert "Warning" not in result.output


def test_payoff_from_csv_with_outputs(runner, tmp_path):
    csv_path = tmp_path / "debts.csv"
    csv_path.write_text("name,balance,min_payment,apr\nCard,1000,100,0\n", encoding="utf-8")
    charts = tmp_path / "charts"
    schedule = tmp_path / "schedule.csv"

    result = runner.invoke(
        args=[
            "fincounsel-payoff",
            "--csv",
            str(csv_path),
            "--extra",
            "0",
            "--strategy",
            "snowball",
            "--chart-dir",
            str(charts),
            "--schedule-csv",
            str(schedule),
        ]
    )

    assert result.exit_code == 0, result.output
    assert "Months to payoff: 10" in result.output
    assert "Total paid: $1,000.00" in result.output
    assert (charts / "payoff.png").read_bytes().startswith(b"\x89PNG")
    assert (charts / "breakdown.png").exists()
    assert len(schedule.read_text(encoding="utf-8").splitlines()) == 11


def test_payoff_warns_when_cap_is_hit(runner, tmp_path):
    csv_path = tmp_path / "debts.csv"
    csv_path.write_text("name,balance,min_payment,apr\nStuck,1000,0,12\n", encoding="utf-8")

    result = runner.invoke(args=["fincounsel-payoff", "--csv", str(csv_path), "--extra", "0"])

    assert "Months to payoff: 600" in result.output
    assert "Warning" in result.output


def test_payoff_rejects_bad_extra(runner):
    result = runner.invoke(args=["fincounsel-payoff", "--extra", "lots"])

    assert result.exit_code != 0
    assert "not an amount" in result.output


def test_report_command(runner, app):
    runner.invoke(args=["fincounsel-seed"])
    output = app.config["FINCOUNSEL_CONFIG"].DATA_DIR / "out" / "report.pdf"

    result = runner.invoke(args=["fincounsel-report", "1", "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"%PDF")


def test_report_default_path(runner, app):
    runner.invoke(args=["fincounsel-seed"])

    result = runner.invoke(args=["fincounsel-report", "2"])

    assert result.exit_code == 0, result.output
    reports_dir = app.config["FINCOUNSEL_CONFIG"].REPORTS_DIR
    assert (reports_dir / "client-2-analysis.pdf").exists()


def test_report_missing_client(runner):
    result = runner.invoke(args=["fincounsel-report", "99"])

    assert result.exit_code != 0
    assert "Client 99 not found" in result.output
