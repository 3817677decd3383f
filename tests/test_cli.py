"""Mini README: Tests for the Typer command line.

Each test points the settings at a temporary data directory, then drives the
commands through ``CliRunner`` so the file-backed repository is exercised the
same way an operator would use it.
"""

from __future__ import annotations

import json
from datetime import date

from typer.testing import CliRunner

from main_budget_widget import cli

runner = CliRunner()


def test_budget_add_and_summary(isolated_settings) -> None:
    assert runner.invoke(cli, ["set-budget", "100"]).exit_code == 0
    result = runner.invoke(cli, ["add", "130", "-d", "Rent share", "-c", "Eltern"])
    assert result.exit_code == 0
    assert "txn_0001" in result.output

    result = runner.invoke(cli, ["summary"])
    assert result.exit_code == 0
    assert "Spent:      CHF 130.00" in result.output
    assert "Remaining:  CHF 0.00" in result.output
    assert "Over budget!" in result.output

    record = json.loads((isolated_settings.data_directory / "budget_widget_state.json").read_text(encoding="utf-8"))
    assert record["budget"] == 100
    assert record["transactions"][0]["category"] == "Eltern"


def test_invalid_input_exits_with_error(isolated_settings) -> None:
    assert runner.invoke(cli, ["set-budget", "--", "-5"]).exit_code == 1
    assert runner.invoke(cli, ["add", "0"]).exit_code == 1
    assert runner.invoke(cli, ["set-name", "  "]).exit_code == 1
    assert not (isolated_settings.data_directory / "budget_widget_state.json").exists()


def test_history_filters_and_delete(isolated_settings) -> None:
    runner.invoke(cli, ["add", "12", "-d", "Lunch", "-c", "Verpflegung"])
    runner.invoke(cli, ["add", "30", "-d", "Phone", "-c", "Handyabo"])

    result = runner.invoke(cli, ["history", "--search", "lunch"])
    assert "Lunch" in result.output
    assert "Phone" not in result.output

    assert "Deleted txn_0001" in runner.invoke(cli, ["delete", "txn_0001"]).output
    assert "nothing deleted" in runner.invoke(cli, ["delete", "txn_0001"]).output


def test_reset_requires_confirmation(isolated_settings) -> None:
    runner.invoke(cli, ["add", "5", "-d", "Snack"])

    aborted = runner.invoke(cli, ["reset"], input="n\n")
    assert aborted.exit_code != 0

    confirmed = runner.invoke(cli, ["reset", "--yes"])
    assert "Removed 1 transactions" in confirmed.output
    assert "Keine Einträge." in runner.invoke(cli, ["history"]).output


def test_exports_write_dated_files(isolated_settings, tmp_path) -> None:
    out_dir = tmp_path / "exports"
    assert runner.invoke(cli, ["export-csv", "--directory", str(out_dir)]).exit_code == 1

    runner.invoke(cli, ["add", "4.5", "-d", "Coffee", "-c", "Verpflegung"])
    assert runner.invoke(cli, ["export-csv", "--directory", str(out_dir)]).exit_code == 0
    assert runner.invoke(cli, ["export-chart", "--directory", str(out_dir), "--kind", "doughnut"]).exit_code == 0

    today = date.today().isoformat()
    csv_text = (out_dir / f"verlauf_{today}.csv").read_text(encoding="utf-8")
    assert csv_text.startswith("category,description,amount,date\nVerpflegung,Coffee,4.5,")
    assert (out_dir / f"diagramm_{today}.png").read_bytes().startswith(b"\x89PNG")


def test_profile_commands(isolated_settings) -> None:
    assert "Hallo Mia" in runner.invoke(cli, ["set-name", "Mia"]).output
    assert "Theme set to dark" in runner.invoke(cli, ["set-theme", "dark"]).output
    assert "Hallo Mia" in runner.invoke(cli, ["summary"]).output
