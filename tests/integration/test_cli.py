from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hreval.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "reviewers:\n"
        "  - id: \"1\"\n"
        "    name: Michael Chen\n"
        "    role: LM\n"
        "generator:\n"
        "  max_optional_quarter: 6\n",
        encoding="utf-8",
    )
    return path


def test_plan_prints_quarterly_records(runner: CliRunner, config_path: Path) -> None:
    result = runner.invoke(
        app,
        [
            "plan",
            "--type",
            "Quarterly",
            "--year",
            "2024",
            "--reviewer",
            "1",
            "--date",
            "2024-02-01",
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.output
    records = json.loads(result.stdout)
    assert [record["period"] for record in records] == ["2024-Q1", "2024-Q2", "2024-Q3", "2024-Q4"]
    assert {record["status"] for record in records} == {"Draft"}
    assert {record["reviewer"] for record in records} == {"Michael Chen"}


def test_plan_reports_validation_errors(runner: CliRunner, config_path: Path) -> None:
    result = runner.invoke(
        app,
        ["plan", "--type", "Optional", "--year", "2024", "--reviewer", "1", "--config", str(config_path)],
    )

    assert result.exit_code == 1
    assert "Quarter is required for optional reviews" in result.output


def test_transitions_lists_selectable_statuses(runner: CliRunner) -> None:
    result = runner.invoke(app, ["transitions", "--status", "EMPLOYEE_REVIEW"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {
        "status": "Employee Review",
        "selectable": ["Employee Review", "Approved", "Rejected"],
        "terminal": False,
    }


def test_transitions_rejects_unknown_status(runner: CliRunner) -> None:
    result = runner.invoke(app, ["transitions", "--status", "Archived"])

    assert result.exit_code == 1
    assert "Unknown status" in result.output


def test_score_computes_composites(runner: CliRunner, tmp_path: Path) -> None:
    input_path = tmp_path / "items.json"
    input_path.write_text(
        json.dumps(
            {
                "objectives": [
                    {"title": "A", "description": "a", "target": 8, "achieved": 7, "weight": 40},
                    {"title": "B", "description": "b", "target": 9, "achieved": 8, "weight": 60},
                ],
                "competencies": [],
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["score", "--input", str(input_path)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["objectives"] == 8.8
    assert payload["competencies"] == 0.0
    assert payload["objective_count"] == 2


def test_score_reports_item_errors(runner: CliRunner, tmp_path: Path) -> None:
    input_path = tmp_path / "items.json"
    input_path.write_text(
        json.dumps({"objectives": [{"title": "", "description": "a", "target": 8, "achieved": 7, "weight": 40}]}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["score", "--input", str(input_path)])

    assert result.exit_code == 1
    assert "objectives[0].title" in result.output
