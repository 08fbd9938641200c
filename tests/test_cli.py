"""
Smoke tests for the Typer CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from studiobreak.cli.app import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "team_id: 2\n"
        f"store_path: {(tmp_path / 'schedules.json').as_posix()}\n",
        encoding="utf-8",
    )
    return path


def test_check_reports_lunch_conflict(config_file):
    result = runner.invoke(app, ["check", "11:00", "20:00", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "lunch conflict" in result.output
    assert "also overlaps dinner" in result.output


def test_check_without_conflict(config_file):
    result = runner.invoke(app, ["check", "09:00", "11:00", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "does not touch" in result.output


def test_check_rejects_malformed_time(config_file):
    result = runner.invoke(app, ["check", "9am", "11:00", "-c", str(config_file)])

    assert result.exit_code == 1
    assert "Invalid time" in result.output


def test_split_preview(config_file):
    result = runner.invoke(app, ["split", "10:00", "15:00", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "10:00 ~ 12:00" in result.output
    assert "13:00 ~ 15:00" in result.output


def test_split_with_custom_break(config_file):
    result = runner.invoke(
        app,
        ["split", "10:00", "15:00", "--break-start", "12:30", "--break-end", "13:00", "-c", str(config_file)],
    )

    assert result.exit_code == 0
    assert "10:00 ~ 12:30" in result.output


def test_split_requires_both_break_bounds(config_file):
    result = runner.invoke(app, ["split", "10:00", "15:00", "--break-start", "12:30", "-c", str(config_file)])

    assert result.exit_code == 1


def test_effective(config_file):
    result = runner.invoke(app, ["effective", "10:00", "15:00", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "240" in result.output


def test_plan_split_and_save(config_file, tmp_path):
    result = runner.invoke(
        app,
        [
            "plan",
            "-p", "kim",
            "--date", "2024-11-25",
            "--start", "10:00",
            "--end", "15:00",
            "-t", "PPT",
            "--option", "split",
            "--save",
            "-c", str(config_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "schedule split into 2 bookings" in result.output

    rows = json.loads((tmp_path / "schedules.json").read_text(encoding="utf-8"))
    assert [(r["start_time"], r["end_time"]) for r in rows] == [("10:00", "12:00"), ("13:00", "15:00")]
    assert all(r["team_id"] == 2 for r in rows)


def test_plan_conflict_without_choice_fails(config_file):
    result = runner.invoke(
        app,
        [
            "plan",
            "-p", "kim",
            "--date", "2024-11-25",
            "--start", "10:00",
            "--end", "15:00",
            "-t", "PPT",
            "-c", str(config_file),
        ],
    )

    assert result.exit_code == 1
    assert "break time handling must be chosen" in result.output


def test_list_breaks(config_file):
    result = runner.invoke(app, ["list-breaks", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "lunch" in result.output
    assert "dinner" in result.output


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["check", "09:00", "11:00", "-c", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output
