import csv
import json
from datetime import date

import pytest
from openpyxl import load_workbook

from expedition.domain.models import MemberDamage, PlanResult
from expedition.presentation import report
from expedition.services.scheduler import optimize_daily_plan


@pytest.fixture()
def plan():
    members = [
        MemberDamage("a", "Alpha", {"teo": 60}),
        MemberDamage("b", "Bravo", {"kyle": 25}),
        MemberDamage("c", "Charlie", {}),
    ]
    return optimize_daily_plan(
        members,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 3),
        initial_hp={"teo": 100, "yeonhee": 50, "kyle": 100, "karma": 50},
    )


def test_grid_and_roster_order(plan):
    assert report.roster_rows(plan) == [("a", "Alpha"), ("b", "Bravo"), ("c", "Charlie")]
    assert report.grid(plan)["a"] == {1: "teo", 2: "teo"}
    assert report.grid(plan)["b"] == {1: "kyle", 2: "kyle", 3: "kyle"}


def test_json_report_round_trips(tmp_path, plan):
    path = report.write_json(tmp_path / "plan.json", plan)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["daily_plans"][0]["date"] == "2025-01-01"
    assert payload["summary"] == {"teo": 2}
    assert PlanResult.from_dict(payload) == plan


def test_csv_grid(tmp_path, plan):
    path = report.write_csv_grid(tmp_path / "grid.csv", plan)
    with path.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["member", "2025-01-01", "2025-01-02", "2025-01-03"]
    assert rows[1] == ["a Alpha", "Teo", "Teo", ""]
    assert rows[3] == ["c Charlie", "", "", ""]


def test_day_metrics_csv(tmp_path, plan):
    path = report.write_day_metrics_csv(tmp_path / "days.csv", plan)
    with path.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 3
    assert rows[1]["teo_entries"] == "1"
    assert rows[1]["teo_hp_after"] == "-20"
    assert rows[1]["killed"] == "teo"
    assert rows[2]["kyle_hp_after"] == "25"


def test_workbook_sheets(tmp_path, plan):
    path = report.write_workbook(tmp_path / "plan.xlsx", plan, title="a" * 40)
    wb = load_workbook(path)
    assert wb.sheetnames == ["a" * 31, "Summary"]
    grid_sheet = wb["a" * 31]
    assert grid_sheet.cell(row=1, column=2).value == "D1 2025-01-01"
    assert grid_sheet.cell(row=2, column=1).value == "Alpha"
    assert grid_sheet.cell(row=2, column=2).value == "Teo"
    assert grid_sheet.cell(row=2, column=4).value is None

    summary = wb["Summary"]
    assert summary.cell(row=2, column=1).value == "Teo"
    assert summary.cell(row=2, column=2).value == 2
    assert summary.cell(row=2, column=3).value == 2


def test_workbook_bytes_is_readable(plan):
    stream = report.workbook_bytes(plan)
    wb = load_workbook(stream)
    assert "Summary" in wb.sheetnames
