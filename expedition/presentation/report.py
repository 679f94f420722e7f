"""Plan exporters: JSON, CSV grids and an Excel workbook."""
from __future__ import annotations

import csv
import json
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from ..domain.bosses import BOSSES, label_for
from ..domain.models import PlanResult

HEADER_FONT = Font(bold=True)
CENTER = Alignment(horizontal="center", vertical="center")
BOSS_FILLS = {
    "teo": PatternFill("solid", fgColor="FCE4D6"),
    "yeonhee": PatternFill("solid", fgColor="E2EFDA"),
    "kyle": PatternFill("solid", fgColor="DDEBF7"),
    "karma": PatternFill("solid", fgColor="EDE1F5"),
}


def roster_rows(plan: PlanResult) -> List[Tuple[str, str]]:
    """Members in order of first assignment, followed by members without scores."""
    seen: Dict[str, str] = {}
    for day in plan.daily_plans:
        for assignment in day.assignments:
            seen.setdefault(assignment.member_id, assignment.member_ign)
    for ref in plan.members_without_scores:
        seen.setdefault(ref.member_id, ref.member_ign)
    return list(seen.items())


def grid(plan: PlanResult) -> Dict[str, Dict[int, str]]:
    """member_id -> day number -> boss."""
    out: Dict[str, Dict[int, str]] = {}
    for day in plan.daily_plans:
        for assignment in day.assignments:
            out.setdefault(assignment.member_id, {})[day.day_number] = assignment.boss
    return out


def write_json(path: str | Path, plan: PlanResult) -> Path:
    path = Path(path)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(plan.to_dict(), handle, ensure_ascii=False, indent=2)
    return path


def write_csv_grid(path: str | Path, plan: PlanResult) -> Path:
    path = Path(path)
    cells = grid(plan)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["member"] + [day.date.isoformat() for day in plan.daily_plans])
        for member_id, member_ign in roster_rows(plan):
            row = [f"{member_id} {member_ign}"]
            for day in plan.daily_plans:
                boss = cells.get(member_id, {}).get(day.day_number)
                row.append(label_for(boss) if boss else "")
            writer.writerow(row)
    return path


def write_day_metrics_csv(path: str | Path, plan: PlanResult) -> Path:
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(
            ["date", "day"]
            + [f"{boss}_entries" for boss in BOSSES]
            + [f"{boss}_hp_after" for boss in BOSSES]
            + ["killed"]
        )
        for day in plan.daily_plans:
            writer.writerow(
                [day.date.isoformat(), day.day_number]
                + [day.entries_for(boss) for boss in BOSSES]
                + [day.boss_hp_after.get(boss, 0) for boss in BOSSES]
                + [" ".join(day.bosses_killed_today)]
            )
    return path


def build_workbook(plan: PlanResult, *, title: str | None = None) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = (title or "Plan")[:31]

    ws.cell(row=1, column=1, value="Member").font = HEADER_FONT
    for col, day in enumerate(plan.daily_plans, start=2):
        cell = ws.cell(row=1, column=col, value=f"D{day.day_number} {day.date.isoformat()}")
        cell.font = HEADER_FONT
        cell.alignment = CENTER

    cells = grid(plan)
    for row_idx, (member_id, member_ign) in enumerate(roster_rows(plan), start=2):
        ws.cell(row=row_idx, column=1, value=member_ign).font = HEADER_FONT
        for col, day in enumerate(plan.daily_plans, start=2):
            boss = cells.get(member_id, {}).get(day.day_number)
            if not boss:
                continue
            cell = ws.cell(row=row_idx, column=col, value=label_for(boss))
            cell.alignment = CENTER
            cell.fill = BOSS_FILLS[boss]

    summary = wb.create_sheet("Summary")
    summary.append(["Boss", "Killed on day", "Entries"])
    for boss in BOSSES:
        summary.append([label_for(boss), plan.summary.get(boss), plan.total_entries_per_boss.get(boss, 0)])
    summary.append([])
    summary.append(["Estimated days", plan.estimated_days])
    summary.append(["Target day", plan.target_day])
    summary.append(["Target met", "yes" if plan.target_met else "no"])
    if plan.warning_message:
        summary.append(["Warning", plan.warning_message])
    for cell in summary[1]:
        cell.font = HEADER_FONT
    return wb


def write_workbook(path: str | Path, plan: PlanResult, *, title: str | None = None) -> Path:
    path = Path(path)
    build_workbook(plan, title=title).save(path)
    return path


def workbook_bytes(plan: PlanResult, *, title: str | None = None) -> BytesIO:
    stream = BytesIO()
    build_workbook(plan, title=title).save(stream)
    stream.seek(0)
    return stream


__all__ = [
    "roster_rows",
    "grid",
    "write_json",
    "write_csv_grid",
    "write_day_metrics_csv",
    "build_workbook",
    "write_workbook",
    "workbook_bytes",
]
