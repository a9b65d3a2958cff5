from __future__ import annotations

import io
from typing import Iterable

import pandas as pd

from .model import SalaryCalculation

SHEET_NAME = "Salaries"


def salary_rows(calculations: Iterable[SalaryCalculation]) -> list[dict]:
    return [
        {
            "Employee ID": c.employee_id,
            "Employee": c.employee_name or "",
            "Period": c.period,
            "From": c.period_start.isoformat(),
            "To": c.period_end.isoformat(),
            "Basic salary": c.basic_salary,
            "Working days": c.working_days,
            "Present": c.present_days,
            "Leave": c.leave_days,
            "Absent": c.absent_days,
            "Late (min)": c.total_late_minutes,
            "Early leave (min)": c.total_early_leave_minutes,
            "Absent deduction": c.absent_deduction,
            "Leave deduction": c.leave_deduction,
            "Late deduction": c.late_deduction,
            "Early leave deduction": c.early_leave_deduction,
            "Total deduction": c.total_deduction,
            "Net salary": c.net_salary,
            "Status": c.status.value,
        }
        for c in calculations
    ]


def build_salary_workbook(calculations: Iterable[SalaryCalculation]) -> bytes:
    """Period salary report as an .xlsx file (in memory, never written to disk)."""
    rows = salary_rows(calculations)
    df = pd.DataFrame(rows)
    if rows:
        totals = {col: "" for col in df.columns}
        totals["Employee"] = "TOTAL"
        for col in ("Basic salary", "Total deduction", "Net salary"):
            totals[col] = int(df[col].sum())
        df = pd.concat([df, pd.DataFrame([totals])], ignore_index=True)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
    return output.getvalue()
