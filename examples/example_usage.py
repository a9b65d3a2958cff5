"""Example: calculate a whole pay period through the service layer (no Flask).

Usage: python examples/example_usage.py 2024-03
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container


def main():
    period = sys.argv[1] if len(sys.argv) > 1 else "2024-03"
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    summary = container.salary_service.calculate_all(period=period)
    print(
        f"{summary.period}: ok={summary.successful_calculations} "
        f"skipped={summary.skipped_locked} failed={len(summary.failed)} "
        f"net={summary.total_salary_amount} deductions={summary.total_deductions}"
    )
    for failure in summary.failed:
        print(f"  FAILED {failure.employee_id}: {failure.message}")
    for calc in container.salary_service.list(period=summary.period):
        print(f"  {calc.employee_id:<10} {calc.status.value:<9} net={calc.net_salary}")


if __name__ == "__main__":
    main()
