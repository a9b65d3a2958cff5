"""Database maintenance for the payroll service.

    python scripts/db.py init      # create database + apply database/schema.sql
    python scripts/db.py seed      # load database/seed.sql (demo settings, shifts, employees)
    python scripts/db.py tables    # list tables

Connection settings come from the config module selected by APP_ENV.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.common.logging_utils import configure_logging
from src.payroll_system.payroll_system.database.bootstrap import apply_schema, apply_seed_sql, list_tables

DATABASE_DIR = REPO_ROOT / "database"


def _target(db_config: dict) -> str:
    return (
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Payroll database maintenance")
    parser.add_argument("command", choices=("init", "seed", "tables"))
    parser.add_argument("--sql", type=Path, help="SQL file to apply instead of the default for the command")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if args.command == "init":
        apply_schema(db_config, schema_path=args.sql or DATABASE_DIR / "schema.sql")
        print(f"OK: schema applied -> {_target(db_config)} (tables={len(list_tables(db_config))})")
    elif args.command == "seed":
        apply_seed_sql(db_config, seed_path=args.sql or DATABASE_DIR / "seed.sql")
        print(f"OK: seeded -> {_target(db_config)}")
    else:
        for name in list_tables(db_config):
            print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
