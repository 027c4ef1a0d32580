"""
Inspect the Herdbook database from the command line.

    python -m src.scripts.inspect_db check   # connectivity + table list
    python -m src.scripts.inspect_db view    # users, animals and totals
"""

import argparse
import sys

import pandas as pd
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.core.db import engine


RULE = "=" * 60
SUB_RULE = "-" * 60

USERS_QUERY = "SELECT id, name, email, email_verified, created_at FROM users ORDER BY id"
ANIMALS_QUERY = (
    "SELECT id, number, type, age, status, gender, image, user_id, created_at, updated_at "
    "FROM animals ORDER BY created_at DESC, id DESC"
)


def list_tables(db_engine: Engine) -> list[str]:
    return sorted(inspect(db_engine).get_table_names())


def check(db_engine: Engine) -> int:
    print(f"Checking database at {db_engine.url.render_as_string(hide_password=True)}")
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        tables = list_tables(db_engine)
    except SQLAlchemyError as e:
        print(f"✗ Database check failed: {e}")
        return 1

    print("✓ Connection successful")
    print(f"✓ Tables found: {len(tables)}")
    for name in tables:
        print(f"  - {name}")
    print("✓ Database check complete")
    return 0


def load_tables(db_engine: Engine) -> tuple[pd.DataFrame, pd.DataFrame]:
    with db_engine.connect() as conn:
        users = pd.read_sql(text(USERS_QUERY), conn)
        animals = pd.read_sql(text(ANIMALS_QUERY), conn)
    return users, animals


def _print_frame(title: str, frame: pd.DataFrame, empty_label: str) -> None:
    print(f"{title}:")
    print(SUB_RULE)
    if frame.empty:
        print(f"  ({empty_label})")
    else:
        print(frame.to_string(index=False, na_rep="None"))
    print("")


def view(db_engine: Engine) -> int:
    print(RULE)
    print("DATABASE CONTENTS")
    print(RULE)
    print(f"Database: {db_engine.url.render_as_string(hide_password=True)}")
    print("")

    try:
        users, animals = load_tables(db_engine)
    except SQLAlchemyError as e:
        print(f"Error reading database: {e}")
        return 1

    _print_frame("USERS TABLE", users, "No users found")
    _print_frame("ANIMALS TABLE", animals, "No animals found")

    print("STATISTICS:")
    print(SUB_RULE)
    print(f"  Total Users: {len(users)}")
    print(f"  Total Animals: {len(animals)}")
    if not animals.empty:
        by_type = animals.groupby("type").size()
        for animal_type, count in by_type.items():
            print(f"    {animal_type}: {count}")
    print(RULE)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Inspect the Herdbook database")
    parser.add_argument("command", choices=["check", "view"])
    args = parser.parse_args(argv)

    if args.command == "check":
        return check(engine)
    return view(engine)


if __name__ == "__main__":
    sys.exit(main())
