"""CLI commands for fridgemate."""

import argparse
import sys

from sqlalchemy.orm import Session

from fridgemate.database import SessionLocal, init_db
from fridgemate.services.inventory_service import InventoryService


def list_expiring(days: int) -> None:
    """Print ingredients expiring within the given number of days."""
    db: Session = SessionLocal()

    try:
        expiring = InventoryService.get_expiring_ingredients(db, days)
        if not expiring:
            print(f"Nothing expires within {days} day(s).")
            return

        for ingredient in expiring:
            print(
                f"{ingredient.expiration_date:%Y-%m-%d}  "
                f"{ingredient.name} ({ingredient.quantity})"
            )
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="fridgemate CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")

    expiring_parser = subparsers.add_parser(
        "list-expiring", help="List ingredients expiring soon"
    )
    expiring_parser.add_argument(
        "--days", type=int, default=7, help="Window in days (default 7)"
    )

    args = parser.parse_args(argv)

    if args.command == "init-db":
        init_db()
        print("Database tables created.")
    elif args.command == "list-expiring":
        if args.days < 0:
            print("Error: --days must not be negative.")
            sys.exit(1)
        list_expiring(args.days)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
