"""Customers service database management CLI.

Usage:
    python src/manage.py setup-db   # Create customer, cart and cart item tables
    python src/manage.py drop-db    # Drop them
"""

import argparse
import sys


def _domain():
    from customers.domain import customers

    customers.init()
    return customers


def setup_database():
    from customers.utils.db import setup_db

    print("Creating customers database schema...")
    setup_db(_domain())
    print("Done.")


def drop_database():
    from customers.utils.db import drop_db

    print("Dropping customers database schema...")
    drop_db(_domain())
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Customers database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
