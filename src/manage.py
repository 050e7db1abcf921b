"""Carts database management CLI.

Creates and drops the relational schema behind the cart store. With the
default in-memory provider there is nothing to do; set
``PROTEAN_ENV=production`` to target PostgreSQL.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def _domain():
    from carts.domain import carts

    print("Initializing carts domain...")
    carts.init()
    return carts


def setup_databases():
    """Create the carts database schema."""
    from carts.utils.db import setup_db

    touched = setup_db(_domain())
    if not touched:
        print("  No relational provider configured; nothing to create.")
    for name in touched:
        print(f"  carts schema ready on provider '{name}'.")
    print("Done.")


def drop_databases():
    """Drop the carts database schema."""
    from carts.utils.db import drop_db

    touched = drop_db(_domain())
    if not touched:
        print("  No relational provider configured; nothing to drop.")
    for name in touched:
        print(f"  carts schema dropped on provider '{name}'.")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Carts database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
