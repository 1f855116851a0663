"""Roastery management CLI.

Usage:
    python src/manage.py setup-db                   # Create all tables
    python src/manage.py drop-db                    # Drop all tables
    python src/manage.py reset-db                   # Drop, then recreate all tables
    python src/manage.py seed-catalogue [--replace] # Load the product catalogue

PROTEAN_ENV selects the database (see src/roastery/domain.toml).
"""

import argparse
import sys


def _initialized_domain():
    from roastery.domain import roastery

    roastery.init()
    return roastery


def setup_database():
    from roastery.utils.db import setup_db

    domain = _initialized_domain()
    print(f"Creating {domain.name} database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from roastery.utils.db import drop_db

    domain = _initialized_domain()
    print(f"Dropping {domain.name} database schema...")
    drop_db(domain)
    print("Done.")


def reset_database():
    from roastery.utils.db import reset_db

    domain = _initialized_domain()
    print(f"Recreating {domain.name} database schema...")
    reset_db(domain)
    print("Done.")


def seed_catalogue(replace=False):
    from roastery.catalogue.seeding import SeedCatalogue

    domain = _initialized_domain()
    with domain.domain_context():
        count = domain.process(SeedCatalogue(replace=replace), asynchronous=False)
    if count:
        print(f"Seeded {count} products.")
    else:
        print("Catalogue already has products; use --replace to reseed.")


def main():
    parser = argparse.ArgumentParser(description="Roastery database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("reset-db", help="Drop and recreate all database tables")

    seed_parser = subparsers.add_parser("seed-catalogue", help="Load the coffee and equipment catalogue")
    seed_parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete existing products before seeding",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "reset-db":
        reset_database()
    elif args.command == "seed-catalogue":
        seed_catalogue(replace=args.replace)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
