"""Fable Apparels management CLI.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed-catalogue           # Load the starter products into an empty catalogue
    python src/manage.py issue-token <customer>   # Mint a customer session token
"""

import argparse
import sys


def _initialized_domain():
    from fable.domain import fable

    print("Initializing fable domain...")
    fable.init()
    return fable


def setup_database():
    from fable.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from fable.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def seed_catalogue():
    from fable.catalogue.seed import seed_catalogue as seed

    domain = _initialized_domain()
    with domain.domain_context():
        product_ids = seed()

    if product_ids:
        print(f"Created {len(product_ids)} products.")
    else:
        print("Catalogue already has products; nothing to do.")


def issue_token(customer_id, ttl_seconds=None):
    from fable.identity.session import issue_token as issue

    print(issue(customer_id, ttl_seconds=ttl_seconds))


def main():
    parser = argparse.ArgumentParser(description="Fable Apparels management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-catalogue", help="Load the starter products into an empty catalogue")

    token_parser = subparsers.add_parser("issue-token", help="Print a session token for a customer")
    token_parser.add_argument("customer_id", help="Customer identifier to put in the token")
    token_parser.add_argument(
        "--ttl", type=int, default=None, help="Lifetime in seconds (default: SESSION_TTL_SECONDS)"
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-catalogue":
        seed_catalogue()
    elif args.command == "issue-token":
        issue_token(args.customer_id, args.ttl)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
