"""Rumah Mlijo operator CLI.

Creates and drops database schemas, provisions administrator accounts and
seeds a starter catalogue. Administrators are never created through the
storefront itself.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py create-admin --username root --password secret
    python src/manage.py seed-catalogue            # Load the starter products
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]

STARTER_CATALOGUE = [
    {
        "name": "Fresh Spinach",
        "category": "vegetables",
        "price": 5000,
        "description": "One bunch, picked this morning.",
    },
    {
        "name": "Red Chili",
        "category": "vegetables",
        "price": 12000,
        "description": "Curly red chili, 250 g.",
    },
    {
        "name": "Fresh Tilapia Fish",
        "category": "fish",
        "price": 35000,
        "description": "Cleaned tilapia, about 500 g each.",
    },
    {
        "name": "Chicken Nuggets",
        "category": "frozen",
        "price": 42000,
        "description": "Frozen nuggets, 500 g pack.",
    },
    {
        "name": "Ground Coriander",
        "category": "spices",
        "price": 8000,
        "description": "Kitchen spice, 100 g.",
    },
]


def _domains(names=None):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    all_domains = {"identity": identity, "catalogue": catalogue, "ordering": ordering}
    return {n: all_domains[n] for n in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def create_admin(username, password):
    """Register an administrator account. Returns the process exit code."""
    from protean.exceptions import ValidationError

    from identity.admin.registration import RegisterAdmin
    from identity.domain import identity

    identity.init()
    with identity.domain_context():
        try:
            admin_id = identity.process(RegisterAdmin(username=username, password=password), asynchronous=False)
        except ValidationError as exc:
            for field, errors in exc.messages.items():
                print(f"  {field}: {', '.join(errors)}", file=sys.stderr)
            return 1

    print(f"Administrator {username!r} created ({admin_id}).")
    return 0


def seed_catalogue():
    """Insert the starter products through the catalogue store."""
    from catalogue.domain import catalogue
    from catalogue.store import ProteanCatalogueStore

    catalogue.init()
    store = ProteanCatalogueStore(catalogue)
    failures = 0
    for fields in STARTER_CATALOGUE:
        result = store.insert(fields)
        if result.success:
            print(f"  added {fields['name']}")
        else:
            failures += 1
            print(f"  failed {fields['name']}: {result.failure_reason}", file=sys.stderr)

    print("Done.")
    return 1 if failures else 0


def main():
    parser = argparse.ArgumentParser(description="Rumah Mlijo storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    admin_parser = subparsers.add_parser("create-admin", help="Provision an administrator account")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--password", required=True)

    subparsers.add_parser("seed-catalogue", help="Load the starter catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "create-admin":
        sys.exit(create_admin(args.username, args.password))
    elif args.command == "seed-catalogue":
        sys.exit(seed_catalogue())
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
