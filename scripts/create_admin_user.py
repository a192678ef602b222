"""Utility script to create an administrator account in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from clinicdesk.application.use_cases.users import register_user
from clinicdesk.domain.entities import UserType
from clinicdesk.domain.errors import ClinicDeskError
from clinicdesk.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for admin creation."""

    parser = argparse.ArgumentParser(
        description="Create an administrator for the ClinicDesk application.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name (default: Administrator)")
    parser.add_argument(
        "--email", default="admin@example.com", help="Email address (default: admin@example.com)"
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an admin using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Admin password: ")
    if not password:
        raise SystemExit("No password provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            user_type=UserType.ADMIN,
        )
    except ClinicDeskError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the admin: {exc.message}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the admin: {exc}") from exc
    else:
        print(
            "Admin created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
