"""CLI commands for News Pulse."""

import argparse
import getpass
import json
import sys

import bcrypt
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.user import USER_TYPE_ADMIN, User
from app.services.feedback import FeedbackStore, compute_feedback_stats
from app.services.store import StoreError, get_tree_store


def create_admin(
    email: str,
    password: str | None = None,
    name: str | None = None,
    phone_number: str | None = None,
) -> None:
    """Create an admin user."""
    db: Session = SessionLocal()

    try:
        existing = db.query(User).filter(User.email == email.lower()).first()
        if existing:
            print(f"Error: User with email '{email}' already exists.")
            sys.exit(1)

        if not password:
            password = getpass.getpass("Password: ")
            password_confirm = getpass.getpass("Confirm password: ")
            if password != password_confirm:
                print("Error: Passwords do not match.")
                sys.exit(1)

        if len(password) < 8:
            print("Error: Password must be at least 8 characters.")
            sys.exit(1)

        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")
        user = User(
            email=email.lower(),
            name=name,
            phone_number=phone_number,
            password_hash=password_hash,
            user_type=USER_TYPE_ADMIN,
        )
        db.add(user)
        db.commit()

        print(f"Admin user created successfully: {email}")

    finally:
        db.close()


def feedback_stats() -> None:
    """Print feedback statistics for the whole collection as JSON."""
    db: Session = SessionLocal()

    try:
        store = FeedbackStore(get_tree_store(db))
        try:
            stats = compute_feedback_stats(store.list_all())
        except StoreError as e:
            print(f"Error: Could not read feedback: {e}")
            sys.exit(1)
        print(json.dumps(stats.model_dump(by_alias=True), indent=2))

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="News Pulse CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    create_admin_parser = subparsers.add_parser(
        "create-admin", help="Create an admin user"
    )
    create_admin_parser.add_argument(
        "--email", required=True, help="Admin email address"
    )
    create_admin_parser.add_argument(
        "--password", help="Admin password (will prompt if not provided)"
    )
    create_admin_parser.add_argument("--name", help="Display name")
    create_admin_parser.add_argument("--phone", help="Phone number")

    subparsers.add_parser("feedback-stats", help="Print feedback statistics")

    args = parser.parse_args()

    if args.command == "create-admin":
        create_admin(args.email, args.password, name=args.name, phone_number=args.phone)
    elif args.command == "feedback-stats":
        feedback_stats()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
