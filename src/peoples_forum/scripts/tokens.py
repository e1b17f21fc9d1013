# src/peoples_forum/scripts/tokens.py
"""
Developer helper to mint access tokens and bootstrap the first administrator.

Usage:
    python -m peoples_forum.scripts.tokens mint alice@example.com
    python -m peoples_forum.scripts.tokens promote alice@example.com
"""

from __future__ import annotations

import argparse
import sys

from peoples_forum.core.errors import NotFound
from peoples_forum.core.security import create_access_token
from peoples_forum.db.session import SessionLocal
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.schemas.common import normalize_email
from peoples_forum.services.user_service import promote_to_admin


def mint(email: str, name: str | None = None) -> str:
    """Return a fresh access token for ``email``."""
    return create_access_token(normalize_email(email), name=name)


def promote(email: str) -> None:
    """Grant the admin role directly in the database.

    The admin-only route needs an existing admin, so the first one is created
    out of band with this command.
    """
    db = SessionLocal()
    try:
        user = promote_to_admin(StoreAdapter(db), normalize_email(email))
        print(f"{user.email} is now {user.role}")
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    sub = parser.add_subparsers(dest="command", required=True)

    mint_parser = sub.add_parser("mint", help="Print an access token for an email")
    mint_parser.add_argument("email")
    mint_parser.add_argument("--name", default=None)

    promote_parser = sub.add_parser("promote", help="Grant the admin role to a member")
    promote_parser.add_argument("email")

    args = parser.parse_args(argv)
    if args.command == "mint":
        print(mint(args.email, args.name))
        return 0
    try:
        promote(args.email)
    except NotFound as exc:
        print(exc.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
