"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create an admin user directly in PostgreSQL (idempotent)
  - Hash passwords with Argon2
  - Public registration always creates USER accounts; this is the
    supported way to provision ADMIN accounts outside local dev
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys
from datetime import datetime, timezone
from uuid import uuid4

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from sweetshop.identity.auth_users import Argon2PasswordHasher  # noqa: E402
from sweetshop.identity.users import UserRole  # noqa: E402


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt(label: str) -> str:
    value = input(f"{label}: ").strip()
    if not value:
        raise SystemExit(f"{label} is required.")
    return value


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if len(password) < 6:
        raise SystemExit("Password must be at least 6 characters.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(description="Create an admin user (idempotent).")
    parser.add_argument("--username", help="Admin username (3-50 chars)")
    parser.add_argument("--email", help="Admin email")
    parser.add_argument(
        "--password",
        help="Admin password (omit to be prompted securely)",
    )
    return parser.parse_args(argv)


def _maybe_create_admin(db_url: str, *, username: str, email: str, password: str):
    with psycopg.connect(db_url) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, role FROM users WHERE username = %s OR email = %s",
                (username, email),
            )
            row = cur.fetchone()
            if row:
                print(f"User already exists: id={row[0]} role={row[1]}")
                return

            user_id = uuid4()
            password_hash = Argon2PasswordHasher().hash(password)
            cur.execute(
                """
                INSERT INTO users (id, username, email, password_hash, role, created_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    user_id,
                    username,
                    email,
                    password_hash,
                    UserRole.ADMIN.value,
                    datetime.now(timezone.utc),
                ),
            )
            conn.commit()
            print(f"Created admin: id={user_id} username={username}")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    db_url = _require_database_url()
    username = (args.username or "").strip() or _prompt("Username")
    if not 3 <= len(username) <= 50:
        raise SystemExit("Username must be between 3 and 50 characters.")
    email = (args.email or "").strip() or _prompt("Email")
    password = args.password or _prompt_password()
    _maybe_create_admin(db_url, username=username, email=email, password=password)


if __name__ == "__main__":
    main()
