#!/usr/bin/env python3
"""
Create the admin user from ADMIN_USERNAME / ADMIN_PASSWORD / ADMIN_EMAIL (.env supported).
Idempotent: does nothing if the username already exists. Run after `alembic upgrade head`.
  python scripts/seed_admin.py
  python scripts/seed_admin.py --username owner --password 's3cret!' --email me@example.org
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from portfolio_api.config import get_settings
from portfolio_api.db.repositories.user_repository import UserRepository
from portfolio_api.db.session import engine, session_scope
from portfolio_api.services.auth_service import AuthService


async def seed(username: str, password: str, email: str | None) -> bool:
    async with session_scope() as session:
        _, created = await AuthService(UserRepository(session)).ensure_admin(username, password, email)
    await engine.dispose()
    return created


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Create the admin user if missing")
    ap.add_argument("--username", default=settings.admin_username)
    ap.add_argument("--password", default=settings.admin_password)
    ap.add_argument("--email", default=str(settings.admin_email))
    args = ap.parse_args()

    if len(args.password) < 6:
        print("Password must be at least 6 characters long")
        sys.exit(1)

    created = asyncio.run(seed(args.username, args.password, args.email))
    if created:
        print(f"Admin user '{args.username}' created.")
        if args.password == "admin123":
            print("Default password in use - change ADMIN_PASSWORD before deploying.")
    else:
        print(f"Admin user '{args.username}' already exists.")


if __name__ == "__main__":
    main()
