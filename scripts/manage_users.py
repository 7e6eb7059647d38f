#!/usr/bin/env python3
"""
Admin account provisioning.

Accounts are never created through the public API; use this script instead:

    python scripts/manage_users.py create-admin --name "Admin User" --email admin@example.com
    python scripts/manage_users.py list
    python scripts/manage_users.py cleanup
"""

import argparse
import asyncio
import getpass
import sys

from app.db import init_db
from app.db_handlers import UserDBHandler
from app.db_handlers.user import AccountExistsError
from app.utils.logger import setup_logger

logger = setup_logger("scripts.manage_users")


async def create_admin(name: str, email: str, password: str) -> int:
    await init_db()
    try:
        user = await UserDBHandler().create_account(name, email, password)
    except AccountExistsError as e:
        print(f"[ERROR] {e}")
        return 1
    print(f"[SUCCESS] Created account '{user.name}' <{user.email}> ({user.id})")
    return 0


async def list_accounts() -> int:
    accounts = await UserDBHandler().list_accounts()
    print(f"Found {len(accounts)} account(s)")
    for user in accounts:
        print(f"  - {user.name} <{user.email}> ({user.id})")
    return 0


async def cleanup_accounts() -> int:
    handler = UserDBHandler()
    accounts = await handler.list_accounts()
    if not accounts:
        print("No accounts found in database")
        return 0

    print(f"Keeping account: {accounts[0].name} <{accounts[0].email}>")
    deleted = await handler.delete_all_except_oldest()
    print(f"Deleted {deleted} account(s)")
    return await list_accounts()


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage admin accounts")
    subparsers = parser.add_subparsers(dest="action", required=True)

    create_parser = subparsers.add_parser("create-admin", help="Create an admin account")
    create_parser.add_argument("--name", required=True, help="Login/display name")
    create_parser.add_argument("--email", required=True, help="Contact email")
    create_parser.add_argument(
        "--password", help="Password (prompted for when omitted)"
    )

    subparsers.add_parser("list", help="List admin accounts")
    subparsers.add_parser(
        "cleanup", help="Keep the oldest account and delete every other one"
    )

    args = parser.parse_args()

    if args.action == "create-admin":
        password = args.password or getpass.getpass("Password: ")
        if not password:
            print("[ERROR] Password must not be empty")
            return 1
        return asyncio.run(create_admin(args.name, args.email, password))
    if args.action == "list":
        return asyncio.run(list_accounts())
    return asyncio.run(cleanup_accounts())


if __name__ == "__main__":
    sys.exit(main())
