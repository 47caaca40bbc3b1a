"""Administrative command line for user accounts."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Optional, Sequence

from photo_accounts.core.config import settings
from photo_accounts.core.database import db_manager
from photo_accounts.core.dependencies import user_service_scope
from photo_accounts.core.handler import AppException
from photo_accounts.schemas.user import UserCountRequest

logger = logging.getLogger("photo_accounts.cli")

PASSWORD_PROMPT = "Please choose a new password (optional): "


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-accounts",
        description="Manage user accounts of the photo server.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "reset-admin-password",
        help="Set a new password for the admin account",
    )

    count_parser = subparsers.add_parser("count-users", help="Print the number of accounts")
    count_parser.add_argument(
        "--admin",
        action="store_true",
        help="Only count administrator accounts",
    )
    return parser


async def _ask_password() -> Optional[str]:
    return await asyncio.to_thread(getpass.getpass, PASSWORD_PROMPT)


async def _reset_admin_password() -> int:
    async with user_service_scope() as service:
        result = await service.reset_admin_password(_ask_password)

    if result.provided:
        print("The admin password has been updated.")
    else:
        print("The admin password has been updated to:")
        print(result.password)
    return 0


async def _count_users(admin: bool) -> int:
    async with user_service_scope() as service:
        response = await service.get_user_count(UserCountRequest(admin=admin))
    print(response.user_count)
    return 0


async def _run(args: argparse.Namespace) -> int:
    try:
        if args.command == "reset-admin-password":
            return await _reset_admin_password()
        return await _count_users(args.admin)
    finally:
        await db_manager.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = _build_parser().parse_args(argv)

    try:
        return asyncio.run(_run(args))
    except AppException as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
