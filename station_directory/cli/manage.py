"""
Maintenance CLI for the configured storage backend.

Usage:
    python -m station_directory.cli.manage stats
    python -m station_directory.cli.manage add-user <username> <phone> <password> [station_ids]
    python -m station_directory.cli.manage delete-user <user_id>
    python -m station_directory.cli.manage update-password <username> <new_password>

``station_ids`` is comma-separated ("A1,B2"). The backend is picked by
STORAGE_BACKEND exactly as the server picks it.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from station_directory.application.services.user_directory import UserDirectory
from station_directory.config.logging_config import setup_logging
from station_directory.config.settings import Config
from station_directory.domain.exceptions import DomainError
from station_directory.infrastructure.persistence import create_persistence_backend
from station_directory.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)


async def show_stats(directory: UserDirectory, args: argparse.Namespace) -> None:
    stats = await directory.stats()
    print("Directory statistics:")
    print(f"  Users: {stats.user_count}")
    print(f"  Users with stations: {stats.users_with_stations}")
    print(f"  Station assignments: {stats.station_assignments}")
    print(f"  Distinct stations: {stats.distinct_stations}")
    for user in await directory.list_all():
        print(f"   - [{user.id}] {user.username} - {len(user.station_ids)} station(s)")


async def add_user(directory: UserDirectory, args: argparse.Namespace) -> None:
    station_ids = [part.strip() for part in args.station_ids.split(",") if part.strip()]
    user = await directory.register(
        username=args.username,
        phone=args.phone,
        password=args.password,
        station_ids=station_ids,
    )
    print(f"User {user.username!r} created (id={user.id}) with {len(user.station_ids)} station(s)")


async def delete_user(directory: UserDirectory, args: argparse.Namespace) -> None:
    user = await directory.remove(args.user_id)
    print(f"User {user.username!r} deleted")


async def update_password(directory: UserDirectory, args: argparse.Namespace) -> None:
    await directory.change_password(args.username, args.new_password)
    print(f"Password updated for user {args.username!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="station-directory",
        description="Manage users in the configured storage backend",
    )
    parser.add_argument(
        "--backend",
        choices=["file", "redis"],
        default=None,
        help="Override STORAGE_BACKEND for this run",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override DATA_DIR for the file backend",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    stats = commands.add_parser("stats", help="Show user and station counts")
    stats.set_defaults(handler=show_stats)

    add = commands.add_parser("add-user", help="Create a user")
    add.add_argument("username")
    add.add_argument("phone")
    add.add_argument("password")
    add.add_argument("station_ids", nargs="?", default="", help="Comma-separated station ids")
    add.set_defaults(handler=add_user)

    delete = commands.add_parser("delete-user", help="Delete a user by id")
    delete.add_argument("user_id", type=int)
    delete.set_defaults(handler=delete_user)

    password = commands.add_parser("update-password", help="Set a new password")
    password.add_argument("username")
    password.add_argument("new_password")
    password.set_defaults(handler=update_password)

    return parser


async def run(args: argparse.Namespace) -> None:
    if args.backend:
        Config.STORAGE_BACKEND = args.backend
    if args.data_dir:
        Config.DATA_DIR = args.data_dir

    backend = await create_persistence_backend(Config)
    try:
        directory = UserDirectory(backend, BcryptPasswordHasher(rounds=Config.BCRYPT_ROUNDS))
        await args.handler(directory, args)
    finally:
        await backend.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(run(args))
    except DomainError as e:
        print(f"Error ({e.kind}): {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
