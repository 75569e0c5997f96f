"""Command-line interface for the coin locker SDK."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any

from .config import load_config
from .errors import LockerError
from .locker import LockCoinsParams, UnlockCoinsParams
from .logging_setup import configure_logging
from .sdk import LockerSDK


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="coin-locker",
        description="Query and build transactions for the coin_locker module on Sui",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in the working directory)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    total = sub.add_parser("total-locked", help="Total locked amount of a coin type")
    total.add_argument("coin_type")

    lock_info = sub.add_parser("lock-info", help="Details of a CoinLock")
    lock_info.add_argument("lock_id")

    can_unlock = sub.add_parser("can-unlock", help="Whether a lock can be claimed now")
    can_unlock.add_argument("lock_id")

    user_locks = sub.add_parser("user-locks", help="All locks of an address")
    user_locks.add_argument("address")

    certificates = sub.add_parser(
        "certificates", help="Lock certificates owned by an address"
    )
    certificates.add_argument("owner")

    registry = sub.add_parser("registry", help="Registry state")
    registry.add_argument(
        "--tables",
        action="store_true",
        help="Also resolve the total_locked and user_locks tables",
    )

    sub.add_parser("status", help="Registry admin and pause status")

    build_lock = sub.add_parser(
        "build-lock", help="Print an unsigned lock_coins transaction"
    )
    build_lock.add_argument("--coin-type", required=True)
    build_lock.add_argument("--amount", required=True)
    build_lock.add_argument(
        "--duration", required=True, type=int, help="Lock duration in seconds"
    )
    build_lock.add_argument(
        "--coin",
        dest="coins",
        action="append",
        default=[],
        help="Coin object id to lock from (repeatable)",
    )
    build_lock.add_argument("--recipient", default=None, help="Certificate recipient")
    build_lock.add_argument("--clock-id", default=None)

    build_unlock = sub.add_parser(
        "build-unlock", help="Print an unsigned unlock_coins transaction"
    )
    build_unlock.add_argument("--coin-type", required=True)
    build_unlock.add_argument("lock_id")
    build_unlock.add_argument("--clock-id", default=None)

    return parser


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


def _print(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2, default=str))


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    sdk = LockerSDK(config)
    clock_id = getattr(args, "clock_id", None)

    if args.command == "total-locked":
        total = await sdk.query.get_total_locked(args.coin_type)
        _print({"coin_type": args.coin_type, "total_locked": total})
    elif args.command == "lock-info":
        _print(await sdk.query.get_lock_info(args.lock_id))
    elif args.command == "can-unlock":
        unlockable = await sdk.query.can_unlock(args.lock_id)
        _print({"lock_id": args.lock_id, "can_unlock": unlockable})
    elif args.command == "user-locks":
        _print(await sdk.query.get_user_locks(args.address))
    elif args.command == "certificates":
        _print(await sdk.query.get_user_certificates(args.owner))
    elif args.command == "registry":
        _print(await sdk.query.get_registry_info(resolve_tables=args.tables))
    elif args.command == "status":
        admin = await sdk.admin.get_admin()
        _print({"admin": admin, "paused": await sdk.admin.is_paused()})
    elif args.command == "build-lock":
        built = sdk.lock.build_lock_coins_transaction(
            LockCoinsParams(
                coin_type=args.coin_type,
                coins=args.coins,
                amount=args.amount,
                lock_duration=args.duration,
                clock_id=clock_id,
                recipient=args.recipient,
            )
        )
        print(built.transaction.to_json())
    elif args.command == "build-unlock":
        tx = sdk.lock.build_unlock_coins_transaction(
            UnlockCoinsParams(
                coin_type=args.coin_type, lock_id=args.lock_id, clock_id=clock_id
            )
        )
        print(tx.to_json())
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except LockerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
