"""Pure builders for coin_locker move calls: validated params in, unsigned transaction out.

Nothing here touches the network. Validation failures raise
:class:`~coin_locker_sdk.errors.ValidationError` before a transaction exists.
Authorization (certificate ownership, admin rights, pause state) is enforced
by the contract at execution time, not here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..constants import MAX_LOCK_DURATION, MIN_LOCK_DURATION, MODULE_NAME, SUI_CLOCK_ID
from ..errors import ValidationError
from ..transactions.transaction import Argument, Transaction
from ..transactions.type_tags import CoinTypeArg, normalize_address, normalize_coin_type

MAX_U64 = 2**64 - 1


@dataclass(frozen=True)
class LockCoinsParams:
    coin_type: str | CoinTypeArg
    coins: Sequence[str]
    amount: int | str
    lock_duration: int  # seconds
    clock_id: str | None = None
    recipient: str | None = None


@dataclass(frozen=True)
class UnlockCoinsParams:
    coin_type: str | CoinTypeArg
    lock_id: str
    clock_id: str | None = None


@dataclass(frozen=True)
class TransferCertificateParams:
    certificate_id: str
    recipient: str


@dataclass(frozen=True)
class SetPausedParams:
    paused: bool


@dataclass(frozen=True)
class TransferAdminParams:
    new_admin: str


@dataclass(frozen=True)
class LockTransaction:
    """A lock transaction plus the handle of the certificate it mints."""

    transaction: Transaction
    certificate: Argument
    coin_type: str = ""
    amount: int = 0
    lock_duration: int = 0
    coins: tuple[str, ...] = field(default_factory=tuple)


def build_target(package_id: str, function: str, module: str = MODULE_NAME) -> str:
    return f"{package_id}::{module}::{function}"


def validate_lock_duration(duration: int) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError(f"Lock duration must be an integer, got {duration!r}")
    if duration < MIN_LOCK_DURATION:
        raise ValidationError(
            f"Lock duration must be at least {MIN_LOCK_DURATION} seconds (1 day)"
        )
    if duration > MAX_LOCK_DURATION:
        raise ValidationError(
            f"Lock duration must not exceed {MAX_LOCK_DURATION} seconds (365 days)"
        )
    return duration


def validate_amount(amount: int | str) -> int:
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid lock amount: {amount!r}")
    try:
        value = int(str(amount).strip())
    except ValueError:
        raise ValidationError(f"Invalid lock amount: {amount!r}") from None
    if value <= 0:
        raise ValidationError("Lock amount must be greater than 0")
    if value > MAX_U64:
        raise ValidationError(f"Lock amount must not exceed {MAX_U64}")
    return value


def build_coin_input(tx: Transaction, coins: Sequence[str], amount: int) -> Argument:
    """Merge the given coin objects into the first one and split off ``amount``."""
    if not coins:
        raise ValidationError("No coins provided")

    primary = tx.object(coins[0])
    others = [tx.object(coin_id) for coin_id in coins[1:]]
    tx.merge_coins(primary, others)

    return tx.split_coin(primary, amount)


def build_lock_transaction(
    package_id: str,
    registry_id: str,
    params: LockCoinsParams,
    clock_id: str = SUI_CLOCK_ID,
) -> LockTransaction:
    """Lock ``amount`` of ``coin_type`` for ``lock_duration`` seconds."""
    duration = validate_lock_duration(params.lock_duration)
    if not params.coins:
        raise ValidationError("No coins provided for locking")
    amount = validate_amount(params.amount)
    coin_type = normalize_coin_type(params.coin_type)
    coins = tuple(normalize_address(c) for c in params.coins)
    if len(set(coins)) != len(coins):
        raise ValidationError("Duplicate coin object ids")

    tx = Transaction()
    coin_arg = build_coin_input(tx, coins, amount)

    certificate = tx.move_call(
        build_target(package_id, "lock_coins"),
        type_arguments=[coin_type],
        arguments=[
            tx.object(registry_id),
            coin_arg,
            tx.pure_u64(duration),
            tx.object(params.clock_id or clock_id, mutable=False),
        ],
    )

    if params.recipient:
        tx.transfer_objects([certificate], params.recipient)

    return LockTransaction(
        transaction=tx,
        certificate=certificate,
        coin_type=coin_type,
        amount=amount,
        lock_duration=duration,
        coins=coins,
    )


def build_unlock_transaction(
    package_id: str,
    registry_id: str,
    params: UnlockCoinsParams,
    clock_id: str = SUI_CLOCK_ID,
) -> Transaction:
    """Claim a lock. Eligibility is checked on-chain; see ``QueryModule.can_unlock``."""
    coin_type = normalize_coin_type(params.coin_type)

    tx = Transaction()
    tx.move_call(
        build_target(package_id, "unlock_coins"),
        type_arguments=[coin_type],
        arguments=[
            tx.object(registry_id),
            tx.object(params.lock_id),
            tx.object(params.clock_id or clock_id, mutable=False),
        ],
    )
    return tx


def build_transfer_certificate_transaction(
    package_id: str, params: TransferCertificateParams
) -> Transaction:
    tx = Transaction()
    tx.move_call(
        build_target(package_id, "transfer_certificate"),
        arguments=[
            tx.object(params.certificate_id),
            tx.pure_address(params.recipient),
        ],
    )
    return tx


def build_set_paused_transaction(
    package_id: str, registry_id: str, params: SetPausedParams
) -> Transaction:
    tx = Transaction()
    tx.move_call(
        build_target(package_id, "set_paused"),
        arguments=[tx.object(registry_id), tx.pure_bool(params.paused)],
    )
    return tx


def build_transfer_admin_transaction(
    package_id: str, registry_id: str, params: TransferAdminParams
) -> Transaction:
    tx = Transaction()
    tx.move_call(
        build_target(package_id, "transfer_admin"),
        arguments=[tx.object(registry_id), tx.pure_address(params.new_admin)],
    )
    return tx


def build_user_locks_view_transaction(
    package_id: str, registry_id: str, user: str
) -> Transaction:
    """Simulate-only call whose sole purpose is to emit a UserLocksViewEvent."""
    tx = Transaction()
    tx.move_call(
        build_target(package_id, "emit_user_locks_view"),
        arguments=[tx.object(registry_id, mutable=False), tx.pure_address(user)],
    )
    return tx
