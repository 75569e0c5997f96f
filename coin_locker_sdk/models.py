"""Data models. All frozen."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CoinLock:
    """Snapshot of an on-chain CoinLock object."""

    id: str
    owner: str
    locked_amount: int
    lock_timestamp: int
    unlock_timestamp: int
    claimed: bool
    coin_type: str = ""


@dataclass(frozen=True)
class LockInfo:
    """Query-side view of a lock, with the derived unlock eligibility."""

    lock_id: str
    owner: str
    locked_amount: int
    lock_timestamp: int
    unlock_timestamp: int
    claimed: bool
    can_unlock: bool


@dataclass(frozen=True)
class LockCertificate:
    """Transferable claim on a CoinLock; whoever owns it may unlock."""

    id: str
    lock_id: str
    coin_type: str
    owner: str
    amount: int
    unlock_timestamp: int


@dataclass(frozen=True)
class UserLockSummary:
    """Per-address aggregate held in the registry's user_locks table."""

    address: str
    total_locked_amount: int
    lock_count: int = 0


@dataclass(frozen=True)
class LockerRegistry:
    """The singleton registry: pause/admin state and aggregate totals."""

    id: str
    paused: bool
    admin: str
    total_locked_table_id: str = ""
    user_locks_table_id: str = ""
    total_locked: dict[str, int] = field(default_factory=dict)
    user_locks: dict[str, UserLockSummary] = field(default_factory=dict)


@dataclass(frozen=True)
class UserLock:
    """A single entry of the UserLocksViewEvent payload."""

    amount: int
    lock_timestamp: int
    unlock_timestamp: int
    lock_id: str | None = None


@dataclass(frozen=True)
class UserLocksInfo:
    """All locks of one user, as reported by emit_user_locks_view."""

    user: str
    locks: tuple[UserLock, ...] = ()
    total_locked_amount: int = 0


@dataclass(frozen=True)
class CoinLockedEvent:
    lock_id: str
    owner: str
    coin_type: str
    amount: int
    lock_timestamp: int
    unlock_timestamp: int


@dataclass(frozen=True)
class CoinUnlockedEvent:
    lock_id: str
    owner: str
    coin_type: str
    amount: int
    unlock_timestamp: int


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of an executed transaction block."""

    digest: str
    status: str = ""
    error: str | None = None
    effects: dict[str, Any] = field(default_factory=dict)
    events: tuple[dict[str, Any], ...] = ()
    object_changes: tuple[dict[str, Any], ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True)
class InspectResult:
    """Outcome of a dev-inspect (simulated) transaction block."""

    status: str = ""
    error: str | None = None
    events: tuple[dict[str, Any], ...] = ()
    results: tuple[dict[str, Any], ...] = ()
