"""coin_locker event recognition and parsing. No I/O."""
from __future__ import annotations

from typing import Any, Iterable

from ..models import CoinLockedEvent, CoinUnlockedEvent, UserLock, UserLocksInfo
from ..transactions.type_tags import normalize_address
from .parser import parse_type_name, to_int

COIN_LOCKED_EVENT = "CoinLockedEvent"
COIN_UNLOCKED_EVENT = "CoinUnlockedEvent"
USER_LOCKS_VIEW_EVENT = "UserLocksViewEvent"


def event_name(event: dict[str, Any]) -> str:
    """Struct name of an event, e.g. ``0xabc::coin_locker::CoinLockedEvent`` → ``CoinLockedEvent``."""
    event_type = event.get("type") or ""
    return event_type.split("<", 1)[0].rsplit("::", 1)[-1]


def is_coin_locked_event(event: dict[str, Any]) -> bool:
    return event_name(event) == COIN_LOCKED_EVENT


def is_coin_unlocked_event(event: dict[str, Any]) -> bool:
    return event_name(event) == COIN_UNLOCKED_EVENT


def is_user_locks_view_event(event: dict[str, Any]) -> bool:
    return event_name(event) == USER_LOCKS_VIEW_EVENT


def _payload(event: dict[str, Any]) -> dict[str, Any]:
    payload = event.get("parsedJson")
    if not isinstance(payload, dict):
        raise ValueError(f"Event {event.get('type')} has no parsedJson payload")
    return payload


def parse_coin_locked_event(event: dict[str, Any]) -> CoinLockedEvent:
    data = _payload(event)
    return CoinLockedEvent(
        lock_id=normalize_address(data["lock_id"]),
        owner=normalize_address(data["owner"]),
        coin_type=parse_type_name(data["coin_type"]),
        amount=to_int(data["amount"]),
        lock_timestamp=to_int(data.get("lock_timestamp", data.get("lock_ts"))),
        unlock_timestamp=to_int(data.get("unlock_timestamp", data.get("unlock_ts"))),
    )


def parse_coin_unlocked_event(event: dict[str, Any]) -> CoinUnlockedEvent:
    data = _payload(event)
    return CoinUnlockedEvent(
        lock_id=normalize_address(data["lock_id"]),
        owner=normalize_address(data["owner"]),
        coin_type=parse_type_name(data["coin_type"]),
        amount=to_int(data["amount"]),
        unlock_timestamp=to_int(data.get("unlock_timestamp", data.get("unlock_ts"))),
    )


def parse_user_locks_event(user: str, events: Iterable[dict[str, Any]]) -> UserLocksInfo:
    """Build a UserLocksInfo from the first UserLocksViewEvent in ``events``.

    No event means the user has no locks. The per-lock vectors must line up;
    a length mismatch raises ``ValueError``.
    """
    event = next((e for e in events if is_user_locks_view_event(e)), None)
    if event is None or not event.get("parsedJson"):
        return UserLocksInfo(user=user)

    data = _payload(event)
    amounts = data.get("amounts") or []
    lock_ts = data.get("lock_timestamps", data.get("lock_tss")) or []
    unlock_ts = data.get("unlock_timestamps", data.get("unlock_tss")) or []
    lock_ids = data.get("lock_ids") or []

    if len(lock_ts) != len(amounts) or len(unlock_ts) != len(amounts):
        raise ValueError("UserLocksViewEvent vectors have mismatched lengths")

    locks = tuple(
        UserLock(
            amount=to_int(amount),
            lock_timestamp=to_int(lock_ts[i]),
            unlock_timestamp=to_int(unlock_ts[i]),
            lock_id=normalize_address(lock_ids[i]) if i < len(lock_ids) else None,
        )
        for i, amount in enumerate(amounts)
    )
    return UserLocksInfo(
        user=user,
        locks=locks,
        total_locked_amount=sum(lock.amount for lock in locks),
    )


def locked_events(events: Iterable[dict[str, Any]]) -> list[CoinLockedEvent]:
    return [parse_coin_locked_event(e) for e in events if is_coin_locked_event(e)]


def unlocked_events(events: Iterable[dict[str, Any]]) -> list[CoinUnlockedEvent]:
    return [parse_coin_unlocked_event(e) for e in events if is_coin_unlocked_event(e)]
