"""Pure parsing functions for coin_locker on-chain data. No I/O.

Every function takes the raw JSON-RPC shapes returned by ``sui_getObject`` /
``sui_multiGetObjects`` and returns a frozen model, or ``None`` when the
object is missing or its fields do not have the expected shape.

Timestamp fields are read as ``lock_timestamp`` / ``unlock_timestamp`` and
fall back to ``lock_ts`` / ``unlock_ts``, since deployments of the module
have used both spellings.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from ..constants import ABORT_MESSAGES, MODULE_NAME
from ..models import (
    CoinLock,
    LockCertificate,
    LockerRegistry,
    LockInfo,
    UserLockSummary,
)
from ..errors import ValidationError
from ..transactions.type_tags import normalize_address, normalize_coin_type, type_arguments

logger = logging.getLogger(__name__)

_ABORT_RE = re.compile(
    r'MoveAbort\(.*?Identifier\("' + MODULE_NAME + r'"\).*?\},\s*(\d+)\)'
)


def _first(fields: dict[str, Any], *names: str) -> Any:
    for name in names:
        if fields.get(name) is not None:
            return fields[name]
    return None


def to_int(value: Any) -> int:
    """Parse an on-chain integer (u64/u128 come back as decimal strings)."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(f"Not an integer: {value!r}")


def object_data(response: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return the ``data`` block of an object response, or None if missing."""
    if not response:
        return None
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    return data


def object_fields(response: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return the Move struct fields of an object response.

    Only ``moveObject`` content is accepted; packages and error responses
    yield ``None``.
    """
    data = object_data(response)
    if data is None:
        return None
    content = data.get("content")
    if not isinstance(content, dict) or content.get("dataType") != "moveObject":
        return None
    fields = content.get("fields")
    return fields if isinstance(fields, dict) else None


def _uid(value: Any) -> str | None:
    """Extract an id from ``{"id": "0x…"}`` / ``{"id": {"id": "0x…"}}`` / plain strings."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return _uid(value.get("id"))
    return None


def parse_type_name(value: Any) -> str:
    """Read a ``std::type_name::TypeName`` field as a normalized coin type."""
    if isinstance(value, dict):
        value = value.get("fields", value).get("name")
    if not isinstance(value, str):
        raise ValueError(f"Not a TypeName: {value!r}")
    return normalize_coin_type(value)


def coin_type_from_object_type(object_type: str) -> str:
    """Extract the coin type parameter from e.g. ``…::CoinLock<0x2::sui::SUI>``."""
    try:
        params = type_arguments(object_type)
    except ValidationError:
        return ""
    return params[0] if params else ""


# ---------------------------------------------------------------------------
# Locks
# ---------------------------------------------------------------------------


def parse_coin_lock(response: dict[str, Any] | None) -> CoinLock | None:
    """Parse a CoinLock object; None on missing object or shape mismatch."""
    data = object_data(response)
    fields = object_fields(response)
    if data is None or fields is None:
        return None

    try:
        return CoinLock(
            id=normalize_address(data.get("objectId") or _uid(fields.get("id")) or ""),
            owner=normalize_address(fields["owner"]),
            locked_amount=to_int(fields["locked_amount"]),
            lock_timestamp=to_int(_first(fields, "lock_timestamp", "lock_ts")),
            unlock_timestamp=to_int(_first(fields, "unlock_timestamp", "unlock_ts")),
            claimed=bool(fields.get("claimed", False)),
            coin_type=coin_type_from_object_type(data.get("type", "")),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.debug("Object is not a CoinLock: %s", e)
        return None


def can_unlock(lock: CoinLock | LockInfo | None, now: int) -> bool:
    """Read-side mirror of the contract's unlock check.

    True iff ``now >= unlock_timestamp`` and the lock is not claimed; a
    missing lock is never unlockable.
    """
    if lock is None:
        return False
    return now >= lock.unlock_timestamp and not lock.claimed


def to_lock_info(lock: CoinLock, now: int) -> LockInfo:
    return LockInfo(
        lock_id=lock.id,
        owner=lock.owner,
        locked_amount=lock.locked_amount,
        lock_timestamp=lock.lock_timestamp,
        unlock_timestamp=lock.unlock_timestamp,
        claimed=lock.claimed,
        can_unlock=can_unlock(lock, now),
    )


def parse_lock_info(response: dict[str, Any] | None, now: int) -> LockInfo | None:
    """Parse a CoinLock object straight into a LockInfo as of ``now``."""
    lock = parse_coin_lock(response)
    if lock is None:
        return None
    return to_lock_info(lock, now)


# ---------------------------------------------------------------------------
# Certificates
# ---------------------------------------------------------------------------


def parse_certificate(response: dict[str, Any] | None) -> LockCertificate | None:
    """Parse a LockCertificate object; None on missing object or shape mismatch."""
    data = object_data(response)
    fields = object_fields(response)
    if data is None or fields is None:
        return None

    try:
        return LockCertificate(
            id=normalize_address(data.get("objectId") or _uid(fields.get("id")) or ""),
            lock_id=normalize_address(_uid(fields["lock_id"]) or ""),
            coin_type=parse_type_name(fields["coin_type"]),
            owner=normalize_address(fields["owner"]),
            amount=to_int(fields["amount"]),
            unlock_timestamp=to_int(_first(fields, "unlock_timestamp", "unlock_ts")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.debug("Object is not a LockCertificate: %s", e)
        return None


def parse_certificates(
    responses: Iterable[dict[str, Any] | None],
) -> list[LockCertificate]:
    """Parse many certificate objects, dropping anything that doesn't match."""
    certificates: list[LockCertificate] = []
    for response in responses:
        cert = parse_certificate(response)
        if cert is not None:
            certificates.append(cert)
    return certificates


# ---------------------------------------------------------------------------
# Registry and its tables
# ---------------------------------------------------------------------------


def _table_id(value: Any) -> str:
    if isinstance(value, dict):
        return _uid(value.get("fields", {}).get("id")) or ""
    return ""


def parse_registry(
    response: dict[str, Any] | None, registry_id: str
) -> LockerRegistry | None:
    """Parse the LockerRegistry singleton without resolving its tables."""
    fields = object_fields(response)
    if fields is None:
        return None

    return LockerRegistry(
        id=registry_id,
        paused=bool(fields.get("paused") or False),
        admin=fields.get("admin") or "",
        total_locked_table_id=_table_id(fields.get("total_locked")),
        user_locks_table_id=_table_id(fields.get("user_locks")),
    )


def parse_total_locked_entry(
    response: dict[str, Any] | None,
) -> tuple[str, int] | None:
    """Parse one ``Field<TypeName, u64>`` of the total_locked table.

    The TypeName comes back without the ``0x`` prefix; the key is normalized
    so lookups with any spelling of the coin type hit the same entry.
    """
    fields = object_fields(response)
    if not fields:
        return None
    name = fields.get("name")
    value = fields.get("value")
    if not isinstance(name, dict) or value is None:
        return None
    try:
        return parse_type_name(name), to_int(value)
    except (ValueError, TypeError, AttributeError) as e:
        logger.debug("Skipping malformed total_locked entry: %s", e)
        return None


def parse_user_lock_entry(
    response: dict[str, Any] | None,
) -> UserLockSummary | None:
    """Parse one ``Field<address, UserLockInfo>`` of the user_locks table."""
    fields = object_fields(response)
    if not fields:
        # suix_getDynamicFieldObject returns the data block directly
        content = (response or {}).get("content")
        if isinstance(content, dict):
            fields = content.get("fields")
    if not isinstance(fields, dict):
        return None

    name = fields.get("name")
    value = fields.get("value")
    if not isinstance(name, str) or not isinstance(value, dict):
        return None
    info = value.get("fields", value)
    try:
        details = info.get("details_list") or []
        return UserLockSummary(
            address=normalize_address(name),
            total_locked_amount=to_int(info.get("total_locked_amount", 0)),
            lock_count=len(details) if isinstance(details, list) else 0,
        )
    except (ValueError, TypeError) as e:
        logger.debug("Skipping malformed user_locks entry: %s", e)
        return None


# ---------------------------------------------------------------------------
# Execution errors
# ---------------------------------------------------------------------------


def explain_abort(error: str | None) -> str | None:
    """Map a coin_locker MoveAbort in an execution error to a readable message."""
    if not error:
        return None
    match = _ABORT_RE.search(error)
    if not match:
        return None
    code = int(match.group(1))
    return ABORT_MESSAGES.get(code, f"coin_locker abort code {code}")
