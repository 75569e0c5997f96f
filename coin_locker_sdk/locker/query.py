"""Read-only queries against coin_locker state.

Remote failures are logged and turned into a safe default (``None``, ``[]``,
``"0"``, ``False`` or an empty :class:`UserLocksInfo`). Construct the module
with ``strict=True`` to get a :class:`~coin_locker_sdk.errors.QueryError`
instead, when "nothing there" and "could not ask" must be told apart.
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable

from ..constants import LOCK_CERTIFICATE_STRUCT, MODULE_NAME
from ..errors import QueryError
from ..interfaces.chain import ChainClient
from ..models import (
    CoinLock,
    LockCertificate,
    LockerRegistry,
    LockInfo,
    UserLocksInfo,
    UserLockSummary,
)
from ..transactions.transaction import to_base64
from ..transactions.type_tags import normalize_address, normalize_coin_type
from . import parser
from .base import LockerModule
from .builders import build_user_locks_view_transaction
from .events import parse_user_locks_event
from .table import DEFAULT_PAGE_SIZE, aggregate_total_locked, aggregate_user_locks

logger = logging.getLogger(__name__)


class QueryModule(LockerModule):
    """Typed views over locks, certificates and the registry."""

    def __init__(
        self,
        client: ChainClient,
        package_id: str,
        registry_id: str,
        strict: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(client, package_id, registry_id, strict)
        self._page_size = page_size
        self._time_source = time_source

    def _now(self) -> int:
        return int(self._time_source())

    # ------------------------------------------------------------------
    # Locks
    # ------------------------------------------------------------------

    async def get_coin_lock(self, lock_id: str) -> CoinLock | None:
        """Fetch a CoinLock snapshot; None if missing or not a CoinLock."""
        try:
            response = await self._client.get_object(lock_id)
        except Exception as e:
            return self._fail(f"fetching lock {lock_id}", e, None)

        lock = parser.parse_coin_lock(response)
        if lock is None:
            logger.info("No CoinLock found at %s", lock_id)
        return lock

    async def get_lock_info(self, lock_id: str) -> LockInfo | None:
        """Lock details plus whether it can be unlocked right now."""
        lock = await self.get_coin_lock(lock_id)
        if lock is None:
            return None
        return parser.to_lock_info(lock, self._now())

    async def can_unlock(self, lock_id: str) -> bool:
        """Courtesy pre-check; the contract makes the real decision on unlock."""
        lock = await self.get_coin_lock(lock_id)
        return parser.can_unlock(lock, self._now())

    async def get_user_locks(self, user: str) -> UserLocksInfo:
        """All locks of ``user``, harvested from a simulated emit_user_locks_view."""
        tx = build_user_locks_view_transaction(
            self._package_id, self._registry_id, user
        )
        try:
            tx_kind = await tx.build_kind(self._client)
            result = await self._client.dev_inspect_transaction_block(
                user, to_base64(tx_kind)
            )
            if result.get("error"):
                raise QueryError(f"emit_user_locks_view failed: {result['error']}")
            return parse_user_locks_event(user, result.get("events") or [])
        except Exception as e:
            return self._fail(f"fetching locks of {user}", e, UserLocksInfo(user=user))

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    async def _fetch_registry(self) -> LockerRegistry:
        response = await self._client.get_object(self._registry_id)
        registry = parser.parse_registry(response, self._registry_id)
        if registry is None:
            raise QueryError(f"Registry {self._registry_id} not found")
        return registry

    async def get_total_locked_map(self) -> dict[str, int]:
        """Every coin type's total locked amount, keyed by normalized coin type."""
        try:
            registry = await self._fetch_registry()
            return await aggregate_total_locked(
                self._client, registry.total_locked_table_id, self._page_size
            )
        except Exception as e:
            return self._fail("fetching total locked amounts", e, {})

    async def get_total_locked(self, coin_type: str) -> str:
        """Total locked amount of one coin type as a decimal string; ``"0"`` if absent."""
        normalized = normalize_coin_type(coin_type)
        totals = await self.get_total_locked_map()
        return str(totals.get(normalized, 0))

    async def get_user_lock_summary(self, address: str) -> UserLockSummary | None:
        """The registry's aggregate entry for one address, if any."""
        address = normalize_address(address)
        try:
            registry = await self._fetch_registry()
            response = await self._client.get_dynamic_field_object(
                registry.user_locks_table_id, "address", address
            )
        except Exception as e:
            return self._fail(f"fetching lock summary of {address}", e, None)
        return parser.parse_user_lock_entry(response)

    # ------------------------------------------------------------------
    # Certificates
    # ------------------------------------------------------------------

    def certificate_struct_type(self) -> str:
        return f"{self._package_id}::{MODULE_NAME}::{LOCK_CERTIFICATE_STRUCT}"

    async def get_user_certificates(self, owner: str) -> list[LockCertificate]:
        """Every LockCertificate owned by ``owner``."""
        try:
            objects = await self._client.get_owned_objects(
                owner, self.certificate_struct_type()
            )
        except Exception as e:
            return self._fail(f"fetching certificates of {owner}", e, [])
        return parser.parse_certificates(objects)

    async def get_certificates_by_id(
        self, certificate_ids: list[str]
    ) -> list[LockCertificate]:
        """Fetch certificates by id; ids that are not certificates are dropped."""
        if not certificate_ids:
            return []
        try:
            objects = await self._client.multi_get_objects(
                certificate_ids, {"showContent": True, "showType": True}
            )
        except Exception as e:
            return self._fail("fetching certificates", e, [])
        return parser.parse_certificates(objects)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    async def get_registry_info(self, resolve_tables: bool = False) -> LockerRegistry | None:
        """Registry pause/admin state; optionally with both tables resolved."""
        try:
            registry = await self._fetch_registry()
            if not resolve_tables:
                return registry
            total_locked = await aggregate_total_locked(
                self._client, registry.total_locked_table_id, self._page_size
            )
            user_locks = await aggregate_user_locks(
                self._client, registry.user_locks_table_id, self._page_size
            )
        except Exception as e:
            return self._fail("fetching registry info", e, None)

        return replace(registry, total_locked=total_locked, user_locks=user_locks)
