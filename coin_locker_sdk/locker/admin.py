"""Admin-only transactions and registry status checks."""
from __future__ import annotations

import logging

from ..errors import ValidationError
from ..transactions.transaction import Transaction
from ..transactions.type_tags import normalize_address
from . import parser
from .base import LockerModule
from .builders import (
    SetPausedParams,
    TransferAdminParams,
    build_set_paused_transaction,
    build_transfer_admin_transaction,
)

logger = logging.getLogger(__name__)


class AdminModule(LockerModule):
    """Pause control and admin hand-over. Only the current admin can execute these."""

    def build_set_paused_transaction(self, params: SetPausedParams) -> Transaction:
        return build_set_paused_transaction(self._package_id, self._registry_id, params)

    def build_transfer_admin_transaction(self, params: TransferAdminParams) -> Transaction:
        return build_transfer_admin_transaction(
            self._package_id, self._registry_id, params
        )

    async def _registry_fields(self) -> dict | None:
        response = await self._client.get_object(self._registry_id)
        return parser.object_fields(response)

    async def get_admin(self) -> str | None:
        """Current admin address, or None when the registry can't be read."""
        try:
            fields = await self._registry_fields()
        except Exception as e:
            return self._fail("fetching admin address", e, None)
        if not fields or not fields.get("admin"):
            return None
        return normalize_address(fields["admin"])

    async def is_admin(self, address: str) -> bool:
        try:
            candidate = normalize_address(address)
        except ValidationError:
            return False
        return await self.get_admin() == candidate

    async def is_paused(self) -> bool:
        try:
            fields = await self._registry_fields()
        except Exception as e:
            return self._fail("checking pause status", e, False)
        return bool(fields and fields.get("paused"))
