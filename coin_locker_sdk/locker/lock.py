"""Lock, unlock and certificate-transfer transactions."""
from __future__ import annotations

import logging

from ..constants import SUI_CLOCK_ID
from ..interfaces.chain import ChainClient
from ..transactions.transaction import Transaction
from ..transactions.type_tags import normalize_coin_type
from .base import LockerModule
from .builders import (
    LockCoinsParams,
    LockTransaction,
    TransferCertificateParams,
    UnlockCoinsParams,
    build_lock_transaction,
    build_transfer_certificate_transaction,
    build_unlock_transaction,
)
from .parser import to_int

logger = logging.getLogger(__name__)


class LockModule(LockerModule):
    """Build lock/unlock/transfer transactions and look up coins to lock."""

    def __init__(
        self,
        client: ChainClient,
        package_id: str,
        registry_id: str,
        strict: bool = False,
        clock_id: str = SUI_CLOCK_ID,
    ) -> None:
        super().__init__(client, package_id, registry_id, strict)
        self._clock_id = clock_id

    def build_lock_coins_transaction(self, params: LockCoinsParams) -> LockTransaction:
        """Lock coins for a duration; the returned certificate must be transferred."""
        built = build_lock_transaction(
            self._package_id, self._registry_id, params, self._clock_id
        )
        logger.debug(
            "Built lock_coins: %s x %d for %ds from %d coin(s)",
            built.coin_type, built.amount, built.lock_duration, len(built.coins),
        )
        return built

    def build_unlock_coins_transaction(self, params: UnlockCoinsParams) -> Transaction:
        return build_unlock_transaction(
            self._package_id, self._registry_id, params, self._clock_id
        )

    def build_transfer_certificate_transaction(
        self, params: TransferCertificateParams
    ) -> Transaction:
        return build_transfer_certificate_transaction(self._package_id, params)

    async def get_coins_for_address(
        self, owner: str, coin_type: str, limit: int = 50
    ) -> list[str]:
        """Object ids of ``owner``'s coins of ``coin_type`` with a non-zero balance."""
        coin_type = normalize_coin_type(coin_type)
        try:
            page = await self._client.get_coins(owner, coin_type, None, limit)
        except Exception as e:
            return self._fail(f"fetching {coin_type} coins for {owner}", e, [])

        coin_ids: list[str] = []
        for coin in page.get("data", []):
            try:
                if to_int(coin.get("balance", 0)) > 0:
                    coin_ids.append(coin["coinObjectId"])
            except (KeyError, ValueError):
                continue
        return coin_ids

    async def get_total_balance(self, owner: str, coin_type: str) -> int:
        """Total balance of ``coin_type`` held by ``owner``."""
        coin_type = normalize_coin_type(coin_type)
        try:
            result = await self._client.get_balance(owner, coin_type)
            return to_int(result.get("totalBalance", 0))
        except Exception as e:
            return self._fail(f"fetching {coin_type} balance for {owner}", e, 0)
