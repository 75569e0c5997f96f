"""SDK context: one chain client, the deployment ids and the three modules.

Example::

    sdk = LockerSDK(load_config("config.yaml"))
    built = sdk.lock.build_lock_coins_transaction(
        LockCoinsParams(
            coin_type="0x2::sui::SUI",
            coins=["0x..."],
            amount=1_000_000_000,
            lock_duration=86_400,
            recipient=signer.address,
        )
    )
    result = await sdk.execute(built.transaction, signer)
"""
from __future__ import annotations

import logging
from typing import Any

from .chains.sui import SuiClient
from .config import AppConfig
from .interfaces.chain import ChainClient
from .interfaces.signer import Signer
from .locker import AdminModule, LockModule, QueryModule
from .locker.parser import explain_abort
from .models import InspectResult, TransactionResult
from .transactions.transaction import Transaction, to_base64

logger = logging.getLogger(__name__)


def _status(effects: dict[str, Any]) -> tuple[str, str | None]:
    status = effects.get("status") or {}
    error = status.get("error")
    return status.get("status", ""), explain_abort(error) or error


class LockerSDK:
    """Explicitly constructed entry point; nothing is global."""

    def __init__(self, config: AppConfig, client: ChainClient | None = None) -> None:
        self.config = config
        self._client: ChainClient = client if client is not None else SuiClient(config.chain)

        locker = config.locker
        self.lock = LockModule(
            self._client,
            locker.package_id,
            locker.registry_id,
            locker.strict,
            clock_id=locker.clock_id,
        )
        self.query = QueryModule(
            self._client,
            locker.package_id,
            locker.registry_id,
            strict=locker.strict,
            page_size=locker.page_size,
        )
        self.admin = AdminModule(
            self._client, locker.package_id, locker.registry_id, locker.strict
        )

    def get_client(self) -> ChainClient:
        return self._client

    @property
    def package_id(self) -> str:
        return self.lock.package_id

    @property
    def registry_id(self) -> str:
        return self.lock.registry_id

    def create_transaction(self) -> Transaction:
        return Transaction()

    async def dev_inspect(self, tx: Transaction, sender: str) -> InspectResult:
        """Simulate ``tx`` as ``sender``. Nothing is committed and no gas is paid."""
        tx_kind = await tx.build_kind(self._client)
        response = await self._client.dev_inspect_transaction_block(
            sender, to_base64(tx_kind)
        )
        status, error = _status(response.get("effects") or {})
        return InspectResult(
            status=status,
            error=response.get("error") or error,
            events=tuple(response.get("events") or ()),
            results=tuple(response.get("results") or ()),
        )

    async def execute(
        self, tx: Transaction, signer: Signer, gas_budget: int | None = None
    ) -> TransactionResult:
        """Build, sign and submit ``tx``. Errors propagate to the caller."""
        budget = gas_budget if gas_budget is not None else self.config.locker.gas_budget
        tx_bytes = await tx.build(self._client, signer.address, budget)
        signature = await signer.sign_transaction(tx_bytes)

        response = await self._client.execute_transaction_block(
            to_base64(tx_bytes), [signature]
        )
        effects = response.get("effects") or {}
        status, error = _status(effects)
        result = TransactionResult(
            digest=response.get("digest", ""),
            status=status,
            error=error,
            effects=effects,
            events=tuple(response.get("events") or ()),
            object_changes=tuple(response.get("objectChanges") or ()),
        )
        if result.succeeded:
            logger.info("Transaction %s executed", result.digest)
        else:
            logger.warning("Transaction %s failed: %s", result.digest, result.error)
        return result
