"""SUI RPC client with fallback support."""
import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import ChainConfig, resolve_endpoints
from ...errors import RpcError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class SuiClient:
    """SUI blockchain RPC client with automatic endpoint fallback.

    Errors are not swallowed here: every method raises :class:`RpcError`
    when no endpoint answers, and callers decide on defaults.
    """

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(resolve_endpoints(config.network, config.rpc_endpoints))
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json()
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed (%s): %s", rpc_url, method, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index

            # The node answered; its error replies are final.
            if "error" in result:
                raise RpcError(f"RPC Error: {result['error']}")
            return result.get("result", {})

        raise RpcError(f"All RPC endpoints failed. Last error: {last_error}")

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    async def get_object(self, object_id: str) -> dict[str, Any]:
        """Get detailed information about an object."""
        return await self.rpc_call(
            "sui_getObject",
            [
                object_id,
                {"showType": True, "showContent": True, "showOwner": True},
            ],
        )

    async def multi_get_objects(
        self, object_ids: list[str], options: dict[str, bool] | None = None
    ) -> list[dict[str, Any]]:
        """Get several objects in one round trip, in request order."""
        if not object_ids:
            return []
        if options is None:
            options = {"showType": True, "showContent": True, "showOwner": True}
        result = await self.rpc_call("sui_multiGetObjects", [object_ids, options])
        return result or []

    async def get_owned_objects(
        self, owner: str, struct_type: str | None = None
    ) -> list[dict[str, Any]]:
        """Get all objects owned by an address (paginated)."""
        all_objects: list[dict[str, Any]] = []
        cursor = None
        query_filter = {"StructType": struct_type} if struct_type else None

        while True:
            result = await self.rpc_call(
                "suix_getOwnedObjects",
                [
                    owner,
                    {
                        "filter": query_filter,
                        "options": {
                            "showType": True,
                            "showContent": True,
                            "showOwner": True,
                        },
                    },
                    cursor,
                    DEFAULT_PAGE_SIZE,
                ],
            )

            data = result.get("data", [])
            all_objects.extend(data)

            cursor = result.get("nextCursor")
            has_next = result.get("hasNextPage", False)

            if not has_next or not cursor:
                break

        return all_objects

    # ------------------------------------------------------------------
    # Dynamic fields
    # ------------------------------------------------------------------

    async def get_dynamic_fields(
        self, parent_id: str, cursor: str | None = None, limit: int | None = None
    ) -> dict[str, Any]:
        """Get one page of dynamic fields of an object.

        Returns the raw page: ``{"data": [...], "nextCursor": ..., "hasNextPage": ...}``.
        """
        return await self.rpc_call(
            "suix_getDynamicFields", [parent_id, cursor, limit]
        )

    async def get_dynamic_field_object(
        self, parent_id: str, key_type: str, key_value: Any
    ) -> dict[str, Any]:
        """Get a specific dynamic field object."""
        result = await self.rpc_call(
            "suix_getDynamicFieldObject",
            [parent_id, {"type": key_type, "value": key_value}],
        )
        return result.get("data") or {}

    # ------------------------------------------------------------------
    # Coins and gas
    # ------------------------------------------------------------------

    async def get_coins(
        self,
        owner: str,
        coin_type: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Get one page of coin objects of ``coin_type`` owned by ``owner``."""
        return await self.rpc_call(
            "suix_getCoins", [owner, coin_type, cursor, limit]
        )

    async def get_balance(self, owner: str, coin_type: str) -> dict[str, Any]:
        return await self.rpc_call("suix_getBalance", [owner, coin_type])

    async def get_reference_gas_price(self) -> int:
        return int(await self.rpc_call("suix_getReferenceGasPrice", []))

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def dev_inspect_transaction_block(
        self, sender: str, tx_kind_b64: str
    ) -> dict[str, Any]:
        """Simulate a transaction kind without committing it."""
        return await self.rpc_call(
            "sui_devInspectTransactionBlock", [sender, tx_kind_b64, None, None]
        )

    async def execute_transaction_block(
        self, tx_bytes_b64: str, signatures: list[str]
    ) -> dict[str, Any]:
        """Submit signed transaction bytes and wait for local execution."""
        return await self.rpc_call(
            "sui_executeTransactionBlock",
            [
                tx_bytes_b64,
                signatures,
                {
                    "showEffects": True,
                    "showEvents": True,
                    "showObjectChanges": True,
                },
                "WaitForLocalExecution",
            ],
        )
