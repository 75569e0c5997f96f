"""Chain client protocol over Sui JSON-RPC abstraction."""
from typing import Any, Protocol


class ChainClient(Protocol):
    """Abstract interface for the read and submit calls the SDK needs."""

    async def get_object(self, object_id: str) -> dict[str, Any]: ...

    async def multi_get_objects(
        self, object_ids: list[str], options: dict[str, bool] | None = None
    ) -> list[dict[str, Any]]: ...

    async def get_owned_objects(
        self, owner: str, struct_type: str | None = None
    ) -> list[dict[str, Any]]: ...

    async def get_dynamic_fields(
        self, parent_id: str, cursor: str | None = None, limit: int | None = None
    ) -> dict[str, Any]: ...

    async def get_dynamic_field_object(
        self, parent_id: str, key_type: str, key_value: Any
    ) -> dict[str, Any]: ...

    async def get_coins(
        self,
        owner: str,
        coin_type: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]: ...

    async def get_balance(self, owner: str, coin_type: str) -> dict[str, Any]: ...

    async def get_reference_gas_price(self) -> int: ...

    async def dev_inspect_transaction_block(
        self, sender: str, tx_kind_b64: str
    ) -> dict[str, Any]: ...

    async def execute_transaction_block(
        self, tx_bytes_b64: str, signatures: list[str]
    ) -> dict[str, Any]: ...
