"""Integration tests for paginated table aggregation with a mocked chain client."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from coin_locker_sdk.errors import QueryError, RpcError
from coin_locker_sdk.locker.table import (
    aggregate_total_locked,
    aggregate_user_locks,
    iter_table_objects,
)
from conftest import OWNER, SUI, TOTAL_LOCKED_TABLE, USDC, fields_page, total_locked_field, user_lock_field

SUI_NAME = SUI[2:]


def _serve(client: AsyncMock, pages: list[dict], objects: dict[str, dict]) -> None:
    """Serve ``pages`` in order and resolve field ids from ``objects``."""
    client.get_dynamic_fields.side_effect = pages

    async def multi_get(ids, options=None):
        return [objects[i] for i in ids]

    client.multi_get_objects.side_effect = multi_get


class TestIterTableObjects:
    @pytest.mark.asyncio
    async def test_empty_table(self, mock_chain_client: AsyncMock) -> None:
        _serve(mock_chain_client, [fields_page([])], {})
        result = await aggregate_total_locked(mock_chain_client, TOTAL_LOCKED_TABLE)
        assert result == {}
        mock_chain_client.multi_get_objects.assert_not_called()

    @pytest.mark.asyncio
    async def test_follows_cursor(self, mock_chain_client: AsyncMock) -> None:
        objects = {
            "0xa": total_locked_field("0xa", SUI_NAME, "1"),
            "0xb": total_locked_field("0xb", USDC, "2"),
        }
        _serve(
            mock_chain_client,
            [fields_page(["0xa"], "c1", True), fields_page(["0xb"])],
            objects,
        )

        seen = [obj async for obj in iter_table_objects(mock_chain_client, "0xt", 1)]

        assert len(seen) == 2
        calls = mock_chain_client.get_dynamic_fields.call_args_list
        assert [c.args for c in calls] == [("0xt", None, 1), ("0xt", "c1", 1)]

    @pytest.mark.asyncio
    async def test_stops_on_missing_cursor(self, mock_chain_client: AsyncMock) -> None:
        objects = {"0xa": total_locked_field("0xa", SUI_NAME, "1")}
        _serve(mock_chain_client, [fields_page(["0xa"], None, True)], objects)

        result = await aggregate_total_locked(mock_chain_client, "0xt")

        assert result == {SUI: 1}
        assert mock_chain_client.get_dynamic_fields.call_count == 1

    @pytest.mark.asyncio
    async def test_empty_table_id(self, mock_chain_client: AsyncMock) -> None:
        with pytest.raises(QueryError, match="empty"):
            await aggregate_total_locked(mock_chain_client, "")

    @pytest.mark.asyncio
    async def test_remote_error_becomes_query_error(self, mock_chain_client: AsyncMock) -> None:
        mock_chain_client.get_dynamic_fields.side_effect = RpcError("down")
        with pytest.raises(QueryError, match="down"):
            await aggregate_total_locked(mock_chain_client, "0xt")


class TestAggregateTotalLocked:
    @pytest.mark.asyncio
    async def test_duplicates_across_pages_last_wins(self, mock_chain_client: AsyncMock) -> None:
        objects = {
            "0xa": total_locked_field("0xa", SUI_NAME, "100"),
            "0xb": total_locked_field("0xb", "0x2::sui::SUI", "250"),
        }
        _serve(
            mock_chain_client,
            [fields_page(["0xa"], "c1", True), fields_page(["0xb"])],
            objects,
        )

        result = await aggregate_total_locked(mock_chain_client, "0xt")

        assert result == {SUI: 250}

    @pytest.mark.asyncio
    async def test_malformed_entries_skipped(self, mock_chain_client: AsyncMock) -> None:
        objects = {
            "0xa": total_locked_field("0xa", SUI_NAME, "100"),
            "0xb": total_locked_field("0xb", USDC, "not a number"),
            "0xc": {"error": {"code": "deleted"}},
        }
        _serve(mock_chain_client, [fields_page(["0xa", "0xb", "0xc"])], objects)

        result = await aggregate_total_locked(mock_chain_client, "0xt")

        assert result == {SUI: 100}

    @pytest.mark.asyncio
    async def test_values_are_ints(self, mock_chain_client: AsyncMock) -> None:
        objects = {"0xa": total_locked_field("0xa", SUI_NAME, str(2**64 - 1))}
        _serve(mock_chain_client, [fields_page(["0xa"])], objects)

        result = await aggregate_total_locked(mock_chain_client, "0xt")

        assert result[SUI] == 2**64 - 1


class TestAggregateUserLocks:
    @pytest.mark.asyncio
    async def test_keyed_by_address(self, mock_chain_client: AsyncMock) -> None:
        objects = {"0xa": user_lock_field("0xa", OWNER, "42", locks=3)}
        _serve(mock_chain_client, [fields_page(["0xa"])], objects)

        result = await aggregate_user_locks(mock_chain_client, "0xt")

        assert list(result) == [OWNER]
        assert result[OWNER].total_locked_amount == 42
        assert result[OWNER].lock_count == 3
