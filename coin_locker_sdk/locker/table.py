"""Paginated walks over on-chain ``Table`` dynamic fields."""
from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from ..errors import QueryError
from ..interfaces.chain import ChainClient
from ..models import UserLockSummary
from .parser import parse_total_locked_entry, parse_user_lock_entry

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


async def iter_table_objects(
    client: ChainClient, table_id: str, page_size: int = DEFAULT_PAGE_SIZE
) -> AsyncIterator[dict[str, Any]]:
    """Yield the full field object of every entry in a table.

    Pages are requested one after another; each cursor comes from the
    previous response. Stops on ``hasNextPage == False``, a missing cursor,
    or an empty page. Any remote failure is raised as :class:`QueryError`.
    """
    if not table_id:
        raise QueryError("Table id is empty")

    cursor: str | None = None
    pages = 0
    while True:
        try:
            page = await client.get_dynamic_fields(table_id, cursor, page_size)
        except Exception as e:
            raise QueryError(f"Failed to list fields of table {table_id}: {e}") from e

        field_ids = [
            item["objectId"] for item in page.get("data", []) if item.get("objectId")
        ]
        pages += 1
        if not field_ids:
            break

        try:
            objects = await client.multi_get_objects(
                field_ids, {"showContent": True}
            )
        except Exception as e:
            raise QueryError(f"Failed to fetch fields of table {table_id}: {e}") from e

        for obj in objects:
            yield obj

        cursor = page.get("nextCursor")
        if not page.get("hasNextPage") or not cursor:
            break

    logger.debug("Walked table %s in %d page(s)", table_id, pages)


async def aggregate_total_locked(
    client: ChainClient, table_id: str, page_size: int = DEFAULT_PAGE_SIZE
) -> dict[str, int]:
    """Resolve the registry's ``Table<TypeName, u64>`` into ``coin_type -> amount``.

    Keys are normalized coin types. Malformed entries are skipped; when the
    same coin type appears more than once the last value seen wins.
    """
    totals: dict[str, int] = {}
    skipped = 0
    async for obj in iter_table_objects(client, table_id, page_size):
        entry = parse_total_locked_entry(obj)
        if entry is None:
            skipped += 1
            continue
        coin_type, amount = entry
        totals[coin_type] = amount

    if skipped:
        logger.debug("Skipped %d malformed total_locked entries", skipped)
    return totals


async def aggregate_user_locks(
    client: ChainClient, table_id: str, page_size: int = DEFAULT_PAGE_SIZE
) -> dict[str, UserLockSummary]:
    """Resolve the registry's ``Table<address, UserLockInfo>``."""
    summaries: dict[str, UserLockSummary] = {}
    async for obj in iter_table_objects(client, table_id, page_size):
        summary = parse_user_lock_entry(obj)
        if summary is not None:
            summaries[summary.address] = summary
    return summaries
