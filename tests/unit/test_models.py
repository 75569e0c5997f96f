"""Unit tests for data models."""
from __future__ import annotations

import pytest

from coin_locker_sdk.models import (
    CoinLock,
    LockerRegistry,
    TransactionResult,
    UserLocksInfo,
)


class TestCoinLock:
    def test_frozen(self) -> None:
        lock = CoinLock("0x1", "0x2", 10, 0, 100, False)
        with pytest.raises(AttributeError):
            lock.claimed = True  # type: ignore[misc]

    def test_equality(self) -> None:
        assert CoinLock("0x1", "0x2", 10, 0, 100, False) == CoinLock(
            "0x1", "0x2", 10, 0, 100, False
        )

    def test_amounts_are_arbitrary_precision(self) -> None:
        lock = CoinLock("0x1", "0x2", 2**128, 0, 100, False)
        assert lock.locked_amount + 1 == 2**128 + 1


class TestLockerRegistry:
    def test_defaults(self) -> None:
        registry = LockerRegistry(id="0x1", paused=False, admin="0x2")
        assert registry.total_locked == {}
        assert registry.user_locks == {}
        assert registry.total_locked_table_id == ""

    def test_default_maps_are_not_shared(self) -> None:
        a = LockerRegistry(id="0x1", paused=False, admin="0x2")
        b = LockerRegistry(id="0x1", paused=False, admin="0x2")
        assert a.total_locked is not b.total_locked


class TestUserLocksInfo:
    def test_empty(self) -> None:
        info = UserLocksInfo(user="0x1")
        assert info.locks == ()
        assert info.total_locked_amount == 0


class TestTransactionResult:
    def test_succeeded(self) -> None:
        assert TransactionResult(digest="abc", status="success").succeeded

    def test_failed(self) -> None:
        result = TransactionResult(digest="abc", status="failure", error="boom")
        assert not result.succeeded
        assert result.events == ()
