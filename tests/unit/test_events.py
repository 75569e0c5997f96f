"""Unit tests for coin_locker event parsing."""
from __future__ import annotations

import pytest

from coin_locker_sdk.locker import events
from coin_locker_sdk.models import UserLock
from conftest import LOCK_ID, OWNER, PACKAGE_ID, SUI

LOCKED_TYPE = f"{PACKAGE_ID}::coin_locker::CoinLockedEvent"
UNLOCKED_TYPE = f"{PACKAGE_ID}::coin_locker::CoinUnlockedEvent"
VIEW_TYPE = f"{PACKAGE_ID}::coin_locker::UserLocksViewEvent"


def _locked_event(**overrides) -> dict:
    payload = {
        "lock_id": LOCK_ID,
        "owner": OWNER,
        "coin_type": {"name": SUI[2:]},
        "amount": "1000",
        "lock_timestamp": "1700000000",
        "unlock_timestamp": "1700086400",
    }
    payload.update(overrides)
    return {"type": LOCKED_TYPE, "parsedJson": payload}


class TestRecognition:
    def test_event_name(self) -> None:
        assert events.event_name({"type": LOCKED_TYPE}) == "CoinLockedEvent"

    def test_generic_event_name(self) -> None:
        assert events.event_name({"type": f"{PACKAGE_ID}::m::Ev<0x2::sui::SUI>"}) == "Ev"

    def test_predicates(self) -> None:
        assert events.is_coin_locked_event({"type": LOCKED_TYPE})
        assert events.is_coin_unlocked_event({"type": UNLOCKED_TYPE})
        assert events.is_user_locks_view_event({"type": VIEW_TYPE})
        assert not events.is_coin_locked_event({"type": UNLOCKED_TYPE})
        assert not events.is_coin_locked_event({})


class TestCoinEvents:
    def test_locked(self) -> None:
        event = events.parse_coin_locked_event(_locked_event())
        assert event.lock_id == LOCK_ID
        assert event.coin_type == SUI
        assert event.amount == 1000
        assert event.unlock_timestamp == 1700086400

    def test_locked_short_field_names(self) -> None:
        raw = _locked_event()
        payload = raw["parsedJson"]
        payload["lock_ts"] = payload.pop("lock_timestamp")
        payload["unlock_ts"] = payload.pop("unlock_timestamp")
        event = events.parse_coin_locked_event(raw)
        assert (event.lock_timestamp, event.unlock_timestamp) == (1700000000, 1700086400)

    def test_unlocked(self) -> None:
        raw = {
            "type": UNLOCKED_TYPE,
            "parsedJson": {
                "lock_id": LOCK_ID,
                "owner": OWNER,
                "coin_type": {"name": SUI[2:]},
                "amount": "1000",
                "unlock_timestamp": "1700086400",
            },
        }
        event = events.parse_coin_unlocked_event(raw)
        assert event.owner == OWNER
        assert event.amount == 1000

    def test_missing_payload_raises(self) -> None:
        with pytest.raises(ValueError, match="no parsedJson"):
            events.parse_coin_locked_event({"type": LOCKED_TYPE})

    def test_filters(self) -> None:
        mixed = [_locked_event(), {"type": VIEW_TYPE, "parsedJson": {}}]
        assert len(events.locked_events(mixed)) == 1
        assert events.unlocked_events(mixed) == []


class TestUserLocksEvent:
    def test_no_event_means_no_locks(self) -> None:
        info = events.parse_user_locks_event(OWNER, [_locked_event()])
        assert info.user == OWNER
        assert info.locks == ()
        assert info.total_locked_amount == 0

    def test_parses_vectors(self) -> None:
        view = {
            "type": VIEW_TYPE,
            "parsedJson": {
                "user": OWNER,
                "amounts": ["10", "18446744073709551615"],
                "lock_timestamps": ["1", "2"],
                "unlock_timestamps": ["100", "200"],
                "lock_ids": [LOCK_ID],
            },
        }
        info = events.parse_user_locks_event(OWNER, [_locked_event(), view])
        assert info.locks == (
            UserLock(amount=10, lock_timestamp=1, unlock_timestamp=100, lock_id=LOCK_ID),
            UserLock(amount=2**64 - 1, lock_timestamp=2, unlock_timestamp=200),
        )
        assert info.total_locked_amount == 2**64 + 9

    def test_short_vector_names(self) -> None:
        view = {
            "type": VIEW_TYPE,
            "parsedJson": {"amounts": ["5"], "lock_tss": ["1"], "unlock_tss": ["2"]},
        }
        info = events.parse_user_locks_event(OWNER, [view])
        assert info.locks[0].unlock_timestamp == 2

    def test_mismatched_vectors_raise(self) -> None:
        view = {
            "type": VIEW_TYPE,
            "parsedJson": {
                "amounts": ["1", "2"],
                "lock_timestamps": ["1"],
                "unlock_timestamps": ["1", "2"],
            },
        }
        with pytest.raises(ValueError, match="mismatched"):
            events.parse_user_locks_event(OWNER, [view])
