"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from coin_locker_sdk.config import AppConfig, ChainConfig, LockerConfig

PACKAGE_ID = "0x" + "ab" * 32
REGISTRY_ID = "0x" + "11" * 32
LOCK_ID = "0x" + "22" * 32
CERT_ID = "0x" + "33" * 32
OWNER = "0x" + "44" * 32
ADMIN = "0x" + "55" * 32
COIN_ID = "0x" + "66" * 32
GAS_COIN_ID = "0x" + "77" * 32
TOTAL_LOCKED_TABLE = "0x" + "88" * 32
USER_LOCKS_TABLE = "0x" + "99" * 32

SUI = "0x0000000000000000000000000000000000000000000000000000000000000002::sui::SUI"
USDC = "0x" + "0" * 61 + "abc::usdc::USDC"

# base58 of 32 zero bytes
ZERO_DIGEST = "11111111111111111111111111111111"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        network="testnet",
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_locker_config() -> LockerConfig:
    return LockerConfig(package_id=PACKAGE_ID, registry_id=REGISTRY_ID)


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_locker_config: LockerConfig
) -> AppConfig:
    return AppConfig(chain=sample_chain_config, locker=sample_locker_config)


SAMPLE_YAML = textwrap.dedent(f"""\
    chain:
      network: testnet
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    locker:
      package_id: "{PACKAGE_ID}"
      registry_id: "{REGISTRY_ID}"
      gas_budget: 20000000
      page_size: 25
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Chain client
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_chain_client() -> AsyncMock:
    return AsyncMock()


# ---------------------------------------------------------------------------
# Sample on-chain data
# ---------------------------------------------------------------------------


def move_object(object_id: str, object_type: str, fields: dict, owner=None) -> dict:
    """Shape of a ``sui_getObject`` response with content."""
    data = {
        "objectId": object_id,
        "version": "7",
        "digest": ZERO_DIGEST,
        "type": object_type,
        "content": {"dataType": "moveObject", "type": object_type, "fields": fields},
    }
    if owner is not None:
        data["owner"] = owner
    return {"data": data}


@pytest.fixture()
def sample_coin_lock() -> dict:
    return move_object(
        LOCK_ID,
        f"{PACKAGE_ID}::coin_locker::CoinLock<0x2::sui::SUI>",
        {
            "id": {"id": LOCK_ID},
            "owner": OWNER,
            "locked_amount": "1000",
            "lock_timestamp": "1700000000",
            "unlock_timestamp": "1700086400",
            "claimed": False,
        },
    )


@pytest.fixture()
def sample_certificate() -> dict:
    return move_object(
        CERT_ID,
        f"{PACKAGE_ID}::coin_locker::LockCertificate",
        {
            "id": {"id": CERT_ID},
            "lock_id": LOCK_ID,
            "coin_type": {
                "type": "0x1::type_name::TypeName",
                "fields": {"name": SUI[2:]},
            },
            "owner": OWNER,
            "amount": "1000",
            "unlock_timestamp": "1700086400",
        },
    )


@pytest.fixture()
def sample_registry() -> dict:
    return move_object(
        REGISTRY_ID,
        f"{PACKAGE_ID}::coin_locker::LockerRegistry",
        {
            "id": {"id": REGISTRY_ID},
            "admin": ADMIN,
            "paused": False,
            "total_locked": {
                "type": "0x2::table::Table<0x1::type_name::TypeName, u64>",
                "fields": {"id": {"id": TOTAL_LOCKED_TABLE}, "size": "2"},
            },
            "user_locks": {
                "type": "0x2::table::Table<address, UserLockInfo>",
                "fields": {"id": {"id": USER_LOCKS_TABLE}, "size": "1"},
            },
        },
        owner={"Shared": {"initial_shared_version": 5}},
    )


def total_locked_field(object_id: str, coin_type_name: str, amount: str) -> dict:
    """One ``Field<TypeName, u64>`` entry of the total_locked table."""
    return move_object(
        object_id,
        "0x2::dynamic_field::Field<0x1::type_name::TypeName, u64>",
        {
            "id": {"id": object_id},
            "name": {"type": "0x1::type_name::TypeName", "fields": {"name": coin_type_name}},
            "value": amount,
        },
    )


def user_lock_field(object_id: str, address: str, total: str, locks: int = 1) -> dict:
    """One ``Field<address, UserLockInfo>`` entry of the user_locks table."""
    return move_object(
        object_id,
        f"0x2::dynamic_field::Field<address, {PACKAGE_ID}::coin_locker::UserLockInfo>",
        {
            "id": {"id": object_id},
            "name": address,
            "value": {
                "type": f"{PACKAGE_ID}::coin_locker::UserLockInfo",
                "fields": {
                    "total_locked_amount": total,
                    "details_list": [{"fields": {}} for _ in range(locks)],
                },
            },
        },
    )


def fields_page(object_ids: list[str], next_cursor=None, has_next: bool = False) -> dict:
    """Shape of a ``suix_getDynamicFields`` page."""
    return {
        "data": [{"objectId": oid} for oid in object_ids],
        "nextCursor": next_cursor,
        "hasNextPage": has_next,
    }
