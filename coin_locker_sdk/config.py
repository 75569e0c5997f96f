"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

NETWORK_URLS: dict[str, str] = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}

DEFAULT_NETWORK = "mainnet"
DEFAULT_CLOCK_ID = "0x6"
DEFAULT_GAS_BUDGET = 50_000_000

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    network: str = DEFAULT_NETWORK
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class LockerConfig:
    package_id: str = ""
    registry_id: str = ""
    clock_id: str = DEFAULT_CLOCK_ID
    gas_budget: int = DEFAULT_GAS_BUDGET
    page_size: int = 50
    strict: bool = False


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    locker: LockerConfig = field(default_factory=LockerConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Endpoint resolution
# ---------------------------------------------------------------------------


def resolve_endpoints(
    network: str = DEFAULT_NETWORK, explicit: tuple[str, ...] | list[str] = ()
) -> tuple[str, ...]:
    """Return the RPC endpoints to use, explicit URLs taking precedence.

    Examples:
        resolve_endpoints("testnet") → ("https://fullnode.testnet.sui.io:443",)
        resolve_endpoints("testnet", ["http://my-node"]) → ("http://my-node",)
    """
    endpoints = tuple(url for url in explicit if url)
    if endpoints:
        return endpoints
    if network not in NETWORK_URLS:
        raise ValueError(f"Unknown network '{network}'")
    return (NETWORK_URLS[network],)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    network = raw.get("network") or DEFAULT_NETWORK
    explicit = list(raw.get("rpc_endpoints", []))
    if raw.get("fullnode_url"):
        explicit.insert(0, raw["fullnode_url"])
    return ChainConfig(
        network=network,
        rpc_endpoints=tuple(url for url in explicit if url),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_locker(raw: dict[str, Any]) -> LockerConfig:
    return LockerConfig(
        package_id=raw.get("package_id", ""),
        registry_id=raw.get("registry_id", ""),
        clock_id=raw.get("clock_id") or DEFAULT_CLOCK_ID,
        gas_budget=int(raw.get("gas_budget", DEFAULT_GAS_BUDGET)),
        page_size=int(raw.get("page_size", 50)),
        strict=bool(raw.get("strict", False)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate SDK configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            current working directory.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain", {})),
        locker=_build_locker(raw.get("locker", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.locker.package_id:
        raise ValueError("locker.package_id must be configured")
    if not cfg.locker.registry_id:
        raise ValueError("locker.registry_id must be configured")
    if not cfg.chain.rpc_endpoints and cfg.chain.network not in NETWORK_URLS:
        raise ValueError(
            f"Unknown network '{cfg.chain.network}' and no rpc_endpoints given"
        )
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("chain.rpc_timeout must be positive")
    if cfg.locker.page_size <= 0:
        raise ValueError("locker.page_size must be positive")
