"""Address and coin-type normalization. No I/O.

Coin types reach the SDK in several spellings. Object fields holding a
``std::type_name::TypeName`` return the full 32-byte address without a
``0x`` prefix (``0000…0002::sui::SUI``), JSON-RPC object types use the short
form (``0x2::sui::SUI``), and callers may pass a structured triple. Every
comparison or mapping lookup goes through :func:`normalize_coin_type`, which
maps all of these to ``0x<64 hex>::module::name``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from ..errors import ValidationError

PRIMITIVE_TYPES = (
    "bool",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    "u256",
    "address",
    "signer",
)

ADDRESS_LENGTH = 32

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_HEX_RE = re.compile(r"^[0-9a-f]+$")


@dataclass(frozen=True)
class CoinTypeArg:
    """Structured coin type, e.g. ``CoinTypeArg("0x2", "sui", "SUI")``."""

    package_id: str
    module: str
    name: str


def normalize_address(address: str) -> str:
    """Return a Sui address/object id as ``0x`` + 64 lowercase hex digits.

    Examples:
        "0x2" → "0x000…0002"
        "0000…0002" → "0x000…0002"
    """
    if not isinstance(address, str):
        raise ValidationError(f"Address must be a string, got {type(address).__name__}")
    value = address.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    if not value or len(value) > ADDRESS_LENGTH * 2 or not _HEX_RE.match(value):
        raise ValidationError(f"Invalid Sui address: {address!r}")
    return "0x" + value.rjust(ADDRESS_LENGTH * 2, "0")


def _split_type(text: str) -> tuple[str, list[str]]:
    """Split ``Head<A, B<C>>`` into ``"Head"`` and its top-level parameters."""
    head, sep, rest = text.partition("<")
    if not sep:
        return head.strip(), []
    if not rest.endswith(">"):
        raise ValidationError(f"Invalid type tag: {text!r}")

    params: list[str] = []
    depth = 0
    start = 0
    body = rest[:-1]
    for i, ch in enumerate(body):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                raise ValidationError(f"Invalid type tag: {text!r}")
        elif ch == "," and depth == 0:
            params.append(body[start:i])
            start = i + 1
    if depth != 0:
        raise ValidationError(f"Invalid type tag: {text!r}")
    params.append(body[start:])
    return head.strip(), params


def normalize_type(text: str) -> str:
    """Render a Move type string in canonical long-address form."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(f"Invalid type tag: {text!r}")
    text = text.strip()
    if text in PRIMITIVE_TYPES:
        return text

    head, raw_params = _split_type(text)
    params = [normalize_type(p) for p in raw_params]
    if head == "vector":
        if len(params) != 1:
            raise ValidationError(f"Invalid type tag: {text!r}")
        return f"vector<{params[0]}>"

    parts = head.split("::")
    if len(parts) != 3 or not all(_IDENT_RE.match(p.strip()) for p in parts[1:]):
        raise ValidationError(f"Invalid type tag: {text!r}")
    base = "::".join([normalize_address(parts[0]), parts[1].strip(), parts[2].strip()])
    if params:
        return f"{base}<{', '.join(params)}>"
    return base


def type_arguments(text: str) -> list[str]:
    """Normalized type parameters of e.g. ``…::CoinLock<0x2::sui::SUI>``."""
    _, params = _split_type(text.strip())
    return [normalize_type(p) for p in params]


def _coin_type_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, CoinTypeArg):
        return f"{value.package_id}::{value.module}::{value.name}"
    if isinstance(value, Mapping):
        package_id = value.get("package_id") or value.get("packageId") or value.get("address")
        module = value.get("module")
        name = value.get("name")
        if package_id and module and name:
            return f"{package_id}::{module}::{name}"
    raise ValidationError(f"Unsupported coin type value: {value!r}")


def normalize_coin_type(value: str | CoinTypeArg | Mapping[str, str]) -> str:
    """Canonicalize a coin type into ``0x<64 hex>::module::name``.

    Idempotent: ``normalize_coin_type(normalize_coin_type(x)) == normalize_coin_type(x)``.
    """
    normalized = normalize_type(_coin_type_text(value))
    if normalized in PRIMITIVE_TYPES or normalized.startswith("vector<"):
        raise ValidationError(f"Coin type must be a struct type, got {value!r}")
    return normalized
