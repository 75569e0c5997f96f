"""Programmable transaction building on top of pysui's BCS types."""
from .transaction import Argument, Transaction
from .type_tags import (
    CoinTypeArg,
    normalize_address,
    normalize_coin_type,
    normalize_type,
)

__all__ = [
    "Argument",
    "CoinTypeArg",
    "Transaction",
    "normalize_address",
    "normalize_coin_type",
    "normalize_type",
]
