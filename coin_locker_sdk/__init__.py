"""Client SDK for the coin_locker Move module on Sui."""
from .config import AppConfig, ChainConfig, LockerConfig, load_config
from .errors import LockerError, QueryError, RpcError, TransactionBuildError, ValidationError
from .locker import (
    LockCoinsParams,
    SetPausedParams,
    TransferAdminParams,
    TransferCertificateParams,
    UnlockCoinsParams,
)
from .sdk import LockerSDK
from .transactions import Transaction, normalize_coin_type

__all__ = [
    "AppConfig",
    "ChainConfig",
    "LockCoinsParams",
    "LockerConfig",
    "LockerError",
    "LockerSDK",
    "QueryError",
    "RpcError",
    "SetPausedParams",
    "Transaction",
    "TransactionBuildError",
    "TransferAdminParams",
    "TransferCertificateParams",
    "UnlockCoinsParams",
    "ValidationError",
    "load_config",
    "normalize_coin_type",
]
