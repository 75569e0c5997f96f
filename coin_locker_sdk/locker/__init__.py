"""coin_locker module bindings: builders, queries and parsers."""
from .admin import AdminModule
from .builders import (
    LockCoinsParams,
    LockTransaction,
    SetPausedParams,
    TransferAdminParams,
    TransferCertificateParams,
    UnlockCoinsParams,
)
from .lock import LockModule
from .query import QueryModule

__all__ = [
    "AdminModule",
    "LockCoinsParams",
    "LockModule",
    "LockTransaction",
    "QueryModule",
    "SetPausedParams",
    "TransferAdminParams",
    "TransferCertificateParams",
    "UnlockCoinsParams",
]
