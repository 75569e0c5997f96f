"""Exception hierarchy for the coin locker SDK."""
from __future__ import annotations


class LockerError(Exception):
    """Base class for every error raised by the SDK."""


class ValidationError(LockerError, ValueError):
    """Client-side parameter check failed; nothing was sent to the network."""


class RpcError(LockerError):
    """The Sui node could not be reached or answered with a JSON-RPC error."""


class QueryError(LockerError):
    """A read-only query against on-chain state failed."""


class TransactionBuildError(LockerError):
    """An unsigned transaction could not be resolved or serialized."""
