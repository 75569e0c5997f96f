"""Shared plumbing for the lock, query and admin modules."""
from __future__ import annotations

import logging
from typing import TypeVar

from ..errors import QueryError
from ..interfaces.chain import ChainClient
from ..transactions.type_tags import normalize_address

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LockerModule:
    """Holds the chain client and deployment ids a module works against."""

    def __init__(
        self,
        client: ChainClient,
        package_id: str,
        registry_id: str,
        strict: bool = False,
    ) -> None:
        self._client = client
        self._package_id = normalize_address(package_id)
        self._registry_id = normalize_address(registry_id)
        self._strict = strict

    @property
    def package_id(self) -> str:
        return self._package_id

    @property
    def registry_id(self) -> str:
        return self._registry_id

    def _fail(self, action: str, error: Exception, default: T) -> T:
        """Log a remote failure and return ``default``, or raise when strict."""
        logger.error("Error %s: %s", action, error)
        if self._strict:
            if isinstance(error, QueryError):
                raise error
            raise QueryError(f"Error {action}: {error}") from error
        return default
