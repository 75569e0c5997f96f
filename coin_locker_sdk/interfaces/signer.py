"""Signer protocol. Key management stays outside the SDK."""
from typing import Protocol


class Signer(Protocol):
    """Anything that can sign Sui transaction bytes for one address."""

    @property
    def address(self) -> str: ...

    async def sign_transaction(self, tx_bytes: bytes) -> str:
        """Return the serialized signature (base64) over the intent message."""
        ...
