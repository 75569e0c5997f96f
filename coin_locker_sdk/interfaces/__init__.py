"""Protocol interfaces for the coin locker SDK."""
from .chain import ChainClient
from .signer import Signer

__all__ = ["ChainClient", "Signer"]
