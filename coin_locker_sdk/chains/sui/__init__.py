"""SUI chain support."""
from .client import SuiClient

__all__ = ["SuiClient"]
