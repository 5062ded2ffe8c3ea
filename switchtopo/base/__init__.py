"""Abstract base classes for switch polling."""

from switchtopo.base.client import BaseSwitchClient
from switchtopo.base.transport import BaseTransport, BaseWalker

__all__ = [
    "BaseTransport",
    "BaseWalker",
    "BaseSwitchClient",
]
