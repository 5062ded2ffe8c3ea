"""Abstract base transports for CLI sessions and SNMP walks."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class BaseTransport(ABC):
    """Abstract interactive CLI channel to a switch.

    ``read_until`` returns everything received up to and including the first
    match of ``pattern``; data received after the match stays buffered for the
    next read. It raises :class:`~switchtopo.exceptions.SessionTimeout` when
    the pattern does not show up in time.
    """

    def __init__(self, host: str, username: str, password: str, port: int | None = None):
        self.host = host
        self.username = username
        self.password = password
        self.port = port

    @abstractmethod
    def connect(self) -> None:
        """Open the channel and authenticate."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the channel."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the channel is currently open."""

    @abstractmethod
    def write(self, data: str) -> None:
        """Send raw keystrokes."""

    @abstractmethod
    def read_until(self, pattern: re.Pattern[str], timeout: float) -> str:
        """Read until ``pattern`` matches the accumulated output."""

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()


class BaseWalker(ABC):
    """Abstract read-only telemetry tree (SNMP walk)."""

    def __init__(self, host: str, community: str = "public"):
        self.host = host
        self.community = community

    @abstractmethod
    def walk(self, root_oid: str) -> list[tuple[str, str]]:
        """Return every ``(oid, value)`` pair below ``root_oid`` in tree order."""
