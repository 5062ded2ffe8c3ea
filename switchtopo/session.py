"""Paged command execution over an interactive CLI transport."""

from __future__ import annotations

import re
import threading
from enum import Enum
from types import TracebackType
from typing import Self

from loguru import logger

from switchtopo.base.transport import BaseTransport
from switchtopo.config import SwitchProfile
from switchtopo.exceptions import ConnectionFailure
from switchtopo.parsers import LineFilter, PagedOutput, Sequential

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b[=>EM]")


class SessionState(Enum):
    """Lifecycle of a :class:`RemoteSession`."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    AWAITING_PAGE = "awaiting_page"


def strip_ansi(text: str) -> str:
    """Remove terminal control sequences and carriage returns."""
    return ANSI_ESCAPE.sub("", text).replace("\r", "")


class RemoteSession:
    """A CLI session with one switch that transparently handles pagination.

    Only one command is in flight at a time; concurrent callers are
    serialized. Any failure while a command is running closes the transport
    so that the session never lingers half way through a paged output.

    Usage::

        with RemoteSession(transport, profile) as session:
            output = session.run_paged_command("show vlans", vlan_filter)
    """

    def __init__(self, transport: BaseTransport, profile: SwitchProfile) -> None:
        self._transport = transport
        self._profile = profile
        self._prompt = profile.prompt_regex
        self._page_end = profile.page_end_regex
        self._banner = profile.banner_regex
        self._lock = threading.Lock()
        self.state = SessionState.DISCONNECTED

    @property
    def host(self) -> str:
        return self._transport.host

    @property
    def is_connected(self) -> bool:
        return self.state is not SessionState.DISCONNECTED

    def connect(self) -> None:
        """Open the transport and wait for the first prompt.

        Consumes the login banner, sends the enter key and blocks until the
        prompt shows up. Does nothing if the session is already connected.

        Raises:
            ConnectionFailure: Authentication or prompt synchronization failed.
            SessionTimeout: The banner or the prompt did not arrive in time.
        """
        with self._lock:
            if self.state is not SessionState.DISCONNECTED:
                return
            timeout = self._profile.connect_timeout
            try:
                self._transport.connect()
                self._transport.read_until(self._banner, timeout)
                self._transport.write(self._profile.enter_key)
                self._transport.read_until(self._prompt, timeout)
            except BaseException:
                self._transport.disconnect()
                raise
            self.state = SessionState.CONNECTED
            logger.info(f"CLI session with {self.host} ready")

    def run_paged_command(self, command: str, line_filter: LineFilter | None = None) -> PagedOutput:
        """Run ``command`` once and collect every page of its output.

        Each page is read until the paging marker or the prompt. Every line
        goes through ``line_filter``; without one every line is kept as is.
        The continue key is sent after each page that did not end with the
        prompt.

        Raises:
            SessionTimeout: A page did not complete in time; the session is closed.
            ConnectionFailure: The session is not connected or the channel dropped.
        """
        with self._lock:
            if self.state is SessionState.DISCONNECTED:
                raise ConnectionFailure(f"Session with {self.host} is not connected")

            result = PagedOutput()
            pages = 0
            self.state = SessionState.AWAITING_PAGE
            try:
                self._transport.write(command + self._profile.enter_key)
                while True:
                    raw = self._transport.read_until(self._page_end, self._profile.read_timeout)
                    pages += 1
                    page = strip_ansi(raw)
                    for line in page.split("\n"):
                        result.add(line_filter(line) if line_filter is not None else Sequential(line))
                    if self._prompt.search(page):
                        break
                    self._transport.write(self._profile.continue_key)
            except BaseException:
                logger.warning(f"Command {command!r} on {self.host} aborted after {pages} page(s); closing session")
                self._close_transport()
                raise

            self.state = SessionState.CONNECTED
            logger.debug(f"{self.host}: {command!r} returned {len(result)} record(s) in {pages} page(s)")
            return result

    def close(self) -> None:
        """Tear down the transport. Safe to call more than once."""
        with self._lock:
            self._close_transport()

    def _close_transport(self) -> None:
        if self.state is not SessionState.DISCONNECTED or self._transport.is_connected():
            self._transport.disconnect()
            logger.info(f"CLI session with {self.host} closed")
        self.state = SessionState.DISCONNECTED

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.close()
