"""Shared fixtures for the switchtopo test suite."""

from __future__ import annotations

import re
from unittest.mock import MagicMock

import pytest

from switchtopo.base.transport import BaseTransport, BaseWalker
from switchtopo.config import HP_3800
from switchtopo.exceptions import SessionTimeout

PROMPT = "PROC-sw# "
BANNER = "Press any key to continue"


class ScriptedTransport(BaseTransport):
    """In-memory CLI channel that replays canned output.

    ``responses`` are handed out one per ``read_until`` call; an exception
    instance in the list is raised instead. With ``commands`` set, writing a
    known command queues its pages, and any other command queues a bare prompt.
    """

    def __init__(self, responses=(), commands=None):
        super().__init__("10.0.0.2", "manager", "secret")
        self.responses = list(responses)
        self.commands = commands
        self.writes: list[str] = []
        self.patterns: list[str] = []
        self.connected = False
        self.connect_calls = 0
        self.disconnect_calls = 0

    def connect(self):
        self.connect_calls += 1
        self.connected = True

    def disconnect(self):
        self.disconnect_calls += 1
        self.connected = False

    def is_connected(self):
        return self.connected

    def write(self, data):
        self.writes.append(data)
        command = data.strip()
        if self.commands is None or not command or not data.endswith("\n"):
            return
        self.responses.extend(self.commands.get(command, [PROMPT]))

    def read_until(self, pattern: re.Pattern[str], timeout: float) -> str:
        self.patterns.append(pattern.pattern)
        if not self.responses:
            raise SessionTimeout("no more output", timeout)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def commands_sent(self) -> list[str]:
        return [w.strip() for w in self.writes if w.endswith("\n") and w.strip()]


# ── transport mocks ───────────────────────────────────────────────────


@pytest.fixture()
def mock_transport():
    """MagicMock of BaseTransport; every read returns a prompt."""
    transport = MagicMock(spec=BaseTransport)
    transport.host = "10.0.0.2"
    transport.is_connected.return_value = False
    transport.read_until.return_value = PROMPT
    return transport


@pytest.fixture()
def mock_walker():
    """MagicMock of BaseWalker with an empty walk."""
    walker = MagicMock(spec=BaseWalker)
    walker.host = "10.0.0.2"
    walker.walk.return_value = []
    return walker


@pytest.fixture()
def scripted_transport():
    """Factory fixture returning a ScriptedTransport."""

    def _make(responses=(), commands=None):
        return ScriptedTransport(responses, commands)

    return _make


@pytest.fixture()
def connected_transport():
    """Factory fixture: a ScriptedTransport primed with the login handshake."""

    def _make(responses=(), commands=None):
        return ScriptedTransport([BANNER, PROMPT, *responses], commands)

    return _make


@pytest.fixture()
def hp_profile():
    return HP_3800
