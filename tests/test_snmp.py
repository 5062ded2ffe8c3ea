"""Tests for SnmpWalker with pysnmp patched out."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pysnmp.proto import errind

from switchtopo.exceptions import SessionTimeout, TelemetryError
from switchtopo.snmp import SnmpWalker

ROOT = "1.3.6.1.2.1.47.1.1.1.1.7"


def value(text):
    val = MagicMock()
    val.prettyPrint.return_value = text
    return val


def walk_results(*rows):
    """Build a bulk_walk_cmd replacement yielding ``rows`` in order."""

    async def _walk(*args, **kwargs):
        for row in rows:
            yield row

    return _walk


@pytest.fixture()
def snmp_env():
    """Patch the pysnmp engine and transport used by SnmpWalker."""
    with (
        patch("switchtopo.snmp.SnmpEngine") as engine_cls,
        patch("switchtopo.snmp.UdpTransportTarget") as target_cls,
    ):
        target_cls.create = AsyncMock(return_value=MagicMock())
        yield engine_cls, target_cls


class TestSnmpWalker:
    """Test SnmpWalker.walk."""

    def test_walk_returns_oid_value_pairs(self, snmp_env):
        """Each var-bind should become an (oid, value) text pair in order."""
        engine_cls, target_cls = snmp_env
        rows = [
            (None, 0, 0, [((1, 3, 6, 1, 2, 1, 47, 1, 1, 1, 1, 7, 1), value("A1"))]),
            (None, 0, 0, [((1, 3, 6, 1, 2, 1, 47, 1, 1, 1, 1, 7, 2), value("A2"))]),
        ]
        with patch("switchtopo.snmp.bulk_walk_cmd", walk_results(*rows)):
            result = SnmpWalker("10.0.0.2", community="private", port=1161, timeout=3.0, retries=2).walk(ROOT)

        assert result == [(f"{ROOT}.1", "A1"), (f"{ROOT}.2", "A2")]
        target_cls.create.assert_awaited_once_with(("10.0.0.2", 1161), timeout=3.0, retries=2)
        engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_empty_walk(self, snmp_env):
        with patch("switchtopo.snmp.bulk_walk_cmd", walk_results()):
            assert SnmpWalker("10.0.0.2").walk(ROOT) == []

    def test_timeout_raises_session_timeout(self, snmp_env):
        """A request timeout should surface as SessionTimeout."""
        engine_cls, _ = snmp_env
        rows = [(errind.RequestTimedOut(), 0, 0, [])]
        with patch("switchtopo.snmp.bulk_walk_cmd", walk_results(*rows)):
            with pytest.raises(SessionTimeout) as exc_info:
                SnmpWalker("10.0.0.2", timeout=2.0).walk(ROOT)
        assert exc_info.value.timeout == 2.0
        engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_other_error_indication(self, snmp_env):
        """Non-timeout error indications should raise TelemetryError."""
        rows = [("unknownUserName", 0, 0, [])]
        with patch("switchtopo.snmp.bulk_walk_cmd", walk_results(*rows)):
            with pytest.raises(TelemetryError):
                SnmpWalker("10.0.0.2").walk(ROOT)

    def test_error_status(self, snmp_env):
        """An agent error status should raise TelemetryError."""
        status = MagicMock()
        status.prettyPrint.return_value = "genErr"
        rows = [(None, status, 1, [])]
        with patch("switchtopo.snmp.bulk_walk_cmd", walk_results(*rows)):
            with pytest.raises(TelemetryError) as exc_info:
                SnmpWalker("10.0.0.2").walk(ROOT)
        assert "genErr" in str(exc_info.value)
