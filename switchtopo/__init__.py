"""Switch topology poller.

Polls managed switches over an SSH CLI and SNMP, then cross-references
interfaces, VLANs, the MAC table, neighbor discovery, PoE and external
lookup tables into one per-port hierarchy.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Enable library logging on stderr with the default format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "INFO")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


# Import vendors to trigger registration
import switchtopo.vendors  # noqa: F401, E402
from switchtopo.aggregator import SwitchSnapshot, TopologyAggregator  # noqa: E402
from switchtopo.arp import ArpAggregator  # noqa: E402
from switchtopo.base.client import BaseSwitchClient  # noqa: E402
from switchtopo.base.transport import BaseTransport, BaseWalker  # noqa: E402
from switchtopo.config import HP_3800, HP_E5406ZL, SwitchProfile  # noqa: E402
from switchtopo.exceptions import (  # noqa: E402
    AuthenticationError,
    ConfigurationError,
    ConnectionFailure,
    InvariantViolation,
    MalformedAddress,
    MalformedHostname,
    MalformedMac,
    SessionTimeout,
    SwitchError,
    TelemetryError,
)
from switchtopo.factory import create_switch, list_models  # noqa: E402
from switchtopo.models import DataSource, EnrichmentRecord, SourceKind  # noqa: E402
from switchtopo.session import RemoteSession  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "create_switch",
    "list_models",
    "BaseSwitchClient",
    "BaseTransport",
    "BaseWalker",
    "RemoteSession",
    "SwitchProfile",
    "HP_3800",
    "HP_E5406ZL",
    "SwitchSnapshot",
    "TopologyAggregator",
    "ArpAggregator",
    "DataSource",
    "EnrichmentRecord",
    "SourceKind",
    "SwitchError",
    "ConnectionFailure",
    "AuthenticationError",
    "SessionTimeout",
    "TelemetryError",
    "ConfigurationError",
    "MalformedAddress",
    "MalformedMac",
    "MalformedHostname",
    "InvariantViolation",
]
