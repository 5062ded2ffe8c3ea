"""Vendor-neutral parsing contract for CLI output and SNMP walks.

A line filter turns one line of CLI output into ``None`` (line dropped),
``Sequential(value)`` (appended in order) or ``Keyed(key, value)`` (stored by
key, last write wins). :class:`PagedOutput` accumulates those results for one
command, whatever mix of the two the filter produces.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from loguru import logger

from switchtopo.exceptions import MalformedMac
from switchtopo.models.datasource import EnrichmentRecord
from switchtopo.models.mac import normalize_mac
from switchtopo.models.records import MacTableEntry

T = TypeVar("T")


@dataclass(frozen=True)
class Sequential(Generic[T]):
    """A parsed line that keeps its position in the output."""

    value: T


@dataclass(frozen=True)
class Keyed(Generic[T]):
    """A parsed line stored under ``key``; a later line with the same key wins."""

    key: str
    value: T


LineResult = Keyed[Any] | Sequential[Any] | None
LineFilter = Callable[[str], LineResult]


@dataclass
class PagedOutput:
    """Results of one paged command."""

    ordered: list[Any] = field(default_factory=list)
    keyed: dict[str, Any] = field(default_factory=dict)

    def add(self, result: LineResult) -> None:
        if result is None:
            return
        if isinstance(result, Keyed):
            self.keyed[result.key] = result.value
        else:
            self.ordered.append(result.value)

    def __len__(self) -> int:
        return len(self.ordered) + len(self.keyed)


def regex_filter(
    pattern: re.Pattern[str] | str,
    build: Callable[[str, re.Match[str]], LineResult],
) -> LineFilter:
    """Build a line filter that hands every ``pattern`` match to ``build``.

    Lines that do not match are dropped.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def _filter(line: str) -> LineResult:
        match = regex.search(line)
        if match is None:
            return None
        return build(line, match)

    return _filter


def group_mac_table(entries: Iterable[MacTableEntry]) -> dict[str, list[MacTableEntry]]:
    """Re-key MAC table rows by port name, keeping row order per port."""
    table: dict[str, list[MacTableEntry]] = {}
    for entry in entries:
        table.setdefault(entry.port, []).append(entry)
    return table


# Six octets of one or two hex digits with separators, or twelve contiguous hex digits
_MAC_RUN = re.compile(r"(?<![0-9a-f])([0-9a-f]{1,2}(?:[:\- ][0-9a-f]{1,2}){5})(?![0-9a-f])|([0-9a-f]{12})")


def extract_mac(text: str) -> str | None:
    """Find the first MAC-like hex run in ``text`` and normalize it.

    Single-digit octets (``0:1b:2:...``) are zero padded.
    """
    match = _MAC_RUN.search(text.lower())
    if match is None:
        return None
    if match.group(1):
        octets = re.split(r"[:\- ]", match.group(1))
        return normalize_mac("".join(octet.zfill(2) for octet in octets))
    return normalize_mac(match.group(2))


def parse_arp_walk(
    entries: Iterable[tuple[str, str]],
    time: datetime | None = None,
) -> dict[str, dict[str, EnrichmentRecord]]:
    """Build ``MAC -> IP -> record`` from an ``ipNetToMediaPhysAddress`` walk.

    The IP address is the last four arcs of each OID. Entries whose value holds
    no MAC address are skipped.
    """
    time = time or datetime.now()
    result: dict[str, dict[str, EnrichmentRecord]] = {}
    for oid, value in entries:
        try:
            mac = extract_mac(value)
        except MalformedMac:
            mac = None
        if mac is None:
            logger.debug(f"ARP entry {oid} has no MAC address: {value!r}")
            continue
        ip = ".".join(oid.split(".")[-4:])
        result.setdefault(mac, {})[ip] = EnrichmentRecord(ip=ip, port=None, sysname=None, time=time)
    return result


def parse_physical_walk(entries: Iterable[tuple[str, str]], port_pattern: re.Pattern[str] | str) -> list[str]:
    """Extract port identifiers from an ``entPhysicalName`` walk, in walk order."""
    regex = re.compile(port_pattern) if isinstance(port_pattern, str) else port_pattern
    ports: list[str] = []
    for _, value in entries:
        match = regex.search(value)
        if match:
            ports.append(match.group(1))
    return ports
