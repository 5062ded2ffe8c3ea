"""ARP table aggregation across several devices."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Protocol

from loguru import logger

from switchtopo.models.datasource import EnrichmentRecord

ArpTable = Mapping[str, Mapping[str, EnrichmentRecord]]


class ArpProvider(Protocol):
    """Anything that can hand out an ARP table shaped ``MAC -> IP -> record``."""

    def get_arp_table(self) -> dict[str, dict[str, EnrichmentRecord]]: ...


class ArpAggregator:
    """Merge ARP tables from many devices into one ``MAC -> IP -> record`` map.

    For a given (MAC, IP) pair the first observation added wins; later ones
    are ignored. ``add`` may be called from several poller threads.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[str, EnrichmentRecord]] = {}
        self._lock = threading.Lock()

    def add(self, arp: ArpTable) -> int:
        """Merge one ARP table and return how many new pairs it contributed."""
        added = 0
        with self._lock:
            for mac, by_ip in arp.items():
                known = self._data.setdefault(mac, {})
                for ip, observation in by_ip.items():
                    if ip not in known:
                        known[ip] = observation
                        added += 1
        logger.debug(f"ARP aggregate: {added} new MAC/IP pair(s)")
        return added

    def add_from(self, provider: ArpProvider) -> int:
        """Fetch and merge the ARP table of ``provider``."""
        return self.add(provider.get_arp_table())

    @property
    def data(self) -> dict[str, dict[str, EnrichmentRecord]]:
        """A snapshot of the accumulated map."""
        with self._lock:
            return {mac: dict(by_ip) for mac, by_ip in self._data.items()}
