"""Abstract base switch client."""

from __future__ import annotations

import concurrent.futures
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from loguru import logger

from switchtopo.aggregator import SwitchSnapshot, TopologyAggregator
from switchtopo.config import SwitchProfile
from switchtopo.models.datasource import DataSource, EnrichmentRecord
from switchtopo.models.device import IPDevice
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import MacTableEntry, NeighborRecord, VlanEntry


class BaseSwitchClient(IPDevice, ABC):
    """Abstract base class for vendor-specific switch clients.

    Each vendor implements the capability methods below; model-specific
    constants come from the :class:`SwitchProfile` given at construction.
    :meth:`get_interfaces_details` runs one polling cycle and returns the
    aggregated ports.
    """

    def __init__(self, ip: str, hostname: str, profile: SwitchProfile) -> None:
        super().__init__(ip, hostname)
        self.profile = profile
        self._data_sources: dict[str, DataSource] = {}

    @property
    def model(self) -> str:
        """Human readable switch model."""
        return self.profile.model

    @abstractmethod
    def get_physical_interfaces(self) -> list[str]:
        """Names of the interfaces physically present in the switch."""

    @abstractmethod
    def get_interfaces(self) -> list[Port]:
        """Interfaces defined in the configuration, present or not."""

    @abstractmethod
    def get_vlans(self) -> dict[int, VlanEntry]:
        """VLAN definitions with their member ports, keyed by VLAN id."""

    @abstractmethod
    def get_mac_address_table(self) -> dict[str, list[MacTableEntry]]:
        """MAC forwarding table keyed by port name."""

    @abstractmethod
    def get_poe_data(self) -> dict[str, PoEConfig]:
        """Power-over-ethernet status keyed by port name."""

    @abstractmethod
    def get_lldp_data(self) -> dict[str, NeighborRecord]:
        """LLDP neighbors keyed by local port name."""

    @abstractmethod
    def get_cdp_data(self) -> dict[str, NeighborRecord]:
        """CDP neighbors keyed by local port name."""

    @abstractmethod
    def get_arp_table(self) -> dict[str, dict[str, EnrichmentRecord]]:
        """ARP table shaped ``MAC -> IP -> record``."""

    @abstractmethod
    def connect(self) -> None:
        """Open the CLI session."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the CLI session."""

    # ── data sources ──────────────────────────────────────────────────

    def add_data_source(self, source: DataSource) -> None:
        """Register a MAC- or IP-keyed enrichment table, replacing one with the same name."""
        self._data_sources[source.name] = source

    def reset_data_sources(self) -> None:
        self._data_sources.clear()

    @property
    def data_sources(self) -> list[DataSource]:
        return list(self._data_sources.values())

    # ── polling ───────────────────────────────────────────────────────

    def collect(self) -> SwitchSnapshot:
        """Gather every input of the aggregation for this switch.

        The SNMP walk uses its own channel and runs on a worker thread while
        the CLI commands run one after another on the single session.
        """
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            physical = pool.submit(self.get_physical_interfaces)
            vlans = self.get_vlans()
            lldp = self.get_lldp_data()
            cdp = self.get_cdp_data()
            poe = self.get_poe_data()
            mac_table = self.get_mac_address_table()
            interfaces = self.get_interfaces()
            physical_ports = physical.result()

        logger.info(
            f"{self.hostname} ({self.ip}): {len(interfaces)} interface(s), {len(physical_ports)} physical, "
            f"{len(vlans)} VLAN(s), {sum(len(v) for v in mac_table.values())} MAC entries"
        )
        return SwitchSnapshot(
            interfaces=interfaces,
            physical_ports=physical_ports,
            vlans=vlans,
            mac_table=mac_table,
            poe=poe,
            lldp=lldp,
            cdp=cdp,
        )

    def get_interfaces_details(self) -> list[Port]:
        """Poll the switch and return its present ports with VLANs, MACs and neighbors."""
        snapshot = self.collect()
        return TopologyAggregator(self.data_sources).aggregate(snapshot)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
