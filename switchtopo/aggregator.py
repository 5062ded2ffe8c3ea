"""Cross-reference one switch's polled data into a per-port topology."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from loguru import logger

from switchtopo.exceptions import ConfigurationError
from switchtopo.models.connected import ConnectedDevice
from switchtopo.models.datasource import DataSource, SourceKind
from switchtopo.models.device import canonical_ip
from switchtopo.models.mac import UNKNOWN_MAC, normalize_mac
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import MacTableEntry, NeighborRecord, VlanEntry
from switchtopo.models.vlan import Vlan


@dataclass
class SwitchSnapshot:
    """Everything polled from one switch during one cycle."""

    interfaces: list[Port]
    physical_ports: list[str]
    vlans: dict[int, VlanEntry] = field(default_factory=dict)
    mac_table: dict[str, list[MacTableEntry]] = field(default_factory=dict)
    poe: dict[str, PoEConfig] = field(default_factory=dict)
    lldp: dict[str, NeighborRecord] = field(default_factory=dict)
    cdp: dict[str, NeighborRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class _IpLookup:
    mac: str
    vlan_id: int
    ip: str


class TopologyAggregator:
    """Build the Port → VLAN → MAC → ConnectedDevice hierarchy for one switch.

    Data sources are read, never modified, so one aggregator (or one set of
    sources) can serve several switches.

    Args:
        data_sources: MAC-keyed and IP-keyed enrichment tables. MAC-keyed
            sources are always consulted before IP-keyed ones.
    """

    def __init__(self, data_sources: Iterable[DataSource] = ()) -> None:
        self.mac_sources: list[DataSource] = []
        self.ip_sources: list[DataSource] = []
        for source in data_sources:
            self.add_data_source(source)

    def add_data_source(self, source: DataSource) -> None:
        if source.kind is SourceKind.MAC:
            self.mac_sources.append(source)
        elif source.kind is SourceKind.IP:
            self.ip_sources.append(source)
        else:
            raise ConfigurationError(f"Data source {source.name!r} has kind {source.kind.value!r}; expected mac or ip")

    def aggregate(self, snapshot: SwitchSnapshot) -> list[Port]:
        """Return the present ports of ``snapshot`` in declaration order, fully populated.

        Interfaces missing from ``snapshot.physical_ports`` are left out.
        Each returned port is a copy; the snapshot itself is not modified,
        so aggregating the same snapshot twice gives the same result.
        Errors propagate; no partial list is ever returned.
        """
        physical = set(snapshot.physical_ports)
        lldp_source = DataSource("LLDP", snapshot.lldp, kind=SourceKind.PROTOCOL)
        cdp_source = DataSource("CDP", snapshot.cdp, kind=SourceKind.PROTOCOL)

        ports: list[Port] = []
        for port in snapshot.interfaces:
            if port.name not in physical:
                logger.debug(f"Skipping {port.name}: defined but not physically present")
                continue

            port = port.copy()
            self._add_poe(port, snapshot.poe)
            self._add_vlans(port, snapshot.vlans)
            self._add_mac_addresses(port, snapshot.mac_table, snapshot.vlans)
            self._add_neighbors(port, snapshot.lldp, lldp_source)
            self._add_neighbors(port, snapshot.cdp, cdp_source)
            pending = self._add_mac_sources(port)
            self._add_ip_sources(port, pending)
            ports.append(port)

        logger.info(f"Aggregated {len(ports)} of {len(snapshot.interfaces)} defined interface(s)")
        return ports

    @staticmethod
    def _add_poe(port: Port, poe: Mapping[str, PoEConfig]) -> None:
        config = poe.get(port.name)
        if config is not None:
            port.poe_config = config

    @staticmethod
    def _add_vlans(port: Port, vlans: Mapping[int, VlanEntry]) -> None:
        for entry in vlans.values():
            if entry.has_member(port.name):
                port.attach_vlan(entry.vlan)

    @staticmethod
    def _add_mac_addresses(
        port: Port,
        mac_table: Mapping[str, list[MacTableEntry]],
        vlans: Mapping[int, VlanEntry],
    ) -> None:
        for entry in mac_table.get(port.name, []):
            vlan = port.vlans.get(entry.vlan_id)
            if vlan is None:
                # MAC learned on a VLAN the port is not a static member of
                known = vlans.get(entry.vlan_id)
                vlan = port.attach_vlan(known.vlan if known is not None else Vlan(entry.vlan_id))
                logger.debug(f"{port.name}: attached VLAN {entry.vlan_id} from MAC table")
            vlan.devices(normalize_mac(entry.mac))

    @staticmethod
    def _add_neighbors(port: Port, neighbors: Mapping[str, NeighborRecord], source: DataSource) -> None:
        record = neighbors.get(port.name)
        if record is None:
            return

        if len(port.vlans) == 1:
            vlan = next(iter(port.vlans.values()))
        else:
            vlan = port.vlans.get(Vlan.NEIGHBORS)
            if vlan is None:
                vlan = Vlan(Vlan.NEIGHBORS)
                port.vlans[Vlan.NEIGHBORS] = vlan

        mac = normalize_mac(record.mac) if record.mac else UNKNOWN_MAC
        vlan.devices(mac).append(
            ConnectedDevice.build(
                source,
                mac,
                ip=record.ip,
                port=record.remote_port,
                sysname=record.sysname,
                time=record.time,
            )
        )

    def _add_mac_sources(self, port: Port) -> dict[_IpLookup, None]:
        pending: dict[_IpLookup, None] = {}
        for vlan in port.vlans.values():
            for mac, devices in vlan.mac_addresses.items():
                if mac == UNKNOWN_MAC:
                    continue
                for source in self.mac_sources:
                    for record in source.lookup(mac):
                        if source.needs_ip_lookup and record.ip:
                            pending[_IpLookup(mac, vlan.vlan_id, canonical_ip(record.ip))] = None
                        devices.append(
                            ConnectedDevice.build(
                                source,
                                mac,
                                ip=record.ip,
                                port=record.port,
                                sysname=record.sysname,
                                time=record.time,
                            )
                        )
        return pending

    def _add_ip_sources(self, port: Port, pending: Iterable[_IpLookup]) -> None:
        for lookup in pending:
            devices = port.vlans[lookup.vlan_id].mac_addresses[lookup.mac]
            for source in self.ip_sources:
                for record in source.lookup(lookup.ip):
                    devices.append(
                        ConnectedDevice.build(
                            source,
                            lookup.mac,
                            ip=record.ip or lookup.ip,
                            sysname=record.sysname,
                            time=record.time,
                        )
                    )
