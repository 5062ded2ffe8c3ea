"""Data models for switch topology."""

from switchtopo.models.connected import ConnectedDevice
from switchtopo.models.datasource import DataSource, EnrichmentRecord, SourceKind
from switchtopo.models.device import IPDevice, canonical_ip, is_valid_ip
from switchtopo.models.mac import UNKNOWN_MAC, is_valid_mac, normalize_mac
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import MacTableEntry, NeighborRecord, VlanEntry, VlanMember
from switchtopo.models.vlan import Vlan

__all__ = [
    "UNKNOWN_MAC",
    "normalize_mac",
    "is_valid_mac",
    "canonical_ip",
    "is_valid_ip",
    "IPDevice",
    "DataSource",
    "EnrichmentRecord",
    "SourceKind",
    "ConnectedDevice",
    "Vlan",
    "Port",
    "PoEConfig",
    "MacTableEntry",
    "VlanMember",
    "VlanEntry",
    "NeighborRecord",
]
