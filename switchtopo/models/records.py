"""Typed records produced by the command parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel

from switchtopo.models.vlan import Vlan


class MacTableEntry(BaseModel):
    """One row of the MAC forwarding table."""

    port: str
    mac: str
    vlan_id: int


class VlanMember(BaseModel):
    """A port listed as member of a VLAN."""

    name: str
    mode: str = ""


@dataclass
class VlanEntry:
    """A VLAN definition together with its member ports."""

    vlan: Vlan
    members: list[VlanMember] = field(default_factory=list)

    def has_member(self, port_name: str) -> bool:
        return any(member.name == port_name for member in self.members)


class NeighborRecord(BaseModel):
    """Neighbor-discovery data for one local port (LLDP or CDP)."""

    local_port: str
    ip: str | None = None
    sysname: str | None = None
    remote_port: str | None = None
    mac: str | None = None
    time: datetime | None = None
