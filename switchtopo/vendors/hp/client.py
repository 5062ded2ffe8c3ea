"""HP ProCurve switch client (SSH CLI + SNMP)."""

from __future__ import annotations

from datetime import datetime

from loguru import logger

from switchtopo.base.client import BaseSwitchClient
from switchtopo.base.transport import BaseTransport, BaseWalker
from switchtopo.config import HP_3800, HP_E5406ZL, SwitchProfile
from switchtopo.exceptions import ConfigurationError, MalformedMac
from switchtopo.factory import register_model
from switchtopo.models.datasource import EnrichmentRecord
from switchtopo.models.mac import normalize_mac
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import MacTableEntry, NeighborRecord, VlanEntry
from switchtopo.parsers import group_mac_table, parse_arp_walk, parse_physical_walk, regex_filter
from switchtopo.session import RemoteSession
from switchtopo.snmp import SnmpWalker
from switchtopo.ssh import ParamikoShellTransport
from switchtopo.vendors.hp.parsers import (
    INTERFACE_LINE,
    LLDP_LINE,
    LLDP_PORT_ID,
    MAC_LINE,
    PHYSICAL_PORT,
    POE_LINE,
    VLAN_LINE,
    VLAN_MEMBER_LINE,
    interface_line,
    lldp_line,
    lldp_port_id_line,
    mac_line,
    parse_cdp_detail,
    poe_line,
    vlan_line,
    vlan_member_line,
)


@register_model("hp3800", HP_3800)
@register_model("hp5406zl", HP_E5406ZL)
class HPSwitch(BaseSwitchClient):
    """Client for HP ProCurve switches (3800, E5406 zl).

    CLI commands go through one paged SSH session; the physical port list and
    the ARP table come from SNMP walks. The session is opened lazily on the
    first CLI command.

    Usage::

        with HPSwitch("10.0.0.2", "sw-core", username="manager", password="secret") as switch:
            switch.add_data_source(DataSource("dhcp", leases, SourceKind.MAC))
            for port in switch.get_interfaces_details():
                print(port.name, list(port.vlans))
    """

    def __init__(
        self,
        ip: str,
        hostname: str,
        username: str,
        password: str = "",
        community: str = "public",
        profile: SwitchProfile = HP_3800,
        transport: BaseTransport | None = None,
        walker: BaseWalker | None = None,
    ) -> None:
        username = username.strip()
        community = community.strip()
        if not username:
            raise ConfigurationError("User name cannot be empty")
        if not community:
            raise ConfigurationError("SNMP community cannot be empty")

        super().__init__(ip, hostname, profile)
        self.username = username

        if transport is None:
            transport = ParamikoShellTransport(
                host=self.ip,
                username=username,
                password=password,
                port=profile.ssh_port,
                connect_timeout=profile.connect_timeout,
                terminal_width=profile.terminal_width,
                terminal_height=profile.terminal_height,
            )
        if walker is None:
            walker = SnmpWalker(
                host=self.ip,
                community=community,
                port=profile.snmp_port,
                timeout=profile.snmp_timeout,
                retries=profile.snmp_retries,
            )
        self._session = RemoteSession(transport, profile)
        self._walker = walker

    def connect(self) -> None:
        """Open the CLI session if it is not open yet."""
        self._session.connect()

    def disconnect(self) -> None:
        self._session.close()

    def get_interfaces(self) -> list[Port]:
        self.connect()
        output = self._session.run_paged_command("show interface config", regex_filter(INTERFACE_LINE, interface_line))
        return output.ordered

    def get_vlans(self) -> dict[int, VlanEntry]:
        """List VLANs, then query the member ports of each one."""
        self.connect()
        vlans = self._session.run_paged_command("show vlans", regex_filter(VLAN_LINE, vlan_line)).ordered

        result: dict[int, VlanEntry] = {}
        for vlan in vlans:
            members = self._session.run_paged_command(
                f"show vlans {vlan.vlan_id}",
                regex_filter(VLAN_MEMBER_LINE, vlan_member_line),
            ).ordered
            result[vlan.vlan_id] = VlanEntry(vlan=vlan, members=members)
        return result

    def get_mac_address_table(self) -> dict[str, list[MacTableEntry]]:
        self.connect()
        output = self._session.run_paged_command("show mac-address", regex_filter(MAC_LINE, mac_line))
        return group_mac_table(output.ordered)

    def get_poe_data(self) -> dict[str, PoEConfig]:
        self.connect()
        output = self._session.run_paged_command("show power-over-ethernet brief", regex_filter(POE_LINE, poe_line))
        return output.keyed

    def get_lldp_data(self) -> dict[str, NeighborRecord]:
        """LLDP neighbors; ports without a MAC get a per-port detail query."""
        time = datetime.now()
        self.connect()
        neighbors: dict[str, NeighborRecord] = self._session.run_paged_command(
            "show lldp info remote-device",
            regex_filter(LLDP_LINE, lldp_line(time)),
        ).keyed

        for port, record in neighbors.items():
            if record.mac is not None:
                continue
            port_ids = self._session.run_paged_command(
                f"show lldp info remote-device {port}",
                regex_filter(LLDP_PORT_ID, lldp_port_id_line),
            ).ordered
            if not port_ids:
                continue
            try:
                record.mac = normalize_mac(port_ids[0])
            except MalformedMac:
                logger.debug(f"{self.hostname} {port}: LLDP PortId {port_ids[0]!r} is not a MAC address")
        return neighbors

    def get_cdp_data(self) -> dict[str, NeighborRecord]:
        time = datetime.now()
        self.connect()
        output = self._session.run_paged_command("show cdp neighbor detail")
        return parse_cdp_detail(output.ordered, time)

    def get_physical_interfaces(self) -> list[str]:
        return parse_physical_walk(self._walker.walk(self.profile.port_oid), PHYSICAL_PORT)

    def get_arp_table(self) -> dict[str, dict[str, EnrichmentRecord]]:
        return parse_arp_walk(self._walker.walk(self.profile.arp_oid), datetime.now())
