"""Line parsers for the HP ProCurve / ArubaOS-Switch CLI."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime

from loguru import logger

from switchtopo.exceptions import MalformedMac
from switchtopo.models.device import is_valid_ip
from switchtopo.models.mac import normalize_mac
from switchtopo.models.port import PoEConfig, Port
from switchtopo.models.records import MacTableEntry, NeighborRecord, VlanMember
from switchtopo.models.vlan import Vlan
from switchtopo.parsers import Keyed, LineResult, Sequential

# A1, B24 (chassis slots) or 1/12 (stack members)
PORT = r"[A-F]\d+|\d/\d+"

PHYSICAL_PORT = re.compile(r"([A-F]\d{1,2}|\d/\d{1,2})")
INTERFACE_LINE = re.compile(rf"((?:{PORT})(?:-Trk\d+)?)[^|]+\|(.+)")
VLAN_LINE = re.compile(r"(\d+)\s+(\S+)[^|]+\|")
VLAN_MEMBER_LINE = re.compile(rf"({PORT})\s+(\S+)")
MAC_LINE = re.compile(rf"([a-zA-Z0-9-]{{13}})\s+({PORT})\s+(\d+)")
POE_LINE = re.compile(rf"({PORT})\s+\|\s+(\S+)[^0-9]+([0-9.]+)\s+W\s+([0-9.]+)\s+W")
LLDP_LINE = re.compile(rf"({PORT})\s+\|")
LLDP_PORT_ID = re.compile(r"PortId[ :]+([0-9a-fA-F: -]{12,18})")
CDP_LABEL = re.compile(r"([a-zA-Z ]+):(.+)")

# Column layout of "show lldp info remote-device", relative to two
# characters before the local port name
_LLDP_CHASSIS = slice(14, 40)
_LLDP_REMOTE_PORT = slice(47, 57)
_LLDP_SYSNAME = slice(57, None)

# Column layout of "show interface config" after the '|' separator
_IF_ENABLED = slice(1, 9)
_IF_MODE = slice(9, 22)


def interface_line(line: str, match: re.Match[str]) -> LineResult:
    """``A1-Trk1    100/1000T | Yes     Auto ...`` -> Port."""
    name, _, trunk = match.group(1).partition("-")
    rest = match.group(2)
    enabled = rest[_IF_ENABLED].strip().lower() == "yes"
    mode = rest[_IF_MODE].strip()
    return Sequential(Port(name, enabled, mode or None, trunk or None))


def vlan_line(line: str, match: re.Match[str]) -> LineResult:
    return Sequential(Vlan(int(match.group(1)), match.group(2)))


def vlan_member_line(line: str, match: re.Match[str]) -> LineResult:
    return Sequential(VlanMember(name=match.group(1), mode=match.group(2)))


def mac_line(line: str, match: re.Match[str]) -> LineResult:
    """``001122-334455   A1   10`` -> MacTableEntry.

    A line whose address column is not a MAC is dropped.
    """
    try:
        mac = normalize_mac(match.group(1))
    except MalformedMac as e:
        logger.warning(f"Dropping MAC table line {line.strip()!r}: {e}")
        return None
    return Sequential(MacTableEntry(port=match.group(2), mac=mac, vlan_id=int(match.group(3))))


def poe_line(line: str, match: re.Match[str]) -> LineResult:
    """``A1 | Yes  low  usage 17.0 W  3.9 W ...`` -> PoEConfig keyed by port.

    Ports without any allocated power carry no usable PoE budget and are
    skipped.
    """
    max_power = float(match.group(3))
    if max_power <= 0:
        return None
    enabled = match.group(2).lower() == "yes"
    return Keyed(match.group(1), PoEConfig(enabled, max_power, float(match.group(4))))


def lldp_line(time: datetime) -> Callable[[str, re.Match[str]], LineResult]:
    """Build the ``show lldp info remote-device`` line parser.

    The chassis id column holds an IP address, a MAC address or, failing
    both, something that is used as sysname when the sysname column is blank.
    """

    def build(line: str, match: re.Match[str]) -> LineResult:
        # columns are fixed relative to a two-space indent before the port
        offset = match.start(1) - 2
        row = line[offset:] if offset >= 0 else " " * -offset + line
        chassis = row[_LLDP_CHASSIS].strip()
        remote_port = row[_LLDP_REMOTE_PORT].strip()
        sysname = row[_LLDP_SYSNAME].strip()
        ip: str | None = None
        mac: str | None = None
        if is_valid_ip(chassis):
            ip = chassis
        else:
            try:
                mac = normalize_mac(chassis)
            except MalformedMac:
                if not sysname:
                    sysname = chassis
        return Keyed(
            match.group(1),
            NeighborRecord(
                local_port=match.group(1),
                ip=ip,
                sysname=sysname or None,
                remote_port=remote_port or None,
                mac=mac,
                time=time,
            ),
        )

    return build


def lldp_port_id_line(line: str, match: re.Match[str]) -> LineResult:
    return Sequential(match.group(1))


def parse_cdp_detail(lines: Iterable[str], time: datetime) -> dict[str, NeighborRecord]:
    """Parse ``show cdp neighbor detail`` into records keyed by local port.

    The output is a sequence of ``Label : value`` lines; each ``Port`` label
    opens a new record. Records announcing a non-IP address type are dropped.
    """
    result: dict[str, NeighborRecord] = {}
    discard: set[str] = set()
    port: str | None = None

    for line in lines:
        match = CDP_LABEL.search(line)
        if match is None:
            continue
        label = match.group(1).strip().lower()
        data = match.group(2).strip()

        if label == "port":
            port = data
            result[port] = NeighborRecord(local_port=port, time=time)
            continue
        if port is None:
            continue

        record = result[port]
        if label == "device id":
            try:
                record.mac = normalize_mac(data)
            except MalformedMac:
                record.sysname = data or None
        elif label == "address type" and data != "IP":
            discard.add(port)
        elif label == "address":
            if is_valid_ip(data):
                record.ip = data
        elif label == "platform" and data:
            record.sysname = f"{record.sysname} ; {data}" if record.sysname else data
        elif label == "device port":
            record.remote_port = data or None

    for port in discard:
        result.pop(port, None)
    return result
