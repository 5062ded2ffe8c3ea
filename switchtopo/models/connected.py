"""Devices observed behind a switch port."""

from __future__ import annotations

from datetime import datetime

from switchtopo.exceptions import InvariantViolation
from switchtopo.models.datasource import DataSource
from switchtopo.models.device import canonical_ip
from switchtopo.models.mac import UNKNOWN_MAC, normalize_mac


class ConnectedDevice:
    """One observation of something associated with a MAC address.

    Every attribute but the data source is optional. An unset attribute
    reports ``False`` from its ``has_*`` predicate and raises
    :class:`InvariantViolation` when read. Port name and sysname are never
    stored as empty strings.
    """

    def __init__(self, source: DataSource, mac_address: str = UNKNOWN_MAC) -> None:
        self._source = source
        self._mac_address = UNKNOWN_MAC
        self._ip_address: str | None = None
        self._port_name: str | None = None
        self._sysname: str | None = None
        self._time: datetime | None = None
        if mac_address != UNKNOWN_MAC:
            self.mac_address = mac_address

    @property
    def source(self) -> DataSource:
        """The data source or protocol this observation came from."""
        return self._source

    @property
    def has_mac_address(self) -> bool:
        return self._mac_address != UNKNOWN_MAC

    @property
    def mac_address(self) -> str:
        if not self.has_mac_address:
            raise InvariantViolation("MAC address undefined")
        return self._mac_address

    @mac_address.setter
    def mac_address(self, value: str) -> None:
        self._mac_address = normalize_mac(value)

    @property
    def has_ip_address(self) -> bool:
        return self._ip_address is not None

    @property
    def ip_address(self) -> str:
        if self._ip_address is None:
            raise InvariantViolation("IP address undefined")
        return self._ip_address

    @ip_address.setter
    def ip_address(self, value: str) -> None:
        self._ip_address = canonical_ip(value)

    @property
    def has_port_name(self) -> bool:
        return self._port_name is not None

    @property
    def port_name(self) -> str:
        if self._port_name is None:
            raise InvariantViolation("Port name undefined")
        return self._port_name

    @port_name.setter
    def port_name(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise InvariantViolation("Port name cannot be empty")
        self._port_name = value

    @property
    def has_sysname(self) -> bool:
        return self._sysname is not None

    @property
    def sysname(self) -> str:
        if self._sysname is None:
            raise InvariantViolation("Sysname undefined")
        return self._sysname

    @sysname.setter
    def sysname(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise InvariantViolation("Sysname cannot be empty")
        self._sysname = value

    @property
    def has_time(self) -> bool:
        return self._time is not None

    @property
    def time(self) -> datetime:
        if self._time is None:
            raise InvariantViolation("Time undefined")
        return self._time

    @time.setter
    def time(self, value: datetime) -> None:
        self._time = value

    @classmethod
    def build(
        cls,
        source: DataSource,
        mac_address: str = UNKNOWN_MAC,
        ip: str | None = None,
        port: str | None = None,
        sysname: str | None = None,
        time: datetime | None = None,
    ) -> ConnectedDevice:
        """Create a device and set whichever optional attributes were given."""
        device = cls(source, mac_address)
        if ip is not None:
            device.ip_address = ip
        if port is not None:
            device.port_name = port
        if sysname is not None:
            device.sysname = sysname
        if time is not None:
            device.time = time
        return device

    def __repr__(self) -> str:
        fields = [f"source={self._source.name!r}", f"mac={self._mac_address!r}"]
        for name in ("ip_address", "port_name", "sysname"):
            value = getattr(self, f"_{name}")
            if value is not None:
                fields.append(f"{name}={value!r}")
        return f"ConnectedDevice({', '.join(fields)})"
