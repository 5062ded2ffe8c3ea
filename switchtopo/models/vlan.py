"""VLAN model."""

from __future__ import annotations

from switchtopo.models.connected import ConnectedDevice


class Vlan:
    """A VLAN and the devices seen on it, grouped by MAC address.

    ``mac_addresses`` keeps first-insertion order. The unknown-MAC sentinel
    may appear as a key for neighbors that did not announce a MAC.
    """

    NEIGHBORS = -1
    """Pseudo-VLAN id for neighbor data that cannot be tied to a real VLAN."""

    def __init__(self, vlan_id: int, name: str = "") -> None:
        self.vlan_id = vlan_id
        self.name = name
        self.mac_addresses: dict[str, list[ConnectedDevice]] = {}

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value.strip()

    @property
    def is_neighbors(self) -> bool:
        return self.vlan_id == Vlan.NEIGHBORS

    def devices(self, mac: str) -> list[ConnectedDevice]:
        """Return the device list for ``mac``, creating an empty one if needed."""
        return self.mac_addresses.setdefault(mac, [])

    def copy(self) -> Vlan:
        """Return a copy whose MAC mapping and device lists are independent."""
        clone = Vlan(self.vlan_id, self._name)
        clone.mac_addresses = {mac: list(devices) for mac, devices in self.mac_addresses.items()}
        return clone

    def __repr__(self) -> str:
        return f"Vlan(vlan_id={self.vlan_id}, name={self._name!r}, macs={len(self.mac_addresses)})"
