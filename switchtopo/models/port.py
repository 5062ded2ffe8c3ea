"""Port and power-over-ethernet models."""

from __future__ import annotations

from switchtopo.exceptions import InvariantViolation
from switchtopo.models.vlan import Vlan


class PoEConfig:
    """Power-over-ethernet state of a port.

    ``max_power`` must stay positive and ``usage`` must stay within
    ``[0, max_power]``. Both are checked on every assignment against the
    other current value.
    """

    def __init__(self, enabled: bool, max_power: float, usage: float) -> None:
        self.enabled = enabled
        self._usage: float | None = None
        self.max_power = max_power
        self.usage = usage

    @property
    def max_power(self) -> float:
        return self._max_power

    @max_power.setter
    def max_power(self, value: float) -> None:
        if value <= 0:
            raise InvariantViolation(f"PoE max must be positive, got {value}")
        if self._usage is not None and value < self._usage:
            raise InvariantViolation(f"PoE max {value} cannot be lower than usage {self._usage}")
        self._max_power = float(value)

    @property
    def usage(self) -> float:
        assert self._usage is not None
        return self._usage

    @usage.setter
    def usage(self, value: float) -> None:
        if value < 0:
            raise InvariantViolation(f"PoE usage cannot be negative, got {value}")
        if value > self._max_power:
            raise InvariantViolation(f"PoE usage {value} cannot exceed max {self._max_power}")
        self._usage = float(value)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def copy(self) -> PoEConfig:
        return PoEConfig(self.enabled, self._max_power, self.usage)

    def __repr__(self) -> str:
        return f"PoEConfig(enabled={self.enabled}, max_power={self._max_power}, usage={self._usage})"


class Port:
    """A switch port and everything attached to it.

    ``vlans`` maps VLAN id to a per-port :class:`Vlan` copy, in the order the
    VLANs were attached. Mode, trunk name and PoE config are optional: check
    ``has_known_mode``, ``is_in_trunk`` and ``has_poe_config`` before reading.
    """

    def __init__(
        self,
        name: str,
        enabled: bool,
        mode: str | None = None,
        trunk_name: str | None = None,
        poe: PoEConfig | None = None,
    ) -> None:
        name = name.strip()
        if not name:
            raise InvariantViolation("Port name cannot be empty")
        self.name = name
        self.enabled = enabled
        self._mode: str | None = None
        self._trunk_name: str | None = None
        self._poe: PoEConfig | None = None
        self.vlans: dict[int, Vlan] = {}
        if mode is not None:
            self.mode = mode
        if trunk_name is not None:
            self.trunk_name = trunk_name
        if poe is not None:
            self.poe_config = poe

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    @property
    def has_known_mode(self) -> bool:
        return self._mode is not None

    @property
    def mode(self) -> str:
        if self._mode is None:
            raise InvariantViolation(f"Port {self.name} has no known mode")
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise InvariantViolation("Port mode cannot be empty")
        self._mode = value

    @property
    def is_in_trunk(self) -> bool:
        return self._trunk_name is not None

    @property
    def trunk_name(self) -> str:
        if self._trunk_name is None:
            raise InvariantViolation(f"Port {self.name} is not in a trunk")
        return self._trunk_name

    @trunk_name.setter
    def trunk_name(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise InvariantViolation("Trunk name cannot be empty")
        self._trunk_name = value

    @property
    def has_poe_config(self) -> bool:
        return self._poe is not None

    @property
    def poe_config(self) -> PoEConfig:
        if self._poe is None:
            raise InvariantViolation(f"Port {self.name} has no PoE config")
        return self._poe

    @poe_config.setter
    def poe_config(self, value: PoEConfig) -> None:
        # two ports must never share one PoEConfig instance
        self._poe = value.copy()

    def attach_vlan(self, vlan: Vlan) -> Vlan:
        """Attach a copy of ``vlan`` and return the port's own copy."""
        attached = vlan.copy()
        self.vlans[vlan.vlan_id] = attached
        return attached

    def copy(self) -> Port:
        """Return an independent port with copies of its PoE config and VLANs."""
        clone = Port(self.name, self.enabled, self._mode, self._trunk_name, self._poe)
        for vlan in self.vlans.values():
            clone.attach_vlan(vlan)
        return clone

    def __repr__(self) -> str:
        return f"Port(name={self.name!r}, enabled={self.enabled}, vlans={list(self.vlans)})"
