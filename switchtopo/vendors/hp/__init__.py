"""HP ProCurve switch support."""

from switchtopo.vendors.hp.client import HPSwitch

__all__ = ["HPSwitch"]
