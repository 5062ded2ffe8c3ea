"""MAC address normalization."""

from __future__ import annotations

import re

from switchtopo.exceptions import MalformedMac

UNKNOWN_MAC = "unknown"
"""Placeholder key used when a neighbor announced no MAC address."""

_NON_HEX = re.compile(r"[^0-9a-f]")


def normalize_mac(mac: str) -> str:
    """Return a MAC address in ``aa:bb:cc:dd:ee:ff`` form.

    Accepts any text holding exactly twelve hex digits once every other
    character is removed, for instance::

        aabbccddeeff
        AA:BB:CC:DD:EE:FF
        aa bb cc dd ee ff
        aabbcc-ddeeff
        aabb.ccdd.eeff

    Raises:
        MalformedMac: If the input does not hold exactly twelve hex digits.
    """
    digits = _NON_HEX.sub("", mac.lower())
    if len(digits) != 12:
        raise MalformedMac(f"Invalid MAC address: {mac!r}")
    return ":".join(digits[i : i + 2] for i in range(0, 12, 2))


def is_valid_mac(mac: str) -> bool:
    """Return True if ``mac`` can be normalized."""
    try:
        normalize_mac(mac)
        return True
    except MalformedMac:
        return False
