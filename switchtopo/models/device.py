"""Device identity."""

from __future__ import annotations

import ipaddress

from switchtopo.exceptions import MalformedAddress, MalformedHostname


def canonical_ip(ip: str) -> str:
    """Validate an IPv4/IPv6 address and return its canonical text form."""
    try:
        return str(ipaddress.ip_address(ip.strip()))
    except ValueError as e:
        raise MalformedAddress(f"Invalid IP address: {ip!r}") from e


def is_valid_ip(ip: str) -> bool:
    """Return True if ``ip`` parses as an IPv4/IPv6 address."""
    try:
        ipaddress.ip_address(ip.strip())
        return True
    except ValueError:
        return False


class IPDevice:
    """A device reachable over IP, identified by address and hostname.

    Both values are fixed at construction.
    """

    def __init__(self, ip: str, hostname: str) -> None:
        hostname = hostname.strip()
        if not hostname:
            raise MalformedHostname("Hostname cannot be empty")
        self._ip = canonical_ip(ip)
        self._hostname = hostname

    @property
    def ip(self) -> str:
        return self._ip

    @property
    def hostname(self) -> str:
        return self._hostname

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ip={self._ip!r}, hostname={self._hostname!r})"
