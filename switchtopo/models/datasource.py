"""Enrichment data sources and their record shape."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from switchtopo.exceptions import MalformedAddress, MalformedMac
from switchtopo.models.device import canonical_ip
from switchtopo.models.mac import normalize_mac


class SourceKind(str, Enum):
    """How a data source is keyed."""

    MAC = "mac"
    IP = "ip"
    PROTOCOL = "protocol"  # neighbor protocol tag (LLDP, CDP), not looked up


class EnrichmentRecord(BaseModel):
    """One piece of information about the device behind a MAC or IP.

    Also the shape of an ARP table observation.
    """

    ip: str | None = None
    sysname: str | None = None
    port: str | None = None
    time: datetime | None = None


RecordInput = EnrichmentRecord | Mapping[str, Any]


class DataSource:
    """A named, read-only lookup table providing device hints.

    ``data`` maps a MAC address (``SourceKind.MAC``) or an IP address
    (``SourceKind.IP``) to a single record or a list of records. Records may
    be :class:`EnrichmentRecord` instances or plain mappings with the same
    keys. The caller's mapping is left untouched; lookups go through a private
    index with canonical keys.

    ``needs_ip_lookup`` marks MAC-keyed sources whose IPs should be resolved
    again through the IP-keyed sources.
    """

    def __init__(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        kind: SourceKind = SourceKind.MAC,
        needs_ip_lookup: bool = False,
    ) -> None:
        self.name = name
        self.kind = kind
        self.needs_ip_lookup = needs_ip_lookup
        self._data: Mapping[str, Any] = data if data is not None else {}
        self._index: dict[str, list[EnrichmentRecord]] = {}
        if kind is not SourceKind.PROTOCOL:
            for key, value in self._data.items():
                self._index[self._canonical_key(key)] = self._as_records(value)

    @property
    def data(self) -> Mapping[str, Any]:
        """The table as supplied by the caller."""
        return self._data

    def lookup(self, key: str) -> list[EnrichmentRecord]:
        """Return every record stored under ``key``, or an empty list.

        A key that cannot be canonicalized simply has no records.
        """
        if self.kind is SourceKind.PROTOCOL:
            return []
        try:
            canonical = self._canonical_key(key)
        except (MalformedMac, MalformedAddress):
            return []
        return list(self._index.get(canonical, []))

    def _canonical_key(self, key: str) -> str:
        if self.kind is SourceKind.MAC:
            return normalize_mac(key)
        return canonical_ip(key)

    @staticmethod
    def _as_records(value: Any) -> list[EnrichmentRecord]:
        # A single record and a list of records are both accepted
        items: Sequence[RecordInput]
        if isinstance(value, (EnrichmentRecord, Mapping)):
            items = [value]
        else:
            items = list(value)
        return [item if isinstance(item, EnrichmentRecord) else EnrichmentRecord.model_validate(item) for item in items]

    def __repr__(self) -> str:
        return f"DataSource(name={self.name!r}, kind={self.kind.value!r}, needs_ip_lookup={self.needs_ip_lookup})"
