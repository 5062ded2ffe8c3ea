"""SNMPv2c walks via pysnmp."""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger
from pysnmp.hlapi.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    bulk_walk_cmd,
)
from pysnmp.proto import errind

from switchtopo.base.transport import BaseWalker
from switchtopo.exceptions import SessionTimeout, TelemetryError

MAX_REPETITIONS = 25


def _oid_text(name: Any) -> str:
    """Dotted text of a var-bind name, without MIB resolution."""
    return ".".join(str(int(arc)) for arc in tuple(name))


class SnmpWalker(BaseWalker):
    """Walk SNMP subtrees of one switch with a community string.

    Each walk opens its own SNMP engine, so walks are independent of the CLI
    session and may run on another thread.
    """

    def __init__(
        self,
        host: str,
        community: str = "public",
        port: int = 161,
        timeout: float = 2.0,
        retries: int = 1,
    ):
        super().__init__(host, community)
        self.port = port
        self.timeout = timeout
        self.retries = retries

    def walk(self, root_oid: str) -> list[tuple[str, str]]:
        """Walk ``root_oid`` and return its entries in tree order.

        Raises:
            SessionTimeout: The agent did not answer in time.
            TelemetryError: Any other SNMP error.
        """
        return asyncio.run(self._walk(root_oid))

    async def _walk(self, root_oid: str) -> list[tuple[str, str]]:
        logger.debug(f"SNMP walk {self.host} {root_oid}")
        engine = SnmpEngine()
        try:
            target = await UdpTransportTarget.create(
                (self.host, self.port),
                timeout=self.timeout,
                retries=self.retries,
            )
            results: list[tuple[str, str]] = []
            async for error_indication, error_status, _, var_binds in bulk_walk_cmd(
                engine,
                CommunityData(self.community, mpModel=1),
                target,
                ContextData(),
                0,
                MAX_REPETITIONS,
                ObjectType(ObjectIdentity(root_oid)),
                lexicographicMode=False,
            ):
                if error_indication:
                    if isinstance(error_indication, errind.RequestTimedOut):
                        raise SessionTimeout(
                            f"SNMP walk of {root_oid} on {self.host} timed out: {error_indication}",
                            self.timeout,
                        )
                    raise TelemetryError(f"SNMP walk of {root_oid} on {self.host} failed: {error_indication}")
                if error_status:
                    raise TelemetryError(
                        f"SNMP walk of {root_oid} on {self.host} failed: {error_status.prettyPrint()}"
                    )
                for var_bind_oid, val in var_binds:
                    results.append((_oid_text(var_bind_oid), val.prettyPrint()))
        finally:
            engine.close_dispatcher()

        logger.debug(f"SNMP walk {self.host} {root_oid}: {len(results)} entries")
        return results
