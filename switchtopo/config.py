"""Per-model switch profiles: CLI patterns, SNMP OIDs and timeouts."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

from switchtopo.exceptions import ConfigurationError

OID_ENT_PHYSICAL_NAME = "1.3.6.1.2.1.47.1.1.1.1.7"  # ENTITY-MIB::entPhysicalName
OID_IP_NET_TO_MEDIA_PHYS = "1.3.6.1.2.1.4.22.1.2"  # IP-MIB::ipNetToMediaPhysAddress


class SwitchProfile(BaseModel):
    """Constants describing how to talk to one switch model.

    A profile is handed to every client instance; nothing is shared through
    module-level mutable state.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    prompt_pattern: str = r"PROC[a-zA-Z0-9-]+[#>]"
    more_pattern: str = r"-- MORE --"
    banner_pattern: str = r"continue"
    enter_key: str = "\n"
    continue_key: str = " "
    terminal_width: int = 160
    terminal_height: int = 2048
    port_oid: str = OID_ENT_PHYSICAL_NAME
    arp_oid: str = OID_IP_NET_TO_MEDIA_PHYS
    ssh_port: int = 22
    snmp_port: int = 161
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    snmp_timeout: float = 2.0
    snmp_retries: int = 1

    @field_validator("prompt_pattern", "more_pattern", "banner_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        if not value.strip():
            raise ConfigurationError("CLI patterns cannot be empty")
        try:
            re.compile(value)
        except re.error as e:
            raise ConfigurationError(f"Invalid CLI pattern {value!r}: {e}") from e
        return value

    @property
    def prompt_regex(self) -> re.Pattern[str]:
        return re.compile(self.prompt_pattern)

    @property
    def more_regex(self) -> re.Pattern[str]:
        return re.compile(self.more_pattern)

    @property
    def banner_regex(self) -> re.Pattern[str]:
        return re.compile(self.banner_pattern)

    @property
    def page_end_regex(self) -> re.Pattern[str]:
        """Matches either the paging marker or the prompt."""
        return re.compile(f"(?:{self.more_pattern})|(?:{self.prompt_pattern})")


HP_3800 = SwitchProfile(model="HP 3800")
HP_E5406ZL = SwitchProfile(model="HP E5406 ZL")
