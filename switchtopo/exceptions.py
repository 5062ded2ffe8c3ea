"""Exception hierarchy for switch polling and topology aggregation."""


class SwitchError(Exception):
    """Base exception for all switch polling errors."""


class ConnectionFailure(SwitchError):
    """The CLI session could not be established or synchronized."""


class AuthenticationError(ConnectionFailure):
    """SSH authentication was rejected by the switch."""


class SessionTimeout(SwitchError):
    """A connect, read or SNMP request exceeded its time budget."""

    def __init__(self, message: str, timeout: float | None = None):
        self.timeout = timeout
        super().__init__(message)


class TelemetryError(SwitchError):
    """SNMP walk failed for a reason other than a timeout."""


class ConfigurationError(SwitchError):
    """Switch client or profile was constructed with unusable settings."""


class MalformedAddress(SwitchError):
    """An IP address did not validate."""


class MalformedMac(SwitchError):
    """A MAC address did not contain exactly twelve hex digits."""


class MalformedHostname(SwitchError):
    """A hostname was empty."""


class InvariantViolation(SwitchError):
    """A data model invariant was broken (range, empty field, unset read)."""
