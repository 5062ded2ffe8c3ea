"""Interactive SSH shell transport built on paramiko."""

from __future__ import annotations

import re
import time

import paramiko
from loguru import logger

from switchtopo.base.transport import BaseTransport
from switchtopo.exceptions import AuthenticationError, ConnectionFailure, SessionTimeout

DEFAULT_TIMEOUT = 10.0
BUFFER_SIZE = 65535
READ_DELAY = 0.1


class ParamikoShellTransport(BaseTransport):
    """SSH transport using a paramiko interactive shell.

    Output is accumulated in a local buffer so that ``read_until`` can hand
    back exactly the text up to a match and keep the rest for the next read.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = 22,
        connect_timeout: float = DEFAULT_TIMEOUT,
        terminal_width: int = 160,
        terminal_height: int = 2048,
    ):
        super().__init__(host, username, password, port)
        self.connect_timeout = connect_timeout
        self.terminal_width = terminal_width
        self.terminal_height = terminal_height
        self._client: paramiko.SSHClient | None = None
        self._shell: paramiko.Channel | None = None
        self._buffer = ""

    def connect(self) -> None:
        """Establish the SSH connection and open an interactive shell."""
        self._client = paramiko.SSHClient()
        self._client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            self._client.connect(
                hostname=self.host,
                port=self.port or 22,
                username=self.username,
                password=self.password,
                look_for_keys=False,
                allow_agent=False,
                timeout=self.connect_timeout,
                banner_timeout=self.connect_timeout,
                auth_timeout=self.connect_timeout,
            )
            self._shell = self._client.invoke_shell(width=self.terminal_width, height=self.terminal_height)
        except paramiko.AuthenticationException as e:
            self.disconnect()
            raise AuthenticationError(f"SSH authentication to {self.host} as {self.username} failed: {e}") from e
        except TimeoutError as e:
            self.disconnect()
            raise SessionTimeout(f"SSH connection to {self.host} timed out", self.connect_timeout) from e
        except (paramiko.SSHException, OSError) as e:
            self.disconnect()
            raise ConnectionFailure(f"SSH connection to {self.host} failed: {e}") from e

        self._buffer = ""
        logger.info(f"SSH connected to {self.host}")

    def disconnect(self) -> None:
        """Close the shell and the SSH connection."""
        if self._shell:
            try:
                self._shell.close()
            except (paramiko.SSHException, OSError) as e:
                logger.debug(f"Closing shell on {self.host} failed: {e}")
            self._shell = None
        if self._client:
            try:
                self._client.close()
            except (paramiko.SSHException, OSError) as e:
                logger.debug(f"Closing SSH client on {self.host} failed: {e}")
            self._client = None
        self._buffer = ""

    def is_connected(self) -> bool:
        """Check if the SSH connection and shell are active."""
        if self._client is None or self._shell is None:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active() and not self._shell.closed

    def write(self, data: str) -> None:
        self._ensure_connected()
        assert self._shell is not None
        self._shell.send(data.encode())

    def read_until(self, pattern: re.Pattern[str], timeout: float) -> str:
        """Read shell output until ``pattern`` matches.

        Raises:
            SessionTimeout: If the pattern is not seen within ``timeout`` seconds.
            ConnectionFailure: If the shell closes while waiting.
        """
        self._ensure_connected()
        assert self._shell is not None
        deadline = time.monotonic() + timeout

        while True:
            match = pattern.search(self._buffer)
            if match:
                output = self._buffer[: match.end()]
                self._buffer = self._buffer[match.end() :]
                return output

            # checked on every pass, a chatty terminal must not outlive the deadline
            if time.monotonic() >= deadline:
                raise SessionTimeout(f"Timed out after {timeout}s waiting for {pattern.pattern!r} on {self.host}", timeout)
            if self._shell.recv_ready():
                chunk = self._shell.recv(BUFFER_SIZE).decode("utf-8", errors="replace")
                self._buffer += chunk
                continue
            if self._shell.closed:
                raise ConnectionFailure(f"Shell on {self.host} closed while waiting for {pattern.pattern!r}")
            time.sleep(READ_DELAY)

    def _ensure_connected(self) -> None:
        if not self.is_connected():
            raise ConnectionFailure("Not connected. Call connect() first.")
