"""SSH tunnel management functionality."""

import enum
from typing import List, Optional

from ..config.models import TunnelConfig
from ..config.validation import prepare_configuration
from ..system.process import CommandResult, ProcessManager
from ..utils.exceptions import ProcessError
from ..utils.logging import get_logger

logger = get_logger("core.tunnel")

DEFAULT_TIMEOUT = 60


class TunnelState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


class SSHTunnel:
    """
    Opens a local port-forward with the ssh client and closes it again
    through the client's control socket.

    Usage:
        tunnel = SSHTunnel().open_tunnel(config)
        ...
        tunnel.close()
    """

    def __init__(self, process_manager: Optional[ProcessManager] = None, timeout: float = DEFAULT_TIMEOUT):
        self.process_manager = process_manager or ProcessManager()
        self.timeout = timeout
        self._state = TunnelState.CLOSED
        self._config: Optional[TunnelConfig] = None
        self._process: Optional[CommandResult] = None

    @property
    def state(self) -> TunnelState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is TunnelState.OPEN

    @property
    def config(self) -> Optional[TunnelConfig]:
        """Configuration of the last opened tunnel."""
        return self._config

    @property
    def process(self) -> Optional[CommandResult]:
        """Result of the command that opened the tunnel, None while closed."""
        return self._process

    def open_tunnel(self, config: TunnelConfig) -> "SSHTunnel":
        """
        Validate the config and start the port-forward.

        Blocks until the ssh client has either established the forward and
        gone to the background, or failed.

        Args:
            config: Tunnel configuration, completed in place

        Returns:
            This tunnel, now open

        Raises:
            ConfigurationError: If the configuration is invalid
            ProcessError: If a tunnel is already open or ssh fails
        """
        if self.is_open:
            raise ProcessError("Tunnel already opened")

        config = prepare_configuration(config)
        command = self._build_open_command(config)

        logger.info(f"Opening SSH tunnel {config.forward_spec} via {config.destination}:{config.ssh_port}")
        logger.debug(f"Executing SSH command: {' '.join(self._sanitize_command(command))}")

        result = self.process_manager.run_command(command, self.timeout)

        if result.returncode != 0:
            logger.error(f"SSH exited with code {result.returncode}")
            raise ProcessError(
                f"Error creating ssh tunnel. {result.output}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr
            )

        self._config = config
        self._process = result
        self._state = TunnelState.OPEN
        logger.info(f"SSH tunnel open on local port {config.forward_port_local}")
        return self

    def close(self) -> None:
        """
        Ask the ssh master behind the control socket to exit.

        Raises:
            ProcessError: If no tunnel is open or ssh fails
        """
        if not self.is_open:
            raise ProcessError("Tunnel not opened")

        command = self._build_close_command(self._config)
        logger.info(f"Closing SSH tunnel via {self._config.ssh_socket_path}")

        result = self.process_manager.run_command(command, self.timeout)

        if result.returncode != 0:
            logger.error(f"SSH exited with code {result.returncode} while closing")
            raise ProcessError(
                f"Unable to close ssh tunnel. {result.output}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr
            )

        self._process = None
        self._state = TunnelState.CLOSED
        logger.info("SSH tunnel closed")

    def __enter__(self) -> "SSHTunnel":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.is_open:
            self.close()

    @staticmethod
    def _build_open_command(config: TunnelConfig) -> List[str]:
        return [
            "ssh",
            "-p", str(config.ssh_port),
            config.destination,
            "-M",
            "-L", config.forward_spec,
            "-i", config.private_key_filename,
            "-fN",
            "-o", "ExitOnForwardFailure=yes",
            "-o", "StrictHostKeyChecking=no",
            "-S", config.ssh_socket_path,
        ]

    @staticmethod
    def _build_close_command(config: TunnelConfig) -> List[str]:
        return ["ssh", "-S", config.ssh_socket_path, "-O", "exit", config.ssh_hostname]

    @staticmethod
    def _sanitize_command(command: List[str]) -> List[str]:
        """Mask the key file path for logging."""
        sanitized = []
        mask_next = False

        for arg in command:
            if mask_next:
                sanitized.append("******")
                mask_next = False
            else:
                sanitized.append(arg)
                mask_next = arg == "-i"

        return sanitized
