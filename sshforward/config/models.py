"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional, Union

Port = Union[str, int]


@dataclass
class TunnelConfig:
    """
    Description of a local port-forward through an SSH server.

    The constructor does not validate anything; a config is checked and
    completed by :func:`sshforward.config.validation.prepare_configuration`
    when a tunnel is opened with it.
    """
    ssh_username: str = ""
    ssh_hostname: str = ""
    ssh_port: Port = "22"
    forward_port_local: Port = ""
    forward_host_remote: str = ""
    forward_port_remote: Port = ""
    private_key_contents: Optional[str] = None
    private_key_filename: Optional[str] = None
    ssh_socket_path: Optional[str] = None

    @property
    def destination(self) -> str:
        """The ``user@host`` part of the ssh command line."""
        return f"{self.ssh_username}@{self.ssh_hostname}"

    @property
    def forward_spec(self) -> str:
        """The argument of ``ssh -L``."""
        return f"{self.forward_port_local}:{self.forward_host_remote}:{self.forward_port_remote}"
