"""
sshforward - Open and close local SSH port-forwards with the ssh client.

This package provides functionality to:
- Validate and complete tunnel configurations
- Start a backgrounded ssh port-forward with a control socket
- Close the forward again through that control socket
"""

from .config.models import TunnelConfig
from .core.tunnel import SSHTunnel, TunnelState
from .utils.exceptions import ConfigurationError, ProcessError, TunnelError

__version__ = "1.0.0"

__all__ = [
    "TunnelConfig",
    "SSHTunnel",
    "TunnelState",
    "TunnelError",
    "ConfigurationError",
    "ProcessError",
]
