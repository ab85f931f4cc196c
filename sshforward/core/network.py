"""Network utilities."""

import socket

from ..utils.logging import get_logger

logger = get_logger("core.network")


def is_port_in_use(port: int, host: str = "localhost") -> bool:
    """
    Check if something accepts connections on a local port.

    Args:
        port: Port number to check
        host: Host to check (default: localhost)

    Returns:
        True if port is in use, False otherwise
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.settimeout(1)
            return s.connect_ex((host, port)) == 0
    except OSError as e:
        logger.warning(f"Error checking port {port}: {e}")
        return False
