"""Custom exception classes for the SSH tunnel manager."""

from typing import Optional


class TunnelError(Exception):
    """Base exception for all tunnel related errors."""
    pass


class ConfigurationError(TunnelError):
    """Exception raised when the tunnel configuration is invalid."""
    pass


class ProcessError(TunnelError):
    """Exception raised when an ssh subprocess fails or cannot be run."""

    def __init__(
            self,
            message: str,
            returncode: Optional[int] = None,
            stdout: str = "",
            stderr: str = ""
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class PortInUseError(TunnelError):
    """Exception raised when the local forward port is already in use."""

    def __init__(self, port: int, process_info: Optional[str] = None):
        self.port = port
        self.process_info = process_info
        message = f"Port {port} is already in use"
        if process_info:
            message += f" by {process_info}"
        super().__init__(message)


class PlatformNotSupportedError(TunnelError):
    """Exception raised when the platform lacks what the tunnel needs."""
    pass
