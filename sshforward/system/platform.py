"""Platform-specific checks."""

import platform
import subprocess
from typing import Literal

from ..utils.exceptions import PlatformNotSupportedError
from ..utils.logging import get_logger

logger = get_logger("system.platform")

PlatformType = Literal["linux", "windows", "macos", "unknown"]


class PlatformManager:
    """Detects the platform and the tools a tunnel needs."""

    def __init__(self):
        self._platform = self._detect_platform()
        logger.info(f"Detected platform: {self._platform}")

    def _detect_platform(self) -> PlatformType:
        system = platform.system().lower()

        if system == "linux":
            return "linux"
        elif system == "windows":
            return "windows"
        elif system == "darwin":
            return "macos"
        else:
            return "unknown"

    def supports_control_sockets(self) -> bool:
        """OpenSSH for Windows does not implement ControlMaster sockets."""
        return self._platform != "windows"

    def check_required_tools(self) -> dict[str, bool]:
        """Check availability of required system tools."""
        return {"ssh": self._check_command("ssh")}

    def ensure_requirements(self) -> None:
        """
        Fail early when the tunnel cannot work on this machine.

        Raises:
            PlatformNotSupportedError: If ssh is missing or lacks control sockets
        """
        if not self.supports_control_sockets():
            raise PlatformNotSupportedError(
                f"SSH control sockets are not supported on {self._platform}"
            )

        missing_tools = [tool for tool, available in self.check_required_tools().items() if not available]
        if missing_tools:
            raise PlatformNotSupportedError(f"Required tools not available: {missing_tools}")

    def _check_command(self, command: str) -> bool:
        """Check if a command is available in PATH."""
        lookup = "where" if self._platform == "windows" else "which"
        try:
            subprocess.run([lookup, command],
                           check=True,
                           stdout=subprocess.DEVNULL,
                           stderr=subprocess.DEVNULL)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False
