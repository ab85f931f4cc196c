"""Process management utilities."""

import subprocess
import tempfile
from dataclasses import dataclass
from typing import List, Optional

import psutil

from ..utils.exceptions import ProcessError
from ..utils.logging import get_logger

logger = get_logger("system.process")


@dataclass
class CommandResult:
    """Outcome of a finished foreground command."""
    args: List[str]
    pid: int
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Combined stdout and stderr, for error messages."""
        return f"{self.stdout} {self.stderr}"


class ProcessManager:
    """Runs ssh commands and inspects processes holding local ports."""

    def run_command(self, command: List[str], timeout: float) -> CommandResult:
        """
        Run a command and block until it exits.

        Output goes to temporary files instead of pipes: ``ssh -f`` forks a
        background child that inherits the output descriptors, and a pipe
        would stay open for as long as the tunnel lives.

        Args:
            command: Argument list, executed without a shell
            timeout: Seconds to wait before the process is killed

        Returns:
            Exit code and captured output

        Raises:
            ProcessError: If the command cannot be started or times out
        """
        with tempfile.TemporaryFile() as out, tempfile.TemporaryFile() as err:
            try:
                process = subprocess.Popen(command, stdin=subprocess.DEVNULL, stdout=out, stderr=err)
            except OSError as e:
                logger.error(f"Failed to start {command[0]}: {e}")
                raise ProcessError(f"Failed to start {command[0]}: {e}") from e

            try:
                returncode = process.wait(timeout=timeout)
            except subprocess.TimeoutExpired as e:
                logger.warning(f"Process {process.pid} did not exit within {timeout}s, killing it")
                process.kill()
                process.wait()
                raise ProcessError(
                    f"Command timed out after {timeout} seconds.",
                    returncode=process.returncode,
                    stdout=_read(out),
                    stderr=_read(err)
                ) from e

            return CommandResult(
                args=list(command),
                pid=process.pid,
                returncode=returncode,
                stdout=_read(out),
                stderr=_read(err)
            )

    def find_process_by_port(self, port: int) -> Optional[str]:
        """
        Find process information for a given port.

        Args:
            port: Port number to check

        Returns:
            Process information string or None if not found
        """
        for proc in psutil.process_iter(['pid', 'name']):
            try:
                for conn in proc.net_connections(kind='inet'):
                    if conn.laddr and conn.laddr.port == port:
                        return f"PID: {proc.pid}, Name: {proc.name()}"
            except (psutil.AccessDenied, psutil.NoSuchProcess):
                continue

        return None

    def kill_process_on_port(self, port: int) -> bool:
        """
        Kill the process listening on a specific port.

        Args:
            port: Port number

        Returns:
            True if a process was killed
        """
        logger.info(f"Attempting to kill process on port {port}")

        for proc in psutil.process_iter(['pid', 'name']):
            try:
                for conn in proc.net_connections(kind='inet'):
                    if conn.laddr and conn.laddr.port == port:
                        logger.info(f"Killing process {proc.pid} ({proc.name()}) on port {port}")
                        proc.kill()
                        proc.wait(timeout=5)
                        return True
            except (psutil.AccessDenied, psutil.NoSuchProcess, psutil.TimeoutExpired):
                continue

        return False


def _read(handle) -> str:
    handle.seek(0)
    return handle.read().decode(errors="replace").strip()
