"""Command line orchestration for a single SSH port-forward."""

import signal
import sys
import time

from .config.environment import load_environment_config
from .config.models import TunnelConfig
from .core.network import is_port_in_use
from .core.tunnel import SSHTunnel
from .system.platform import PlatformManager
from .system.process import ProcessManager
from .utils.console import console
from .utils.exceptions import (
    TunnelError, ConfigurationError, PlatformNotSupportedError, PortInUseError
)
from .utils.logging import setup_logging, get_logger

logger = get_logger("main")


class TunnelRunner:
    """Runs one tunnel from pre-flight checks to shutdown."""

    def __init__(self, config: TunnelConfig):
        self.config = config
        self.platform_manager = PlatformManager()
        self.process_manager = ProcessManager()
        self.tunnel = SSHTunnel(self.process_manager)

    def start(self) -> None:
        console.print_header("SSH Tunnel Startup")

        self._perform_preflight_checks()

        console.print_step(
            f"Opening tunnel {self.config.forward_spec} via {self.config.ssh_hostname}"
        )
        self.tunnel.open_tunnel(self.config)

        local_port = int(self.config.forward_port_local)
        if is_port_in_use(local_port):
            console.print_success(f"Forward listening on localhost:{local_port}")
        else:
            console.print_warning(f"SSH reported success but localhost:{local_port} is not accepting connections")

    def stop(self) -> None:
        """Close the tunnel if it is open. Safe to call more than once."""
        if not self.tunnel.is_open:
            return

        console.print_header("SSH Tunnel Shutdown")
        self.tunnel.close()
        console.print_success("SSH tunnel closed")

    def is_running(self) -> bool:
        return self.tunnel.is_open

    def _perform_preflight_checks(self) -> None:
        console.print_step("Performing pre-flight checks")

        self.platform_manager.ensure_requirements()

        try:
            local_port = int(self.config.forward_port_local)
        except (TypeError, ValueError):
            # left to the tunnel's configuration checks
            return

        if is_port_in_use(local_port):
            process_info = self.process_manager.find_process_by_port(local_port)
            if process_info and console.ask_confirmation(
                    f"Port {local_port} is in use by {process_info}. Kill it?",
                    default=False
            ):
                self.process_manager.kill_process_on_port(local_port)
                time.sleep(1)
            else:
                raise PortInUseError(local_port, process_info)

        console.print_success("Pre-flight checks completed")


def main():
    """Main entry point."""
    setup_logging(log_file="tunnel.log")

    try:
        console.print_header("Loading Configuration")
        config = load_environment_config()

        runner = TunnelRunner(config)

        def shutdown(signum, frame):
            console.print_warning(f"\nReceived signal {signum}, shutting down...")
            runner.stop()
            sys.exit(0)

        signal.signal(signal.SIGTERM, shutdown)

        try:
            runner.start()
            console.print_info("Tunnel running. Press Ctrl+C to close it.")

            while runner.is_running():
                time.sleep(1)
        except KeyboardInterrupt:
            console.print_warning("\nKeyboard interrupt received")

        runner.stop()

    except ConfigurationError as e:
        console.print_error(f"Configuration error: {e}")
        sys.exit(1)
    except PlatformNotSupportedError as e:
        console.print_error(f"Platform not supported: {e}")
        sys.exit(1)
    except TunnelError as e:
        console.print_error(f"Tunnel error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error in main")
        console.print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
