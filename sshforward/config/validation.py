"""Validation and completion of tunnel configurations."""

from pathlib import Path

from .generator import default_socket_path, write_private_key_file
from .models import TunnelConfig
from ..utils.exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger("config.validation")

MANDATORY_FIELDS = (
    "ssh_socket_path",
    "ssh_username",
    "ssh_hostname",
    "ssh_port",
    "forward_port_local",
    "forward_port_remote",
    "forward_host_remote",
)

PORT_FIELDS = ("ssh_port", "forward_port_local", "forward_port_remote")


def prepare_configuration(config: TunnelConfig) -> TunnelConfig:
    """
    Check a tunnel configuration and fill in derived values.

    The config is modified in place: a missing socket path is replaced by
    the default one, and key contents are written to a file whose path
    replaces them.

    Args:
        config: Configuration to prepare

    Returns:
        The same config object

    Raises:
        ConfigurationError: If a mandatory value is missing or invalid
    """
    if not config.ssh_socket_path:
        config.ssh_socket_path = default_socket_path(config)

    for name in MANDATORY_FIELDS:
        if not getattr(config, name):
            raise ConfigurationError(f'Missing configuration "{name}".')

    for name in PORT_FIELDS:
        _validate_port(name, getattr(config, name))

    if not config.private_key_contents and not config.private_key_filename:
        raise ConfigurationError(
            'Missing configuration: One of "private_key_contents" and '
            '"private_key_filename" is mandatory.'
        )

    if config.private_key_contents and config.private_key_filename:
        raise ConfigurationError(
            'Only one of "private_key_contents" and "private_key_filename" may be set.'
        )

    if config.private_key_filename and not Path(config.private_key_filename).exists():
        raise ConfigurationError(f'Key file "{config.private_key_filename}" could not be found')

    if config.private_key_contents:
        config.private_key_filename = write_private_key_file(config.private_key_contents)
        config.private_key_contents = None

    logger.debug(f"Configuration for {config.destination} prepared")
    return config


def _validate_port(name: str, value) -> None:
    """Ports must be integers between 1 and 65535."""
    text = str(value)
    if not (text.isascii() and text.isdigit()) or not (1 <= int(text) <= 65535):
        raise ConfigurationError(f'Configuration "{name}" must be a port between 1 and 65535, got "{value}".')
