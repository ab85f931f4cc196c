"""Environment variable loading."""

import os
from typing import Optional

from dotenv import load_dotenv

from .models import TunnelConfig
from ..utils.exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger("config")


def load_environment_config(env_file: Optional[str] = None) -> TunnelConfig:
    """
    Build a tunnel configuration from environment variables.

    Key and socket variables are optional here; their rules are enforced
    when the tunnel is opened.

    Args:
        env_file: Optional path to .env file

    Returns:
        Tunnel configuration

    Raises:
        ConfigurationError: If a required variable is missing
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    logger.info("Loading configuration from environment variables")

    try:
        config = TunnelConfig(
            ssh_username=_get_required_env("SSH_USERNAME"),
            ssh_hostname=_get_required_env("SSH_HOSTNAME"),
            ssh_port=os.getenv("SSH_PORT") or "22",
            forward_port_local=_get_required_env("FORWARD_PORT_LOCAL"),
            forward_host_remote=_get_required_env("FORWARD_HOST_REMOTE"),
            forward_port_remote=_get_required_env("FORWARD_PORT_REMOTE"),
            private_key_contents=os.getenv("PRIVATE_KEY_CONTENTS") or None,
            private_key_filename=os.getenv("PRIVATE_KEY_FILENAME") or None,
            ssh_socket_path=os.getenv("SSH_SOCKET_PATH") or None,
        )
    except KeyError as e:
        logger.error(f"Configuration loading failed: {e}")
        raise ConfigurationError(f"Configuration loading failed: {e}") from e

    logger.info("Configuration loaded successfully")
    return config


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise error."""
    value = os.getenv(key)
    if not value:
        raise KeyError(f"Missing required environment variable: {key}")
    return value
