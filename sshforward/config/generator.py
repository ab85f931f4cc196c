"""Files and paths derived from a tunnel configuration."""

import os
import tempfile

from .models import TunnelConfig
from ..utils.exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger("config.generator")

KEY_FILE_PREFIX = "ssh-key-"


def write_private_key_file(contents: str) -> str:
    """
    Write raw private key material to a temporary file.

    The file is created in the system temp directory with owner-only
    permissions and is left in place after the tunnel closes.

    Args:
        contents: Private key material

    Returns:
        Absolute, resolved path of the key file

    Raises:
        ConfigurationError: If the key is empty or cannot be written
    """
    if not contents:
        raise ConfigurationError("SSH key must not be empty")

    try:
        fd, path = tempfile.mkstemp(prefix=KEY_FILE_PREFIX)
        with os.fdopen(fd, "w") as f:
            f.write(contents)

        os.chmod(path, 0o600)

    except (IOError, OSError) as e:
        logger.error(f"Failed to write private key file: {e}")
        raise ConfigurationError(f"Failed to write private key file: {e}") from e

    key_path = os.path.realpath(path)
    logger.debug(f"Private key written to {key_path}")
    return key_path


def default_socket_path(config: TunnelConfig) -> str:
    """Control socket path used when the config does not name one."""
    return os.path.join(
        tempfile.gettempdir(),
        f"ssh-{config.ssh_username}@{config.ssh_hostname}:{config.ssh_port}"
    )
