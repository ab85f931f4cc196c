import os
import stat
import tempfile

import pytest

from sshforward.config.models import TunnelConfig
from sshforward.config.validation import MANDATORY_FIELDS, prepare_configuration
from sshforward.utils.exceptions import ConfigurationError


@pytest.mark.parametrize("field", [f for f in MANDATORY_FIELDS if f != "ssh_socket_path"])
def test_missing_mandatory_field_is_named(config, field):
    setattr(config, field, "")

    with pytest.raises(ConfigurationError, match=f'"{field}"'):
        prepare_configuration(config)


def test_fields_are_checked_in_order(config):
    config.ssh_hostname = ""
    config.forward_host_remote = ""

    with pytest.raises(ConfigurationError, match='"ssh_hostname"'):
        prepare_configuration(config)


def test_default_socket_path(config):
    config.ssh_socket_path = None

    prepare_configuration(config)

    expected = os.path.join(tempfile.gettempdir(), "ssh-deploy@bastion.example.com:2222")
    assert config.ssh_socket_path == expected


def test_explicit_socket_path_is_kept(config, tmp_path):
    prepare_configuration(config)
    assert config.ssh_socket_path == str(tmp_path / "ctl.sock")


def test_both_key_sources_rejected(config):
    config.private_key_contents = "KEYDATA"

    with pytest.raises(ConfigurationError, match="Only one of"):
        prepare_configuration(config)


def test_no_key_source_rejected(config):
    config.private_key_filename = None

    with pytest.raises(ConfigurationError, match="is mandatory"):
        prepare_configuration(config)


def test_key_file_must_exist(config, tmp_path):
    config.private_key_filename = str(tmp_path / "missing")

    with pytest.raises(ConfigurationError, match="could not be found"):
        prepare_configuration(config)


def test_key_contents_are_materialized(config):
    config.private_key_filename = None
    config.private_key_contents = "KEYDATA"

    prepared = prepare_configuration(config)

    try:
        assert prepared is config
        assert config.private_key_contents is None
        assert os.path.basename(config.private_key_filename).startswith("ssh-key-")
        with open(config.private_key_filename) as f:
            assert f.read() == "KEYDATA"
        assert stat.S_IMODE(os.stat(config.private_key_filename).st_mode) == 0o600
    finally:
        os.remove(config.private_key_filename)


@pytest.mark.parametrize("value", ["0", "65536", "ssh", "-1", "²", "22¹", "8080 ", " 22"])
def test_invalid_port_rejected(config, value):
    config.forward_port_local = value

    with pytest.raises(ConfigurationError, match='"forward_port_local"'):
        prepare_configuration(config)


def test_integer_ports_accepted(config):
    config.ssh_port = 22
    config.forward_port_local = 8080
    config.forward_port_remote = 80

    prepare_configuration(config)


def test_default_ssh_port():
    assert TunnelConfig().ssh_port == "22"
