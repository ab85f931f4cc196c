import pytest

from sshforward.config.environment import load_environment_config
from sshforward.utils.exceptions import ConfigurationError

ENV = {
    "SSH_USERNAME": "deploy",
    "SSH_HOSTNAME": "bastion.example.com",
    "FORWARD_PORT_LOCAL": "15432",
    "FORWARD_HOST_REMOTE": "db.internal",
    "FORWARD_PORT_REMOTE": "5432",
}

OPTIONAL = ["SSH_PORT", "PRIVATE_KEY_CONTENTS", "PRIVATE_KEY_FILENAME", "SSH_SOCKET_PATH"]


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in OPTIONAL:
        monkeypatch.delenv(key, raising=False)
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


def test_load_from_environment(env):
    env.setenv("PRIVATE_KEY_FILENAME", "/keys/id_ed25519")

    config = load_environment_config()

    assert config.ssh_username == "deploy"
    assert config.ssh_hostname == "bastion.example.com"
    assert config.ssh_port == "22"
    assert config.forward_spec == "15432:db.internal:5432"
    assert config.private_key_filename == "/keys/id_ed25519"
    assert config.private_key_contents is None
    assert config.ssh_socket_path is None


def test_missing_required_variable(env):
    env.delenv("SSH_HOSTNAME")

    with pytest.raises(ConfigurationError, match="SSH_HOSTNAME"):
        load_environment_config()


def test_env_file(env, tmp_path):
    env.delenv("SSH_USERNAME")
    env_file = tmp_path / "tunnel.env"
    env_file.write_text("SSH_USERNAME=from-file\nSSH_PORT=2200\n")

    config = load_environment_config(str(env_file))

    assert config.ssh_username == "from-file"
    assert config.ssh_port == "2200"
