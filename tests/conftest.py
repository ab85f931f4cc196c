import pytest

from sshforward.config.models import TunnelConfig
from sshforward.system.process import CommandResult


class FakeProcessManager:
    """Records commands and answers them with queued exit codes or errors."""

    def __init__(self, *results):
        self.results = list(results)
        self.commands = []

    def run_command(self, command, timeout):
        self.commands.append((command, timeout))
        result = self.results.pop(0) if self.results else (0, "", "")
        if isinstance(result, Exception):
            raise result
        returncode, stdout, stderr = result
        return CommandResult(
            args=command, pid=4242, returncode=returncode, stdout=stdout, stderr=stderr
        )


@pytest.fixture
def fake_process_manager():
    return FakeProcessManager


@pytest.fixture
def key_file(tmp_path):
    path = tmp_path / "id_test"
    path.write_text("KEY")
    return str(path)


@pytest.fixture
def config(key_file, tmp_path):
    return TunnelConfig(
        ssh_username="deploy",
        ssh_hostname="bastion.example.com",
        ssh_port="2222",
        forward_port_local="15432",
        forward_host_remote="db.internal",
        forward_port_remote="5432",
        private_key_filename=key_file,
        ssh_socket_path=str(tmp_path / "ctl.sock"),
    )
