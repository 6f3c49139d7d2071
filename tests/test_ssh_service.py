"""Unit tests for SSHService."""

import subprocess

import pytest

from wowzadeploy.exceptions import SSHError
from wowzadeploy.models import RemoteCommand
from wowzadeploy.services import SSHService


class FakeCompleted:
    def __init__(self, returncode=0, stdout=b"", stderr=b""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs))
        return FakeCompleted(stdout=b"ok\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_execute_command_argv_and_env(captured, credential):
    result = SSHService().execute_command(credential, RemoteCommand(["mkdir", "-p", "/a b"]))

    args, kwargs = captured[0]
    assert args[:3] == ["sshpass", "-e", "ssh"]
    assert args[-2] == "root@10.0.0.5"
    assert args[-1] == "mkdir -p '/a b'"
    assert kwargs["env"]["SSHPASS"] == credential.ssh_password
    assert kwargs["timeout"] is None
    assert kwargs["stdin"] == subprocess.DEVNULL
    assert "shell" not in kwargs

    assert result.is_success
    assert result.stdout == "ok\n"
    assert result.host == "10.0.0.5"


def test_timeout_is_passed(captured, credential):
    SSHService(timeout=15).execute_command(credential, RemoteCommand(["true"]))
    assert captured[0][1]["timeout"] == 15


def test_non_zero_exit_is_returned(monkeypatch, credential):
    monkeypatch.setattr(subprocess, "run", lambda args, **kw: FakeCompleted(1, b"", b"denied"))

    result = SSHService().execute_command(credential, RemoteCommand(["false"]))

    assert result.is_failure
    assert result.stderr == "denied"


def test_missing_binary_raises_ssh_error(monkeypatch, credential):
    def fake_run(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "sshpass")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(SSHError, match="SSH command failed"):
        SSHService().execute_command(credential, RemoteCommand(["true"]))


def test_timeout_raises_ssh_error(monkeypatch, credential):
    def fake_run(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(SSHError, match="timed out after 5s"):
        SSHService(timeout=5).execute_command(credential, RemoteCommand(["sleep", "60"]))


def test_output_line_endings_are_preserved(monkeypatch, credential):
    monkeypatch.setattr(
        subprocess, "run", lambda args, **kw: FakeCompleted(0, b"line1\r\nline2\rend", b"")
    )

    result = SSHService().execute_command(credential, RemoteCommand(["cat", "/f"]))

    assert result.stdout == "line1\r\nline2\rend"


def test_undecodable_stdout_raises_ssh_error(monkeypatch, credential):
    monkeypatch.setattr(subprocess, "run", lambda args, **kw: FakeCompleted(0, b"\xff\xfe", b""))

    with pytest.raises(SSHError, match="non-UTF-8"):
        SSHService().execute_command(credential, RemoteCommand(["cat", "/f"]))


def test_undecodable_stderr_is_replaced(monkeypatch, credential):
    monkeypatch.setattr(subprocess, "run", lambda args, **kw: FakeCompleted(1, b"", b"bad \xff"))

    result = SSHService().execute_command(credential, RemoteCommand(["false"]))

    assert result.stderr == "bad \ufffd"
