"""CLI tests using click's CliRunner."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import HOST, LocalShellService
from wowzadeploy.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def env(monkeypatch, settings):
    monkeypatch.setenv("WOWZA_BASE_PATH", settings.wowza_base_path)
    monkeypatch.setenv("WOWZADEPLOY_STREAMING_HOME", settings.streaming_home)
    monkeypatch.setenv("WOWZADEPLOY_DB_URL", settings.database_url)
    monkeypatch.setenv("WOWZADEPLOY_LOG_DIR", str(settings.log_dir))
    monkeypatch.delenv("WOWZADEPLOY_SSH_TIMEOUT", raising=False)
    return settings


@pytest.fixture
def local_ssh(monkeypatch):
    """Route every SSH command built by the CLI to the local shell."""
    monkeypatch.setattr(
        "wowzadeploy.services.wowza_config_service.SSHService", LocalShellService
    )


def test_help_lists_commands(runner):
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for name in ["create", "remove", "update", "servers:add", "servers:list"]:
        assert name in result.output


def test_create_dry_run_json(runner, env):
    result = runner.invoke(
        cli,
        ["create", "clienteA", "--host", HOST, "-p", "s3cr3t", "-b", "6000", "-n", "500", "--dry-run", "--json"],
    )

    assert result.exit_code == 0, result.output
    files = json.loads(result.output)["files"]
    app_dir = f"{env.wowza_base_path}/clienteA"
    assert files[f"{app_dir}/publish.password"] == "clienteA=s3cr3t\n*=${Stream.Name}"
    assert files[f"{app_dir}/aliasmap.play.txt"] == "clienteA teste2026"
    assert "<Value>6000</Value>" in files[f"{app_dir}/Application.xml"]
    assert not Path(app_dir).exists()


def test_create_rejects_unsafe_name(runner, env):
    result = runner.invoke(cli, ["create", "../etc", "--host", HOST, "-p", "x", "--dry-run"])

    assert result.exit_code == 1
    assert "Invalid application name" in result.output


def test_update_requires_a_limit(runner, env):
    result = runner.invoke(cli, ["update", "clienteA", "--host", HOST])

    assert result.exit_code == 2
    assert "Nothing to update" in result.output


def test_servers_add_and_list(runner, env):
    added = runner.invoke(cli, ["servers:add", HOST, "--password", "pw", "--port", "2222", "--json"])
    assert added.exit_code == 0, added.output
    assert json.loads(added.output) == {"ip": HOST, "ssh_port": 2222, "status": "ativo"}

    listed = runner.invoke(cli, ["servers:list", "--json"])
    assert listed.exit_code == 0, listed.output
    assert json.loads(listed.output)["servers"] == [{"ip": HOST, "ssh_port": 2222, "status": "ativo"}]
    assert "pw" not in listed.output


def test_unknown_server_fails(runner, env, local_ssh):
    runner.invoke(cli, ["servers:list"])  # creates the table

    result = runner.invoke(cli, ["create", "clienteA", "--host", "10.9.9.9", "-p", "x", "--json"])

    assert result.exit_code == 1
    error = json.loads(result.output)
    assert error["error"] == "Server not found or inactive: 10.9.9.9"
    assert error["details"]["type"] == "HostNotFoundError"


def test_create_update_remove_lifecycle(runner, env, local_ssh):
    runner.invoke(cli, ["servers:add", HOST, "--password", "pw"])
    app_dir = Path(env.wowza_base_path) / "clienteA"

    created = runner.invoke(
        cli, ["create", "clienteA", "--host", HOST, "-p", "s3cr3t", "-b", "6000", "-n", "500", "--json"]
    )
    assert created.exit_code == 0, created.output
    assert json.loads(created.output)["status"] == "created"
    assert (app_dir / "publish.password").read_text() == "clienteA=s3cr3t\n*=${Stream.Name}"

    updated = runner.invoke(cli, ["update", "clienteA", "--host", HOST, "-b", "8000", "--json"])
    assert updated.exit_code == 0, updated.output
    xml = (app_dir / "Application.xml").read_text()
    assert "<Name>MaxBitrate</Name>\n\t\t\t\t<Value>8000</Value>" in xml
    assert "<Name>limitStreamViewersMaxViewers</Name>\n\t\t\t\t<Value>500</Value>" in xml

    removed = runner.invoke(cli, ["remove", "clienteA", "--host", HOST, "--yes", "--json"])
    assert removed.exit_code == 0, removed.output
    assert not app_dir.exists()

    logs = list((env.log_dir / "clienteA").rglob("*.log"))
    assert len(logs) == 3
    assert all("s3cr3t" not in log.read_text() for log in logs)


def test_disabled_server_is_not_used(runner, env, local_ssh):
    runner.invoke(cli, ["servers:add", HOST, "--password", "pw"])
    disabled = runner.invoke(cli, ["servers:disable", HOST])
    assert disabled.exit_code == 0, disabled.output

    result = runner.invoke(cli, ["remove", "clienteA", "--host", HOST, "--yes"])

    assert result.exit_code == 1
    assert "not found or inactive" in result.output


def test_remove_asks_for_confirmation(runner, env, local_ssh):
    result = runner.invoke(cli, ["remove", "clienteA", "--host", HOST], input="n\n")

    assert result.exit_code == 0
    assert "Aborted" in result.output
