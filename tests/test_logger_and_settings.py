"""Unit tests for DeployLogger and Settings."""

import pytest

from wowzadeploy.exceptions import ConfigurationError
from wowzadeploy.logger import DeployLogger
from wowzadeploy.settings import Settings


class TestDeployLogger:
    """Tests for DeployLogger."""

    def test_log_file_layout(self, tmp_path):
        with DeployLogger("clienteA", "create", log_dir=tmp_path, quiet=True) as logger:
            logger.step("Creating clienteA")
            logger.success("done")
            log_path = logger.log_path

        assert log_path.parent.parent == tmp_path / "clienteA"
        assert log_path.name.endswith("_create.log")
        text = log_path.read_text()
        assert "Operation: create" in text
        assert "[INFO] Step: Creating clienteA" in text
        assert "Status: SUCCESS" in text

    def test_secrets_are_masked(self, tmp_path):
        logger = DeployLogger("clienteA", "create", log_dir=tmp_path, quiet=True)
        logger.add_secret("s3cr3t")
        logger.log_command("printf %s 'clienteA=s3cr3t' > /x", "10.0.0.5")
        logger.warning("password s3cr3t rejected")
        logger.close()

        text = logger.log_path.read_text()
        assert "s3cr3t" not in text
        assert "clienteA=***" in text

    def test_command_output_is_written_per_line(self, tmp_path):
        logger = DeployLogger("clienteA", "update", log_dir=tmp_path, quiet=True)
        logger.add_secret("s3cr3t")
        logger.log_output("exists\n\x1b[32mgreen\x1b[0m s3cr3t\n")
        logger.log_output("mkdir: odd\n", "stderr")
        logger.log_output("")
        logger.close()

        text = logger.log_path.read_text()
        assert "  [stdout] exists\n" in text
        assert "  [stdout] green ***\n" in text
        assert "  [stderr] mkdir: odd\n" in text

    def test_unhandled_exception_marks_failure(self, tmp_path):
        with pytest.raises(RuntimeError):
            with DeployLogger("clienteA", "update", log_dir=tmp_path, quiet=True) as logger:
                raise RuntimeError("boom")

        text = logger.log_path.read_text()
        assert "ERROR OCCURRED" in text
        assert "boom" in text
        assert "Status: FAILED" in text


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for var in [
            "WOWZA_BASE_PATH",
            "WOWZADEPLOY_STREAMING_HOME",
            "WOWZADEPLOY_SSH_USER",
            "WOWZADEPLOY_SSH_TIMEOUT",
            "WOWZADEPLOY_DB_URL",
        ]:
            monkeypatch.delenv(var, raising=False)

        settings = Settings.from_env()

        assert settings.wowza_base_path == "/usr/local/WowzaStreamingEngine-4.8.0/conf"
        assert settings.streaming_home == "/home/streaming"
        assert settings.ssh_user == "root"
        assert settings.ssh_timeout is None

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WOWZA_BASE_PATH", "/opt/wowza/conf")
        monkeypatch.setenv("WOWZADEPLOY_SSH_TIMEOUT", "30")
        monkeypatch.setenv("WOWZADEPLOY_LOG_DIR", str(tmp_path))

        settings = Settings.from_env()

        assert settings.wowza_base_path == "/opt/wowza/conf"
        assert settings.ssh_timeout == 30
        assert settings.log_dir == tmp_path

    @pytest.mark.parametrize("value", ["soon", "0", "-5"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("WOWZADEPLOY_SSH_TIMEOUT", value)
        with pytest.raises(ConfigurationError):
            Settings.from_env()
