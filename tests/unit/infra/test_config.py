"""Unit tests for MqConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from mergeq.infra.io.config import ConfigurationError, MqConfig

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MERGEQ_TOWN_ROOT",
        "MERGEQ_BD_BIN",
        "MERGEQ_MAIL_BIN",
        "MERGEQ_COMMAND_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = MqConfig.from_env()
        assert config.town_root == tmp_path
        assert config.bd_bin == "bd"
        assert config.mail_bin == "gt"
        assert config.command_timeout == 30.0

    def test_reads_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MERGEQ_TOWN_ROOT", str(tmp_path))
        monkeypatch.setenv("MERGEQ_BD_BIN", "/opt/bd")
        monkeypatch.setenv("MERGEQ_MAIL_BIN", "town")
        monkeypatch.setenv("MERGEQ_COMMAND_TIMEOUT", "5.5")
        config = MqConfig.from_env()
        assert config == MqConfig(
            town_root=tmp_path, bd_bin="/opt/bd", mail_bin="town", command_timeout=5.5
        )

    def test_unparseable_timeout_falls_back(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MERGEQ_COMMAND_TIMEOUT", "soon")
        assert MqConfig.from_env().command_timeout == 30.0

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MERGEQ_COMMAND_TIMEOUT", "0")
        with pytest.raises(ConfigurationError) as exc_info:
            MqConfig.from_env()
        assert "command_timeout must be positive" in exc_info.value.errors[0]

    def test_validation_can_be_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MERGEQ_COMMAND_TIMEOUT", "-1")
        assert MqConfig.from_env(validate=False).command_timeout == -1.0


class TestValidate:
    def test_valid_config_has_no_errors(self, tmp_path: Path) -> None:
        assert MqConfig(town_root=tmp_path).validate() == []

    def test_collects_all_errors(self, tmp_path: Path) -> None:
        config = MqConfig(town_root=tmp_path, bd_bin=" ", mail_bin="", command_timeout=0)
        assert len(config.validate()) == 3

    def test_error_message_lists_each_problem(self) -> None:
        error = ConfigurationError(["a is bad", "b is bad"])
        assert "  - a is bad" in str(error)
        assert "  - b is bad" in str(error)
