"""Tests for configuration loading and logging setup."""

import logging

import pytest

import vetcase_events.config as config_module
from vetcase_events.config import (
    CaseEventsConfig,
    ConfigError,
    configure_logging,
    load_config,
)
from vetcase_events.domains.changes import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT

ENV_VARS = (
    "VETCASE_COLLECTION",
    "VETCASE_MAX_DEPTH",
    "VETCASE_LOG_LEVEL",
    "VETCASE_DISPATCH_ENABLED",
)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr(config_module, "_ENV_LOADED", True)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestCaseEventsConfig:
    def test_defaults(self):
        cfg = CaseEventsConfig()

        assert cfg.collection_name == "vetCases"
        assert cfg.max_snapshot_depth == DEFAULT_MAX_DEPTH
        assert cfg.log_level == "INFO"
        assert cfg.dispatch_enabled is True
        assert cfg.document_pattern == "vetCases/{vetCaseId}"

    def test_log_level_is_normalised(self):
        assert CaseEventsConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("kwargs", [
        {"collection_name": ""},
        {"collection_name": "vet/cases"},
        {"max_snapshot_depth": 0},
        {"max_snapshot_depth": MAX_DEPTH_LIMIT + 1},
        {"log_level": "verbose"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            CaseEventsConfig(**kwargs)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_with_overrides(self):
        cfg = CaseEventsConfig()

        updated = cfg.with_overrides(collection_name="cases", dispatch_enabled=False)

        assert updated.collection_name == "cases"
        assert updated.dispatch_enabled is False
        assert updated.max_snapshot_depth == cfg.max_snapshot_depth
        assert cfg.collection_name == "vetCases"

    def test_with_overrides_without_changes(self):
        cfg = CaseEventsConfig(log_level="WARNING")

        assert cfg.with_overrides() == cfg


class TestLoadConfig:
    def test_defaults_without_env(self, clean_env):
        assert load_config() == CaseEventsConfig()

    def test_reads_environment(self, clean_env):
        clean_env.setenv("VETCASE_COLLECTION", "cases")
        clean_env.setenv("VETCASE_MAX_DEPTH", "12")
        clean_env.setenv("VETCASE_LOG_LEVEL", "debug")
        clean_env.setenv("VETCASE_DISPATCH_ENABLED", "off")

        cfg = load_config()

        assert cfg == CaseEventsConfig(
            collection_name="cases",
            max_snapshot_depth=12,
            log_level="DEBUG",
            dispatch_enabled=False,
        )

    def test_arguments_override_environment(self, clean_env):
        clean_env.setenv("VETCASE_COLLECTION", "cases")
        clean_env.setenv("VETCASE_DISPATCH_ENABLED", "false")

        cfg = load_config(collection_name="other", dispatch_enabled=True)

        assert cfg.collection_name == "other"
        assert cfg.dispatch_enabled is True

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("TRUE", True), ("yes", True), ("on", True),
        ("0", False), ("False", False), ("no", False), ("off", False),
    ])
    def test_boolean_flags(self, clean_env, raw, expected):
        clean_env.setenv("VETCASE_DISPATCH_ENABLED", raw)

        assert load_config().dispatch_enabled is expected

    def test_invalid_boolean(self, clean_env):
        clean_env.setenv("VETCASE_DISPATCH_ENABLED", "maybe")

        with pytest.raises(ConfigError, match="VETCASE_DISPATCH_ENABLED"):
            load_config()

    def test_invalid_depth(self, clean_env):
        clean_env.setenv("VETCASE_MAX_DEPTH", "deep")

        with pytest.raises(ConfigError, match="VETCASE_MAX_DEPTH"):
            load_config()

    def test_out_of_range_depth(self, clean_env):
        clean_env.setenv("VETCASE_MAX_DEPTH", "0")

        with pytest.raises(ConfigError):
            load_config()

    def test_depth_above_maximum(self, clean_env):
        clean_env.setenv("VETCASE_MAX_DEPTH", "1000")

        with pytest.raises(ConfigError, match="between 1 and"):
            load_config()

    def test_maximum_depth_is_accepted(self, clean_env):
        clean_env.setenv("VETCASE_MAX_DEPTH", str(MAX_DEPTH_LIMIT))

        assert load_config().max_snapshot_depth == MAX_DEPTH_LIMIT


class TestConfigureLogging:
    def test_sets_package_level(self):
        logger = configure_logging(CaseEventsConfig(log_level="ERROR"))

        assert logger.name == "vetcase_events"
        assert logger.level == logging.ERROR
        assert logging.getLogger("vetcase_events.domains.changes").getEffectiveLevel() == logging.ERROR

    def test_handler_added_once(self):
        logger = configure_logging(CaseEventsConfig())
        configure_logging(CaseEventsConfig())

        assert len(logger.handlers) == 1
