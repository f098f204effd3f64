"""Unit tests for configuration loading (reporter/config.py)."""

import dataclasses
from unittest.mock import patch

import pytest

from reporter.config import ReporterConfig
from reporter.errors import ConfigError


def test_defaults_when_environment_is_empty():
    with patch.dict("os.environ", {}, clear=True):
        config = ReporterConfig.from_env()
    assert config == ReporterConfig()
    assert config.enabled is True
    assert config.port == 9091
    assert config.should_report


def test_values_read_from_environment():
    env = {
        "METRICS_ENABLED": "no",
        "METRICS_REPORTER": "Prometheus",
        "METRICS_HOST": "127.0.0.1",
        "METRICS_PORT": "9100",
        "METRICS_SOURCE": "simulated",
        "LOG_LEVEL": "debug",
    }
    with patch.dict("os.environ", env, clear=True):
        config = ReporterConfig.from_env()
    assert config.enabled is False
    assert config.reporter == "Prometheus"
    assert config.host == "127.0.0.1"
    assert config.port == 9100
    assert config.log_level == "DEBUG"


def test_invalid_port_raises_config_error():
    with patch.dict("os.environ", {"METRICS_PORT": "ninety"}, clear=True):
        with pytest.raises(ConfigError, match="METRICS_PORT"):
            ReporterConfig.from_env()


def test_out_of_range_port_raises_config_error():
    with patch.dict("os.environ", {"METRICS_PORT": "70000"}, clear=True):
        with pytest.raises(ConfigError, match="out of range"):
            ReporterConfig.from_env()


def test_invalid_bool_raises_config_error():
    with patch.dict("os.environ", {"METRICS_ENABLED": "maybe"}, clear=True):
        with pytest.raises(ConfigError, match="METRICS_ENABLED"):
            ReporterConfig.from_env()


@pytest.mark.parametrize(
    "enabled,reporter,expected",
    [
        (True, "prometheus", True),
        (True, "PROMETHEUS", True),
        (False, "prometheus", False),
        (True, "statsd", False),
    ],
)
def test_should_report(enabled, reporter, expected):
    assert ReporterConfig(enabled=enabled, reporter=reporter).should_report is expected


def test_config_is_immutable():
    config = ReporterConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.port = 1
