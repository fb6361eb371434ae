import logging
import threading

import pytest

from metrics_fallback.core import logging as core_logging
from metrics_fallback.core.config import (
    OPENTELEMETRY_ENABLED_ENV,
    ConfigurationHolder,
    MetricsConfiguration,
    primary_enabled_from_env,
)


@pytest.fixture(autouse=True)
def _no_env_flag(monkeypatch):
    monkeypatch.delenv(OPENTELEMETRY_ENABLED_ENV, raising=False)


def test_defaults():
    config = MetricsConfiguration()

    assert config.primary_enabled is False
    assert config.primary_client is None
    assert config.fallback_client is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("false", False), ("TRUE", False), ("1", False), ("", False)],
)
def test_env_flag_requires_exact_true(monkeypatch, raw, expected):
    monkeypatch.setenv(OPENTELEMETRY_ENABLED_ENV, raw)

    assert primary_enabled_from_env() is expected
    assert MetricsConfiguration().primary_enabled is expected


def test_explicit_flag_overrides_environment(monkeypatch):
    monkeypatch.setenv(OPENTELEMETRY_ENABLED_ENV, "true")

    assert MetricsConfiguration(primary_enabled=False).is_primary_enabled() is False


def test_queries_follow_fields(mocker):
    config = MetricsConfiguration()
    config.primary_enabled = True
    config.fallback_client = mocker.Mock()

    assert config.is_primary_enabled() is True
    assert config.is_fallback_configured() is True

    config.primary_enabled = False
    config.fallback_client = None

    assert config.is_primary_enabled() is False
    assert config.is_fallback_configured() is False


def test_enabled_primary_without_client_is_accepted():
    config = MetricsConfiguration(primary_enabled=True)

    assert config.is_primary_enabled() is True
    assert config.primary_client is None


def test_explicit_error_sink_is_kept(mocker):
    sink = mocker.Mock()

    assert MetricsConfiguration(error_sink=sink).error_sink is sink


def test_error_sink_defaults_once(mocker):
    fallback_logger = logging.getLogger("metrics_fallback")
    factory = mocker.patch.object(core_logging, "default_error_sink", return_value=fallback_logger)
    config = MetricsConfiguration()

    assert config.error_sink is fallback_logger
    assert config.error_sink is fallback_logger
    factory.assert_called_once_with()


def test_holder_configure_runs_mutator_on_live_instance():
    holder = ConfigurationHolder()
    seen = []

    result = holder.configure(seen.append)

    assert seen == [holder.current]
    assert result is holder.current


def test_holder_reset_reads_environment_again(monkeypatch):
    holder = ConfigurationHolder()
    assert holder.current.primary_enabled is False

    monkeypatch.setenv(OPENTELEMETRY_ENABLED_ENV, "true")
    fresh = holder.reset()

    assert fresh is holder.current
    assert fresh.primary_enabled is True


def test_holder_serialises_writers():
    holder = ConfigurationHolder(MetricsConfiguration(primary_enabled=False))
    counter = {"value": 0}

    def _bump(_config):
        current = counter["value"]
        counter["value"] = current + 1

    threads = [
        threading.Thread(target=lambda: [holder.configure(_bump) for _ in range(200)])
        for _ in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter["value"] == 800
