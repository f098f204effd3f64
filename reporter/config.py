"""Reporter settings, read from the environment once at process start."""

import os
from dataclasses import dataclass

from reporter.errors import ConfigError

PROMETHEUS_REPORTER = "prometheus"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _get_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _get_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ReporterConfig:
    """Immutable reporter settings"""

    enabled: bool = True
    reporter: str = PROMETHEUS_REPORTER
    host: str = "0.0.0.0"
    port: int = 9091
    source: str = "simulated"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ReporterConfig":
        port = _get_int("METRICS_PORT", 9091)
        if not 0 <= port <= 65535:
            raise ConfigError(f"METRICS_PORT out of range: {port}")
        return cls(
            enabled=_get_bool("METRICS_ENABLED", True),
            reporter=os.environ.get("METRICS_REPORTER", PROMETHEUS_REPORTER),
            host=os.environ.get("METRICS_HOST", "0.0.0.0"),
            port=port,
            source=os.environ.get("METRICS_SOURCE", "simulated"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def should_report(self) -> bool:
        return self.enabled and self.reporter.strip().lower() == PROMETHEUS_REPORTER
