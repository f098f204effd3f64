"""Exception hierarchy for the Prometheus reporter."""


class ReporterError(Exception):
    """Base class for all reporter errors."""


class ConfigError(ReporterError):
    """Raised when an environment setting cannot be parsed."""


class ReporterStartupError(ReporterError):
    """Raised when the reporting endpoint cannot bind its socket."""
