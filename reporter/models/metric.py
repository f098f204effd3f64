"""Registry-agnostic metric model handed to the exposition renderer."""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum


class MetricKind(str, Enum):
    """Metric kinds understood by the exposition format."""

    COUNTER = "counter"
    GAUGE = "gauge"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, raw: str) -> "MetricKind":
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"unknown metric kind: {raw!r}") from None


@dataclass
class Snapshot:
    """One rolling time window of a distribution metric"""

    time_window: timedelta | str | int | float
    mean: float
    max: float
    min: float
    std_dev: float
    percentile_values: list[tuple[float, float]] = field(default_factory=list)


@dataclass
class Metric:
    """A single metric as read from the registry for one pull"""

    name: str
    value: int | float
    kind: MetricKind = MetricKind.GAUGE
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    summaries: list[Snapshot] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, MetricKind):
            self.kind = MetricKind.parse(self.kind)

    @property
    def has_distribution(self) -> bool:
        return self.summaries is not None
