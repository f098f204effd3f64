"""Prometheus text exposition renderer.

Turns a registry snapshot (a sequence of :class:`Metric`) into the plain-text
format scraped by Prometheus::

    # HELP http_requests_value count
    # TYPE http_requests_value gauge
    http_requests_value{method="GET"} 10.0

Gauges that carry rolling-window snapshots are additionally expanded into
``_mean``/``_max``/``_min``/``_stdDev`` series plus one ``quantile`` line per
percentile. Every function here is pure: label sets for derived series are
built as fresh dicts, so the registry's tag maps are never touched and
concurrent scrapes cannot observe each other's transient labels.
"""

import logging
import math
import re
from datetime import timedelta
from typing import Iterable, Mapping

from reporter.models.metric import Metric, MetricKind, Snapshot

logger = logging.getLogger(__name__)

_IDENTIFIER_INVALID = re.compile(r"[^a-zA-Z0-9:_]")
_LABEL_VALUE_INVALID = re.compile(r"[^a-zA-Z0-9/.:_* ]")

VALUE_SUFFIX = "_value"
WINDOW_LABEL = "timeWindow"
QUANTILE_LABEL = "quantile"

# (suffix, Snapshot attribute) in emission order
_SUMMARY_STATS = (
    ("_mean", "mean"),
    ("_max", "max"),
    ("_min", "min"),
    ("_stdDev", "std_dev"),
)


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def escape_identifier(s: str) -> str:
    """Rewrite every character outside ``[a-zA-Z0-9:_]`` to ``_``."""
    return _IDENTIFIER_INVALID.sub("_", s)


def escape_label_value(s: str) -> str:
    """Rewrite every character outside ``[a-zA-Z0-9/.:_* ]`` to ``_``."""
    return _LABEL_VALUE_INVALID.sub("_", s)


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


# ---------------------------------------------------------------------------
# Line building
# ---------------------------------------------------------------------------


def render_labels(tags: Mapping[str, str] | None) -> str:
    """Render ``{k1="v1",k2="v2"}`` in insertion order, or ``""`` if empty.

    Keys that collide after escaping (``a.b`` and ``a_b``) are emitted once,
    at the first key's position, with the last value.
    """
    if not tags:
        return ""
    escaped: dict[str, str] = {}
    for k, v in tags.items():
        escaped[escape_identifier(k)] = escape_label_value(v)
    pairs = ",".join(f'{k}="{v}"' for k, v in escaped.items())
    return f"{{{pairs}}}"


def format_value(value: int | float) -> str:
    """Format a sample value so Prometheus always sees a float token."""
    if isinstance(value, bool):
        return f"{int(value)}.0"
    if isinstance(value, int):
        return f"{value}.0"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "+Inf" if value > 0 else "-Inf"
        return repr(value)
    raise TypeError(f"sample value must be int or float, got {type(value).__name__}")


def format_window(window: timedelta | str | int | float) -> str:
    """Render a snapshot window as ``60s``, ``1.5s`` or ``250ms``.

    Windows that are not a ``timedelta`` (strings, or plain numbers as some
    registries hand them over) render as their own text.
    """
    if not isinstance(window, timedelta):
        return str(window)
    seconds = window.total_seconds()
    if seconds.is_integer():
        return f"{int(seconds)}s"
    if abs(seconds) >= 1:
        return f"{seconds:g}s"
    return f"{seconds * 1000:g}ms"


def render_help(name: str, description: str) -> str:
    if not description:
        return ""
    return f"# HELP {name} {_escape_help(description)}\n"


def render_type(name: str, kind: MetricKind | str) -> str:
    kind_text = kind.value if isinstance(kind, MetricKind) else kind
    return f"# TYPE {name} {kind_text}\n"


def render_sample(name: str, tags: Mapping[str, str] | None, value: int | float) -> str:
    return f"{name}{render_labels(tags)} {format_value(value)}\n"


# ---------------------------------------------------------------------------
# Summary expansion
# ---------------------------------------------------------------------------


def _is_summary_eligible(metric: Metric) -> bool:
    return metric.kind is MetricKind.GAUGE and metric.has_distribution


def _expand_snapshot(name: str, metric: Metric, snapshot: Snapshot) -> str:
    window = format_window(snapshot.time_window)
    window_tags = {**metric.tags, WINDOW_LABEL: window}

    stats = "".join(
        render_sample(name + suffix, window_tags, getattr(snapshot, attr))
        for suffix, attr in _SUMMARY_STATS
    )

    quantiles: list[str] = []
    for entry in snapshot.percentile_values:
        try:
            percentile, value = entry
            line = render_sample(
                name, {**window_tags, QUANTILE_LABEL: str(percentile)}, value
            )
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Skipping malformed percentile %r of %s (%s): %s",
                entry, metric.name, window, exc,
            )
            continue
        quantiles.append(line)

    return (
        render_help(name, f"A Summary of {metric.name} for window of {window}")
        + render_type(name, MetricKind.SUMMARY)
        + stats
        + "".join(quantiles)
    )


def expand_summaries(name: str, metric: Metric) -> str:
    """Render every rolling window of ``metric`` as summary series.

    ``name`` is the already escaped, unsuffixed metric name. A metric whose
    snapshot list is present but empty yields a single bare newline, which
    existing scrape consumers of this reporter have always received.
    """
    if not metric.summaries:
        return "\n"

    parts: list[str] = []
    for snapshot in metric.summaries:
        try:
            parts.append(_expand_snapshot(name, metric, snapshot))
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed snapshot of %s: %s", metric.name, exc)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def render_metric(metric: Metric) -> str:
    """Render the base series of ``metric`` and, if eligible, its summaries."""
    name = escape_identifier(metric.name)
    if not name:
        raise ValueError("metric name is empty")
    value_name = name + VALUE_SUFFIX
    out = (
        render_help(value_name, metric.description)
        + render_type(value_name, metric.kind)
        + render_sample(value_name, metric.tags, metric.value)
    )
    if _is_summary_eligible(metric):
        out += expand_summaries(name, metric)
    return out


def assemble(metrics: Iterable[Metric]) -> str:
    """Concatenate the exposition text of every metric in registry order."""
    parts: list[str] = []
    for metric in metrics:
        try:
            parts.append(render_metric(metric))
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning(
                "Omitting metric %r from exposition: %s",
                getattr(metric, "name", metric), exc,
            )
    return "".join(parts)
