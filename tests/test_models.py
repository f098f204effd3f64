"""Unit tests for the metric model (reporter/models/metric.py)."""

import pytest

from reporter.models.metric import Metric, MetricKind, Snapshot


@pytest.mark.parametrize("raw", ["gauge", "GAUGE", " Gauge "])
def test_kind_parse_is_case_insensitive(raw):
    assert MetricKind.parse(raw) is MetricKind.GAUGE


def test_kind_parse_rejects_unknown_kind():
    with pytest.raises(ValueError, match="unknown metric kind"):
        MetricKind.parse("histogram")


def test_metric_coerces_string_kind():
    metric = Metric(name="x", value=1, kind="Counter")
    assert metric.kind is MetricKind.COUNTER


def test_metric_defaults():
    metric = Metric(name="x", value=1)
    assert metric.kind is MetricKind.GAUGE
    assert metric.description == ""
    assert metric.tags == {}
    assert metric.summaries is None
    assert not metric.has_distribution


def test_has_distribution_follows_summaries_presence():
    assert Metric(name="x", value=1, summaries=[]).has_distribution
    snap = Snapshot("60s", 1.0, 2.0, 0.0, 0.5)
    assert snap.percentile_values == []
    assert Metric(name="x", value=1, summaries=[snap]).has_distribution


def test_tag_defaults_are_not_shared():
    a = Metric(name="a", value=1)
    b = Metric(name="b", value=1)
    a.tags["k"] = "v"
    assert b.tags == {}
