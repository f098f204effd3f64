"""Simulated metrics registry for local runs.

Stands in for the host application's registry so the endpoint can be scraped
without any instrumentation. Values drift over time (sine wave + noise).
"""

import math
import random
import time
from datetime import timedelta

from reporter.models.metric import Metric, MetricKind, Snapshot
from reporter.providers.base import BaseProvider

# ---------------------------------------------------------------------------
# Simulated services
# ---------------------------------------------------------------------------

SERVICES = [
    {"service": "api", "route": "/v1/items", "rps_base": 120, "rps_amp": 40, "latency_ms": 35},
    {"service": "api", "route": "/v1/items/*", "rps_base": 60, "rps_amp": 25, "latency_ms": 22},
    {"service": "auth", "route": "/token", "rps_base": 15, "rps_amp": 5, "latency_ms": 80},
]

WINDOWS = (timedelta(seconds=60), timedelta(minutes=5))
PERCENTILES = (0.5, 0.9, 0.95, 0.99)


def _wave(base: float, amplitude: float, period_minutes: float = 60.0) -> float:
    """Return a realistic time-varying value using sine wave + noise."""
    t = time.time()
    wave = math.sin(2 * math.pi * t / (period_minutes * 60))
    noise = random.uniform(-amplitude * 0.2, amplitude * 0.2)
    return max(0.0, base + amplitude * wave + noise)


def _latency_snapshot(window: timedelta, base_ms: float) -> Snapshot:
    mean = _wave(base_ms, base_ms * 0.3, period_minutes=window.total_seconds() / 6)
    std_dev = mean * 0.25
    return Snapshot(
        time_window=window,
        mean=mean,
        max=mean + 3 * std_dev,
        min=max(0.0, mean - 2 * std_dev),
        std_dev=std_dev,
        percentile_values=[(p, mean + std_dev * (p - 0.5) * 4) for p in PERCENTILES],
    )


class SimulatedProvider(BaseProvider):
    """Generates a fresh snapshot of demo metrics on every collect"""

    def __init__(self) -> None:
        self.started = time.time()
        self.totals: dict[tuple[str, str], int] = {}

    async def collect(self) -> list[Metric]:
        metrics: list[Metric] = []
        for svc in SERVICES:
            tags = {"service": svc["service"], "route": svc["route"]}
            key = (svc["service"], svc["route"])

            rps = _wave(svc["rps_base"], svc["rps_amp"], period_minutes=30)
            self.totals[key] = self.totals.get(key, 0) + int(rps)

            metrics.append(
                Metric(
                    name="http.requests.total",
                    description="Requests served since start",
                    kind=MetricKind.COUNTER,
                    tags=dict(tags),
                    value=self.totals[key],
                )
            )
            metrics.append(
                Metric(
                    name="http.request.latency",
                    description="Request latency in milliseconds",
                    kind=MetricKind.GAUGE,
                    tags=dict(tags),
                    value=_wave(svc["latency_ms"], svc["latency_ms"] * 0.2),
                    summaries=[_latency_snapshot(w, svc["latency_ms"]) for w in WINDOWS],
                )
            )

        metrics.append(
            Metric(
                name="process.uptime.seconds",
                description="Seconds since the reporter started",
                kind=MetricKind.GAUGE,
                value=time.time() - self.started,
            )
        )
        return metrics

    async def health_check(self) -> bool:
        return True
