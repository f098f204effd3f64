"""Pull-based Prometheus reporting endpoint."""

import logging
from typing import Optional

from aiohttp import web

from reporter.config import ReporterConfig
from reporter.errors import ReporterStartupError
from reporter.exposition import assemble
from reporter.providers.base import BaseProvider

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


class PrometheusEndpoint:
    """aiohttp server rendering the provider's snapshot on every scrape."""

    def __init__(self, config: ReporterConfig, provider: BaseProvider) -> None:
        self.config = config
        self.provider = provider
        self.app = web.Application()
        self.app.router.add_get("/metrics", self.handle_metrics)
        self.app.router.add_get("/", self.handle_metrics)
        self.app.router.add_get("/healthz", self.handle_healthz)
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None

    async def handle_healthz(self, request: web.Request) -> web.Response:
        if await self.provider.health_check():
            return web.Response(text="ok")
        return web.Response(text="unhealthy", status=503)

    async def handle_metrics(self, request: web.Request) -> web.StreamResponse:
        try:
            metrics = await self.provider.collect()
        except Exception:
            logger.exception("Failed to read metrics snapshot")
            return web.Response(text="metrics registry unavailable\n", status=500)

        body = assemble(metrics).encode("utf-8")
        response = web.StreamResponse(status=200, headers={"Content-Type": CONTENT_TYPE})
        response.content_length = len(body)
        try:
            await response.prepare(request)
            await response.write(body)
            await response.write_eof()
        except ConnectionResetError as exc:
            logger.debug("Scrape client %s went away: %s", request.remote, exc)
        return response

    async def start(self) -> None:
        """Bind the listener; raises ReporterStartupError if the socket is unavailable."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        self.site = web.TCPSite(self.runner, self.config.host, self.config.port)
        try:
            await self.site.start()
        except OSError as exc:
            await self.runner.cleanup()
            self.runner = None
            self.site = None
            raise ReporterStartupError(
                f"cannot listen on {self.config.host}:{self.config.port}: {exc}"
            ) from exc
        logger.info(
            "Prometheus endpoint listening on http://%s:%d/metrics",
            self.config.host, self.config.port,
        )

    async def stop(self) -> None:
        if self.site:
            await self.site.stop()
        if self.runner:
            await self.runner.cleanup()
        self.site = None
        self.runner = None


async def start_reporting(
    config: ReporterConfig, provider: BaseProvider
) -> Optional[PrometheusEndpoint]:
    """Stand up the endpoint if configured; never raises on bind failure.

    Returns None when reporting is disabled or the socket could not be bound,
    in which case the host process keeps running without metrics.
    """
    if not config.should_report:
        logger.info(
            "Metrics reporting disabled (enabled=%s, reporter=%s)",
            config.enabled, config.reporter,
        )
        return None

    endpoint = PrometheusEndpoint(config, provider)
    try:
        await endpoint.start()
    except ReporterStartupError as exc:
        logger.error("Metrics reporting unavailable: %s", exc)
        return None
    return endpoint
