"""Prometheus Reporter - Entrypoint

Serves /metrics and /healthz for the configured metrics source. Hosts that
embed the reporter call ``start_reporting`` with their own provider instead.
"""

import asyncio
import logging

from reporter.config import ReporterConfig
from reporter.endpoint import start_reporting
from reporter.errors import ConfigError
from reporter.providers.base import BaseProvider
from reporter.providers.simulated import SimulatedProvider

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, type[BaseProvider]] = {
    "simulated": SimulatedProvider,
}


def build_provider(config: ReporterConfig) -> BaseProvider:
    try:
        provider_cls = PROVIDERS[config.source.lower()]
    except KeyError:
        raise ValueError(f"unknown metrics source: {config.source!r}") from None
    return provider_cls()


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    try:
        config = ReporterConfig.from_env()
    except ConfigError as exc:
        logger.error("Invalid reporter configuration: %s", exc)
        return
    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))

    if not config.should_report:
        logger.info(
            "Metrics reporting disabled (enabled=%s, reporter=%s)",
            config.enabled, config.reporter,
        )
        return

    try:
        provider = build_provider(config)
    except ValueError as exc:
        logger.error("Metrics reporting unavailable: %s", exc)
        return

    endpoint = await start_reporting(config, provider)
    if endpoint is None:
        return

    try:
        await asyncio.Event().wait()
    finally:
        await endpoint.stop()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down.")


if __name__ == "__main__":
    run()
