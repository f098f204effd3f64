"""Provider backed by a host application's registry callable"""

import logging
from typing import Callable, Iterable

from reporter.models.metric import Metric
from reporter.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class CallableProvider(BaseProvider):
    """Wraps a synchronous ``() -> Iterable[Metric]`` registry accessor."""

    def __init__(self, func: Callable[[], Iterable[Metric]]) -> None:
        self.func = func

    async def collect(self) -> list[Metric]:
        return list(self.func())

    async def health_check(self) -> bool:
        """Healthy while the accessor can be read without raising"""
        try:
            list(self.func())
        except Exception as exc:
            logger.warning("Metrics registry health check failed: %s", exc)
            return False
        return True
