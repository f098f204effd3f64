"""Metrics provider abstract base class"""

from abc import ABC, abstractmethod

from reporter.models.metric import Metric


class BaseProvider(ABC):
    """Boundary to the registry that owns the metrics.

    Each scrape calls ``collect`` once and renders whatever it returns; the
    provider is free to build fresh ``Metric`` objects or hand out its own.
    """

    @abstractmethod
    async def collect(self) -> list[Metric]:
        """Return the current metrics snapshot in registry order"""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Report whether the registry can currently be read"""
        ...
