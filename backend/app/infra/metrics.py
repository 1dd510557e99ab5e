"""Process-local counters for passwords API operations."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict

from .logging import get_logger

logger = get_logger(__name__)


class MetricsClient:  # pragma: no cover - simple helper
    """Counter interface consumed by the routers."""

    def increment(self, metric: str, value: int = 1) -> None:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, int]:
        raise NotImplementedError


@dataclass
class InMemoryMetricsClient(MetricsClient):
    """Counters live for the lifetime of the process; nothing is exported."""

    counters: Counter = field(default_factory=Counter)

    def increment(self, metric: str, value: int = 1) -> None:
        self.counters[metric] += value
        logger.debug("metrics_increment", extra={"metric": metric, "value": value})

    def snapshot(self) -> Dict[str, int]:
        return dict(sorted(self.counters.items()))


_metrics_singleton: InMemoryMetricsClient | None = None


def get_metrics_client() -> MetricsClient:
    """Return the shared metrics client."""

    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = InMemoryMetricsClient()
    return _metrics_singleton
