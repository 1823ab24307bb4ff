"""
Metrics Abstraction for the Cognito Gateway

Handlers and middleware record metrics through the MetricsClient interface so the backend
can be chosen by configuration:

- TelegrafCompatibilityClient: forwards to an aio-statsd TelegrafStatsdClient
- NoOpMetricsClient: discards everything, used when metrics are disabled and in tests

Metric types follow StatsD conventions: counters (`increment`), gauges and timers (seconds).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from aio_statsd import TelegrafStatsdClient

logger = logging.getLogger(__name__)

Tags = Optional[Dict[str, Any]]


class MetricsClient(ABC):
    """
    Backend independent metrics client.

    `tag_dict` values are attached as StatsD tags by backends that support them.
    """

    @abstractmethod
    def increment(
        self, name: str, value: Union[int, float] = 1, tag_dict: Tags = None
    ) -> None:
        """Increment a counter, e.g. `cognito_gateway.server.request.count`."""
        pass

    @abstractmethod
    def gauge(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        """Set a gauge to a point-in-time value."""
        pass

    @abstractmethod
    def timer(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        """Record a duration in seconds."""
        pass

    async def connect(self) -> None:
        """Open any network resources. Called once during application startup."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Flush pending metrics and release network resources."""
        pass


class TelegrafCompatibilityClient(MetricsClient):
    """MetricsClient that delegates to an aio-statsd TelegrafStatsdClient."""

    def __init__(self, telegraf_client: Any, prefix: str = ""):
        self.client = telegraf_client
        self.prefix = prefix

    def _name(self, name: str) -> str:
        return f"{self.prefix}.{name}" if self.prefix else name

    def increment(
        self, name: str, value: Union[int, float] = 1, tag_dict: Tags = None
    ) -> None:
        self.client.increment(self._name(name), value, tag_dict=tag_dict or {})

    def gauge(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        self.client.gauge(self._name(name), value, tag_dict=tag_dict or {})

    def timer(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        self.client.timer(self._name(name), value, tag_dict=tag_dict or {})

    async def connect(self) -> None:
        await self.client.connect()

    async def close(self) -> None:
        try:
            await self.client.close()
        except Exception as e:
            logger.warning(f"Error closing Telegraf client: {e}")


class NoOpMetricsClient(MetricsClient):
    """MetricsClient that records nothing."""

    def increment(
        self, name: str, value: Union[int, float] = 1, tag_dict: Tags = None
    ) -> None:
        pass

    def gauge(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        pass

    def timer(self, name: str, value: Union[int, float], tag_dict: Tags = None) -> None:
        pass

    async def close(self) -> None:
        pass


def create_metrics_client(
    backend: str,
    host: str = "localhost",
    port: int = 8125,
    prefix: str = "",
    debug: bool = False,
) -> MetricsClient:
    """
    Create the metrics client for `backend`.

    Args:
        backend: Backend type, 'telegraf' or 'none'
        host: Telegraf/StatsD host
        port: Telegraf/StatsD port
        prefix: Prefix prepended to every metric name
        debug: Enable aio-statsd debug output

    Raises:
        ValueError: If the backend type is not supported
    """
    backend = backend.lower()

    if backend == "telegraf":
        telegraf_client = TelegrafStatsdClient(host=host, port=port, debug=debug)
        return TelegrafCompatibilityClient(telegraf_client, prefix=prefix)

    if backend == "none":
        logger.info("Metrics collection disabled (no-op client)")
        return NoOpMetricsClient()

    raise ValueError(
        f"Invalid metrics backend: {backend}. Supported backends: 'telegraf', 'none'"
    )
