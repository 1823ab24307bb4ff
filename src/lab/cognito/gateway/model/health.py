import asyncio


class HealthGauge:
    """
    Tracks recent identity provider transport failures for the readiness probe.

    Each failure that is not an ordinary rejection (bad credentials, invalid token) bumps the
    counter. A background task ticks it back down over time. A burst of failures pushes the
    counter above the threshold and readiness reports unhealthy until it drains.
    """

    def __init__(self, value: int = 0, health_threshold: int = 25) -> None:
        self._value = value
        self._health_threshold = health_threshold
        self._lock = asyncio.Lock()

    async def record_failure(self, count: int = 1) -> int:
        async with self._lock:
            self._value += int(count)
            return self._value

    async def tick(self) -> None:
        async with self._lock:
            if self._value > 0:
                self._value -= 1

    async def is_healthy(self) -> bool:
        async with self._lock:
            return self._value <= self._health_threshold
