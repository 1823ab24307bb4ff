import asyncio
import logging
from typing import NoReturn
from aiohttp import web

from lab.cognito.gateway.app.config import HealthGaugeAppKey, SettingsAppKey

logger = logging.getLogger(__name__)


async def tick_health_task(app: web.Application) -> NoReturn:
    """
    Tick the health gauge every `health_tick_interval` seconds, draining one recorded failure each time.
    """

    logger.info("Starting health gauge task")

    health_gauge = app[HealthGaugeAppKey]
    interval = app[SettingsAppKey].health_tick_interval
    while True:
        await health_gauge.tick()
        await asyncio.sleep(interval)
