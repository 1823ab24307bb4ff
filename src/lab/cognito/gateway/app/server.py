import asyncio
import contextlib
import logging
from time import time
from typing import Optional
from aiohttp import web
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from lab.cognito.gateway.app.config import (
    HealthGaugeAppKey,
    IdentityProviderAppKey,
    MetricsClientAppKey,
    Settings,
    SettingsAppKey,
)
from lab.cognito.gateway.app.handlers.internal import (
    handle_internal_alive,
    handle_internal_ready,
)
from lab.cognito.gateway.app.handlers.user import handle_user_get, handle_user_login
from lab.cognito.gateway.app.metrics import MetricsClient, create_metrics_client
from lab.cognito.gateway.app.tasks import tick_health_task
from lab.cognito.gateway.identity.cognito import CognitoIdentityProvider
from lab.cognito.gateway.identity.provider import IdentityProvider
from lab.cognito.gateway.model.health import HealthGauge

logger = logging.getLogger(__name__)


async def background_tasks(app):
    logger.info("Starting up")

    metrics_client = app[MetricsClientAppKey]
    await metrics_client.connect()

    tick_health = asyncio.create_task(tick_health_task(app))

    logger.info("Startup complete")

    yield

    logger.info("Shutting down background tasks")

    tick_health.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await tick_health

    await metrics_client.close()


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


@web.middleware
async def metrics_middleware(request: web.Request, handler):
    metrics_client = request.app[MetricsClientAppKey]
    request_method: str = request.method
    request_path = request.path

    start_time: float = time()
    response_status_code = 0

    try:
        response = await handler(request)
        response_status_code = response.status
        return response
    except web.HTTPException as e:
        response_status_code = e.status
        raise e
    except Exception as e:
        metrics_client.increment(
            "server.request.exception",
            1,
            tag_dict={
                "exception": type(e).__name__,
                "path": request_path,
                "method": request_method,
            },
        )
        raise e
    finally:
        metrics_client.timer(
            "server.request.time",
            time() - start_time,
            tag_dict={"path": request_path, "method": request_method},
        )
        metrics_client.increment(
            "server.request.count",
            1,
            tag_dict={
                "path": request_path,
                "method": request_method,
                "status": response_status_code,
            },
        )


async def start_web_server(
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
    metrics_client: Optional[MetricsClient] = None,
) -> web.Application:

    if settings is None:
        settings = Settings()  # type: ignore
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=False,
            integrations=[AioHttpIntegration()],
        )

    if identity_provider is None:
        identity_provider = CognitoIdentityProvider(settings.identity_config())
    if metrics_client is None:
        metrics_client = create_metrics_client(
            settings.metrics_backend,
            host=settings.statsd_host,
            port=settings.statsd_port,
            prefix=settings.statsd_prefix,
            debug=settings.debug,
        )

    app = web.Application(middlewares=[metrics_middleware, sentry_middleware])

    app[SettingsAppKey] = settings
    app[IdentityProviderAppKey] = identity_provider
    app[MetricsClientAppKey] = metrics_client
    app[HealthGaugeAppKey] = HealthGauge()

    app.add_routes(
        [
            web.post("/user/login", handle_user_login),
            web.get("/user", handle_user_get),
        ]
    )

    app.add_routes(
        [
            web.get("/internal/alive", handle_internal_alive),
            web.get("/internal/ready", handle_internal_ready),
        ]
    )

    app.cleanup_ctx.append(background_tasks)

    return app
