"""
Configuration Module for the Cognito Gateway

Settings are loaded once at startup from environment variables (and an optional `.env` file)
using Pydantic. The identity provider credentials have no defaults, so a missing
COGNITO_CLIENT_ID, COGNITO_CLIENT_SECRET or COGNITO_USER_POOL_ID fails validation and stops
the process before it starts listening.

Shared resources are attached to the aiohttp application under typed AppKeys and looked up
by handlers through `request.app[...]`.
"""

from typing import Final, Optional
import logging
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from aiohttp import web

from lab.cognito.gateway.app.metrics import MetricsClient
from lab.cognito.gateway.identity.provider import IdentityConfig, IdentityProvider
from lab.cognito.gateway.model.health import HealthGauge


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the Cognito gateway.

    Environment variables map to fields by name, case-insensitively. Aliases are accepted
    where noted.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    debug: bool = False
    """
    Enable DEBUG level logging and aio-statsd debug output.
    Set with DEBUG=true environment variable.
    """

    http_port: int = Field(alias="port", default=8080)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    cognito_client_id: str
    """
    App client id of the user pool client. Required.
    Set with COGNITO_CLIENT_ID environment variable.
    """

    cognito_client_secret: SecretStr
    """
    App client secret, used to compute SECRET_HASH. Required.
    Set with COGNITO_CLIENT_SECRET environment variable.
    """

    cognito_user_pool_id: str
    """
    User pool id, used by administrative calls. Required.
    Set with COGNITO_USER_POOL_ID environment variable.
    """

    cognito_region: str = Field(
        "ap-southeast-1",
        validation_alias=AliasChoices("cognito_region", "aws_region"),
    )
    """
    AWS region hosting the user pool.
    Set with COGNITO_REGION or AWS_REGION environment variables.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. No error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    metrics_backend: str = "none"
    """
    Metrics backend, either "telegraf" or "none".
    Set with METRICS_BACKEND environment variable.
    """

    statsd_host: str = Field(alias="TELEGRAF_HOST", default="telegraf")
    statsd_port: int = Field(alias="TELEGRAF_PORT", default=8125)
    statsd_prefix: str = "cognito_gateway"
    """Prefix for all metric names emitted by this service."""

    health_tick_interval: int = 30
    """Seconds between health gauge decrements."""

    def identity_config(self) -> IdentityConfig:
        return IdentityConfig(
            client_id=self.cognito_client_id,
            client_secret=self.cognito_client_secret,
            user_pool_id=self.cognito_user_pool_id,
            region=self.cognito_region,
        )


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

IdentityProviderAppKey: Final = web.AppKey("identity_provider", IdentityProvider)
"""AppKey for accessing the identity provider client"""

MetricsClientAppKey: Final = web.AppKey("metrics_client", MetricsClient)
"""AppKey for accessing the metrics client"""

HealthGaugeAppKey: Final = web.AppKey("health_gauge", HealthGauge)
"""AppKey for accessing the health monitoring gauge"""
