import logging
from aiohttp import web
from pydantic import ValidationError

from lab.cognito.gateway.app.config import (
    HealthGaugeAppKey,
    IdentityProviderAppKey,
    MetricsClientAppKey,
)
from lab.cognito.gateway.app.handlers.helpers import (
    AuthenticationFailed,
    InvalidRequest,
    RequestError,
    UserLookupFailed,
    bearer_token,
)
from lab.cognito.gateway.identity.provider import IdentityProviderError
from lab.cognito.gateway.model.auth import Credentials, TokenPair
from lab.cognito.gateway.model.user import UserProfile, user_profile_from_attributes

logger = logging.getLogger(__name__)


async def _record_provider_error(
    request: web.Request, operation: str, error: IdentityProviderError
) -> None:
    request.app[MetricsClientAppKey].increment(
        "identity.exception",
        1,
        tag_dict={"operation": operation, "code": error.code or "transport"},
    )
    if error.is_transport_error:
        await request.app[HealthGaugeAppKey].record_failure()


async def sign_in(request: web.Request) -> TokenPair:
    """
    Authenticate the credentials in the request body.

    Raises:
        InvalidRequest: If the body is not a JSON object with non-empty username and password
        AuthenticationFailed: If the identity provider does not issue tokens
    """
    identity_provider = request.app[IdentityProviderAppKey]

    try:
        data = await request.read()
        credentials = Credentials.model_validate_json(data)
    except (OSError, ValidationError) as e:
        raise InvalidRequest() from e

    try:
        return await identity_provider.sign_in(credentials)
    except IdentityProviderError as e:
        logger.info("sign in failed: %s", e.code)
        await _record_provider_error(request, "sign_in", e)
        raise AuthenticationFailed() from e


async def get_user_by_token(request: web.Request) -> UserProfile:
    """
    Look up the user that owns the bearer token.

    Raises:
        TokenMissing: If no bearer token was presented
        UserLookupFailed: If the identity provider does not return the user
    """
    identity_provider = request.app[IdentityProviderAppKey]
    token = bearer_token(request)

    try:
        attributes = await identity_provider.get_user_by_token(token)
    except IdentityProviderError as e:
        logger.info("user lookup failed: %s", e.code)
        await _record_provider_error(request, "get_user", e)
        raise UserLookupFailed() from e

    return user_profile_from_attributes(attributes)


async def handle_user_login(request: web.Request) -> web.Response:
    try:
        token_pair = await sign_in(request)
    except RequestError as e:
        return e.to_response()

    # Refresh token and expiry are not returned to the client.
    return web.json_response(
        status=201,
        data={
            "access_token": token_pair.access_token,
            "id_token": token_pair.id_token,
        },
    )


async def handle_user_get(request: web.Request) -> web.Response:
    try:
        user = await get_user_by_token(request)
    except RequestError as e:
        return e.to_response()

    return web.json_response({"user": user.model_dump()})
