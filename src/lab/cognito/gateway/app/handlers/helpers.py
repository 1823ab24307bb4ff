import logging
from typing import Optional
from aiohttp import web

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class RequestError(Exception):
    """
    A request that cannot be completed, reported to the client as `{"error": message}`.

    Messages are generic on purpose; identity provider details never reach the client.
    """

    status: int = 400
    message: str = "bad request"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_response(self) -> web.Response:
        return web.json_response(status=self.status, data={"error": self.message})


class InvalidRequest(RequestError):
    """The request body could not be parsed into the expected shape."""

    status = 400
    message = "invalid json"


class AuthenticationFailed(RequestError):
    """The identity provider refused the credentials or could not be reached."""

    status = 400
    message = "could not sign in"


class TokenMissing(RequestError):
    """No bearer token was presented."""

    status = 401
    message = "token not found"


class UserLookupFailed(RequestError):
    """The identity provider refused the access token or could not be reached."""

    status = 400
    message = "could not get user"


def bearer_token(request: web.Request) -> str:
    """
    Return the access token from the `Authorization` header.

    The `Bearer ` prefix is removed when present; a header without it is used as-is.

    Raises:
        TokenMissing: If the header is absent or the token is empty
    """
    authorization: str = request.headers.get("Authorization", "")
    # Trailing whitespace is stripped from header values, so "Bearer " arrives as "Bearer".
    if authorization.rstrip() == BEARER_PREFIX.rstrip():
        raise TokenMissing()
    token = authorization.removeprefix(BEARER_PREFIX)
    if token == "":
        raise TokenMissing()
    return token
