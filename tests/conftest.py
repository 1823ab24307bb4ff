"""
Shared test configuration and fixtures for the Cognito gateway tests.

Provides settings with substituted identity provider values, an in-memory fake identity
provider, and an aiohttp test client wired to both.
"""

from typing import Dict, List, Optional
import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from lab.cognito.gateway.app.config import Settings
from lab.cognito.gateway.app.metrics import NoOpMetricsClient
from lab.cognito.gateway.app.server import start_web_server
from lab.cognito.gateway.identity.provider import IdentityProvider, IdentityProviderError
from lab.cognito.gateway.model.auth import Credentials, SignUpUser, TokenPair
from lab.cognito.gateway.model.user import UserAttribute


class FakeIdentityProvider(IdentityProvider):
    """
    In-memory identity provider.

    `passwords` maps usernames to passwords accepted by sign_in. `users` maps access tokens
    to the attribute list returned by get_user_by_token. Setting `error` makes every call
    raise it.
    """

    def __init__(self) -> None:
        self.passwords: Dict[str, str] = {}
        self.users: Dict[str, List[UserAttribute]] = {}
        self.error: Optional[IdentityProviderError] = None
        self.calls: List[str] = []
        self.signed_up: List[SignUpUser] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.error is not None:
            raise self.error

    async def sign_up(self, user: SignUpUser) -> None:
        self._check("sign_up")
        self.signed_up.append(user)

    async def sign_in(self, credentials: Credentials) -> TokenPair:
        self._check("sign_in")
        if self.passwords.get(credentials.username) != credentials.password:
            raise IdentityProviderError(
                "Incorrect username or password.", code="NotAuthorizedException"
            )
        return TokenPair(
            access_token=f"access-{credentials.username}",
            id_token=f"id-{credentials.username}",
            refresh_token=f"refresh-{credentials.username}",
            token_type="Bearer",
            expires_in=3600,
        )

    async def get_user_by_token(self, access_token: str) -> List[UserAttribute]:
        self._check("get_user_by_token")
        if access_token not in self.users:
            raise IdentityProviderError(
                "Invalid Access Token", code="NotAuthorizedException"
            )
        return self.users[access_token]

    async def update_password(self, credentials: Credentials) -> None:
        self._check("update_password")
        self.passwords[credentials.username] = credentials.password


@pytest.fixture
def settings():
    """Settings with fixed identity provider values."""
    return Settings(
        cognito_client_id="client-id",
        cognito_client_secret="client-secret",
        cognito_user_pool_id="ap-southeast-1_TestPool",
        _env_file=None,
    )


@pytest.fixture
def identity_provider():
    """Fake identity provider with one known user."""
    provider = FakeIdentityProvider()
    provider.passwords["ann"] = "correct horse"
    provider.users["access-ann"] = [
        UserAttribute(name="sub", value="u1"),
        UserAttribute(name="name", value="Ann"),
        UserAttribute(name="email", value="a@x.com"),
        UserAttribute(name="email_verified", value="true"),
    ]
    return provider


@pytest_asyncio.fixture
async def client(settings, identity_provider):
    """aiohttp test client for the gateway application."""
    app = await start_web_server(
        settings,
        identity_provider=identity_provider,
        metrics_client=NoOpMetricsClient(),
    )
    async with TestClient(TestServer(app)) as test_client:
        yield test_client
