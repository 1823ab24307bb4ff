from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, SecretStr

from lab.cognito.gateway.model.auth import Credentials, SignUpUser, TokenPair
from lab.cognito.gateway.model.user import UserAttribute


class IdentityConfig(BaseModel):
    """
    Immutable settings an identity provider client needs to talk to its user pool.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr
    user_pool_id: str
    region: str


class IdentityProviderError(Exception):
    """
    Raised when the identity provider rejects a request or cannot be reached.

    `code` carries the provider's error code (for example `NotAuthorizedException`) when the
    provider answered. It is None for transport level failures where no answer arrived.
    """

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code

    @property
    def is_transport_error(self) -> bool:
        return self.code is None

    @staticmethod
    def challenge_required(challenge_name: Optional[str]) -> "IdentityProviderError":
        """The provider answered with an auth challenge instead of tokens."""
        return IdentityProviderError(
            f"authentication challenge required: {challenge_name}",
            code="ChallengeRequired",
        )


class IdentityProvider(ABC):
    """
    Capabilities the HTTP layer needs from the user pool.

    Implementations must not retain authentication results or user data between calls.
    """

    @abstractmethod
    async def sign_up(self, user: SignUpUser) -> None:
        """
        Register a new user.

        Registration is not implemented by this service; implementations accept the user and
        return without contacting the provider.
        """
        pass

    @abstractmethod
    async def sign_in(self, credentials: Credentials) -> TokenPair:
        """
        Authenticate with username and password.

        Raises:
            IdentityProviderError: If the provider rejects the credentials or cannot be reached
        """
        pass

    @abstractmethod
    async def get_user_by_token(self, access_token: str) -> List[UserAttribute]:
        """
        Fetch the attribute list of the user that owns `access_token`.

        Raises:
            IdentityProviderError: If the provider rejects the token or cannot be reached
        """
        pass

    @abstractmethod
    async def update_password(self, credentials: Credentials) -> None:
        """
        Set a permanent password for `credentials.username` as an administrator.

        Raises:
            IdentityProviderError: If the provider rejects the request or cannot be reached
        """
        pass
