from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """
    Username and password submitted to the sign-in endpoint.

    Both fields are required and must be non-empty.
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class SignUpUser(BaseModel):
    """A user record accepted by the identity provider's register capability."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    email: Optional[str] = None
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class TokenPair(BaseModel):
    """
    Tokens issued by the identity provider for a successful password authentication.

    The values are opaque to this service and are passed through as-is.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    id_token: str
    refresh_token: str
    token_type: str
    expires_in: int
