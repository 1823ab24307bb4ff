import asyncio
import logging
from typing import Any, Dict, List, Optional
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lab.cognito.gateway.identity.digest import generate_secret_hash
from lab.cognito.gateway.identity.provider import (
    IdentityConfig,
    IdentityProvider,
    IdentityProviderError,
)
from lab.cognito.gateway.model.auth import Credentials, SignUpUser, TokenPair
from lab.cognito.gateway.model.user import UserAttribute

logger = logging.getLogger(__name__)

AUTH_FLOW_USER_PASSWORD = "USER_PASSWORD_AUTH"


def create_cognito_client(region: str) -> Any:
    """Create the boto3 `cognito-idp` client for `region`."""
    return boto3.client("cognito-idp", region_name=region)


class CognitoIdentityProvider(IdentityProvider):
    """
    IdentityProvider backed by an AWS Cognito user pool.

    boto3 clients are synchronous, so each call runs on a worker thread to keep the event
    loop free. The client itself is thread-safe and shared across requests.
    """

    def __init__(self, config: IdentityConfig, client: Optional[Any] = None) -> None:
        self._config = config
        if client is None:
            client = create_cognito_client(config.region)
        self._client = client

    async def _call(self, operation: str, **kwargs: Any) -> Dict[str, Any]:
        method = getattr(self._client, operation)
        try:
            return await asyncio.to_thread(method, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.warning("Cognito %s rejected: %s", operation, code)
            raise IdentityProviderError(
                f"cognito {operation} failed: {code}", code=code
            ) from e
        except BotoCoreError as e:
            logger.warning("Cognito %s unreachable: %s", operation, type(e).__name__)
            raise IdentityProviderError(f"cognito {operation} failed: {e}") from e

    async def sign_up(self, user: SignUpUser) -> None:
        logger.debug("sign_up is not implemented, ignoring request")

    async def sign_in(self, credentials: Credentials) -> TokenPair:
        secret_hash = generate_secret_hash(
            credentials.username,
            self._config.client_id,
            self._config.client_secret.get_secret_value(),
        )
        response = await self._call(
            "initiate_auth",
            AuthFlow=AUTH_FLOW_USER_PASSWORD,
            AuthParameters={
                "USERNAME": credentials.username,
                "PASSWORD": credentials.password,
                "SECRET_HASH": secret_hash,
            },
            ClientId=self._config.client_id,
        )

        result: Optional[Dict[str, Any]] = response.get("AuthenticationResult")
        if result is None:
            raise IdentityProviderError.challenge_required(response.get("ChallengeName"))

        return TokenPair(
            access_token=result["AccessToken"],
            id_token=result["IdToken"],
            refresh_token=result.get("RefreshToken", ""),
            token_type=result.get("TokenType", ""),
            expires_in=result.get("ExpiresIn", 0),
        )

    async def get_user_by_token(self, access_token: str) -> List[UserAttribute]:
        response = await self._call("get_user", AccessToken=access_token)
        return [
            UserAttribute(name=attribute["Name"], value=attribute.get("Value", ""))
            for attribute in response.get("UserAttributes", [])
        ]

    async def update_password(self, credentials: Credentials) -> None:
        await self._call(
            "admin_set_user_password",
            UserPoolId=self._config.user_pool_id,
            Username=credentials.username,
            Password=credentials.password,
            Permanent=True,
        )
