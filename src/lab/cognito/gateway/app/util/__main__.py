import argparse
import asyncio
import logging
from typing import Optional

from lab.cognito.gateway.app.config import Settings
from lab.cognito.gateway.identity.cognito import CognitoIdentityProvider
from lab.cognito.gateway.identity.digest import generate_secret_hash
from lab.cognito.gateway.identity.provider import IdentityProvider, IdentityProviderError
from lab.cognito.gateway.model.auth import Credentials, SignUpUser

logger = logging.getLogger(__name__)


async def genSecretHash(settings: Settings, username: str) -> None:
    print(
        generate_secret_hash(
            username,
            settings.cognito_client_id,
            settings.cognito_client_secret.get_secret_value(),
        )
    )


async def setPassword(
    identity_provider: IdentityProvider, username: str, password: str
) -> int:
    try:
        await identity_provider.update_password(
            Credentials(username=username, password=password)
        )
    except IdentityProviderError as e:
        print(f"Error setting password: {e}")
        return 1
    print(f"Password set for {username}")
    return 0


async def signUp(
    identity_provider: IdentityProvider,
    username: str,
    password: str,
    name: str,
    email: Optional[str],
) -> int:
    await identity_provider.sign_up(
        SignUpUser(name=name, email=email, username=username, password=password)
    )
    print(f"Signed up {username}")
    return 0


async def realMain(
    argv: Optional[list] = None,
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> int:
    parser = argparse.ArgumentParser(
        prog="cognito-gateway-util", description="Cognito gateway utilities"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    secret_hash = subparsers.add_parser(
        "secret-hash", help="Print the SECRET_HASH for a username"
    )
    secret_hash.add_argument("username", help="The username to hash.")

    set_password = subparsers.add_parser(
        "set-password", help="Set a permanent password for a user"
    )
    set_password.add_argument("username", help="The user to update.")
    set_password.add_argument("password", help="The new password.")

    sign_up = subparsers.add_parser("sign-up", help="Register a user")
    sign_up.add_argument("username", help="The username to register.")
    sign_up.add_argument("password", help="The password for the user.")
    sign_up.add_argument("--name", required=True, help="Display name of the user.")
    sign_up.add_argument("--email", default=None, help="Email address of the user.")

    args = vars(parser.parse_args(argv))
    command = args.get("command", None)

    if settings is None:
        settings = Settings()  # type: ignore

    if command == "secret-hash":
        await genSecretHash(settings, args["username"])
        return 0

    if identity_provider is None:
        identity_provider = CognitoIdentityProvider(settings.identity_config())

    if command == "set-password":
        return await setPassword(identity_provider, args["username"], args["password"])
    if command == "sign-up":
        return await signUp(
            identity_provider,
            args["username"],
            args["password"],
            args["name"],
            args["email"],
        )
    return 2


def main() -> None:
    raise SystemExit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
