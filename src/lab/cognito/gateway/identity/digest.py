import base64
import hashlib
import hmac


def message_digest(msg: bytes, key: bytes) -> str:
    """
    Return the base64 encoded HMAC-SHA-256 of `msg` keyed by `key`.
    """
    digest = hmac.new(key, msg, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def generate_secret_hash(username: str, client_id: str, client_secret: str) -> str:
    """
    Compute the SECRET_HASH value Cognito requires from app clients that have a client secret.

    The hash is taken over the username followed by the app client id, keyed by the app client secret.

    Args:
        username: The user pool username being authenticated
        client_id: The app client id
        client_secret: The app client secret

    Returns:
        str: Base64 encoded digest suitable for the SECRET_HASH auth parameter
    """
    return message_digest(
        (username + client_id).encode("utf-8"), client_secret.encode("utf-8")
    )
