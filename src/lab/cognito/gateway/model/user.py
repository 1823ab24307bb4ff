from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict

# Attribute names as stored by the user pool.
ATTRIBUTE_SUB = "sub"
ATTRIBUTE_NAME = "name"
ATTRIBUTE_EMAIL = "email"
ATTRIBUTE_EMAIL_VERIFIED = "email_verified"
ATTRIBUTE_CUSTOM_ID = "custom:custom_id"

_TRUE_VALUES = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE_VALUES = frozenset(("0", "f", "F", "FALSE", "false", "False"))


class UserAttribute(BaseModel):
    """A single name/value entry from the identity provider's user attribute list."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""


class UserProfile(BaseModel):
    """
    The current user as returned by `GET /user`.

    Fields that have no matching provider attribute keep their empty defaults.
    """

    id: str = ""
    name: str = ""
    email: str = ""
    custom_id: str = ""
    email_verified: bool = False


def parse_bool(value: str) -> Optional[bool]:
    """
    Parse a provider boolean string, returning None when the value is not recognized.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def user_profile_from_attributes(attributes: Iterable[UserAttribute]) -> UserProfile:
    """
    Build a UserProfile by scanning the provider attribute list for well-known names.

    Unknown attributes are ignored. An `email_verified` value that cannot be parsed as a
    boolean is skipped and leaves the flag at False. When an attribute name repeats, the
    last value wins.
    """
    profile = UserProfile()
    for attribute in attributes:
        if attribute.name == ATTRIBUTE_SUB:
            profile.id = attribute.value
        elif attribute.name == ATTRIBUTE_NAME:
            profile.name = attribute.value
        elif attribute.name == ATTRIBUTE_EMAIL:
            profile.email = attribute.value
        elif attribute.name == ATTRIBUTE_CUSTOM_ID:
            profile.custom_id = attribute.value
        elif attribute.name == ATTRIBUTE_EMAIL_VERIFIED:
            email_verified = parse_bool(attribute.value)
            if email_verified is not None:
                profile.email_verified = email_verified
    return profile
