"""
Tests for the operator utility in lab.cognito.gateway.app.util
"""

import pytest

from lab.cognito.gateway.app.util.__main__ import realMain
from lab.cognito.gateway.identity.digest import generate_secret_hash
from lab.cognito.gateway.identity.provider import IdentityProviderError


@pytest.mark.asyncio
async def test_secret_hash(settings, capsys):
    code = await realMain(["secret-hash", "ann"], settings=settings)
    assert code == 0
    assert capsys.readouterr().out.strip() == generate_secret_hash(
        "ann", "client-id", "client-secret"
    )


@pytest.mark.asyncio
async def test_set_password(settings, identity_provider):
    code = await realMain(
        ["set-password", "ann", "new password"],
        settings=settings,
        identity_provider=identity_provider,
    )
    assert code == 0
    assert identity_provider.passwords["ann"] == "new password"


@pytest.mark.asyncio
async def test_set_password_failure(settings, identity_provider, capsys):
    identity_provider.error = IdentityProviderError(
        "User does not exist.", code="UserNotFoundException"
    )
    code = await realMain(
        ["set-password", "ghost", "pw"],
        settings=settings,
        identity_provider=identity_provider,
    )
    assert code == 1
    assert "Error setting password" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_sign_up(settings, identity_provider):
    code = await realMain(
        ["sign-up", "bob", "pw", "--name", "Bob", "--email", "b@x.com"],
        settings=settings,
        identity_provider=identity_provider,
    )
    assert code == 0
    assert identity_provider.signed_up[0].username == "bob"
    assert identity_provider.signed_up[0].email == "b@x.com"
