"""
Identity Provider Integration

This package wraps the managed user pool that owns users, credentials and token issuance.
The rest of the service only talks to the `IdentityProvider` interface, so the Cognito
implementation can be replaced by a fake in tests.

Key Components:
- provider.py: The IdentityProvider interface, its immutable configuration and error type
- cognito.py: The boto3 backed Cognito implementation
- digest.py: SECRET_HASH computation for app clients configured with a client secret

Every remote call is attempted exactly once. Failures surface immediately as
IdentityProviderError and the caller decides how to report them.
"""
