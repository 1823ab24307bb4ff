"""
Data Models

This package defines the typed records that flow between the HTTP handlers and the identity
provider. None of them are persisted; every record is built for a single request and discarded.

Key Models:
- auth.py: Credentials, sign-up users and the token pair returned by password authentication
- user.py: Provider user attributes and the user profile assembled from them
- health.py: Health gauge backing the readiness probe
"""
