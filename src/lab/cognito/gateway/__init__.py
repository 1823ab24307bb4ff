"""
Cognito Gateway

A small HTTP façade over an AWS Cognito user pool. Clients sign in with a username and
password and receive the pool's access and ID tokens; they then present the access token to
read back their profile.

Key Components:
- app: aiohttp web application, configuration, metrics and request handlers
- identity: The identity provider interface and its Cognito implementation
- model: Pydantic records for credentials, tokens and user profiles

The service keeps no state between requests. Credentials are verified, tokens are issued
and user attributes are stored by Cognito; this service computes the client SECRET_HASH,
shapes requests and responses, and translates provider failures into generic HTTP errors.
"""
