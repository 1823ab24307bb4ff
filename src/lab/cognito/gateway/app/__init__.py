"""
Cognito Gateway Application Layer

This package implements the HTTP layer of the gateway on top of aiohttp.

Key Components:
- cli.py: Entry point for running the web server
- server.py: Application assembly, middleware and startup/cleanup context
- config.py: Configuration management using Pydantic settings
- metrics.py: Metrics client abstraction (Telegraf or no-op)
- tasks.py: Background health gauge task
- handlers/: Request handlers for the user and internal endpoints
- util/: Operator command line utilities

Middleware layers:
- Metrics middleware for request counts, timings and exceptions
- Sentry middleware for error reporting

Endpoints:
- POST /user/login: password sign-in, returns access and ID tokens
- GET /user: profile of the user owning the bearer token
- GET /internal/alive, GET /internal/ready: probes
"""
