"""
Shared utilities for the HTTP compression layer.

This package aggregates common building blocks consumed by the
compression service:

- config: Service configuration via pydantic-settings
- logging: Structured logging via structlog
- errors: Canonical error types and responses

Do not import from service_* packages into shared/.
"""
