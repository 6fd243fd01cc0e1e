"""
Shared utilities for the pickup catalog client.

This package aggregates the ambient building blocks used by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging via structlog
- metrics: Prometheus cache and fetch metrics
- errors: Canonical error types and error payloads

Do not import from pickup_catalog into shared/.
"""
