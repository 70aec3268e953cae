"""
Shared utilities for the Fetch Cache services.

This package aggregates common building blocks:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers, including cache counters
- errors: Canonical error types and responses
- retry: Retry decorator for upstream calls
- base_service: FastAPI service skeleton (health, metrics, error handlers)

Do not import from service_* packages into shared/.
"""
