"""
Shared utilities for the GraphQL cache layer.

This package aggregates common building blocks consumed by every component:

- config: Configuration via pydantic-settings
- logging: Structured logging with load correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Any cross-cutting logic should live here to avoid import cycles. Do not
import from graphql_cache into shared/.
"""
