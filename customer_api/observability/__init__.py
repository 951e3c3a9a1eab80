"""Observability helpers for the customer service.

Request IDs + structlog contextvars for JSON logs, plus an in-memory metrics
snapshot served at ``/metrics``.
"""
