"""Observability module for client metrics."""

from pcdb.observability.metrics import get_metrics, normalize_endpoint, track_request

__all__ = [
    "get_metrics",
    "normalize_endpoint",
    "track_request",
]
