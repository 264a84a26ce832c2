"""Prometheus metrics for API requests issued by the client.

Provides metrics instrumentation for:
- Request latency and counts per endpoint
- Transport failures per endpoint
"""

from prometheus_client import Counter, Histogram, generate_latest

REQUEST_DURATION = Histogram(
    "pcdb_request_duration_seconds",
    "API request duration in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

REQUEST_TOTAL = Counter(
    "pcdb_requests_total",
    "Total API requests",
    ["method", "endpoint", "status"],
)

REQUEST_ERRORS_TOTAL = Counter(
    "pcdb_request_errors_total",
    "API requests that raised a transport error",
    ["method", "endpoint"],
)

# First path segments whose remainder is a resource name
_NAMED_RESOURCES = ("indexes", "collections")


def normalize_endpoint(path: str) -> str:
    """Normalize a request path to reduce label cardinality.

    Query strings, scheme and host are dropped and resource names are
    collapsed, so ``/indexes/my-index`` becomes ``/indexes``.
    """
    path = path.split("?", 1)[0]
    if "://" in path:
        path = "/" + path.split("://", 1)[1].partition("/")[2]

    parts = [part for part in path.split("/") if part]
    if not parts:
        return "/"
    if parts[0] in _NAMED_RESOURCES:
        return f"/{parts[0]}"
    return "/" + "/".join(parts)


def track_request(
    method: str,
    path: str,
    duration: float,
    status: int | None,
    success: bool = True,
) -> None:
    """Track a completed or failed API request.

    Args:
        method: HTTP method.
        path: Request path (normalized before labelling).
        duration: Request duration in seconds.
        status: Response status code, or None if no response was received.
        success: Whether the request produced a usable response.
    """
    endpoint = normalize_endpoint(path)
    method = method.upper()

    if not success:
        REQUEST_ERRORS_TOTAL.labels(method=method, endpoint=endpoint).inc()

    if status is None:
        return

    REQUEST_DURATION.labels(
        method=method, endpoint=endpoint, status=str(status)
    ).observe(duration)
    REQUEST_TOTAL.labels(method=method, endpoint=endpoint, status=str(status)).inc()


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
