"""Prometheus metrics for the cart client.

Labels use only static values (HTTP method, endpoint template, cache key,
operation name, outcome), never item, booking or user ids.
"""

from prometheus_client import Counter, Histogram

# ── HTTP ──────────────────────────────────────────────────────────

HTTP_REQUESTS_TOTAL = Counter(
    "deepclean_http_requests_total",
    "REST calls issued by the client",
    ["method", "endpoint", "outcome"],
)

HTTP_REQUEST_SECONDS = Histogram(
    "deepclean_http_request_seconds",
    "REST call latency in seconds, retries included",
    ["method", "endpoint"],
)

# ── Cache ─────────────────────────────────────────────────────────

CACHE_LOOKUPS_TOTAL = Counter(
    "deepclean_cache_lookups_total",
    "Local cache reads by result",
    ["key", "outcome"],
)

# ── Cart / checkout ───────────────────────────────────────────────

CART_MUTATIONS_TOTAL = Counter(
    "deepclean_cart_mutations_total",
    "Settled cart mutations",
    ["operation", "outcome"],
)

CHECKOUT_BOOKINGS_TOTAL = Counter(
    "deepclean_checkout_bookings_total",
    "Per-item booking outcomes during checkout",
    ["outcome"],
)
