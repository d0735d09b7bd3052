"""Prometheus metrics for monitoring cache efficiency, upstream health, and estimates"""

from prometheus_client import Counter, Histogram

# Estimate metrics
estimate_counter = Counter(
    "scorecard_estimate_total",
    "Aid estimates computed",
    ["bracket"],  # 0-30000 | 30001-48000 | ... | 110001-plus
)

# Search cache metrics
cache_hit_counter = Counter(
    "scorecard_cache_hits_total",
    "Search queries served from cache",
)

cache_miss_counter = Counter(
    "scorecard_cache_misses_total",
    "Search queries that went upstream",
)

cache_coalesced_counter = Counter(
    "scorecard_cache_coalesced_total",
    "Search queries that joined an in-flight upstream call",
)

# Scorecard API metrics
upstream_latency_histogram = Histogram(
    "scorecard_upstream_latency_seconds",
    "College Scorecard API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

upstream_failure_counter = Counter(
    "scorecard_upstream_failures_total",
    "Failed College Scorecard API calls",
    ["status"],  # HTTP status, or "timeout"
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_estimate(bracket: str) -> None:
    """Record estimate metrics for monitoring the income bracket mix"""
    estimate_counter.labels(bracket=bracket).inc()
