"""Custom Prometheus metrics for the classification guess stage.

The hosting process exposes them with its own registry/exporter.
Alert rules should be configured for:
- classification_outcomes_total{outcome="timeout"} (slow classification service)
- classification_outcomes_total{outcome="transport_error"} (service unreachable)
"""

from prometheus_client import Counter, Histogram

classification_outcomes_total = Counter(
    "classification_outcomes_total",
    "Classification attempts by outcome",
    ["outcome"],
)
"""
Classification attempts counter by outcome.

Labels:
- outcome: answer, timeout, transport_error, build_error

Every outcome except answer means no header was added.
"""

classification_latency_seconds = Histogram(
    "classification_latency_seconds",
    "Classification service call latency in seconds",
    ["success"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)
"""
Latency of the HTTP call itself, measured inside the worker.

Abandoned calls (caller deadline exceeded) are still observed when they
finally complete.
"""

classification_headers_added_total = Counter(
    "classification_headers_added_total",
    "Classification guess headers appended to messages",
)
