"""Monitoring and metrics instrumentation for the classification guess stage."""

from classification_guess.monitoring.metrics import (
    classification_headers_added_total,
    classification_latency_seconds,
    classification_outcomes_total,
)

__all__ = [
    "classification_outcomes_total",
    "classification_latency_seconds",
    "classification_headers_added_total",
]
