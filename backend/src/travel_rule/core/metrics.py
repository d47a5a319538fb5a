"""Observability helpers (logging + Prometheus metrics)."""

from __future__ import annotations

import logging

import structlog
from prometheus_client import Counter, Histogram


REQUEST_LATENCY = Histogram(
    "travel_rule_request_seconds",
    "Latency per endpoint",
    labelnames=("endpoint",),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1),
)

EVALUATIONS = Counter(
    "travel_rule_evaluations_total",
    "Compliance evaluations by resulting status",
    labelnames=("status",),
)


def configure_logging(level: str = "INFO") -> None:
    """Initialise structlog for JSON output."""

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


__all__ = ["configure_logging", "EVALUATIONS", "REQUEST_LATENCY"]
