"""Prometheus metrics for talkops-domoticz.

Exposes metrics for Grafana dashboards:
- Domoticz request counts and latencies
- Poll cycle outcomes and snapshot sizes
- Action calls
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Info, generate_latest
from prometheus_client.core import CollectorRegistry

# =============================================================================
# Custom Registry (avoids conflicts in tests)
# =============================================================================

REGISTRY = CollectorRegistry(auto_describe=True)

# =============================================================================
# Application Metrics
# =============================================================================

extension_info = Info(
    "talkops_domoticz",
    "talkops-domoticz version and environment info",
    registry=REGISTRY,
)

# =============================================================================
# Domoticz API Metrics
# =============================================================================

domoticz_requests_total = Counter(
    "talkops_domoticz_requests_total",
    "Total Domoticz API requests",
    ["command", "status"],
    registry=REGISTRY,
)

domoticz_request_duration_seconds = Histogram(
    "talkops_domoticz_request_duration_seconds",
    "Domoticz API request latency",
    ["command"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=REGISTRY,
)

# =============================================================================
# Poll Cycle Metrics
# =============================================================================

poll_cycles_total = Counter(
    "talkops_domoticz_poll_cycles_total",
    "Total poll cycles",
    ["status"],  # status: success/error
    registry=REGISTRY,
)

poll_cycle_duration_seconds = Histogram(
    "talkops_domoticz_poll_cycle_duration_seconds",
    "Poll cycle duration",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

snapshot_entities = Gauge(
    "talkops_domoticz_snapshot_entities",
    "Entities in the last published snapshot",
    ["kind"],
    registry=REGISTRY,
)

# =============================================================================
# Action Metrics
# =============================================================================

actions_total = Counter(
    "talkops_domoticz_actions_total",
    "Total action function calls",
    ["function", "status"],
    registry=REGISTRY,
)


# =============================================================================
# Recording Helpers
# =============================================================================


def record_domoticz_request(command: str, status: str, latency_seconds: float) -> None:
    """Record metrics for a Domoticz API request."""
    domoticz_requests_total.labels(command=command, status=status).inc()
    domoticz_request_duration_seconds.labels(command=command).observe(latency_seconds)


def record_poll_cycle(success: bool, duration_seconds: float) -> None:
    """Record metrics for one poll cycle."""
    status = "success" if success else "error"
    poll_cycles_total.labels(status=status).inc()
    poll_cycle_duration_seconds.observe(duration_seconds)


def update_snapshot_entities(counts: dict[str, int]) -> None:
    """Update the per-kind entity gauges from a published snapshot."""
    for kind, count in counts.items():
        snapshot_entities.labels(kind=kind).set(count)


def record_action(function: str, success: bool) -> None:
    """Record metrics for an action function call."""
    status = "success" if success else "error"
    actions_total.labels(function=function, status=status).inc()


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest(REGISTRY)


def init_metrics(version: str, env: str) -> None:
    """Initialize static metrics."""
    extension_info.info({"version": version, "environment": env})
