"""Prometheus metrics for plan activity and HTTP latency"""

from prometheus_client import Counter, Histogram

# Collection changes
plan_operation_counter = Counter(
    "installment_plan_operations_total",
    "Successful plan collection changes",
    ["operation"],  # add | update | remove | reorder | toggle_paid | import
)

due_toggle_counter = Counter(
    "installment_due_toggles_total",
    "Dues marked paid or unpaid",
    ["state"],  # paid | unpaid
)

snapshot_import_failures_counter = Counter(
    "snapshot_import_failures_total",
    "Rejected snapshot imports",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_operation(operation: str) -> None:
    """Count a committed change to the plan collection"""
    plan_operation_counter.labels(operation=operation).inc()


def record_toggle(paid: bool) -> None:
    record_operation("toggle_paid")
    due_toggle_counter.labels(state="paid" if paid else "unpaid").inc()
