"""
Prometheus metrics for the voyage enrichment job

Metrics live in a dedicated registry; a scheduler can expose them with
start_metrics_server() or push generate_metrics() output elsewhere.
"""
import os

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    start_http_server,
)

REGISTRY = CollectorRegistry()


# =======================
# ENRICHMENT METRICS
# =======================

records_enriched_total = Counter(
    name="enrichment_records_enriched_total",
    documentation="Records written back by committed batches",
    labelnames=["department"],
    registry=REGISTRY,
)

records_flagged_total = Counter(
    name="enrichment_records_flagged_total",
    documentation="Committed records scoring below the needs-review threshold",
    registry=REGISTRY,
)

duplicates_detected_total = Counter(
    name="enrichment_duplicates_detected_total",
    documentation="Records sharing another record's natural event key",
    registry=REGISTRY,
)

allocations_total = Counter(
    name="enrichment_allocations_total",
    documentation="Cost-center allocations produced",
    labelnames=["matched"],  # matched: true, false
    registry=REGISTRY,
)

quality_score = Histogram(
    name="enrichment_quality_score",
    documentation="Data-quality score of enriched records",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
    registry=REGISTRY,
)

# =======================
# BATCH METRICS
# =======================

batches_total = Counter(
    name="enrichment_batches_total",
    documentation="Batches processed",
    labelnames=["status"],  # status: committed, rolled_back
    registry=REGISTRY,
)

batch_size = Histogram(
    name="enrichment_batch_size",
    documentation="Records per batch",
    buckets=[10, 50, 100, 250, 500, 1000, 2500, 5000],
    registry=REGISTRY,
)

run_duration_seconds = Histogram(
    name="enrichment_run_duration_seconds",
    documentation="Wall-clock duration of an enrichment run",
    buckets=[1.0, 5.0, 15.0, 30.0, 60.0, 300.0, 900.0, 3600.0],
    registry=REGISTRY,
)


# =======================
# HELPERS
# =======================

def generate_metrics() -> bytes:
    """Metrics in Prometheus text exposition format."""
    return generate_latest(REGISTRY)


def start_metrics_server(port: int | None = None) -> None:
    """
    Start an HTTP server exposing the registry

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT, then 9108)
    """
    port = port or int(os.getenv("METRICS_PORT", "9108"))
    start_http_server(port, registry=REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    if value <= 0:
        return
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


def record_batch(record_count: int, committed: bool) -> None:
    """
    Record one batch outcome

    Args:
        record_count: Records in the batch
        committed: Whether the batch committed
    """
    increment_counter(batches_total, 1, status="committed" if committed else "rolled_back")
    if record_count > 0:
        observe_histogram(batch_size, record_count)


def record_enriched(department: str, score: int, flagged: bool) -> None:
    """
    Record one committed enriched record

    Args:
        department: Department written to the row
        score: Data-quality score
        flagged: Whether the record needs review
    """
    increment_counter(records_enriched_total, 1, department=department)
    observe_histogram(quality_score, score)
    if flagged:
        increment_counter(records_flagged_total, 1)
