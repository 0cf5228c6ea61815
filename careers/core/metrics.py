"""Prometheus metrics for availability loads and saves.

Labels stay low-cardinality: outcomes are ``success`` or a failure code,
never application or interview ids.
"""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

AVAILABILITY_LOADS_TOTAL = Counter(
    "availability_loads_total",
    "Availability fetches by outcome.",
    labelnames=("outcome",),
)

AVAILABILITY_SAVES_TOTAL = Counter(
    "availability_saves_total",
    "Availability replacements by outcome.",
    labelnames=("outcome",),
)

AVAILABILITY_SAVED_SLOTS = Histogram(
    "availability_saved_slots",
    "Number of time ranges persisted per successful save.",
    buckets=(0, 1, 2, 5, 10, 20, 50, 100),
)


def record_load(outcome: str) -> None:
    AVAILABILITY_LOADS_TOTAL.labels(outcome=outcome).inc()


def record_save(outcome: str, slot_count: int | None = None) -> None:
    AVAILABILITY_SAVES_TOTAL.labels(outcome=outcome).inc()
    if slot_count is not None:
        AVAILABILITY_SAVED_SLOTS.observe(slot_count)


def render_latest() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = ["record_load", "record_save", "render_latest"]
