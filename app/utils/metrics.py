"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


# Counters
share_unlocks_total = Counter(
    "share_unlocks_total",
    "Share unlock attempts by result",
    ["result"],  # created, existing, free_today
)

unlock_checks_total = Counter(
    "unlock_checks_total",
    "Gate resolutions by outcome",
    ["outcome"],  # today, unlocked, locked
)

unlock_storage_errors_total = Counter(
    "unlock_storage_errors_total",
    "Unlock ledger storage failures",
    ["operation"],  # read, write
)

share_unlocks_purged_total = Counter(
    "share_unlocks_purged_total",
    "Unlock records removed by retention purge",
)

job_views_total = Counter(
    "job_views_total",
    "Job detail views",
    ["gated"],  # "true" when contacts were masked
)


# Metrics endpoint router
router = APIRouter()


@router.get("/metrics")
def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint for scraping."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


class Metrics:
    """Thin helpers so services do not import label names."""

    def inc_unlock(self, result: str) -> None:
        share_unlocks_total.labels(result=result).inc()

    def inc_check(self, outcome: str) -> None:
        unlock_checks_total.labels(outcome=outcome).inc()

    def inc_storage_error(self, operation: str) -> None:
        unlock_storage_errors_total.labels(operation=operation).inc()

    def inc_purged(self, count: int) -> None:
        if count > 0:
            share_unlocks_purged_total.inc(count)

    def inc_job_view(self, gated: bool) -> None:
        job_views_total.labels(gated="true" if gated else "false").inc()


metrics = Metrics()
