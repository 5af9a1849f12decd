"""Analytics endpoints for the Civic Commons API."""

from fastapi import APIRouter

from civic_commons.api.dependencies import StorageDep
from civic_commons.schemas.analytics import AnalyticsSummary

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=AnalyticsSummary)
async def get_summary(storage: StorageDep) -> AnalyticsSummary:
    """Return platform-wide totals."""
    return AnalyticsSummary(**storage.summarize())
