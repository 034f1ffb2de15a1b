"""Poll result API endpoints."""

from typing import List
from fastapi import APIRouter, HTTPException

from ..models.schemas import DistrictSummary, PollData, ReportRow
from ..services.results import get_districts, get_district_polls, get_report


router = APIRouter(prefix="/api", tags=["results"])


@router.get("/districts", response_model=List[DistrictSummary])
async def list_districts():
    """Get a summary of every district."""
    return get_districts()


@router.get("/districts/{district}/polls", response_model=List[PollData])
async def list_polls(district: int):
    """Get poll results for one district, in table order."""
    polls = get_district_polls(district)
    if polls is None:
        raise HTTPException(status_code=404, detail="District not found")
    return polls


@router.get("/reports/{report}", response_model=List[ReportRow])
async def report_rows(report: str):
    """Get rows of a poll report: winners, runner-ups or green."""
    rows = get_report(report)
    if rows is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return rows
