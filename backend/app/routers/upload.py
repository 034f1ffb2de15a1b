"""District page upload and decoding endpoint."""

from fastapi import APIRouter, UploadFile, File, HTTPException, Query

from scripts.extractors.errors import ExtractionError
from scripts.extractors.parsers import DistrictPageParser
from scripts.extractors.registry import list_districts
from scripts.extractors.validators import validate_poll

from ..models.schemas import UploadResponse
from ..services.results import to_poll_data


router = APIRouter(prefix="/api", tags=["upload"])


MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
HTML_EXTENSIONS = (".html", ".htm")


@router.post("/upload", response_model=UploadResponse)
async def upload_district_page(
    district: int = Query(..., description="District number the page belongs to"),
    file: UploadFile = File(...),
):
    """Decode an uploaded district results page.

    The page is parsed in memory; nothing is written to the result store.
    """
    if district not in list_districts():
        raise HTTPException(status_code=404, detail="District not found")

    # Validate file extension
    if not file.filename or not file.filename.lower().endswith(HTML_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only HTML files are allowed")

    contents = await file.read()

    # Validate file size
    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="File too large. Maximum size is 5MB.")

    html_content = contents.decode("utf-8", errors="replace")

    try:
        polls = DistrictPageParser().parse_html(html_content, district)
    except ExtractionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    issues = [issue for result in polls for issue in validate_poll(result)]

    return UploadResponse(
        success=not issues,
        message="Page decoded successfully" if not issues else "Page decoded with validation issues",
        district=district,
        pollsProcessed=len(polls),
        polls=[to_poll_data(result) for result in polls],
        errors=issues or None,
    )
