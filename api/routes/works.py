# api/routes/works.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from catalog.config import PAGE_SIZE
from catalog.models import SearchMode, WorksPage, EditionsPage, LocationSummary
from catalog.sa.database import get_db
from catalog.services import SearchService

router = APIRouter(prefix="/works", tags=["works"])

def _unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Catalog is temporarily unavailable")

@router.get("", response_model=WorksPage)
def search_works(
    q: str = Query(..., description="Search text"),
    mode: SearchMode = Query(SearchMode.ALL, description="Match title and author, title only or author only"),
    offset: int = Query(0, ge=0, description="Number of works to skip"),
    limit: int = Query(PAGE_SIZE, ge=1, le=100, description="Maximum number of works"),
    db: Session = Depends(get_db)
):
    """
    Search works, i.e. catalog editions grouped by author and title.

    Queries shorter than three characters after normalization return an
    empty page. `total` is a lower bound, not an exact count.
    """
    page = SearchService(db).search_works(q, offset, limit, mode)
    if not page.ok:
        raise _unavailable()
    return page

@router.get("/{work_key}/editions", response_model=EditionsPage)
def get_editions(
    work_key: str,
    offset: int = Query(0, ge=0, description="Number of editions to skip"),
    limit: int = Query(PAGE_SIZE, ge=1, le=100, description="Maximum number of editions"),
    db: Session = Depends(get_db)
):
    """Get the editions of a work, newest catalog entries first, with an exact total"""
    page = SearchService(db).get_editions(work_key, offset, limit)
    if not page.ok:
        raise _unavailable()
    return page

@router.get("/{work_key}/locations", response_model=LocationSummary)
def get_work_locations(work_key: str, db: Session = Depends(get_db)):
    """Get the storage locations holding any edition of a work"""
    summary = SearchService(db).get_work_location_stats(work_key)
    if not summary.ok:
        raise _unavailable()
    return summary
