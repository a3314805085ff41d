"""POST /v1/checks/search - filter and paginate a submitted snapshot"""

from fastapi import APIRouter

from check_gateway.api.dependencies import resolve_now
from check_gateway.api.v1.presenters import buckets, checks_out
from check_gateway.api.v1.schemas import SearchRequest, SearchResponse
from check_gateway.config import settings
from check_gateway.domain.aggregation import totals_by_status, totals_by_type
from check_gateway.domain.filters import CheckQuery, filter_checks, paginate

router = APIRouter()


@router.post("/checks/search", response_model=SearchResponse)
def search_checks(request_body: SearchRequest):
    """
    Search and filter checks for list views.

    Totals by type and status cover every matching check, not just the
    returned page.
    """
    query = CheckQuery(**request_body.query.model_dump())
    checks = [c.to_domain() for c in request_body.checks]
    matched = filter_checks(checks, query, resolve_now(request_body.now))
    page = paginate(matched, request_body.page, request_body.page_size or settings.page_size)

    return SearchResponse(
        items=checks_out(page.items),
        page=page.page,
        page_size=page.page_size,
        total_items=page.total_items,
        total_pages=page.total_pages,
        by_type=buckets(totals_by_type(matched)),
        by_status=buckets(totals_by_status(matched)),
    )
