"""Advocate API router: filtered list and single-record lookup."""

from fastapi import APIRouter, Depends, Request

from src.advocates.api.http.deps import get_advocate_repository
from src.advocates.core.errors import NotFoundError, ValidationError
from src.advocates.entities.advocate import AdvocatePage, AdvocateRepository, parse_filter
from src.advocates.entities.advocate.dto import (
    AdvocateDetailResponse,
    AdvocateListResponse,
    AdvocateResponse,
    ErrorResponse,
)
from src.advocates.entities.advocate.filters import MAX_INTEGER
from src.advocates.runtime.context import get_config

router = APIRouter(prefix="/advocates", tags=["advocates"])


def to_list_response(page: AdvocatePage) -> AdvocateListResponse:
    """Shape a repository page into the list envelope and validate it."""
    envelope = {
        "data": [AdvocateResponse.from_entity(advocate) for advocate in page.rows],
        "pagination": {
            "limit": page.limit,
            "offset": page.offset,
            "total": page.total,
            "hasMore": page.has_more,
        },
    }
    return AdvocateListResponse.model_validate(envelope)


def parse_advocate_id(raw: str) -> int:
    """Parse a path segment as a positive integer id."""
    candidate = raw.strip()
    if not (candidate.isascii() and candidate.isdigit()):
        raise ValidationError(["id: ID must be a positive integer"])
    value = int(candidate)
    if value <= 0 or value > MAX_INTEGER:
        raise ValidationError(["id: ID must be a positive integer"])
    return value


@router.get(
    "",
    response_model=AdvocateListResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def list_advocates(
    request: Request,
    repository: AdvocateRepository = Depends(get_advocate_repository),
) -> AdvocateListResponse:
    """List advocates.

    Query parameters: ``search``, ``city``, ``degree``, ``specialty``,
    ``minYearsOfExperience``, ``limit`` (default 10) and ``offset``.
    ``search`` matches names, city, degree and specialties and, when given,
    overrides ``city`` and ``degree``.
    """
    api_config = get_config().api
    result = parse_filter(
        request.query_params,
        default_limit=api_config.default_page_size,
        max_page_size=api_config.max_page_size,
    )
    if not result.ok:
        raise ValidationError(result.errors)

    page = repository.find_by_filter(result.value)
    return to_list_response(page)


@router.get(
    "/{item_id}",
    response_model=AdvocateDetailResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_advocate(
    item_id: str,
    repository: AdvocateRepository = Depends(get_advocate_repository),
) -> AdvocateDetailResponse:
    """Get an advocate by ID."""
    advocate_id = parse_advocate_id(item_id)
    advocate = repository.find_by_id(advocate_id)
    if advocate is None:
        raise NotFoundError(f"Advocate with ID {advocate_id} not found")
    return AdvocateDetailResponse.model_validate(
        {"data": AdvocateResponse.from_entity(advocate)}
    )
