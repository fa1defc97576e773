"""Seed endpoint inserting the fixed advocate dataset."""

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.exc import IntegrityError

from src.advocates.api.http.deps import get_advocate_repository
from src.advocates.core.errors import ConflictError
from src.advocates.entities.advocate import AdvocateRepository
from src.advocates.entities.advocate.dto import (
    AdvocateResponse,
    ErrorResponse,
    SeedResponse,
)
from src.advocates.entities.advocate.seed_data import seed_advocates

router = APIRouter(tags=["seed"])


@router.post(
    "/seed",
    response_model=SeedResponse,
    responses={409: {"model": ErrorResponse}},
)
def seed_database(
    repository: AdvocateRepository = Depends(get_advocate_repository),
) -> SeedResponse:
    """Insert the seed dataset.

    Running it again hits the unique phone-number constraint, rolls back and
    answers 409, so the table never holds the dataset twice.
    """
    try:
        created = repository.seed(seed_advocates())
    except IntegrityError as exc:
        logger.info("Seed skipped: advocates already present")
        raise ConflictError(
            "Advocates may already exist in the database",
            error="Database already seeded",
        ) from exc

    return SeedResponse(
        message="Database seeded successfully",
        count=len(created),
        advocates=[AdvocateResponse.from_entity(advocate) for advocate in created],
    )
