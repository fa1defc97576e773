"""Wire shapes for the advocate endpoints.

The same models document the API (OpenAPI) and validate outgoing payloads,
and the client layer parses responses with them.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.advocates.entities.advocate.entity import Advocate


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdvocateResponse(_WireModel):
    id: int | None = None
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    specialties: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(ge=0)
    phone_number: int = Field(gt=0)
    created_at: datetime | str | None = None

    @classmethod
    def from_entity(cls, advocate: Advocate) -> "AdvocateResponse":
        """Copy every field across; validation runs on construction."""
        return cls(
            id=advocate.id,
            first_name=advocate.first_name,
            last_name=advocate.last_name,
            city=advocate.city,
            degree=advocate.degree,
            specialties=advocate.specialties,
            years_of_experience=advocate.years_of_experience,
            phone_number=advocate.phone_number,
            created_at=advocate.created_at,
        )


class PaginationMeta(_WireModel):
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)
    total: int = Field(ge=0)
    has_more: bool


class AdvocateListResponse(_WireModel):
    data: list[AdvocateResponse]
    pagination: PaginationMeta


class AdvocateDetailResponse(_WireModel):
    data: AdvocateResponse


class SeedResponse(_WireModel):
    message: str
    count: int
    advocates: list[AdvocateResponse]


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
    details: list[str] | None = None
