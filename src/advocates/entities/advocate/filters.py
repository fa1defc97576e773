"""Query-string contract for listing advocates.

``parse_filter`` turns raw string parameters into an ``AdvocateFilter`` or a
list of per-field problems. It never raises for bad input; the HTTP layer
decides what a failure means.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE = 10

# Largest value a signed 64-bit INTEGER/BIGINT column can bind
MAX_INTEGER = 2**63 - 1


class AdvocateFilter(BaseModel):
    """Validated filter and pagination window for the advocate list.

    When ``search`` is set it supersedes ``city`` and ``degree``;
    ``specialty`` and ``min_years_of_experience`` always apply.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    search: str | None = None
    city: str | None = None
    degree: str | None = None
    specialty: str | None = None
    min_years_of_experience: int | None = Field(default=None, ge=0, le=MAX_INTEGER)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_INTEGER)
    offset: int = Field(default=0, ge=0, le=MAX_INTEGER)

    @field_validator("search", "city", "degree", "specialty", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("limit")
    @classmethod
    def _cap_limit(cls, value: int, info: ValidationInfo) -> int:
        max_page_size = (info.context or {}).get("max_page_size")
        if max_page_size is not None and value > max_page_size:
            raise ValueError(f"must be less than or equal to {max_page_size}")
        return value

    @property
    def has_search(self) -> bool:
        return self.search is not None

    def to_query_params(self) -> dict[str, Any]:
        """Wire-named parameters for every field that has a value."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class FilterParseResult:
    """Either a validated filter or the list of problems with the input."""

    value: AdvocateFilter | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None


def format_validation_errors(exc: PydanticValidationError) -> list[str]:
    """Render every pydantic error as ``"<field>: <message>"``."""
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "query"
        details.append(f"{location}: {err['msg']}")
    return details


def parse_filter(
    params: Mapping[str, str],
    *,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_page_size: int | None = None,
) -> FilterParseResult:
    """Validate raw query parameters.

    Every field is optional. Numeric fields are coerced from strings and a
    coercion failure is reported, never defaulted. All offending fields are
    reported together.
    """
    raw = dict(params)
    if raw.get("limit") is None or raw.get("limit") == "":
        raw["limit"] = default_limit
    if raw.get("offset") == "":
        raw.pop("offset")
    if raw.get("minYearsOfExperience") == "":
        raw.pop("minYearsOfExperience")

    try:
        value = AdvocateFilter.model_validate(
            raw, context={"max_page_size": max_page_size}
        )
    except PydanticValidationError as exc:
        return FilterParseResult(errors=format_validation_errors(exc))
    return FilterParseResult(value=value)
