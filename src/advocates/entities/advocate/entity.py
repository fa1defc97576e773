"""Entity: Advocate."""

from typing import Any

from pydantic import Field, field_validator

from src.advocates.entities._base import Entity


class Advocate(Entity):
    """Advocate entity representing one directory entry.

    This is the domain model handed out by the repository. Storage values are
    normalised on the way in, so ``specialties`` is always a list.
    """

    first_name: str = Field(min_length=1, description="First name")
    last_name: str = Field(min_length=1, description="Last name")
    city: str = Field(min_length=1, description="City")
    degree: str = Field(min_length=1, description="Degree, e.g. MD, PhD, MSW")
    specialties: list[str] = Field(default_factory=list, description="Specialties")
    years_of_experience: int = Field(ge=0, description="Years of experience")
    phone_number: int = Field(gt=0, description="Phone number as a 64-bit integer")

    @field_validator("specialties", mode="before")
    @classmethod
    def _coerce_specialties(cls, value: Any) -> Any:
        # Anything that is not a JSON array in storage reads as "no specialties"
        if not isinstance(value, (list, tuple)):
            return []
        return list(value)

    def __eq__(self, other: Any) -> bool:
        """Compare advocates by business attributes, ignoring timestamps."""
        if not isinstance(other, Advocate):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.city == other.city
            and self.degree == other.degree
            and self.specialties == other.specialties
            and self.years_of_experience == other.years_of_experience
            and self.phone_number == other.phone_number
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.phone_number,
        ))
