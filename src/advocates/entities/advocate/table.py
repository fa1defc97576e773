"""Advocate database table model."""

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field

from src.advocates.entities._base import EntityTable

# JSONB on PostgreSQL so specialty containment can use @>; plain JSON text elsewhere.
SpecialtiesType = sa.JSON().with_variant(JSONB(), "postgresql")


class AdvocateTable(EntityTable, table=True):
    """Database persistence model for advocates.

    This represents how the Advocate entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "advocates"

    first_name: str = Field(nullable=False)
    last_name: str = Field(nullable=False)
    city: str = Field(nullable=False)
    degree: str = Field(nullable=False)
    specialties: list[str] = Field(
        default_factory=list,
        sa_column=sa.Column(
            "specialties", SpecialtiesType, nullable=False, server_default="[]"
        ),
    )
    years_of_experience: int = Field(nullable=False)
    phone_number: int = Field(
        sa_column=sa.Column("phone_number", sa.BigInteger, nullable=False, unique=True)
    )
