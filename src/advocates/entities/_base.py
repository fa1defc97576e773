from datetime import datetime

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class for records identified by a storage-assigned integer."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = PydanticField(
        default=None,
        description="Surrogate key assigned by storage on insert",
    )

    created_at: datetime | None = PydanticField(default=None)


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement primary key and an insert timestamp."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Surrogate key assigned by storage on insert",
    )

    created_at: datetime | None = Field(
        default=None,
        sa_column_kwargs={
            "server_default": sa.func.current_timestamp(),
        },
    )
