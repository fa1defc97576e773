"""Data-access layer for advocates.

Filtering happens in the database: ``build_conditions`` composes one
predicate that both the page query and the count query use.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import sqlalchemy as sa
from loguru import logger
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, func, select

from src.advocates.core.services.database.db_session import DbSessionService
from src.advocates.entities.advocate.entity import Advocate
from src.advocates.entities.advocate.filters import AdvocateFilter
from src.advocates.entities.advocate.table import AdvocateTable


@dataclass(frozen=True)
class AdvocatePage:
    """One window of matching advocates plus the unwindowed match count."""

    rows: list[Advocate]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.rows) < self.total


def _specialty_condition(dialect_name: str, specialty: str) -> ColumnElement[bool]:
    """Exact membership of ``specialty`` in the specialties array."""
    if dialect_name == "postgresql":
        return sa.type_coerce(AdvocateTable.specialties, JSONB).contains([specialty])
    return sa.text(
        "EXISTS (SELECT 1 FROM json_each(advocates.specialties) AS s "
        "WHERE s.value = :specialty)"
    ).bindparams(specialty=specialty)


def _like_pattern(term: str) -> str:
    """``%term%`` with LIKE wildcards escaped by ``/``."""
    escaped = term.replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"


def _specialty_text_condition(dialect_name: str, term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match against any one specialty."""
    if dialect_name == "postgresql":
        return sa.cast(AdvocateTable.specialties, sa.Text).icontains(term, autoescape=True)
    # SQLite stores JSON text with non-ASCII escaped, so match the decoded values
    return sa.text(
        "EXISTS (SELECT 1 FROM json_each(advocates.specialties) AS s "
        "WHERE lower(s.value) LIKE lower(:specialty_pattern) ESCAPE '/')"
    ).bindparams(specialty_pattern=_like_pattern(term))


def build_conditions(
    filters: AdvocateFilter, dialect_name: str = "sqlite"
) -> list[ColumnElement[bool]]:
    """Translate a validated filter into a list of AND-ed predicates."""
    conditions: list[ColumnElement[bool]] = []

    if filters.search:
        term = filters.search
        conditions.append(
            sa.or_(
                AdvocateTable.first_name.icontains(term, autoescape=True),
                AdvocateTable.last_name.icontains(term, autoescape=True),
                AdvocateTable.city.icontains(term, autoescape=True),
                AdvocateTable.degree.icontains(term, autoescape=True),
                _specialty_text_condition(dialect_name, term),
            )
        )
    else:
        if filters.city:
            conditions.append(AdvocateTable.city.icontains(filters.city, autoescape=True))
        if filters.degree:
            conditions.append(AdvocateTable.degree == filters.degree)

    if filters.specialty:
        conditions.append(_specialty_condition(dialect_name, filters.specialty))

    if filters.min_years_of_experience is not None:
        conditions.append(
            AdvocateTable.years_of_experience >= filters.min_years_of_experience
        )

    return conditions


def _to_entity(row: AdvocateTable) -> Advocate:
    return Advocate.model_validate(row, from_attributes=True)


class AdvocateRepository:
    """Data-access layer for advocates.

    One instance is created at startup and shared by every request; each
    operation opens its own session from the injected ``DbSessionService``.
    """

    def __init__(self, database: DbSessionService) -> None:
        self._database = database

    def find_all(self) -> list[Advocate]:
        with self._database.session_scope() as session:
            rows = session.exec(select(AdvocateTable).order_by(AdvocateTable.id)).all()
            return [_to_entity(row) for row in rows]

    def find_by_id(self, advocate_id: int) -> Advocate | None:
        with self._database.session_scope() as session:
            row = session.get(AdvocateTable, advocate_id)
            if row is None:
                return None
            return _to_entity(row)

    def count(self) -> int:
        with self._database.session_scope() as session:
            return session.exec(select(func.count()).select_from(AdvocateTable)).one()

    def find_by_filter(self, filters: AdvocateFilter) -> AdvocatePage:
        """Return the requested window and the total number of matches.

        Both queries share one predicate and one session.
        """
        with self._database.session_scope() as session:
            return self._find_by_filter(session, filters)

    def _find_by_filter(self, session: Session, filters: AdvocateFilter) -> AdvocatePage:
        dialect_name = session.get_bind().dialect.name
        conditions = build_conditions(filters, dialect_name)
        predicate = sa.and_(sa.true(), *conditions)

        page_query = (
            select(AdvocateTable)
            .where(predicate)
            .order_by(AdvocateTable.id)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        count_query = select(func.count()).select_from(AdvocateTable).where(predicate)

        rows = session.exec(page_query).all()
        total = session.exec(count_query).one()

        logger.debug(
            "Advocate filter matched {} rows (returned {})",
            total,
            len(rows),
            conditions=len(conditions),
            limit=filters.limit,
            offset=filters.offset,
        )
        return AdvocatePage(
            rows=[_to_entity(row) for row in rows],
            total=total,
            limit=filters.limit,
            offset=filters.offset,
        )

    def seed(self, advocates: Iterable[Advocate]) -> list[Advocate]:
        """Insert ``advocates`` in one transaction.

        A uniqueness violation rolls the whole batch back and propagates as
        ``sqlalchemy.exc.IntegrityError``.
        """
        with self._database.session_scope() as session:
            rows = [
                AdvocateTable(
                    first_name=advocate.first_name,
                    last_name=advocate.last_name,
                    city=advocate.city,
                    degree=advocate.degree,
                    specialties=list(advocate.specialties),
                    years_of_experience=advocate.years_of_experience,
                    phone_number=advocate.phone_number,
                )
                for advocate in advocates
            ]
            session.add_all(rows)
            session.flush()
            for row in rows:
                session.refresh(row)
            created = [_to_entity(row) for row in rows]

        logger.info("Inserted {} advocates", len(created))
        return created

