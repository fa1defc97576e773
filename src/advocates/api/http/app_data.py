from dataclasses import dataclass

from src.advocates.core.services import DbSessionService
from src.advocates.entities.advocate import AdvocateRepository


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    advocate_repository: AdvocateRepository

    @classmethod
    def from_database(cls, database_service: DbSessionService) -> "ApplicationDependencies":
        return cls(
            database_service=database_service,
            advocate_repository=AdvocateRepository(database_service),
        )
