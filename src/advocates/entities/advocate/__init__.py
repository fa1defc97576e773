"""Entity package: Advocate."""

from .entity import Advocate
from .filters import AdvocateFilter, FilterParseResult, parse_filter
from .repository import AdvocatePage, AdvocateRepository
from .table import AdvocateTable

__all__ = [
    "Advocate",
    "AdvocateFilter",
    "AdvocatePage",
    "AdvocateRepository",
    "AdvocateTable",
    "FilterParseResult",
    "parse_filter",
]
