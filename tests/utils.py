"""Payload builders shared by client-side tests."""

from __future__ import annotations

from typing import Any

from src.advocates.entities.advocate.filters import AdvocateFilter


def advocate_payload(n: int, **overrides: Any) -> dict[str, Any]:
    payload = {
        "id": n,
        "firstName": f"Person{n:02d}",
        "lastName": "Example",
        "city": "Springfield",
        "degree": "MSW",
        "specialties": ["Personal growth"],
        "yearsOfExperience": 5,
        "phoneNumber": 5550000000 + n,
        "createdAt": "2024-01-01T00:00:00",
    }
    payload.update(overrides)
    return payload


def list_payload(filters: AdvocateFilter | None, total: int) -> dict[str, Any]:
    """A list envelope for ``filters`` drawn from ``total`` matching rows."""
    filters = filters or AdvocateFilter()
    end = min(filters.offset + filters.limit, total)
    data = [advocate_payload(n) for n in range(filters.offset + 1, end + 1)]
    return {
        "data": data,
        "pagination": {
            "limit": filters.limit,
            "offset": filters.offset,
            "total": total,
            "hasMore": filters.offset + len(data) < total,
        },
    }
