"""Tests for the Advocate domain entity."""

import pytest
from pydantic import ValidationError

from src.advocates.entities.advocate import Advocate

VALID = {
    "first_name": "Priya",
    "last_name": "Desai",
    "city": "Seattle",
    "degree": "MD",
    "specialties": ["Bipolar"],
    "years_of_experience": 12,
    "phone_number": 5551234567,
}


def test_non_list_specialties_read_as_empty():
    assert Advocate.model_validate({**VALID, "specialties": None}).specialties == []
    assert Advocate.model_validate({**VALID, "specialties": "Bipolar"}).specialties == []


@pytest.mark.parametrize(
    "field,value",
    [
        ("first_name", ""),
        ("years_of_experience", -1),
        ("phone_number", 0),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Advocate.model_validate({**VALID, field: value})


def test_equality_ignores_created_at():
    from datetime import datetime

    first = Advocate.model_validate({**VALID, "id": 1})
    second = Advocate.model_validate({**VALID, "id": 1, "created_at": datetime.now()})

    assert first == second
    assert hash(first) == hash(second)
    assert first != Advocate.model_validate({**VALID, "id": 2})
