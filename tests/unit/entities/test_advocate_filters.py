"""Unit tests for the advocate list query-string contract."""

import pytest
from pydantic import ValidationError

from src.advocates.entities.advocate import AdvocateFilter, parse_filter


class TestParseFilter:
    def test_no_parameters_gives_default_window(self):
        result = parse_filter({})

        assert result.ok
        assert result.errors == []
        assert result.value == AdvocateFilter(limit=10, offset=0)
        assert result.value.search is None
        assert result.value.min_years_of_experience is None

    def test_numeric_fields_are_coerced_from_strings(self):
        result = parse_filter(
            {"minYearsOfExperience": "5", "limit": "20", "offset": "40"}
        )

        assert result.ok
        assert result.value.min_years_of_experience == 5
        assert result.value.limit == 20
        assert result.value.offset == 40

    def test_every_bad_field_is_reported(self):
        result = parse_filter(
            {"minYearsOfExperience": "many", "limit": "abc", "offset": "-1"}
        )

        assert not result.ok
        assert result.value is None
        fields = {detail.split(":", 1)[0] for detail in result.errors}
        assert fields == {"minYearsOfExperience", "limit", "offset"}

    def test_limit_zero_is_invalid(self):
        result = parse_filter({"limit": "0"})

        assert not result.ok
        assert result.errors[0].startswith("limit: ")

    def test_negative_min_years_is_invalid(self):
        result = parse_filter({"minYearsOfExperience": "-3"})

        assert not result.ok
        assert result.errors[0].startswith("minYearsOfExperience: ")

    def test_limit_above_maximum_is_invalid(self):
        assert parse_filter({"limit": "101"}, max_page_size=100).errors == [
            "limit: Value error, must be less than or equal to 100"
        ]
        assert parse_filter({"limit": "100"}, max_page_size=100).ok

    def test_limit_is_uncapped_without_maximum(self):
        assert parse_filter({"limit": "5000"}).value.limit == 5000

    def test_values_beyond_64_bits_are_invalid(self):
        result = parse_filter(
            {"offset": str(2**63), "minYearsOfExperience": str(2**70), "limit": str(2**64)}
        )

        assert not result.ok
        assert sorted(error.split(":", 1)[0] for error in result.errors) == [
            "limit",
            "minYearsOfExperience",
            "offset",
        ]
        assert parse_filter({"offset": str(2**63 - 1)}).value.offset == 2**63 - 1

    def test_default_limit_is_configurable(self):
        assert parse_filter({}, default_limit=25).value.limit == 25

    def test_blank_values_are_absent(self):
        result = parse_filter(
            {
                "search": "   ",
                "city": "",
                "degree": "\t",
                "specialty": " ",
                "limit": "",
                "offset": "",
                "minYearsOfExperience": "",
            }
        )

        assert result.ok
        assert result.value == AdvocateFilter()

    def test_text_values_are_trimmed(self):
        result = parse_filter({"search": "  desai ", "city": " Seattle"})

        assert result.value.search == "desai"
        assert result.value.city == "Seattle"

    def test_unknown_parameters_are_ignored(self):
        assert parse_filter({"sort": "name", "page": "2"}).ok


class TestAdvocateFilter:
    def test_query_params_use_wire_names_and_skip_missing_values(self):
        filters = AdvocateFilter(search="desai", min_years_of_experience=3)

        assert filters.to_query_params() == {
            "search": "desai",
            "minYearsOfExperience": 3,
            "limit": 10,
            "offset": 0,
        }

    def test_has_search(self):
        assert AdvocateFilter(search="x").has_search
        assert not AdvocateFilter(city="x").has_search

    def test_filters_are_immutable(self):
        filters = AdvocateFilter()

        with pytest.raises(ValidationError):
            filters.limit = 50

    def test_equal_filters_hash_alike(self):
        assert hash(AdvocateFilter(search="a")) == hash(AdvocateFilter(search="a"))
