"""Tests for rule value shapes and conversions."""

import math

import pytest

from smartlist.domain.playlists.fields import get_field_config
from smartlist.domain.playlists.values import (
    DateRangeValue,
    RangeValue,
    SimilarityValue,
    conform_value,
    default_value_for_field,
    expected_shape,
    matches_shape,
)


class TestExpectedShape:
    @pytest.mark.parametrize(
        "field,operator,shape",
        [
            ("genre", "contains", "string"),
            ("genre", "in", "string_list"),
            ("genre", "is_empty", "none"),
            ("mood", "contains", "string"),
            ("mood", "not_in", "string_list"),
            ("year", "equals", "number"),
            ("year", "between", "range"),
            ("added", "greater_than", "date"),
            ("added", "between", "date_range"),
            ("similar_to", "equals", "similarity"),
        ],
    )
    def test_shape_table(self, field, operator, shape):
        assert expected_shape(get_field_config(field), operator) == shape


class TestMatchesShape:
    def test_booleans_are_not_numbers(self):
        assert not matches_shape("number", True)
        assert matches_shape("number", 3)
        assert matches_shape("number", None)

    def test_non_finite_numbers_rejected(self):
        assert not matches_shape("number", math.nan)
        assert not matches_shape("range", RangeValue(0, math.inf))

    def test_huge_integers_are_numbers(self):
        assert matches_shape("number", 10**400)
        assert matches_shape("range", RangeValue(0, 10**400))

    def test_string_list(self):
        assert matches_shape("string_list", ["a", "b"])
        assert not matches_shape("string_list", "a")
        assert not matches_shape("string_list", ["a", 1])

    def test_similarity_rejects_duplicates(self):
        assert matches_shape("similarity", SimilarityValue(("a", "b")))
        assert not matches_shape("similarity", SimilarityValue(("a", "a")))

    def test_similarity_max(self):
        value = SimilarityValue(("a", "b", "c"))
        assert matches_shape("similarity", value, max_seed_tracks=3)
        assert not matches_shape("similarity", value, max_seed_tracks=2)

    def test_none_shape(self):
        assert matches_shape("none", None)
        assert not matches_shape("none", "")


class TestDefaults:
    def test_type_defaults(self):
        assert default_value_for_field(get_field_config("genre")) == ""
        assert default_value_for_field(get_field_config("year")) == 0
        assert default_value_for_field(get_field_config("plays")) == 0
        assert default_value_for_field(get_field_config("mood")) == []
        assert default_value_for_field(get_field_config("added")) == ""
        assert default_value_for_field(get_field_config("similar_to")) == SimilarityValue()


class TestConformValue:
    def test_conforming_value_kept(self):
        config = get_field_config("genre")
        assert conform_value(config, "equals", "rock") == "rock"

    def test_scalar_to_list(self):
        config = get_field_config("genre")
        assert conform_value(config, "in", " rock ") == ["rock"]
        assert conform_value(config, "in", "") == []

    def test_list_to_scalar(self):
        config = get_field_config("genre")
        assert conform_value(config, "contains", ["rock"]) == ""

    def test_number_to_range(self):
        config = get_field_config("rating")
        assert conform_value(config, "between", 40) == RangeValue(40, 40)

    def test_empty_number_to_range_uses_bounds(self):
        config = get_field_config("rating")
        assert conform_value(config, "between", None) == RangeValue(0, 100)

    def test_range_to_number(self):
        config = get_field_config("plays")
        assert conform_value(config, "greater_than", RangeValue(5, 10)) == 5

    def test_date_to_range_and_back(self):
        config = get_field_config("added")
        assert conform_value(config, "between", "2024-01-01") == DateRangeValue(
            "2024-01-01", "2024-01-01"
        )
        assert conform_value(config, "between", "") == DateRangeValue("", "")
        assert (
            conform_value(config, "less_than", DateRangeValue("2024-01-01", "2024-02-01"))
            == "2024-01-01"
        )

    def test_to_is_empty(self):
        config = get_field_config("lastPlayed")
        assert conform_value(config, "is_empty", "2024-01-01") is None
