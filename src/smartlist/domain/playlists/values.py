"""Rule value shapes.

A rule's value is a tagged union whose variant is decided by the owning
field's value type and the rule's operator:

    value_type   operator              value
    ----------   -------------------   ------------------------------
    any          is_empty              None
    string       in / not_in           list[str]
    string       other                 str
    array        in / not_in           list[str]
    array        contains / not_...    str
    number       between               RangeValue
    number       other                 int | float | None
    date         between               DateRangeValue
    date         other                 str (ISO date, '' while unset)
    similar_to   equals                SimilarityValue

expected_shape() names the variant; everything else in this module dispatches
on that name.
"""

import math
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from .fields import LIST_OPERATORS, FieldConfig

Shape = Literal[
    "none",
    "string",
    "string_list",
    "number",
    "range",
    "date",
    "date_range",
    "similarity",
]


@dataclass(frozen=True)
class RangeValue:
    """Inclusive numeric range for the 'between' operator."""

    min: float
    max: float


@dataclass(frozen=True)
class DateRangeValue:
    """Inclusive date range (ISO YYYY-MM-DD strings) for the 'between' operator."""

    min: str
    max: str


@dataclass(frozen=True)
class SimilarityValue:
    """Seed tracks for a similar_to rule. Order is significant to the engine."""

    track_ids: tuple[str, ...] = ()
    min_score: Optional[float] = None  # Similarity cutoff in [0, 1]; engine default when None


SmartRuleValue = Union[
    None, str, int, float, list[str], RangeValue, DateRangeValue, SimilarityValue
]


def expected_shape(config: FieldConfig, operator: str) -> Shape:
    """Get the value variant required for (field value type, operator)."""
    if operator == "is_empty":
        return "none"

    match config.value_type:
        case "string" | "array":
            return "string_list" if operator in LIST_OPERATORS else "string"
        case "number":
            return "range" if operator == "between" else "number"
        case "date":
            return "date_range" if operator == "between" else "date"
        case "similar_to":
            return "similarity"
        case _:
            raise AssertionError(f"Unhandled value type: {config.value_type}")


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and (isinstance(value, int) or math.isfinite(value))
    )


def matches_shape(
    shape: Shape, value: Any, max_seed_tracks: Optional[int] = None
) -> bool:
    """Check a value against a shape variant.

    Args:
        shape: Variant from expected_shape()
        value: Candidate value
        max_seed_tracks: Upper bound on similarity seeds (unchecked when None)
    """
    match shape:
        case "none":
            return value is None
        case "string" | "date":
            return isinstance(value, str)
        case "string_list":
            return isinstance(value, list) and all(isinstance(v, str) for v in value)
        case "number":
            return value is None or _is_number(value)
        case "range":
            return (
                isinstance(value, RangeValue)
                and _is_number(value.min)
                and _is_number(value.max)
            )
        case "date_range":
            return (
                isinstance(value, DateRangeValue)
                and isinstance(value.min, str)
                and isinstance(value.max, str)
            )
        case "similarity":
            if not isinstance(value, SimilarityValue):
                return False
            ids = value.track_ids
            if not all(isinstance(track_id, str) for track_id in ids):
                return False
            if len(set(ids)) != len(ids):
                return False
            if value.min_score is not None and not _is_number(value.min_score):
                return False
            return max_seed_tracks is None or len(ids) <= max_seed_tracks
        case _:
            raise AssertionError(f"Unhandled shape: {shape}")


def value_conforms(
    config: FieldConfig,
    operator: str,
    value: Any,
    max_seed_tracks: Optional[int] = None,
) -> bool:
    """Check whether value has the shape required for (config, operator)."""
    return matches_shape(expected_shape(config, operator), value, max_seed_tracks)


def _default_number(config: FieldConfig) -> float:
    # Fields without a declared min default to 0, pulled inside max when 0 is out of range
    if config.min is not None:
        return config.min
    if config.max is not None and config.max < 0:
        return config.max
    return 0


def default_value_for_field(config: FieldConfig) -> SmartRuleValue:
    """Type default used whenever a field is (re)selected or leaves is_empty."""
    match config.value_type:
        case "string":
            return ""
        case "number":
            return _default_number(config)
        case "array":
            return []
        case "date":
            return ""
        case "similar_to":
            return SimilarityValue()
        case _:
            raise AssertionError(f"Unhandled value type: {config.value_type}")


def conform_value(config: FieldConfig, operator: str, value: Any) -> SmartRuleValue:
    """Carry a value over to the shape required by a new operator.

    Values that already conform are returned unchanged. Otherwise the value is
    converted where a natural mapping exists (scalar to one-element list, number
    to a degenerate range, range to its lower bound) and replaced by the
    variant's empty value where it does not.
    """
    shape = expected_shape(config, operator)
    if matches_shape(shape, value):
        return value

    match shape:
        case "none":
            return None
        case "string":
            return ""
        case "string_list":
            if isinstance(value, str) and value.strip():
                return [value.strip()]
            return []
        case "number":
            if isinstance(value, RangeValue):
                return value.min
            return _default_number(config)
        case "range":
            if _is_number(value):
                return RangeValue(min=value, max=value)
            low = _default_number(config)
            high = config.max if config.max is not None else low
            return RangeValue(min=low, max=high)
        case "date":
            if isinstance(value, DateRangeValue):
                return value.min
            return ""
        case "date_range":
            if isinstance(value, str) and value:
                return DateRangeValue(min=value, max=value)
            return DateRangeValue(min="", max="")
        case "similarity":
            return SimilarityValue()
        case _:
            raise AssertionError(f"Unhandled shape: {shape}")
