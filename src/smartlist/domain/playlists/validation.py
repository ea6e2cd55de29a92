"""Submission-time validation of a smart playlist.

Editing never rejects anything (see rules.py); this module runs once, when
the user saves, and reports the first problem found so the form can point at
it. The matching engine still has the final say.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, cast

from smartlist.core.config import LimitsConfig

from .fields import SORT_FIELDS, FieldConfig, get_field_config
from .rules import MATCH_MODES, SORT_DIRECTIONS, SmartRule, SmartRuleSet
from .values import (
    DateRangeValue,
    RangeValue,
    SimilarityValue,
    expected_shape,
    matches_shape,
)


@dataclass(frozen=True)
class ValidationError:
    """Validation error for a form field.

    field is a dotted path into the form, e.g. "name" or "rules.2.value".
    """

    field: str
    message: str


def _parse_iso_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _check_number_bounds(
    config: FieldConfig, number: float, path: str, label: str
) -> Optional[ValidationError]:
    if config.min is not None and number < config.min:
        return ValidationError(path, f"{label}: {config.label} cannot be below {config.min:g}")
    if config.max is not None and number > config.max:
        return ValidationError(path, f"{label}: {config.label} cannot exceed {config.max:g}")
    return None


def validate_rule(
    rule: SmartRule, index: int, limits: LimitsConfig
) -> Optional[ValidationError]:
    """Validate a single rule; index is 0-based and reported 1-based."""
    label = f"Rule {index + 1}"
    path = f"rules.{index}"

    config = get_field_config(rule.field)
    if config is None:
        return ValidationError(f"{path}.field", f"{label}: Unknown field '{rule.field}'")

    if rule.operator not in config.operators:
        return ValidationError(
            f"{path}.operator",
            f"{label}: '{rule.operator}' is not a valid operator for {config.label}",
        )

    value = rule.value
    value_path = f"{path}.value"
    shape = expected_shape(config, rule.operator)

    if not matches_shape(shape, value):
        return ValidationError(value_path, f"{label}: Value has the wrong type")

    match shape:
        case "none":
            return None

        case "similarity":
            seeds = cast(SimilarityValue, value)
            if not seeds.track_ids:
                return ValidationError(
                    value_path, f"{label}: At least one seed track is required"
                )
            if len(seeds.track_ids) > limits.max_seed_tracks:
                return ValidationError(
                    value_path,
                    f"{label}: Cannot have more than {limits.max_seed_tracks} seed tracks",
                )
            if len(set(seeds.track_ids)) != len(seeds.track_ids):
                return ValidationError(value_path, f"{label}: Seed tracks must be unique")
            if seeds.min_score is not None and not 0 <= seeds.min_score <= 1:
                return ValidationError(
                    value_path, f"{label}: Similarity threshold must be between 0 and 1"
                )
            return None

        case "range":
            bounds = cast(RangeValue, value)
            if bounds.min > bounds.max:
                return ValidationError(
                    value_path, f"{label}: Minimum cannot exceed maximum"
                )
            return _check_number_bounds(
                config, bounds.min, value_path, label
            ) or _check_number_bounds(config, bounds.max, value_path, label)

        case "date_range":
            dates = cast(DateRangeValue, value)
            if not dates.min or not dates.max:
                return ValidationError(
                    value_path, f"{label}: Start and end dates are required"
                )
            start = _parse_iso_date(dates.min)
            end = _parse_iso_date(dates.max)
            if start is None or end is None:
                return ValidationError(value_path, f"{label}: Dates must be valid")
            if start > end:
                return ValidationError(
                    value_path, f"{label}: Start date must be before end date"
                )
            return None

        case "number":
            if value is None:
                return ValidationError(value_path, f"{label}: Value is required")
            return _check_number_bounds(config, value, value_path, label)

        case "date":
            if not value.strip():
                return ValidationError(value_path, f"{label}: Value is required")
            if _parse_iso_date(value) is None:
                return ValidationError(value_path, f"{label}: Dates must be valid")
            return None

        case "string":
            if not value.strip():
                return ValidationError(value_path, f"{label}: Value is required")
            return None

        case "string_list":
            if not [v for v in value if v.strip()]:
                return ValidationError(value_path, f"{label}: Value is required")
            return None

        case _:
            raise AssertionError(f"Unhandled shape: {shape}")


def validate_rule_set(
    rule_set: SmartRuleSet, limits: LimitsConfig
) -> Optional[ValidationError]:
    """Validate rules and aggregation settings.

    Returns:
        The first error found, or None when the rule set can be submitted
    """
    if not rule_set.rules:
        return ValidationError("rules", "At least one rule is required")
    if len(rule_set.rules) > limits.max_rules:
        return ValidationError("rules", f"Cannot exceed {limits.max_rules} rules")

    if rule_set.match_mode not in MATCH_MODES:
        return ValidationError("matchMode", "Match mode must be 'all' or 'any'")

    for index, rule in enumerate(rule_set.rules):
        error = validate_rule(rule, index, limits)
        if error:
            return error

    if rule_set.limit < 1:
        return ValidationError("limit", "Limit must be a positive number")
    if rule_set.limit > limits.max_playlist_limit:
        return ValidationError(
            "limit", f"Limit cannot exceed {limits.max_playlist_limit:,} tracks"
        )

    if rule_set.sort_by not in SORT_FIELDS:
        return ValidationError("sortBy", f"Cannot sort by '{rule_set.sort_by}'")
    if rule_set.sort_direction not in SORT_DIRECTIONS:
        return ValidationError("sortOrder", "Sort order must be 'asc' or 'desc'")

    return None


def _validate_name(name: str, limits: LimitsConfig) -> Optional[ValidationError]:
    if not name.strip():
        return ValidationError("name", "Playlist name is required")
    if len(name) > limits.max_name_length:
        return ValidationError(
            "name", f"Name cannot exceed {limits.max_name_length} characters"
        )
    return None


def _validate_description(
    description: str, limits: LimitsConfig
) -> Optional[ValidationError]:
    if description and len(description) > limits.max_description_length:
        return ValidationError(
            "description",
            f"Description cannot exceed {limits.max_description_length} characters",
        )
    return None


def validate_smart_playlist(
    name: str,
    description: str,
    rule_set: SmartRuleSet,
    limits: LimitsConfig,
) -> Optional[ValidationError]:
    """Validate the whole smart playlist form (name, description, rules)."""
    return (
        _validate_name(name, limits)
        or _validate_description(description, limits)
        or validate_rule_set(rule_set, limits)
    )


def validate_playlist_update(
    rule_set: SmartRuleSet,
    limits: LimitsConfig,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Optional[ValidationError]:
    """Validate an edit of a saved smart playlist.

    Metadata passed as None is left as saved and not checked.
    """
    if name is not None:
        error = _validate_name(name, limits)
        if error:
            return error
    if description is not None:
        error = _validate_description(description, limits)
        if error:
            return error
    return validate_rule_set(rule_set, limits)
