"""Conversion between rule sets and their JSON wire form.

Wire form of a rule set (the matching engine's input):

    {
        "matchMode": "all" | "any",
        "rules": [{"field": ..., "operator": ..., "value": ...}],
        "limit": 100,
        "sortBy": "title",          # omitted for random order
        "sortOrder": "asc" | "desc"
    }

Values travel as plain JSON: ranges as {"min", "max"}, seed tracks as
{"track_ids": [...], "min_score"?}, is_empty as null.
"""

from typing import Any, Callable, Optional

from .fields import get_field_config
from .rules import SmartRule, SmartRuleSet, generate_rule_id
from .values import (
    DateRangeValue,
    RangeValue,
    SimilarityValue,
    SmartRuleValue,
    expected_shape,
)


def value_to_json(value: SmartRuleValue) -> Any:
    """Convert a rule value to its JSON representation."""
    if isinstance(value, (RangeValue, DateRangeValue)):
        return {"min": value.min, "max": value.max}
    if isinstance(value, SimilarityValue):
        payload: dict[str, Any] = {"track_ids": list(value.track_ids)}
        if value.min_score is not None:
            payload["min_score"] = value.min_score
        return payload
    if isinstance(value, list):
        return list(value)
    return value


def rule_to_json(rule: SmartRule) -> dict[str, Any]:
    return {
        "field": rule.field,
        "operator": rule.operator,
        "value": value_to_json(rule.value),
    }


def rule_set_to_input(rule_set: SmartRuleSet) -> dict[str, Any]:
    """Serialize a rule set for submission to the matching engine."""
    payload: dict[str, Any] = {
        "matchMode": rule_set.match_mode,
        "rules": [rule_to_json(rule) for rule in rule_set.rules],
        "limit": rule_set.limit,
        "sortOrder": rule_set.sort_direction,
    }
    if rule_set.sort_by != "random":
        payload["sortBy"] = rule_set.sort_by
    return payload


def _require_range_dict(raw: Any, where: str) -> dict:
    if not isinstance(raw, dict) or "min" not in raw or "max" not in raw:
        raise ValueError(f"{where}: expected an object with 'min' and 'max'")
    return raw


def value_from_json(field: str, operator: str, raw: Any, where: str = "value") -> SmartRuleValue:
    """Parse a JSON value into the variant required by (field, operator).

    Raises:
        ValueError: If the field is unknown, the operator is not allowed for
            the field, or the JSON does not have the required shape
    """
    config = get_field_config(field)
    if config is None:
        raise ValueError(f"{where}: unknown field '{field}'")
    if operator not in config.operators:
        raise ValueError(f"{where}: operator '{operator}' is not valid for field '{field}'")

    shape = expected_shape(config, operator)
    match shape:
        case "none":
            if raw is not None:
                raise ValueError(f"{where}: is_empty takes no value")
            return None
        case "string" | "date":
            if not isinstance(raw, str):
                raise ValueError(f"{where}: expected a string")
            return raw
        case "string_list":
            if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
                raise ValueError(f"{where}: expected a list of strings")
            return list(raw)
        case "number":
            if raw is not None and (
                isinstance(raw, bool) or not isinstance(raw, (int, float))
            ):
                raise ValueError(f"{where}: expected a number")
            return raw
        case "range":
            data = _require_range_dict(raw, where)
            bounds = (data["min"], data["max"])
            if any(isinstance(b, bool) or not isinstance(b, (int, float)) for b in bounds):
                raise ValueError(f"{where}: range bounds must be numbers")
            return RangeValue(min=data["min"], max=data["max"])
        case "date_range":
            data = _require_range_dict(raw, where)
            if not isinstance(data["min"], str) or not isinstance(data["max"], str):
                raise ValueError(f"{where}: date range bounds must be strings")
            return DateRangeValue(min=data["min"], max=data["max"])
        case "similarity":
            track_ids = raw.get("track_ids") if isinstance(raw, dict) else None
            if not isinstance(track_ids, list) or not all(
                isinstance(t, str) for t in track_ids
            ):
                raise ValueError(f"{where}: expected {{'track_ids': [...]}}")
            min_score = raw.get("min_score")
            if min_score is not None and (
                isinstance(min_score, bool) or not isinstance(min_score, (int, float))
            ):
                raise ValueError(f"{where}: 'min_score' must be a number")
            return SimilarityValue(track_ids=tuple(track_ids), min_score=min_score)
        case _:
            raise AssertionError(f"Unhandled shape: {shape}")


def _optional_string(data: dict[str, Any], key: str, default: str) -> str:
    # null and "" fall back to the default, like an omitted key
    raw = data.get(key)
    if raw is None or raw == "":
        return default
    if not isinstance(raw, str):
        raise ValueError(f"'{key}' must be a string")
    return raw


def rule_set_from_dict(
    data: dict[str, Any],
    id_factory: Callable[[], str] = generate_rule_id,
) -> SmartRuleSet:
    """Parse a rule set from its wire form (e.g. a saved JSON file).

    Rule IDs are kept when present and generated otherwise. Limits are not
    enforced here; run validation.validate_rule_set on the result.

    Raises:
        ValueError: If the document is structurally malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Rule set must be a JSON object")

    raw_rules = data.get("rules")
    if not isinstance(raw_rules, list):
        raise ValueError("'rules' must be a list")

    rules = []
    for index, raw_rule in enumerate(raw_rules):
        where = f"rules[{index}]"
        if not isinstance(raw_rule, dict):
            raise ValueError(f"{where}: rule must be an object")
        field = raw_rule.get("field")
        operator = raw_rule.get("operator")
        if not isinstance(field, str) or not isinstance(operator, str):
            raise ValueError(f"{where}: 'field' and 'operator' are required")
        value = value_from_json(field, operator, raw_rule.get("value"), f"{where}.value")
        rule_id = raw_rule.get("id")
        rules.append(
            SmartRule(
                id=rule_id if isinstance(rule_id, str) and rule_id else id_factory(),
                field=field,
                operator=operator,
                value=value,
            )
        )

    limit = data.get("limit", 100)
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError("'limit' must be an integer")

    match_mode = _optional_string(data, "matchMode", "all")
    sort_by = _optional_string(data, "sortBy", "random")
    sort_direction = _optional_string(data, "sortOrder", "desc")
    return SmartRuleSet(
        rules=tuple(rules),
        match_mode=match_mode,
        limit=limit,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )


def create_playlist_input(
    name: str,
    description: str,
    is_public: bool,
    rule_set: SmartRuleSet,
) -> dict[str, Any]:
    """Build the createPlaylist mutation input for a smart playlist."""
    payload: dict[str, Any] = {
        "name": name.strip(),
        "isPublic": is_public,
        "playlistType": "Smart",
        "smartRules": rule_set_to_input(rule_set),
    }
    if description.strip():
        payload["description"] = description.strip()
    return payload


def update_playlist_input(
    rule_set: SmartRuleSet,
    name: Optional[str] = None,
    description: Optional[str] = None,
    is_public: Optional[bool] = None,
) -> dict[str, Any]:
    """Build the updatePlaylist mutation input for an edited smart playlist.

    Metadata left as None is omitted so the saved value is kept.
    """
    payload: dict[str, Any] = {"smartRules": rule_set_to_input(rule_set)}
    if name is not None:
        payload["name"] = name.strip()
    if description is not None:
        payload["description"] = description.strip()
    if is_public is not None:
        payload["isPublic"] = is_public
    return payload
