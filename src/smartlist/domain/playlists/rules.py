"""Smart playlist rule model - immutable state updates.

A rule set is edited entirely client-side through the functions below. Each
function takes the current SmartRuleSet and returns the next one; when an
event would break an invariant (too many rules, deleting the last rule, an
operator the field does not allow, a value of the wrong shape) the input
rule set is returned unchanged instead of raising. Final acceptance of a
rule set belongs to the matching engine at submission time.
"""

import re
import uuid
from dataclasses import dataclass, replace
from typing import Any, Callable, Literal, Optional

from loguru import logger

from smartlist.core.config import LimitsConfig

from .fields import SORT_FIELDS, get_default_field, get_field_config
from .values import (
    SmartRuleValue,
    conform_value,
    default_value_for_field,
    value_conforms,
)

MatchMode = Literal["all", "any"]
SortDirection = Literal["asc", "desc"]

MATCH_MODES = ("all", "any")
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class SmartRule:
    """A single smart playlist rule."""

    id: str
    field: str
    operator: str
    value: SmartRuleValue


@dataclass(frozen=True)
class SmartRuleSet:
    """Rules plus the settings that aggregate and order their result."""

    rules: tuple[SmartRule, ...]
    match_mode: MatchMode = "all"  # all = AND across rules, any = OR
    limit: int = 100
    sort_by: str = "random"
    sort_direction: SortDirection = "desc"

    def get_rule(self, rule_id: str) -> Optional[SmartRule]:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None


def generate_rule_id() -> str:
    """Generate a unique ID for a new rule."""
    return f"rule-{uuid.uuid4().hex[:12]}"


def create_default_rule(id_factory: Callable[[], str] = generate_rule_id) -> SmartRule:
    """Create a rule with the library-wide default field, operator and value."""
    config = get_default_field()
    return SmartRule(
        id=id_factory(),
        field=config.field,
        operator=config.default_operator,
        value=default_value_for_field(config),
    )


def create_rule_set(limits: LimitsConfig) -> SmartRuleSet:
    """Create the initial rule set shown in a new smart playlist form."""
    return SmartRuleSet(
        rules=(create_default_rule(),),
        limit=limits.default_playlist_limit,
    )


def _update_rule(
    rule_set: SmartRuleSet, rule_id: str, updated: SmartRule
) -> SmartRuleSet:
    return replace(
        rule_set,
        rules=tuple(updated if r.id == rule_id else r for r in rule_set.rules),
    )


def change_field(rule_set: SmartRuleSet, rule_id: str, new_field: str) -> SmartRuleSet:
    """Select a new field for a rule.

    Field, operator and value are replaced together: the operator becomes the
    field's default operator and the value its type default, so no operator or
    value from the previous field survives.
    """
    rule = rule_set.get_rule(rule_id)
    if rule is None:
        logger.debug(f"change_field: unknown rule {rule_id}")
        return rule_set

    config = get_field_config(new_field)
    if config is None or not config.operators:
        logger.debug(f"change_field: unknown field {new_field!r}, rule unchanged")
        return rule_set

    updated = replace(
        rule,
        field=config.field,
        operator=config.default_operator,
        value=default_value_for_field(config),
    )
    return _update_rule(rule_set, rule_id, updated)


def change_operator(
    rule_set: SmartRuleSet, rule_id: str, new_operator: str
) -> SmartRuleSet:
    """Select a new operator for a rule.

    Entering or leaving is_empty resets the value to the field's type default.
    Other changes keep the value when it still fits the new operator and
    convert it otherwise (see values.conform_value).
    """
    rule = rule_set.get_rule(rule_id)
    if rule is None:
        logger.debug(f"change_operator: unknown rule {rule_id}")
        return rule_set

    config = get_field_config(rule.field)
    if config is None or new_operator not in config.operators:
        logger.debug(
            f"change_operator: {new_operator!r} not allowed for field {rule.field!r}"
        )
        return rule_set

    if rule.operator == new_operator:
        return rule_set

    if "is_empty" in (rule.operator, new_operator):
        value = conform_value(config, new_operator, default_value_for_field(config))
    else:
        value = conform_value(config, new_operator, rule.value)

    return _update_rule(
        rule_set, rule_id, replace(rule, operator=new_operator, value=value)
    )


def change_value(
    rule_set: SmartRuleSet,
    rule_id: str,
    new_value: Any,
    limits: Optional[LimitsConfig] = None,
) -> SmartRuleSet:
    """Replace a rule's value.

    The value is stored verbatim when it has the shape required by the rule's
    field and operator; a value of any other shape is ignored.
    """
    rule = rule_set.get_rule(rule_id)
    if rule is None:
        logger.debug(f"change_value: unknown rule {rule_id}")
        return rule_set

    config = get_field_config(rule.field)
    if config is None:
        return rule_set

    max_seeds = limits.max_seed_tracks if limits else None
    if not value_conforms(config, rule.operator, new_value, max_seeds):
        logger.debug(
            f"change_value: ignored {type(new_value).__name__} value for "
            f"{rule.field}/{rule.operator}"
        )
        return rule_set

    return _update_rule(rule_set, rule_id, replace(rule, value=new_value))


def add_rule(
    rule_set: SmartRuleSet,
    limits: LimitsConfig,
    id_factory: Callable[[], str] = generate_rule_id,
) -> SmartRuleSet:
    """Append a default rule unless the rule set is already at max_rules."""
    if len(rule_set.rules) >= limits.max_rules:
        logger.debug(f"add_rule: already at max_rules ({limits.max_rules})")
        return rule_set

    return replace(rule_set, rules=rule_set.rules + (create_default_rule(id_factory),))


def delete_rule(rule_set: SmartRuleSet, rule_id: str) -> SmartRuleSet:
    """Remove a rule. The last remaining rule cannot be removed."""
    if len(rule_set.rules) <= 1:
        return rule_set

    remaining = tuple(r for r in rule_set.rules if r.id != rule_id)
    if len(remaining) == len(rule_set.rules):
        return rule_set

    return replace(rule_set, rules=remaining)


def clamp_limit(value: int, limits: LimitsConfig) -> int:
    """Clamp a track limit to [1, max_playlist_limit]."""
    return max(1, min(value, limits.max_playlist_limit))


def set_limit(rule_set: SmartRuleSet, value: int, limits: LimitsConfig) -> SmartRuleSet:
    """Commit a track limit, clamped to [1, max_playlist_limit]."""
    return replace(rule_set, limit=clamp_limit(value, limits))


def set_match_mode(rule_set: SmartRuleSet, match_mode: str) -> SmartRuleSet:
    """Switch between all (AND) and any (OR)."""
    if match_mode not in MATCH_MODES:
        return rule_set
    return replace(rule_set, match_mode=match_mode)


def set_sort(
    rule_set: SmartRuleSet, sort_by: str, sort_direction: Optional[str] = None
) -> SmartRuleSet:
    """Set the result ordering. Unknown sort fields or directions are ignored."""
    if sort_by not in SORT_FIELDS:
        return rule_set
    direction = sort_direction or rule_set.sort_direction
    if direction not in SORT_DIRECTIONS:
        return rule_set
    return replace(rule_set, sort_by=sort_by, sort_direction=direction)


# ============================================================================
# LIMIT INPUT BUFFER
# ============================================================================


@dataclass(frozen=True)
class LimitInput:
    """Raw text of the track-limit box plus the last committed limit.

    The text may be transiently invalid (empty, out of range) while the user
    types; it is only coerced back into range when the box loses focus.
    """

    text: str
    committed: int


_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")

# Any longer digit run is far past every limit and only ever clamps
_MAX_LIMIT_DIGITS = 18


def _parse_int(text: str) -> Optional[int]:
    """Parse the leading integer of text ("12abc" -> 12, "abc" -> None)."""
    match = _LEADING_INT.match(text)
    if not match:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_LIMIT_DIGITS:
        digits = "9" * _MAX_LIMIT_DIGITS
    value = int(digits)
    return -value if sign == "-" else value


def create_limit_input(limit: int) -> LimitInput:
    return LimitInput(text=str(limit), committed=limit)


def edit_limit_text(
    buffer: LimitInput, text: str, limits: LimitsConfig
) -> LimitInput:
    """Record a keystroke. In-range values are committed immediately."""
    parsed = _parse_int(text)
    if parsed is not None and 1 <= parsed <= limits.max_playlist_limit:
        return LimitInput(text=text, committed=parsed)
    return replace(buffer, text=text)


def commit_limit_text(buffer: LimitInput, limits: LimitsConfig) -> LimitInput:
    """Coerce the buffer into range on blur and sync the text with it."""
    parsed = _parse_int(buffer.text)
    committed = 1 if parsed is None else clamp_limit(parsed, limits)
    return LimitInput(text=str(committed), committed=committed)


def apply_limit_input(
    rule_set: SmartRuleSet, buffer: LimitInput, limits: LimitsConfig
) -> SmartRuleSet:
    """Copy the buffer's committed limit into the rule set."""
    if buffer.committed == rule_set.limit:
        return rule_set
    return set_limit(rule_set, buffer.committed, limits)
