"""Smart playlist field registry.

Static, closed catalog of the fields a smart playlist rule can filter on.
Each field declares its value type (which decides the legal operators and
the shape of a rule's value), a category used only to group selectors, and
for numeric fields the input bounds and scale.

The first operator listed for a field is its default operator: it is the
operator a rule receives whenever that field is newly selected.
"""

from dataclasses import dataclass
from typing import Literal, Optional

ValueType = Literal["string", "number", "array", "date", "similar_to"]

# All operators, in display order
OPERATORS = (
    "equals",
    "not_equals",
    "contains",
    "not_contains",
    "in",
    "not_in",
    "greater_than",
    "less_than",
    "between",
    "is_empty",
)

# Operators whose value is a list of strings
LIST_OPERATORS = {"in", "not_in"}

OPERATOR_LABELS = {
    "equals": "equals",
    "not_equals": "does not equal",
    "contains": "contains",
    "not_contains": "does not contain",
    "in": "is one of",
    "not_in": "is not one of",
    "greater_than": "is greater than",
    "less_than": "is less than",
    "between": "is between",
    "is_empty": "is empty",
}

# Category order is the order selectors show the groups in
CATEGORY_LABELS = {
    "metadata": "Metadata",
    "activity": "Activity",
    "audio-features": "Audio Features",
    "ai": "AI Analysis",
    "similarity": "Similarity",
}

_TEXT_OPERATORS = ("contains", "not_contains", "equals", "not_equals")
_TAG_OPERATORS = ("in", "not_in", "contains", "not_contains", "is_empty")


@dataclass(frozen=True)
class FieldConfig:
    """Configuration for one filterable field."""

    field: str
    label: str
    category: str
    value_type: ValueType
    operators: tuple[str, ...]
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    unit: Optional[str] = None
    description: str = ""

    @property
    def default_operator(self) -> str:
        return self.operators[0]

    @property
    def is_percentage(self) -> bool:
        """True for 0-100 percent fields, which are edited with a slider."""
        return (
            self.value_type == "number"
            and self.min == 0
            and self.max == 100
            and self.unit == "%"
        )


SMART_RULE_FIELDS: tuple[FieldConfig, ...] = (
    # Metadata
    FieldConfig(
        field="genre",
        label="Genre",
        category="metadata",
        value_type="string",
        operators=_TEXT_OPERATORS + ("in", "not_in", "is_empty"),
        description="Music genre",
    ),
    FieldConfig(
        field="artist",
        label="Artist",
        category="metadata",
        value_type="string",
        operators=_TEXT_OPERATORS + ("in", "not_in"),
        description="Artist name",
    ),
    FieldConfig(
        field="album",
        label="Album",
        category="metadata",
        value_type="string",
        operators=_TEXT_OPERATORS,
        description="Album title",
    ),
    FieldConfig(
        field="title",
        label="Title",
        category="metadata",
        value_type="string",
        operators=_TEXT_OPERATORS,
        description="Track title",
    ),
    FieldConfig(
        field="year",
        label="Year",
        category="metadata",
        value_type="number",
        operators=("equals", "not_equals", "greater_than", "less_than", "between"),
        step=1,
        description="Release year",
    ),
    FieldConfig(
        field="format",
        label="Format",
        category="metadata",
        value_type="string",
        operators=("equals", "not_equals", "in", "not_in"),
        description="Audio file format (flac, mp3, ...)",
    ),
    # Activity
    FieldConfig(
        field="plays",
        label="Play Count",
        category="activity",
        value_type="number",
        operators=("greater_than", "less_than", "equals", "between"),
        min=0,
        step=1,
        description="Number of times played",
    ),
    FieldConfig(
        field="rating",
        label="Rating",
        category="activity",
        value_type="number",
        operators=("greater_than", "less_than", "equals", "between"),
        min=0,
        max=100,
        step=1,
        unit="%",
        description="Your rating of the track",
    ),
    FieldConfig(
        field="added",
        label="Date Added",
        category="activity",
        value_type="date",
        operators=("greater_than", "less_than", "between"),
        description="When the track was added to the library",
    ),
    FieldConfig(
        field="lastPlayed",
        label="Last Played",
        category="activity",
        value_type="date",
        operators=("greater_than", "less_than", "between", "is_empty"),
        description="When the track was last played (empty = never played)",
    ),
    # Audio features
    FieldConfig(
        field="duration",
        label="Duration",
        category="audio-features",
        value_type="number",
        operators=("greater_than", "less_than", "between"),
        min=0,
        max=3600,
        step=1,
        unit="s",
        description="Track length in seconds",
    ),
    FieldConfig(
        field="mood",
        label="Mood",
        category="audio-features",
        value_type="array",
        operators=_TAG_OPERATORS,
        description="Detected mood tags",
    ),
    # AI
    FieldConfig(
        field="aiTag",
        label="AI Tags",
        category="ai",
        value_type="array",
        operators=_TAG_OPERATORS,
        description="AI-generated semantic tags",
    ),
    # Similarity
    FieldConfig(
        field="similar_to",
        label="Similar to Tracks",
        category="similarity",
        value_type="similar_to",
        operators=("equals",),
        description="Tracks similar to the selected seed tracks",
    ),
)

_FIELDS_BY_NAME = {config.field: config for config in SMART_RULE_FIELDS}

VALID_FIELDS = frozenset(_FIELDS_BY_NAME)

# Sort options for the result ordering dropdown; 'random' is sent as no sort
SORT_OPTIONS = [
    ("random", "Random"),
    ("title", "Title"),
    ("artist", "Artist"),
    ("album", "Album"),
    ("year", "Year"),
    ("plays", "Play Count"),
    ("rating", "Rating"),
    ("added", "Date Added"),
    ("lastPlayed", "Last Played"),
    ("duration", "Duration"),
]

SORT_FIELDS = frozenset(value for value, _ in SORT_OPTIONS)


def get_field_config(field: str) -> Optional[FieldConfig]:
    """Get field configuration by field name.

    Returns:
        The field's config, or None for an unknown field name
    """
    return _FIELDS_BY_NAME.get(field)


def get_default_field() -> FieldConfig:
    """Field given to newly added rules (first in declaration order)."""
    return SMART_RULE_FIELDS[0]


def get_fields_by_category() -> dict[str, list[FieldConfig]]:
    """Get fields grouped by category, in declaration order within each group."""
    grouped: dict[str, list[FieldConfig]] = {category: [] for category in CATEGORY_LABELS}
    for config in SMART_RULE_FIELDS:
        grouped[config.category].append(config)
    return grouped


def is_operator_allowed(field: str, operator: str) -> bool:
    """Check whether operator is legal for field."""
    config = get_field_config(field)
    return config is not None and operator in config.operators


def get_default_operator(config: FieldConfig) -> str:
    """Operator assigned whenever the field is newly selected."""
    return config.default_operator
