"""Smart playlists domain - rule editing, validation and seed tracks.

This domain handles:
- The static field registry (fields, operators, value types)
- Rule set editing as immutable state updates
- Submission-time validation
- JSON wire form of rule sets
- Seed-track selection for similar_to rules
"""

# Field registry
from .fields import (
    CATEGORY_LABELS,
    OPERATOR_LABELS,
    OPERATORS,
    SMART_RULE_FIELDS,
    SORT_FIELDS,
    SORT_OPTIONS,
    VALID_FIELDS,
    FieldConfig,
    get_default_field,
    get_default_operator,
    get_field_config,
    get_fields_by_category,
    is_operator_allowed,
)

# Rule values
from .values import (
    DateRangeValue,
    RangeValue,
    SimilarityValue,
    SmartRuleValue,
    default_value_for_field,
    expected_shape,
    value_conforms,
)

# Rule model
from .rules import (
    LimitInput,
    SmartRule,
    SmartRuleSet,
    add_rule,
    apply_limit_input,
    change_field,
    change_operator,
    change_value,
    commit_limit_text,
    create_default_rule,
    create_limit_input,
    create_rule_set,
    delete_rule,
    edit_limit_text,
    set_limit,
    set_match_mode,
    set_sort,
)

# Validation
from .validation import (
    ValidationError,
    validate_playlist_update,
    validate_rule,
    validate_rule_set,
    validate_smart_playlist,
)

# Wire form
from .serialization import (
    create_playlist_input,
    rule_set_from_dict,
    rule_set_to_input,
    update_playlist_input,
)

# Seed tracks
from .seeds import (
    SeedSelectionState,
    SeedTrack,
    create_seed_state,
    remove_seed_track,
    select_seed_track,
    selected_tracks,
)
