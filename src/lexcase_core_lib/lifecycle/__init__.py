"""Case Lifecycle Engine

Phase transition table, case-type rule registry, condition evaluation and
the transition validator that composes them.
"""

from .exceptions import (
    LifecycleError,
    RuleConfigurationError,
    UnknownCaseTypeError,
)
from .conditions import (
    ConditionEvaluator,
    field_exists,
    flag_set,
    missing_fields,
    strict_equals,
)
from .transitions import PhaseTransitionTable
from .registry import CaseTypeRuleRegistry, merge_fields
from .builtin_rules import (
    BUILTIN_TRANSITIONS,
    BUILTIN_CASE_TYPE_RULES,
    BUILTIN_PHASE_POLICIES,
    builtin_rule_set,
)
from .loader import (
    load_rule_set,
    load_rule_set_file,
    dump_rule_set,
)
from .validator import (
    TransitionValidator,
    PHASE_START_FIELD,
    DOCUMENTS_FIELD,
)
from .factory import (
    build_transition_validator,
    load_transition_validator,
    get_transition_validator,
    reset_transition_validator,
)

__all__ = [
    # Errors
    "LifecycleError",
    "RuleConfigurationError",
    "UnknownCaseTypeError",
    # Conditions
    "ConditionEvaluator",
    "field_exists",
    "flag_set",
    "missing_fields",
    "strict_equals",
    # Tables
    "PhaseTransitionTable",
    "CaseTypeRuleRegistry",
    "merge_fields",
    # Rule data
    "BUILTIN_TRANSITIONS",
    "BUILTIN_CASE_TYPE_RULES",
    "BUILTIN_PHASE_POLICIES",
    "builtin_rule_set",
    "load_rule_set",
    "load_rule_set_file",
    "dump_rule_set",
    # Validator
    "TransitionValidator",
    "PHASE_START_FIELD",
    "DOCUMENTS_FIELD",
    "build_transition_validator",
    "load_transition_validator",
    "get_transition_validator",
    "reset_transition_validator",
]
