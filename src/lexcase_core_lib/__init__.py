"""LexCase Core Library

Shared models and the case lifecycle transition engine for LexCase services.
"""

__version__ = "0.1.0"

# Export shared models first (no dependencies)
from lexcase_core_lib.models import (
    Phase, CaseType, CaseStatus, Role, CaseState, ValidationResult,
    Condition, ConditionOperator, TransitionRule, CaseTypeRule, RuleSet,
)

# Export engine settings (no model dependencies)
from lexcase_core_lib.config import (
    EngineSettings,
    RulesSource,
)

from lexcase_core_lib.lifecycle import (
    TransitionValidator,
    RuleConfigurationError,
    UnknownCaseTypeError,
    builtin_rule_set,
    get_transition_validator,
    reset_transition_validator,
    load_transition_validator,
)

# Lazy import for clients to avoid circular dependency
# Clients depend on the lifecycle package, so import them last
_LAZY_CLIENTS = ("CaseServiceClient", "RuleConfigClient")


def __getattr__(name):
    """Lazy import for service clients to avoid circular import."""
    if name in _LAZY_CLIENTS:
        from lexcase_core_lib import clients
        return getattr(clients, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    # Models
    "Phase", "CaseType", "CaseStatus", "Role", "CaseState", "ValidationResult",
    "Condition", "ConditionOperator", "TransitionRule", "CaseTypeRule", "RuleSet",
    # Engine
    "TransitionValidator",
    "RuleConfigurationError",
    "UnknownCaseTypeError",
    "builtin_rule_set",
    "get_transition_validator",
    "reset_transition_validator",
    "load_transition_validator",
    # Settings
    "EngineSettings",
    "RulesSource",
    # Clients (lazy loaded)
    "CaseServiceClient",
    "RuleConfigClient",
]
