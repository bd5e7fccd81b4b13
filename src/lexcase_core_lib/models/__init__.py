"""
Shared data models for the case lifecycle engine.

This package provides Pydantic models shared by the lifecycle engine and the
services that call it: case snapshots, validation results and rule data.
"""

from lexcase_core_lib.models.case import (
    # Lifecycle enumerations
    Phase,
    PHASE_ORDER,
    TERMINAL_PHASE,
    CaseType,
    CaseStatus,
    Role,

    # Snapshot and result
    CaseState,
    ValidationResult,
)

from lexcase_core_lib.models.rules import (
    # Conditions
    Condition,
    ConditionOperator,

    # Transition table
    TransitionRule,

    # Case-type rules
    CaseTypeRule,
    PhaseRule,
    DocumentRequirement,
    TimelineConstraint,
    Advisory,
    IntakeWarning,
    ApprovalRule,
    FeeStructure,

    # Phase policies
    PhasePolicy,
    StatusRule,
    CompletionCheck,
    CaseTypeCompletionRequirement,

    # Bundle
    RuleSet,
)

__all__ = [
    # Lifecycle
    "Phase", "PHASE_ORDER", "TERMINAL_PHASE", "CaseType", "CaseStatus", "Role",
    # Snapshot and result
    "CaseState", "ValidationResult",
    # Conditions
    "Condition", "ConditionOperator",
    # Rules
    "TransitionRule", "CaseTypeRule", "PhaseRule", "DocumentRequirement",
    "TimelineConstraint", "Advisory", "IntakeWarning", "ApprovalRule",
    "FeeStructure", "RuleSet",
    # Phase policies
    "PhasePolicy", "StatusRule", "CompletionCheck", "CaseTypeCompletionRequirement",
]
