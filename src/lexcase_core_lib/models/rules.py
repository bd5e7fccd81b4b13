"""Rule data models for the case lifecycle engine.

Key Models:
- Condition: Structured predicate over case metadata (optionally a conditional requirement)
- TransitionRule: One legal (from → to) edge with required fields, conditions and roles
- PhaseRule: Case-type additions for transitions into a phase
- DocumentRequirement / TimelineConstraint: Advisory checks
- Advisory / IntakeWarning / ApprovalRule: Case-type hints and approval policy
- CaseTypeRule: Complete declarative rule set for one case type
- StatusRule / CompletionCheck / PhasePolicy: Status changes and phase completion
- RuleSet: Serializable bundle of transitions, case-type rules and phase policies

All models are frozen and use tuples for collections. Rule tables are loaded
once at process start and shared read-only between requests.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lexcase_core_lib.models.case import CaseStatus, CaseType, Phase, Role, TERMINAL_PHASE


def render_value(value: Any) -> str:
    """Render a condition value the way it appears in error messages"""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


# ============================================================
# Conditions
# ============================================================

class ConditionOperator(str, Enum):
    """Supported predicate operators"""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"

    @property
    def takes_value(self) -> bool:
        return self in [ConditionOperator.EQUALS, ConditionOperator.NOT_EQUALS]


class Condition(BaseModel):
    """
    Structured predicate evaluated against case metadata.

    Plain form:
        {"field": "riskAssessmentCompleted", "operator": "equals", "value": true}

    Conditional requirement form (guard implies required field):
        {"field": "unionMember", "operator": "equals", "value": true,
         "requires_field": "unionContract"}

    A conditional requirement is satisfied when the guard is false, or when
    the guard is true and `requires_field` exists.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    field: str = Field(
        min_length=1,
        description="Metadata key the predicate reads"
    )

    operator: ConditionOperator = Field(
        description="Comparison operator"
    )

    value: Any = Field(
        default=None,
        description="Comparison value (equals / not_equals only)"
    )

    requires_field: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Field required when the guard holds"
    )

    description: Optional[str] = Field(
        default=None,
        description="Human-readable form used in error messages"
    )

    @model_validator(mode='after')
    def validate_shape(self):
        """Reject condition shapes the evaluator cannot interpret"""
        if self.operator.takes_value and 'value' not in self.model_fields_set:
            raise ValueError(
                f"Condition on '{self.field}': operator '{self.operator.value}' requires a value"
            )
        if not self.operator.takes_value and self.value is not None:
            raise ValueError(
                f"Condition on '{self.field}': operator '{self.operator.value}' does not take a value"
            )
        if self.requires_field is not None:
            if self.operator is not ConditionOperator.EQUALS:
                raise ValueError(
                    f"Condition on '{self.field}': requires_field needs an 'equals' guard"
                )
            if self.requires_field == self.field:
                raise ValueError(
                    f"Condition on '{self.field}': requires_field must differ from the guard field"
                )
        return self

    @property
    def is_conditional_requirement(self) -> bool:
        return self.requires_field is not None

    def render(self) -> str:
        """Predicate as text: 'field operator value'"""
        if self.operator.takes_value:
            return f"{self.field} {self.operator.value} {render_value(self.value)}"
        return f"{self.field} {self.operator.value}"

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.is_conditional_requirement:
            return f"if {self.render()}, require {self.requires_field}"
        return self.render()


# ============================================================
# Transition Table
# ============================================================

class TransitionRule(BaseModel):
    """
    One legal phase transition.

    `from_phase=None` marks the wildcard rule: it matches any non-terminal
    source phase and must target the terminal phase.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_phase: Optional[Phase] = Field(
        description="Source phase; None for the wildcard rule"
    )

    to_phase: Phase = Field(
        description="Target phase"
    )

    required_fields: Tuple[str, ...] = Field(
        default=(),
        description="Metadata fields that must exist, in declaration order"
    )

    conditions: Tuple[Condition, ...] = Field(
        default=(),
        description="Predicates that must hold"
    )

    allowed_roles: Tuple[Role, ...] = Field(
        min_length=1,
        description="Roles permitted to execute the transition"
    )

    @model_validator(mode='after')
    def validate_edge(self):
        """Edges only move forward; the wildcard only targets closure"""
        if self.from_phase is None:
            if self.to_phase is not TERMINAL_PHASE:
                raise ValueError(
                    f"Wildcard transition must target {TERMINAL_PHASE.value}, got {self.to_phase.value}"
                )
        elif not self.from_phase.precedes(self.to_phase):
            raise ValueError(
                f"Invalid edge {self.from_phase.value} → {self.to_phase.value}: phases must progress forward"
            )
        if len(set(self.required_fields)) != len(self.required_fields):
            raise ValueError(f"Duplicate required fields in {self.label}")
        return self

    @property
    def is_wildcard(self) -> bool:
        return self.from_phase is None

    @property
    def label(self) -> str:
        source = self.from_phase.value if self.from_phase else "ANY"
        return f"{source} → {self.to_phase.value}"

    def applies_from(self, phase: Phase) -> bool:
        """Check if this rule can fire from `phase`"""
        if self.is_wildcard:
            return not phase.is_terminal
        return self.from_phase is phase

    def allows(self, role: Role) -> bool:
        return role in self.allowed_roles


# ============================================================
# Case-Type Rules
# ============================================================

class FeeStructure(str, Enum):
    """Billing arrangements a case type may use"""

    HOURLY = "HOURLY"
    FLAT = "FLAT"
    CONTINGENCY = "CONTINGENCY"
    RETAINER = "RETAINER"


class PhaseRule(BaseModel):
    """Case-type additions applied to transitions into `phase`"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: Phase
    additional_required_fields: Tuple[str, ...] = ()
    conditions: Tuple[Condition, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.additional_required_fields and not self.conditions


class DocumentRequirement(BaseModel):
    """Document type expected to be attached by `phase`"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    document_type: str = Field(min_length=1)
    phase: Phase
    required: bool = True


class TimelineConstraint(BaseModel):
    """Maximum days a case should spend in `phase` before a warning"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: Phase
    max_duration_days: int = Field(gt=0)


class Advisory(BaseModel):
    """
    Non-blocking recommendation attached to a move into `to_phase`.

    Restricted to moves from `from_phase` when given; suppressed when
    `unless_field` holds a truthy value (an explicit `False` does not suppress).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    to_phase: Phase
    message: str = Field(min_length=1)
    from_phase: Optional[Phase] = None
    unless_field: Optional[str] = None

    def applies_to(self, from_phase: Phase, to_phase: Phase) -> bool:
        if self.to_phase is not to_phase:
            return False
        return self.from_phase is None or self.from_phase is from_phase


class IntakeWarning(BaseModel):
    """Warning raised at case opening when `field` is missing or falsy"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    field: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ApprovalRule(BaseModel):
    """Roles that may move a case into `phase` without a separate approval"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: Phase
    approver_roles: Tuple[Role, ...] = Field(min_length=1)


class CaseTypeRule(BaseModel):
    """
    Declarative rule set for one case type.

    `required_fields` apply to every phase; `phase_rules` add fields and
    conditions for transitions into a specific phase. The
    INTAKE_RISK_ASSESSMENT phase rule holds the case-opening requirements.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    case_type: CaseType
    required_fields: Tuple[str, ...] = ()
    prohibited_fields: Tuple[str, ...] = ()
    phase_rules: Tuple[PhaseRule, ...] = ()
    document_requirements: Tuple[DocumentRequirement, ...] = ()
    timeline_constraints: Tuple[TimelineConstraint, ...] = ()
    fee_structures: Tuple[FeeStructure, ...] = ()
    advisories: Tuple[Advisory, ...] = ()
    intake_warnings: Tuple[IntakeWarning, ...] = ()
    approvals: Tuple[ApprovalRule, ...] = ()

    @model_validator(mode='after')
    def validate_consistency(self):
        """One entry per phase; a field cannot be both required and prohibited"""
        for name, entries in [
            ("phase rule", self.phase_rules),
            ("timeline constraint", self.timeline_constraints),
            ("approval rule", self.approvals),
        ]:
            phases = [entry.phase for entry in entries]
            duplicates = {p.value for p in phases if phases.count(p) > 1}
            if duplicates:
                raise ValueError(
                    f"{self.case_type.value}: duplicate {name} for {', '.join(sorted(duplicates))}"
                )

        required = set(self.required_fields)
        for rule in self.phase_rules:
            required.update(rule.additional_required_fields)
        clash = required.intersection(self.prohibited_fields)
        if clash:
            raise ValueError(
                f"{self.case_type.value}: fields both required and prohibited: {', '.join(sorted(clash))}"
            )
        return self

    def phase_rule(self, phase: Phase) -> Optional[PhaseRule]:
        for rule in self.phase_rules:
            if rule.phase is phase:
                return rule
        return None


# ============================================================
# Phase Policies (status changes and phase completion)
# ============================================================

class StatusRule(BaseModel):
    """
    Whether a case in `phase` may change status between the listed values.

    A matching rule with `allowed=False` rejects the change with `reason`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_statuses: Tuple[CaseStatus, ...] = Field(min_length=1)
    to_statuses: Tuple[CaseStatus, ...] = Field(min_length=1)
    allowed: bool = True
    reason: Optional[str] = None

    def matches(self, from_status: CaseStatus, to_status: CaseStatus) -> bool:
        return from_status in self.from_statuses and to_status in self.to_statuses


class CompletionCheck(BaseModel):
    """Flag that must be truthy before a phase is complete; a warning when not blocking"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    field: str = Field(min_length=1)
    message: str = Field(min_length=1)
    blocking: bool = True


class CaseTypeCompletionRequirement(BaseModel):
    """Fields a case type must record before completing a phase"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    case_type: CaseType
    required_fields: Tuple[str, ...] = Field(min_length=1)
    message: str = Field(min_length=1)


class PhasePolicy(BaseModel):
    """Completion requirements and permitted status changes for one phase"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: Phase
    completion_fields: Tuple[str, ...] = ()
    case_type_requirements: Tuple[CaseTypeCompletionRequirement, ...] = ()
    completion_checks: Tuple[CompletionCheck, ...] = ()
    status_rules: Tuple[StatusRule, ...] = ()

    @model_validator(mode='after')
    def validate_case_types(self):
        case_types = [req.case_type for req in self.case_type_requirements]
        duplicates = {c.value for c in case_types if case_types.count(c) > 1}
        if duplicates:
            raise ValueError(
                f"{self.phase.value}: duplicate completion requirement for {', '.join(sorted(duplicates))}"
            )
        return self

    def requirement_for(self, case_type: CaseType) -> Optional[CaseTypeCompletionRequirement]:
        for requirement in self.case_type_requirements:
            if requirement.case_type is case_type:
                return requirement
        return None


class RuleSet(BaseModel):
    """Serializable bundle of a transition table, its case-type rules and phase policies"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transitions: Tuple[TransitionRule, ...]
    case_type_rules: Tuple[CaseTypeRule, ...]
    phase_policies: Tuple[PhasePolicy, ...] = ()
