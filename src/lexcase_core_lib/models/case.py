"""Case data models - Phase-based legal case lifecycle.

This module defines the case-side data structures consumed by the lifecycle
transition engine.

Key Models:
- Phase: Lifecycle stage (INTAKE → PREPARATION → PROCEEDINGS → RESOLUTION → CLOSURE)
- CaseType: Legal matter category, selects the per-type rule set
- Role: Actor role requesting a transition
- CaseStatus: Administrative status carried alongside the phase
- CaseState: Caller-supplied snapshot of a case (phase, status, type, metadata)
- ValidationResult: Aggregated outcome of a transition request

Architecture:
- Phase-based progress, strictly forward
- One early-exit path from any open phase into closure
- Snapshot-in, decision-out (no repository access from the engine)
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


# ============================================================
# Lifecycle Enumerations
# ============================================================

class Phase(str, Enum):
    """
    Case lifecycle phase.

    Lifecycle Flow:
      INTAKE_RISK_ASSESSMENT → PRE_PROCEEDING_PREPARATION → FORMAL_PROCEEDINGS
        → RESOLUTION_POST_PROCEEDING → CLOSURE_REVIEW_ARCHIVING (terminal)

      any open phase ↘ CLOSURE_REVIEW_ARCHIVING (rejection / settlement / dismissal)

    Terminal State: CLOSURE_REVIEW_ARCHIVING (no further transitions)
    """

    INTAKE_RISK_ASSESSMENT = "INTAKE_RISK_ASSESSMENT"
    """
    Client intake, conflict check and risk assessment.

    Case-opening fields for the case type are collected here.
    """

    PRE_PROCEEDING_PREPARATION = "PRE_PROCEEDING_PREPARATION"
    """
    Legal research, document and witness preparation.
    """

    FORMAL_PROCEEDINGS = "FORMAL_PROCEEDINGS"
    """
    Court, arbitration or agency proceedings.
    """

    RESOLUTION_POST_PROCEEDING = "RESOLUTION_POST_PROCEEDING"
    """
    Judgment, settlement, appeal window.
    """

    CLOSURE_REVIEW_ARCHIVING = "CLOSURE_REVIEW_ARCHIVING"
    """
    TERMINAL STATE: Case closed, reviewed and archived.

    State: Terminal (permanent)
    """

    @property
    def is_terminal(self) -> bool:
        """Check if this phase is terminal"""
        return self is Phase.CLOSURE_REVIEW_ARCHIVING

    @property
    def order(self) -> int:
        """Position in the canonical phase order (0-based)"""
        return PHASE_ORDER.index(self)

    @property
    def next_phase(self) -> Optional['Phase']:
        """Following phase in canonical order, None for the terminal phase"""
        if self.is_terminal:
            return None
        return PHASE_ORDER[self.order + 1]

    def precedes(self, other: 'Phase') -> bool:
        """Check if this phase comes strictly before `other`"""
        return self.order < other.order


PHASE_ORDER: List[Phase] = [
    Phase.INTAKE_RISK_ASSESSMENT,
    Phase.PRE_PROCEEDING_PREPARATION,
    Phase.FORMAL_PROCEEDINGS,
    Phase.RESOLUTION_POST_PROCEEDING,
    Phase.CLOSURE_REVIEW_ARCHIVING,
]

TERMINAL_PHASE = Phase.CLOSURE_REVIEW_ARCHIVING


class CaseType(str, Enum):
    """Legal matter category. Drives which case-type rules apply."""

    LABOR_DISPUTE = "LABOR_DISPUTE"
    MEDICAL_MALPRACTICE = "MEDICAL_MALPRACTICE"
    CRIMINAL_DEFENSE = "CRIMINAL_DEFENSE"
    DIVORCE_FAMILY = "DIVORCE_FAMILY"
    INHERITANCE_DISPUTE = "INHERITANCE_DISPUTE"
    CONTRACT_DISPUTE = "CONTRACT_DISPUTE"
    ADMINISTRATIVE_CASE = "ADMINISTRATIVE_CASE"
    DEMOLITION_CASE = "DEMOLITION_CASE"
    SPECIAL_MATTERS = "SPECIAL_MATTERS"


class Role(str, Enum):
    """Role of the actor requesting a transition"""

    ADMIN = "ADMIN"
    ATTORNEY = "ATTORNEY"
    PARALEGAL = "PARALEGAL"
    ASSISTANT = "ASSISTANT"
    CLIENT = "CLIENT"
    ARCHIVIST = "ARCHIVIST"


class CaseStatus(str, Enum):
    """
    Administrative case status.

    Tracked alongside the phase by the case service. Phase transitions do not
    gate on it; status changes are checked per phase by
    `TransitionValidator.validate_status_transition`.
    """

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_open(self) -> bool:
        """Check if case is still being worked on"""
        return self in [CaseStatus.DRAFT, CaseStatus.ACTIVE, CaseStatus.ON_HOLD]


# ============================================================
# Snapshot & Result Models
# ============================================================

class CaseState(BaseModel):
    """
    Snapshot of a case as seen by the transition engine.

    Built by the case service from the stored record. `metadata` merges case
    fields, uploaded-document descriptors (`documents`: list of `{"type": ...}`)
    and the phase start timestamp (`phaseStartDate`).
    """

    phase: Phase = Field(
        description="Current lifecycle phase"
    )

    status: CaseStatus = Field(
        default=CaseStatus.ACTIVE,
        description="Administrative status"
    )

    case_type: CaseType = Field(
        description="Legal matter category"
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Field presence/value snapshot; never written by the engine"
    )

    @field_validator('metadata', mode='before')
    @classmethod
    def copy_metadata(cls, v):
        """Detach from the caller's dict"""
        if v is None:
            return {}
        return dict(v)

    @property
    def is_closed(self) -> bool:
        """Check if case has reached the terminal phase"""
        return self.phase.is_terminal


class ValidationResult(BaseModel):
    """
    Outcome of a transition (or intake) validation.

    Only `errors` affect validity. `warnings` and `recommendations` are
    advisory and never block a transition. `is_valid` is derived from
    `errors`; a serialized `is_valid` value is ignored on input.
    """

    errors: List[str] = Field(
        default_factory=list,
        description="Blocking business-rule failures"
    )

    warnings: List[str] = Field(
        default_factory=list,
        description="Advisory issues: timeline overrun, missing documents"
    )

    recommendations: List[str] = Field(
        default_factory=list,
        description="Case-type hints for the next phase"
    )

    @computed_field
    @property
    def is_valid(self) -> bool:
        """True when no errors were recorded"""
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_recommendation(self, message: str) -> None:
        self.recommendations.append(message)
