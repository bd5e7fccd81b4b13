"""Transition validation orchestrator.

Composes the transition table, the case-type registry and the condition
evaluator into a single decision function. Validation is pure: it reads a
caller-owned snapshot and returns a `ValidationResult`; committing the
transition and writing history belong to the caller.

Checks (all run; only table lookup short-circuits):
1. Table lookup             → "Invalid transition from X to Y"
2. Role                     → "Insufficient permissions for transition"
3. Required fields          → "Missing required fields: a, b, c"
4. Conditions               → "Condition failed: ..." / "Conditional requirement not met: ..."
5. Source-phase timeline    → warning
6. Target-phase documents   → warning
7. Case-type advisories     → recommendations

Phase policies separately govern status changes within a phase
(`validate_status_transition`) and the exit criteria of a phase
(`validate_phase_completion`).
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from lexcase_core_lib.lifecycle.conditions import ConditionEvaluator, field_exists, flag_set, missing_fields
from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError, UnknownCaseTypeError
from lexcase_core_lib.lifecycle.registry import CaseTypeRuleRegistry, merge_fields
from lexcase_core_lib.lifecycle.transitions import PhaseTransitionTable
from lexcase_core_lib.models.case import (
    PHASE_ORDER,
    CaseState,
    CaseStatus,
    CaseType,
    Phase,
    Role,
    ValidationResult,
)
from lexcase_core_lib.models.common import coerce_utc_datetime, utc_now
from lexcase_core_lib.models.rules import CaseTypeRule, PhasePolicy, RuleSet, TransitionRule

logger = logging.getLogger(__name__)

PHASE_START_FIELD = "phaseStartDate"
DOCUMENTS_FIELD = "documents"

SECONDS_PER_DAY = 24 * 60 * 60


class TransitionValidator:
    """Decides whether a case may move between lifecycle phases.

    Safe to share between concurrent requests: the table and registry are
    read-only and no state is kept between calls.

    Usage:
        ```python
        validator = TransitionValidator.from_rule_set(builtin_rule_set())
        result = validator.validate(state, Phase.PRE_PROCEEDING_PREPARATION, Role.ATTORNEY)
        if not result.is_valid:
            return 400, result.errors
        ```
    """

    def __init__(
        self,
        table: PhaseTransitionTable,
        registry: CaseTypeRuleRegistry,
        evaluator: Optional[ConditionEvaluator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        phase_policies: Iterable[PhasePolicy] = (),
    ):
        """Initialize validator.

        Args:
            table: Phase transition table
            registry: Case-type rule registry
            evaluator: Condition evaluator (default: shared with the table)
            clock: Returns the current datetime; naive values are taken as UTC (default: UTC now)
            phase_policies: Status and completion policies, at most one per phase

        Raises:
            RuleConfigurationError: If a phase has more than one policy
        """
        self.table = table
        self.registry = registry
        self.evaluator = evaluator or table.evaluator
        self.clock = clock or utc_now

        self._policies: Dict[Phase, PhasePolicy] = {}
        for policy in phase_policies:
            if policy.phase in self._policies:
                raise RuleConfigurationError(f"Duplicate phase policy for {policy.phase.value}")
            self._policies[policy.phase] = policy

    @classmethod
    def from_rule_set(
        cls,
        rule_set: RuleSet,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> 'TransitionValidator':
        """Build table and registry from a rule set.

        Raises:
            RuleConfigurationError: If the rule set is structurally inconsistent
        """
        evaluator = ConditionEvaluator()
        table = PhaseTransitionTable(rule_set.transitions, evaluator=evaluator)
        registry = CaseTypeRuleRegistry(rule_set.case_type_rules)
        return cls(
            table, registry, evaluator=evaluator, clock=clock, phase_policies=rule_set.phase_policies
        )

    # ============================================================
    # Transition Validation
    # ============================================================

    def validate(
        self,
        current_state: CaseState,
        target_phase: Phase,
        role: Role,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> ValidationResult:
        """Validate a phase transition request.

        Args:
            current_state: Snapshot of the case
            target_phase: Requested phase
            role: Role of the requesting actor
            metadata: Overrides `current_state.metadata` when given

        Returns:
            ValidationResult; `is_valid` is False for any business-rule failure
        """
        metadata = dict(current_state.metadata if metadata is None else metadata)
        from_phase = current_state.phase
        result = ValidationResult()

        rule = self.table.lookup(from_phase, target_phase, metadata)
        if rule is None:
            result.add_error(f"Invalid transition from {from_phase.value} to {target_phase.value}")
            logger.debug(f"Rejected {from_phase.value} → {target_phase.value}: no matching rule")
            return result

        if not rule.allows(role):
            result.add_error("Insufficient permissions for transition")

        case_rule = self._case_rule(current_state.case_type, result)

        required_fields = list(rule.required_fields)
        conditions = list(rule.conditions)
        # The wildcard (rejection) path carries only its own conditions
        if case_rule is not None and not rule.is_wildcard:
            required_fields = merge_fields(
                required_fields,
                self.registry.requirements_for(case_rule.case_type, target_phase),
            )
            conditions.extend(self.registry.conditions_for(case_rule.case_type, target_phase))

        missing = missing_fields(metadata, required_fields)
        if missing:
            result.add_error(f"Missing required fields: {', '.join(missing)}")

        for error in self.evaluator.check_all(conditions, metadata):
            result.add_error(error)

        if case_rule is not None:
            self._check_timeline(case_rule, from_phase, metadata, result)
            self._check_documents(case_rule, target_phase, metadata, result)
            self._add_advisories(case_rule, from_phase, target_phase, metadata, result)

        if not result.is_valid:
            logger.debug(
                f"Rejected {from_phase.value} → {target_phase.value} "
                f"for {current_state.case_type.value}: {len(result.errors)} error(s)"
            )
        return result

    def validate_intake(self, case_type: CaseType, metadata: Mapping[str, Any]) -> ValidationResult:
        """Validate the fields collected when a case is opened.

        Checks the case type's intake requirements, prohibited fields and
        intake conditional requirements; intake warnings are advisory.
        """
        metadata = dict(metadata or {})
        result = ValidationResult()

        case_rule = self._case_rule(case_type, result)
        if case_rule is None:
            return result

        intake = Phase.INTAKE_RISK_ASSESSMENT
        missing = missing_fields(metadata, self.registry.requirements_for(case_type, intake))
        if missing:
            result.add_error(f"Missing required fields for intake: {', '.join(missing)}")

        prohibited = [f for f in case_rule.prohibited_fields if field_exists(metadata, f)]
        if prohibited:
            result.add_error(f"Prohibited fields present: {', '.join(prohibited)}")

        for error in self.evaluator.check_all(self.registry.conditions_for(case_type, intake), metadata):
            result.add_error(error)

        for warning in case_rule.intake_warnings:
            if not flag_set(metadata, warning.field):
                result.add_warning(warning.message)

        return result

    def requires_approval(self, current_state: CaseState, target_phase: Phase, role: Role) -> bool:
        """Check if the move needs sign-off from another role.

        True when the case type names approver roles for `target_phase` and
        `role` is not one of them. Unknown case types never require approval.
        """
        try:
            approvers = self.registry.approval_roles_for(current_state.case_type, target_phase)
        except UnknownCaseTypeError:
            return False
        return bool(approvers) and role not in approvers

    # ============================================================
    # Phase Policies
    # ============================================================

    def validate_status_transition(
        self,
        phase: Phase,
        from_status: CaseStatus,
        to_status: CaseStatus,
    ) -> ValidationResult:
        """Validate a status change for a case in `phase`.

        Phases without status rules accept any change. Otherwise the first
        rule matching the pair decides; an unmatched pair is rejected.
        """
        result = ValidationResult()
        policy = self._policies.get(phase)
        if policy is None or not policy.status_rules:
            return result

        for rule in policy.status_rules:
            if rule.matches(from_status, to_status):
                if not rule.allowed:
                    result.add_error(
                        rule.reason
                        or f"Status transition from {from_status.value} to {to_status.value} is not allowed"
                    )
                return result

        result.add_error(
            f"Status transition from {from_status.value} to {to_status.value} "
            f"is not defined for phase {phase.value}"
        )
        logger.debug(f"Rejected status {from_status.value} → {to_status.value} in {phase.value}")
        return result

    def validate_phase_completion(
        self,
        current_state: CaseState,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> ValidationResult:
        """Check whether the current phase has met its exit criteria.

        Args:
            current_state: Snapshot of the case
            metadata: Overrides `current_state.metadata` when given

        Returns:
            ValidationResult with an error for missing completion fields, for
            an unmet case-type requirement and for each unset blocking flag;
            unset non-blocking flags become warnings
        """
        metadata = dict(current_state.metadata if metadata is None else metadata)
        phase = current_state.phase
        result = ValidationResult()

        policy = self._policies.get(phase)
        if policy is None:
            result.add_error(f"No validation rules found for phase: {phase.value}")
            return result

        missing = missing_fields(metadata, policy.completion_fields)
        if missing:
            result.add_error(
                f"Cannot complete phase {phase.value}. Missing required fields: {', '.join(missing)}"
            )

        requirement = policy.requirement_for(current_state.case_type)
        if requirement is not None and missing_fields(metadata, requirement.required_fields):
            result.add_error(requirement.message)

        for check in policy.completion_checks:
            if flag_set(metadata, check.field):
                continue
            if check.blocking:
                result.add_error(check.message)
            else:
                result.add_warning(check.message)

        return result

    def phase_policy(self, phase: Phase) -> Optional[PhasePolicy]:
        return self._policies.get(phase)

    # ============================================================
    # Introspection
    # ============================================================

    def available_transitions(self, current_state: CaseState, role: Role) -> List[Phase]:
        """Phases reachable from the current phase that `role` may request.

        Ignores field and condition state; meant for UI affordances, not
        authorization.
        """
        phases: List[Phase] = []
        for rule in self.table.list_outgoing(current_state.phase):
            if rule.allows(role) and rule.to_phase not in phases:
                phases.append(rule.to_phase)
        return phases

    def phase_requirements(self, phase: Phase, case_type: CaseType) -> List[str]:
        """Fields required to enter `phase` for a case of `case_type`.

        Generic fields of the edges into `phase` first, then the case-type
        additions, in declaration order without duplicates.
        """
        generic = merge_fields(*(rule.required_fields for rule in self.table.list_incoming(phase)))
        if not self.registry.has_rules(case_type):
            return generic
        return merge_fields(generic, self.registry.requirements_for(case_type, phase))

    def phase_progress(self, current_state: CaseState) -> int:
        """Percentage of fields satisfied for the forward move out of the current phase.

        Returns:
            0-100; 100 when nothing is required, 0 in the terminal phase
        """
        if current_state.phase.is_terminal:
            return 0
        next_phase = current_state.phase.next_phase
        rule = self.table.forward_rule(current_state.phase)
        generic = rule.required_fields if rule is not None else ()
        required = list(generic)
        if self.registry.has_rules(current_state.case_type):
            required = merge_fields(
                generic, self.registry.requirements_for(current_state.case_type, next_phase)
            )
        if not required:
            return 100
        done = len(required) - len(missing_fields(current_state.metadata, required))
        return round(done * 100 / len(required))

    def case_type_workflow(self, case_type: CaseType) -> List[TransitionRule]:
        """Case-type augmentations expressed as transition rules.

        One rule per non-intake phase the case type augments, describing the
        forward edge into that phase with the case-type fields and conditions
        merged in. Empty for case types without augmentations.
        """
        if not self.registry.has_rules(case_type):
            return []

        workflow = []
        for phase in PHASE_ORDER[1:]:
            phase_rule = self.registry.phase_rule_for(case_type, phase)
            if phase_rule is None or phase_rule.is_empty:
                continue
            previous = PHASE_ORDER[phase.order - 1]
            base = self.table.forward_rule(previous)
            if base is None:
                continue
            workflow.append(
                TransitionRule(
                    from_phase=base.from_phase,
                    to_phase=base.to_phase,
                    required_fields=tuple(
                        merge_fields(base.required_fields, self.registry.requirements_for(case_type, phase))
                    ),
                    conditions=base.conditions + phase_rule.conditions,
                    allowed_roles=base.allowed_roles,
                )
            )
        return workflow

    def all_transitions(self) -> List[TransitionRule]:
        """Full transition table, wildcard included"""
        return self.table.all_rules()

    # ============================================================
    # Internal Checks
    # ============================================================

    def _case_rule(self, case_type: CaseType, result: ValidationResult) -> Optional[CaseTypeRule]:
        try:
            return self.registry.rules_for(case_type)
        except UnknownCaseTypeError as e:
            logger.warning(str(e))
            result.add_error(str(e))
            return None

    def _check_timeline(
        self,
        case_rule: CaseTypeRule,
        from_phase: Phase,
        metadata: Dict[str, Any],
        result: ValidationResult,
    ) -> None:
        """Warn when the case has stayed in the source phase too long"""
        constraint = self.registry.timeline_constraint_for(case_rule.case_type, from_phase)
        raw_start = metadata.get(PHASE_START_FIELD)
        if constraint is None or raw_start is None or raw_start == "":
            return

        started_at = coerce_utc_datetime(raw_start)
        if started_at is None:
            result.add_warning(f"Unable to interpret {PHASE_START_FIELD}: {raw_start!r}")
            return

        now = coerce_utc_datetime(self.clock())
        elapsed_days = int((now - started_at).total_seconds() // SECONDS_PER_DAY)
        if elapsed_days > constraint.max_duration_days:
            result.add_warning(
                f"{from_phase.value} phase has exceeded maximum duration of "
                f"{constraint.max_duration_days} days"
            )

    def _check_documents(
        self,
        case_rule: CaseTypeRule,
        target_phase: Phase,
        metadata: Dict[str, Any],
        result: ValidationResult,
    ) -> None:
        """Warn about required documents not attached for the target phase.

        Skipped when the caller supplied no document list (unknown, not missing).
        """
        documents = metadata.get(DOCUMENTS_FIELD)
        if documents is None:
            return
        if not isinstance(documents, (list, tuple)):
            logger.debug(f"Ignoring non-list {DOCUMENTS_FIELD} metadata: {type(documents).__name__}")
            return

        attached = set()
        for document in documents:
            if isinstance(document, Mapping):
                attached.add(document.get("type"))
            elif isinstance(document, str):
                attached.add(document)

        missing = [
            requirement.document_type
            for requirement in self.registry.document_requirements_for(case_rule.case_type, target_phase)
            if requirement.required and requirement.document_type not in attached
        ]
        if missing:
            result.add_warning(
                f"Missing required documents for {target_phase.value}: {', '.join(missing)}"
            )

    def _add_advisories(
        self,
        case_rule: CaseTypeRule,
        from_phase: Phase,
        target_phase: Phase,
        metadata: Dict[str, Any],
        result: ValidationResult,
    ) -> None:
        for advisory in self.registry.advisories_for(case_rule.case_type, from_phase, target_phase):
            if advisory.unless_field and flag_set(metadata, advisory.unless_field):
                continue
            result.add_recommendation(advisory.message)
