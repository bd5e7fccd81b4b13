"""Case-type rule registry.

Declarative per-case-type rules keyed by case type, with phase-level
entries keyed by `(case_type, phase)`. Adding a case type is a data change:
register another `CaseTypeRule`.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError, UnknownCaseTypeError
from lexcase_core_lib.models.case import CaseType, Phase, Role
from lexcase_core_lib.models.rules import (
    Advisory,
    CaseTypeRule,
    Condition,
    DocumentRequirement,
    FeeStructure,
    PhaseRule,
    TimelineConstraint,
)

logger = logging.getLogger(__name__)


def merge_fields(*groups: Iterable[str]) -> List[str]:
    """Ordered union: first occurrence wins, declaration order preserved"""
    merged: List[str] = []
    seen = set()
    for group in groups:
        for field in group:
            if field not in seen:
                seen.add(field)
                merged.append(field)
    return merged


class CaseTypeRuleRegistry:
    """Read-only registry of `CaseTypeRule`s.

    Example:
        ```python
        registry = CaseTypeRuleRegistry(builtin_rule_set().case_type_rules)
        registry.requirements_for(CaseType.CRIMINAL_DEFENSE,
                                  Phase.PRE_PROCEEDING_PREPARATION)
        # ['bailHearingScheduled', 'evidenceSecured', 'witnessStatements']
        ```
    """

    def __init__(self, rules: Iterable[CaseTypeRule]):
        """Build the registry.

        Args:
            rules: One rule set per case type

        Raises:
            RuleConfigurationError: If a case type is registered twice
        """
        self._rules: Dict[CaseType, CaseTypeRule] = {}
        self._phase_rules: Dict[Tuple[CaseType, Phase], PhaseRule] = {}

        for rule in rules:
            if rule.case_type in self._rules:
                raise RuleConfigurationError(
                    f"Duplicate case type rules: {rule.case_type.value}"
                )
            self._rules[rule.case_type] = rule
            for phase_rule in rule.phase_rules:
                self._phase_rules[(rule.case_type, phase_rule.phase)] = phase_rule

        missing = [t.value for t in CaseType if t not in self._rules]
        if missing:
            logger.warning(f"No case type rules registered for: {', '.join(missing)}")

        logger.info(
            f"CaseTypeRuleRegistry initialized: case_types={len(self._rules)}, "
            f"phase_rules={len(self._phase_rules)}"
        )

    def rules_for(self, case_type: CaseType) -> CaseTypeRule:
        """Get the rule set for a case type.

        Raises:
            UnknownCaseTypeError: If no rules are registered for `case_type`
        """
        try:
            return self._rules[case_type]
        except KeyError:
            raise UnknownCaseTypeError(case_type) from None

    def has_rules(self, case_type: CaseType) -> bool:
        """Whether `case_type` is registered; never raises"""
        return case_type in self._rules

    def case_types(self) -> List[CaseType]:
        """Registered case types in registration order"""
        return list(self._rules)

    def phase_rule_for(self, case_type: CaseType, phase: Phase) -> Optional[PhaseRule]:
        """Case-type additions for transitions into `phase`, or None when there are none.

        Raises:
            UnknownCaseTypeError: If `case_type` is not registered
        """
        self.rules_for(case_type)
        return self._phase_rules.get((case_type, phase))

    def requirements_for(self, case_type: CaseType, phase: Phase) -> List[str]:
        """Required fields for moving a case of `case_type` into `phase`.

        Returns:
            Case-type required fields followed by the phase additions, in
            declaration order, without duplicates
        """
        rule = self.rules_for(case_type)
        phase_rule = self._phase_rules.get((case_type, phase))
        additions = phase_rule.additional_required_fields if phase_rule else ()
        return merge_fields(rule.required_fields, additions)

    def conditions_for(self, case_type: CaseType, phase: Phase) -> List[Condition]:
        """Case-type conditions checked on transitions into `phase`, in declaration order"""
        phase_rule = self.phase_rule_for(case_type, phase)
        return list(phase_rule.conditions) if phase_rule else []

    def prohibited_fields_for(self, case_type: CaseType) -> List[str]:
        return list(self.rules_for(case_type).prohibited_fields)

    def document_requirements_for(self, case_type: CaseType, phase: Phase) -> List[DocumentRequirement]:
        return [
            requirement
            for requirement in self.rules_for(case_type).document_requirements
            if requirement.phase is phase
        ]

    def timeline_constraint_for(self, case_type: CaseType, phase: Phase) -> Optional[TimelineConstraint]:
        for constraint in self.rules_for(case_type).timeline_constraints:
            if constraint.phase is phase:
                return constraint
        return None

    def fee_structures_for(self, case_type: CaseType) -> List[FeeStructure]:
        return list(self.rules_for(case_type).fee_structures)

    def advisories_for(self, case_type: CaseType, from_phase: Phase, to_phase: Phase) -> List[Advisory]:
        return [
            advisory
            for advisory in self.rules_for(case_type).advisories
            if advisory.applies_to(from_phase, to_phase)
        ]

    def approval_roles_for(self, case_type: CaseType, phase: Phase) -> List[Role]:
        """Roles that may enter `phase` without approval; empty when no approval policy applies"""
        for approval in self.rules_for(case_type).approvals:
            if approval.phase is phase:
                return list(approval.approver_roles)
        return []
