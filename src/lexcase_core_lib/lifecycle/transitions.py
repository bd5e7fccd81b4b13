"""Phase transition table.

Registry of legal (from → to) edges plus the single wildcard rule that lets
any open phase jump straight to closure (case rejected). Built once from
static configuration and read-only afterwards.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from lexcase_core_lib.lifecycle.conditions import ConditionEvaluator
from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError
from lexcase_core_lib.models.case import PHASE_ORDER, Phase
from lexcase_core_lib.models.rules import TransitionRule

logger = logging.getLogger(__name__)


class PhaseTransitionTable:
    """Lookup structure for transition rules.

    Lookup order for a request `from → to` (see `lookup`):
    1. Terminal, same-phase and backward requests never match.
    2. The wildcard rule wins when its conditions hold.
    3. Otherwise the exact edge.
    4. A request into closure with no exact edge falls back to the wildcard,
       so its unmet conditions are reported instead of "invalid transition".

    Example:
        ```python
        table = PhaseTransitionTable(builtin_rule_set().transitions)
        rule = table.lookup(Phase.INTAKE_RISK_ASSESSMENT,
                            Phase.PRE_PROCEEDING_PREPARATION)
        ```
    """

    def __init__(
        self,
        rules: Iterable[TransitionRule],
        evaluator: Optional[ConditionEvaluator] = None,
    ):
        """Build the table.

        Args:
            rules: Transition rules in declaration order
            evaluator: Condition evaluator for the wildcard check

        Raises:
            RuleConfigurationError: On duplicate edges, more than one wildcard
                rule, or an open phase without an outgoing edge
        """
        self.evaluator = evaluator or ConditionEvaluator()
        self._rules: Tuple[TransitionRule, ...] = tuple(rules)
        self._edges: Dict[Tuple[Phase, Phase], TransitionRule] = {}
        self.wildcard: Optional[TransitionRule] = None

        for rule in self._rules:
            if rule.is_wildcard:
                if self.wildcard is not None:
                    raise RuleConfigurationError("More than one wildcard transition rule defined")
                self.wildcard = rule
                continue

            key = (rule.from_phase, rule.to_phase)
            if key in self._edges:
                raise RuleConfigurationError(f"Duplicate transition rule: {rule.label}")
            self._edges[key] = rule

        for phase in PHASE_ORDER:
            if phase.is_terminal:
                continue
            if not any(source is phase for source, _ in self._edges):
                raise RuleConfigurationError(
                    f"Phase {phase.value} has no outgoing transition"
                )

        logger.info(
            f"PhaseTransitionTable initialized: edges={len(self._edges)}, "
            f"wildcard={'yes' if self.wildcard else 'no'}"
        )

    def lookup(
        self,
        from_phase: Phase,
        to_phase: Phase,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Optional[TransitionRule]:
        """Resolve the rule governing `from_phase → to_phase`.

        Args:
            from_phase: Current phase
            to_phase: Requested phase
            metadata: Case metadata, used only for the wildcard check

        Returns:
            Matching rule, or None for an invalid transition
        """
        if from_phase.is_terminal or not from_phase.precedes(to_phase):
            return None

        if self.wildcard is not None and self.wildcard.to_phase is to_phase:
            if self.wildcard_matches(metadata or {}):
                return self.wildcard

        rule = self._edges.get((from_phase, to_phase))
        if rule is not None:
            return rule

        if self.wildcard is not None and self.wildcard.to_phase is to_phase:
            return self.wildcard
        return None

    def wildcard_matches(self, metadata: Mapping[str, Any]) -> bool:
        """Check if the wildcard rule's conditions hold"""
        if self.wildcard is None:
            return False
        return all(
            self.evaluator.is_satisfied(condition, metadata)
            for condition in self.wildcard.conditions
        )

    def list_outgoing(self, from_phase: Phase) -> List[TransitionRule]:
        """All rules that can fire from `from_phase`.

        Exact edges in declaration order, then the wildcard rule if the phase
        is open. Empty for the terminal phase.
        """
        rules = [rule for rule in self._rules if not rule.is_wildcard and rule.from_phase is from_phase]
        if self.wildcard is not None and self.wildcard.applies_from(from_phase):
            rules.append(self.wildcard)
        return rules

    def list_incoming(self, to_phase: Phase) -> List[TransitionRule]:
        """Exact (non-wildcard) edges into `to_phase`, in declaration order"""
        return [rule for rule in self._rules if not rule.is_wildcard and rule.to_phase is to_phase]

    def forward_rule(self, from_phase: Phase) -> Optional[TransitionRule]:
        """The edge to the next phase in canonical order, if declared"""
        next_phase = from_phase.next_phase
        if next_phase is None:
            return None
        return self._edges.get((from_phase, next_phase))

    def all_rules(self) -> List[TransitionRule]:
        """Full table dump in declaration order"""
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
