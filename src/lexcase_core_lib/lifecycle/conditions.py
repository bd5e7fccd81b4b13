"""Condition evaluation against case metadata.

Pure functions over a metadata mapping. Condition shapes are validated when
the rule models are built, so evaluation never raises.
"""

from typing import Any, Iterable, List, Mapping, Optional

from lexcase_core_lib.models.rules import Condition, ConditionOperator


def field_exists(metadata: Mapping[str, Any], field: str) -> bool:
    """A field exists when present and not None / empty string"""
    value = metadata.get(field)
    return value is not None and value != ""


def flag_set(metadata: Mapping[str, Any], field: str) -> bool:
    """A flag is set when its value is truthy; an explicit False or 0 is unset"""
    return bool(metadata.get(field))


def missing_fields(metadata: Mapping[str, Any], fields: Iterable[str]) -> List[str]:
    """Fields that do not exist, in the order given"""
    return [f for f in fields if not field_exists(metadata, f)]


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that keeps booleans apart from numbers (True != 1)"""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


class ConditionEvaluator:
    """Evaluates structured `Condition`s.

    Usage:
        evaluator = ConditionEvaluator()
        evaluator.evaluate(condition, {"riskAssessmentCompleted": True})
        error = evaluator.check(condition, metadata)  # None when satisfied
    """

    def evaluate(self, condition: Condition, metadata: Mapping[str, Any]) -> bool:
        """Evaluate the predicate part of a condition (the guard, for conditional requirements)."""
        value = metadata.get(condition.field)
        operator = condition.operator

        if operator is ConditionOperator.EQUALS:
            return strict_equals(value, condition.value)
        if operator is ConditionOperator.NOT_EQUALS:
            return not strict_equals(value, condition.value)
        if operator is ConditionOperator.EXISTS:
            return field_exists(metadata, condition.field)
        if operator is ConditionOperator.NOT_EXISTS:
            return not field_exists(metadata, condition.field)
        return False

    def is_satisfied(self, condition: Condition, metadata: Mapping[str, Any]) -> bool:
        """Full check: plain predicates must hold; conditional requirements must not be violated."""
        return self.check(condition, metadata) is None

    def check(self, condition: Condition, metadata: Mapping[str, Any]) -> Optional[str]:
        """Evaluate a condition and return its error message, or None if satisfied.

        Args:
            condition: Condition to evaluate
            metadata: Case metadata snapshot

        Returns:
            "Condition failed: ..." for a failed plain predicate,
            "Conditional requirement not met: ..." when a guard holds but the
            required field is missing, otherwise None
        """
        guard = self.evaluate(condition, metadata)

        if condition.is_conditional_requirement:
            if guard and not field_exists(metadata, condition.requires_field):
                return f"Conditional requirement not met: {condition.describe()}"
            return None

        if not guard:
            return f"Condition failed: {condition.render()}"
        return None

    def check_all(self, conditions: Iterable[Condition], metadata: Mapping[str, Any]) -> List[str]:
        """Error messages for every failing condition, in order"""
        errors = []
        for condition in conditions:
            error = self.check(condition, metadata)
            if error is not None:
                errors.append(error)
        return errors
