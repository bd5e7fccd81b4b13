"""Exceptions raised by the lifecycle engine.

Business-rule failures are never raised; they are reported in
`ValidationResult.errors`. These exceptions cover configuration problems
(found while building rule tables) and registry gaps.
"""


class LifecycleError(Exception):
    """Base class for lifecycle engine errors."""


class RuleConfigurationError(LifecycleError, ValueError):
    """Raised when rule data is malformed or structurally inconsistent."""


class UnknownCaseTypeError(LifecycleError, KeyError):
    """Raised when no rule set is registered for a case type."""

    def __init__(self, case_type):
        self.case_type = case_type
        super().__init__(case_type)

    def __str__(self) -> str:
        value = getattr(self.case_type, "value", self.case_type)
        return f"No validation rules found for case type: {value}"
