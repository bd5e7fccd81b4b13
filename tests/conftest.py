"""Shared fixtures for the lifecycle engine tests."""

from datetime import datetime, timezone

import pytest

from lexcase_core_lib.lifecycle import TransitionValidator, builtin_rule_set, reset_transition_validator
from lexcase_core_lib.models import CaseState, CaseType, Phase

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

GENERIC_INTAKE_FIELDS = {
    "clientInformation": "Jane Doe",
    "caseDescription": "Unpaid overtime",
    "initialEvidence": "Timesheets",
}


@pytest.fixture
def fixed_clock():
    """Clock pinned to NOW"""
    return lambda: NOW


@pytest.fixture
def rule_set():
    return builtin_rule_set()


@pytest.fixture
def validator(rule_set, fixed_clock):
    """Validator over the built-in rules with a fixed clock"""
    return TransitionValidator.from_rule_set(rule_set, clock=fixed_clock)


@pytest.fixture
def make_state():
    """Factory for CaseState snapshots."""

    def _make(phase=Phase.INTAKE_RISK_ASSESSMENT, case_type=CaseType.CONTRACT_DISPUTE, **metadata):
        return CaseState(phase=phase, case_type=case_type, metadata=metadata)

    return _make


@pytest.fixture
def ready_intake_metadata():
    """Metadata satisfying the generic INTAKE → PREPARATION edge"""
    return dict(GENERIC_INTAKE_FIELDS, riskAssessmentCompleted=True)


@pytest.fixture(autouse=True)
def clean_validator_singleton():
    """Reset the global validator around each test"""
    reset_transition_validator()
    yield
    reset_transition_validator()
