"""Tests for the transition validator."""

from datetime import date, datetime, timezone

import pytest

from lexcase_core_lib.lifecycle import (
    BUILTIN_CASE_TYPE_RULES,
    BUILTIN_PHASE_POLICIES,
    BUILTIN_TRANSITIONS,
    RuleConfigurationError,
    TransitionValidator,
)
from lexcase_core_lib.models import (
    PHASE_ORDER,
    CaseStatus,
    CaseType,
    CaseTypeRule,
    Phase,
    PhasePolicy,
    Role,
    RuleSet,
    StatusRule,
)

from conftest import GENERIC_INTAKE_FIELDS

INTAKE = Phase.INTAKE_RISK_ASSESSMENT
PREPARATION = Phase.PRE_PROCEEDING_PREPARATION
PROCEEDINGS = Phase.FORMAL_PROCEEDINGS
RESOLUTION = Phase.RESOLUTION_POST_PROCEEDING
CLOSURE = Phase.CLOSURE_REVIEW_ARCHIVING


@pytest.fixture
def labor_only_validator(fixed_clock):
    """Validator whose registry only knows labor disputes"""
    rule_set = RuleSet(
        transitions=BUILTIN_TRANSITIONS,
        case_type_rules=(BUILTIN_CASE_TYPE_RULES[CaseType.LABOR_DISPUTE],),
    )
    return TransitionValidator.from_rule_set(rule_set, clock=fixed_clock)


class TestScenarios:
    """Reference scenarios against the built-in rules."""

    def test_contract_dispute_intake_to_preparation(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert result.is_valid
        assert result.errors == []

    def test_missing_generic_fields(self, validator, make_state):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, riskAssessmentCompleted=True)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert not result.is_valid
        assert result.errors == ["Missing required fields: clientInformation, caseDescription, initialEvidence"]

    def test_criminal_defense_case_type_fields(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CRIMINAL_DEFENSE, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert not result.is_valid
        assert result.errors == [
            "Missing required fields: bailHearingScheduled, evidenceSecured, witnessStatements"
        ]

    @pytest.mark.parametrize("target", PHASE_ORDER)
    @pytest.mark.parametrize("role", list(Role))
    def test_terminal_phase_is_final(self, validator, make_state, target, role):
        state = make_state(CLOSURE, caseRejected=True)
        result = validator.validate(state, target, role)
        assert not result.is_valid
        assert result.errors == [f"Invalid transition from CLOSURE_REVIEW_ARCHIVING to {target.value}"]

    def test_rejection_from_intake_with_no_other_metadata(self, validator, make_state):
        state = make_state(INTAKE, caseRejected=True)
        result = validator.validate(state, CLOSURE, Role.ATTORNEY)
        assert result.is_valid


class TestTransitionRules:
    """Table lookup, roles, fields and conditions."""

    def test_all_error_kinds_reported_together(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.CONTRACT_DISPUTE)
        result = validator.validate(state, PROCEEDINGS, Role.CLIENT)
        assert result.errors == [
            "Insufficient permissions for transition",
            "Missing required fields: legalResearch, documentPreparation, witnessPreparation, "
            "contractDocument, breachEvidence, correspondence",
            "Condition failed: preparationCompleted equals true",
            "Condition failed: contractAnalyzed equals true",
            "Condition failed: breachDocumented equals true",
        ]

    @pytest.mark.parametrize("role", [Role.CLIENT, Role.ASSISTANT, Role.PARALEGAL, Role.ARCHIVIST])
    def test_non_legal_roles_lack_permission(self, validator, make_state, ready_intake_metadata, role):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, role)
        assert result.errors == ["Insufficient permissions for transition"]

    @pytest.mark.parametrize("case_type", list(CaseType))
    @pytest.mark.parametrize("phase", PHASE_ORDER[:-1])
    @pytest.mark.parametrize("role", [Role.ADMIN, Role.ATTORNEY])
    def test_rejection_from_every_open_phase(self, validator, make_state, case_type, phase, role):
        state = make_state(phase, case_type, caseRejected=True)
        assert validator.validate(state, CLOSURE, role).is_valid

    def test_rejection_still_checks_role(self, validator, make_state):
        state = make_state(PROCEEDINGS, caseRejected=True)
        result = validator.validate(state, CLOSURE, Role.CLIENT)
        assert result.errors == ["Insufficient permissions for transition"]

    def test_early_close_without_rejection(self, validator, make_state):
        state = make_state(INTAKE, caseRejected=False)
        result = validator.validate(state, CLOSURE, Role.ADMIN)
        assert result.errors == ["Condition failed: caseRejected equals true"]

    def test_rejected_flag_must_be_boolean(self, validator, make_state):
        state = make_state(INTAKE, caseRejected="true")
        assert not validator.validate(state, CLOSURE, Role.ADMIN).is_valid

    def test_settlement_closes_from_preparation(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.DIVORCE_FAMILY, caseSettled=True)
        assert validator.validate(state, CLOSURE, Role.ATTORNEY).is_valid

    @pytest.mark.parametrize(
        "from_phase,to_phase",
        [
            (PREPARATION, INTAKE),
            (RESOLUTION, PROCEEDINGS),
            (PROCEEDINGS, PROCEEDINGS),
            (INTAKE, PROCEEDINGS),
        ],
    )
    def test_backward_same_and_skip_moves_are_invalid(self, validator, make_state, from_phase, to_phase):
        metadata = dict(GENERIC_INTAKE_FIELDS, riskAssessmentCompleted=True, preparationCompleted=True)
        state = make_state(from_phase, **metadata)
        result = validator.validate(state, to_phase, Role.ADMIN)
        assert result.errors == [f"Invalid transition from {from_phase.value} to {to_phase.value}"]

    def test_conditional_requirement_from_case_type(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, international=True, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert result.errors == [
            "Conditional requirement not met: if international equals true, require jurisdictionAnalysis"
        ]

    def test_metadata_argument_overrides_snapshot(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY, metadata=ready_intake_metadata)
        assert result.is_valid

    def test_caller_metadata_not_modified(self, validator, make_state, ready_intake_metadata):
        before = dict(ready_intake_metadata)
        state = make_state(INTAKE, CaseType.CRIMINAL_DEFENSE)
        validator.validate(state, PREPARATION, Role.ATTORNEY, metadata=ready_intake_metadata)
        assert ready_intake_metadata == before

    def test_unknown_case_type_is_distinct_error(self, labor_only_validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, **ready_intake_metadata)
        result = labor_only_validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert result.errors == ["No validation rules found for case type: CONTRACT_DISPUTE"]


class TestTimeline:
    """Source-phase duration warnings."""

    def _validate(self, validator, make_state, ready_intake_metadata, start):
        state = make_state(INTAKE, CaseType.LABOR_DISPUTE, phaseStartDate=start, **ready_intake_metadata)
        return validator.validate(state, PREPARATION, Role.ATTORNEY)

    def test_overrun_warns_without_blocking(self, validator, make_state, ready_intake_metadata):
        result = self._validate(validator, make_state, ready_intake_metadata, "2025-04-01T00:00:00Z")
        assert result.is_valid
        assert result.warnings == ["INTAKE_RISK_ASSESSMENT phase has exceeded maximum duration of 30 days"]

    def test_exact_limit_does_not_warn(self, validator, make_state, ready_intake_metadata):
        result = self._validate(validator, make_state, ready_intake_metadata, "2025-05-02T12:00:00+00:00")
        assert result.warnings == []

    def test_accepts_datetime_and_date(self, validator, make_state, ready_intake_metadata):
        aware = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert self._validate(validator, make_state, ready_intake_metadata, aware).warnings
        assert self._validate(validator, make_state, ready_intake_metadata, date(2025, 1, 1)).warnings

    def test_unparseable_start_is_a_warning(self, validator, make_state, ready_intake_metadata):
        result = self._validate(validator, make_state, ready_intake_metadata, "last tuesday")
        assert result.is_valid
        assert result.warnings == ["Unable to interpret phaseStartDate: 'last tuesday'"]

    def test_no_start_date_no_warning(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.LABOR_DISPUTE, **ready_intake_metadata)
        assert validator.validate(state, PREPARATION, Role.ATTORNEY).warnings == []

    def test_naive_clock_is_taken_as_utc(self, rule_set, make_state, ready_intake_metadata):
        validator = TransitionValidator.from_rule_set(rule_set, clock=lambda: datetime(2025, 6, 1, 12, 0))
        result = self._validate(validator, make_state, ready_intake_metadata, "2025-04-01T00:00:00Z")
        assert result.warnings == ["INTAKE_RISK_ASSESSMENT phase has exceeded maximum duration of 30 days"]


class TestDocuments:
    """Target-phase document warnings."""

    def test_missing_document_warns(self, validator, make_state, ready_intake_metadata):
        state = make_state(
            INTAKE, CaseType.LABOR_DISPUTE, documents=[{"type": "EmploymentContract"}], **ready_intake_metadata
        )
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert result.is_valid
        assert result.warnings == ["Missing required documents for PRE_PROCEEDING_PREPARATION: LaborComplaint"]

    def test_document_names_as_strings(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.LABOR_DISPUTE, documents=["LaborComplaint"], **ready_intake_metadata)
        assert validator.validate(state, PREPARATION, Role.ATTORNEY).warnings == []

    def test_optional_documents_never_warn(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, documents=[], **ready_intake_metadata)
        assert validator.validate(state, PREPARATION, Role.ATTORNEY).warnings == []

    def test_unknown_document_list_is_skipped(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.LABOR_DISPUTE, **ready_intake_metadata)
        assert validator.validate(state, PREPARATION, Role.ATTORNEY).warnings == []


class TestRecommendations:
    def test_medical_malpractice_advice(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.MEDICAL_MALPRACTICE, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, Role.ADMIN)
        assert result.recommendations == [
            "Consider consulting with medical experts early in the preparation phase",
            "Statute of limitations should be verified for medical malpractice case",
        ]

    def test_advice_suppressed_by_field(self, validator, make_state, ready_intake_metadata):
        state = make_state(
            INTAKE, CaseType.MEDICAL_MALPRACTICE, statuteOfLimitationsChecked=True, **ready_intake_metadata
        )
        result = validator.validate(state, PREPARATION, Role.ADMIN)
        assert result.recommendations == [
            "Consider consulting with medical experts early in the preparation phase"
        ]

    def test_advice_limited_to_source_phase(self, validator, make_state, ready_intake_metadata):
        state = make_state(INTAKE, CaseType.CRIMINAL_DEFENSE, **ready_intake_metadata)
        result = validator.validate(state, PREPARATION, Role.ATTORNEY)
        assert result.recommendations == [
            "Consider plea bargain options before proceeding to formal proceedings"
        ]

    def test_divorce_mediation_before_proceedings(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.DIVORCE_FAMILY)
        result = validator.validate(state, PROCEEDINGS, Role.ATTORNEY)
        assert "Mediation should be attempted before formal proceedings" in result.recommendations

    def test_false_flag_does_not_suppress_advice(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.CRIMINAL_DEFENSE, bailPosted=False)
        result = validator.validate(state, PROCEEDINGS, Role.ADMIN)
        assert result.recommendations == ["Bail has not been posted for criminal defense case"]

    def test_true_flag_suppresses_advice(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.CRIMINAL_DEFENSE, bailPosted=True)
        assert validator.validate(state, PROCEEDINGS, Role.ADMIN).recommendations == []

    def test_divorce_custody_advice(self, validator, make_state):
        custody = "Child custody arrangements should be confirmed for divorce cases"
        state = make_state(PREPARATION, CaseType.DIVORCE_FAMILY, minorChildrenInvolved=False)
        assert custody in validator.validate(state, PROCEEDINGS, Role.ATTORNEY).recommendations
        state = make_state(PREPARATION, CaseType.DIVORCE_FAMILY, minorChildrenInvolved=True)
        assert custody not in validator.validate(state, PROCEEDINGS, Role.ATTORNEY).recommendations


class TestValidateIntake:
    LABOR_INTAKE = {
        "employerInformation": "ACME",
        "employeeInformation": "J. Doe",
        "employmentContract": "contract.pdf",
        "disputeDetails": "Unpaid overtime",
        "employmentDates": "2019-2024",
    }

    def test_complete_intake(self, validator):
        assert validator.validate_intake(CaseType.LABOR_DISPUTE, self.LABOR_INTAKE).is_valid

    def test_missing_intake_fields(self, validator):
        result = validator.validate_intake(CaseType.LABOR_DISPUTE, {"employerInformation": "ACME"})
        assert result.errors == [
            "Missing required fields for intake: employeeInformation, employmentContract, "
            "disputeDetails, employmentDates"
        ]

    def test_prohibited_fields(self, validator):
        metadata = dict(self.LABOR_INTAKE, criminalRecord="none", medicalHistory="")
        result = validator.validate_intake(CaseType.LABOR_DISPUTE, metadata)
        assert result.errors == ["Prohibited fields present: criminalRecord"]

    def test_intake_conditional_requirement(self, validator):
        metadata = dict(self.LABOR_INTAKE, unionMember=True)
        result = validator.validate_intake(CaseType.LABOR_DISPUTE, metadata)
        assert result.errors == [
            "Conditional requirement not met: if unionMember equals true, require unionContract"
        ]

    def test_intake_warning(self, validator):
        result = validator.validate_intake(CaseType.CRIMINAL_DEFENSE, {})
        assert "Constitutional rights should be reviewed immediately" in result.warnings

    def test_false_flag_still_warns(self, validator):
        result = validator.validate_intake(CaseType.MEDICAL_MALPRACTICE, {"statuteOfLimitationsChecked": False})
        assert (
            "Statute of limitations should be verified immediately for medical malpractice cases"
            in result.warnings
        )

    def test_true_flag_clears_warning(self, validator):
        result = validator.validate_intake(CaseType.MEDICAL_MALPRACTICE, {"statuteOfLimitationsChecked": True})
        assert (
            "Statute of limitations should be verified immediately for medical malpractice cases"
            not in result.warnings
        )

    def test_unknown_case_type(self, labor_only_validator):
        result = labor_only_validator.validate_intake(CaseType.DEMOLITION_CASE, {})
        assert result.errors == ["No validation rules found for case type: DEMOLITION_CASE"]


class TestRequiresApproval:
    def test_attorney_needs_admin_for_criminal_proceedings(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.CRIMINAL_DEFENSE)
        assert validator.requires_approval(state, PROCEEDINGS, Role.ATTORNEY)
        assert not validator.requires_approval(state, PROCEEDINGS, Role.ADMIN)

    def test_no_policy_no_approval(self, validator, make_state):
        state = make_state(PREPARATION, CaseType.CONTRACT_DISPUTE)
        assert not validator.requires_approval(state, PROCEEDINGS, Role.ATTORNEY)

    def test_unknown_case_type_needs_no_approval(self, labor_only_validator, make_state):
        state = make_state(PREPARATION, CaseType.CRIMINAL_DEFENSE)
        assert not labor_only_validator.requires_approval(state, PROCEEDINGS, Role.ATTORNEY)


class TestIntrospection:
    def test_available_transitions(self, validator, make_state):
        assert validator.available_transitions(make_state(INTAKE), Role.ATTORNEY) == [PREPARATION, CLOSURE]
        assert validator.available_transitions(make_state(PREPARATION), Role.ADMIN) == [PROCEEDINGS, CLOSURE]

    def test_available_transitions_ignore_metadata(self, validator, make_state):
        assert validator.available_transitions(make_state(RESOLUTION), Role.ADMIN) == [CLOSURE]

    @pytest.mark.parametrize("role", list(Role))
    def test_terminal_phase_offers_nothing(self, validator, make_state, role):
        assert validator.available_transitions(make_state(CLOSURE), role) == []

    def test_client_sees_nothing(self, validator, make_state):
        assert validator.available_transitions(make_state(INTAKE), Role.CLIENT) == []

    def test_phase_requirements(self, validator):
        assert validator.phase_requirements(PREPARATION, CaseType.CRIMINAL_DEFENSE) == [
            "clientInformation",
            "caseDescription",
            "initialEvidence",
            "bailHearingScheduled",
            "evidenceSecured",
            "witnessStatements",
        ]

    def test_phase_requirements_into_closure(self, validator):
        assert validator.phase_requirements(CLOSURE, CaseType.CONTRACT_DISPUTE) == [
            "finalJudgment",
            "settlementAgreement",
            "appealPeriod",
        ]

    @pytest.mark.parametrize("case_type", list(CaseType))
    @pytest.mark.parametrize("phase", PHASE_ORDER)
    def test_phase_requirements_generic_first_without_duplicates(self, validator, case_type, phase):
        requirements = validator.phase_requirements(phase, case_type)
        generic = []
        for rule in validator.table.list_incoming(phase):
            generic.extend(f for f in rule.required_fields if f not in generic)
        assert requirements[: len(generic)] == generic
        assert len(set(requirements)) == len(requirements)

    def test_phase_requirements_unknown_case_type(self, labor_only_validator):
        assert labor_only_validator.phase_requirements(PREPARATION, CaseType.SPECIAL_MATTERS) == [
            "clientInformation",
            "caseDescription",
            "initialEvidence",
        ]

    def test_all_transitions(self, validator):
        rules = validator.all_transitions()
        assert len(rules) == 7
        assert sum(rule.is_wildcard for rule in rules) == 1


class TestPhaseProgress:
    def test_partial_progress(self, validator, make_state):
        state = make_state(INTAKE, clientInformation="x", caseDescription="x")
        assert validator.phase_progress(state) == 67

    def test_counts_case_type_fields(self, validator, make_state):
        state = make_state(INTAKE, CaseType.CRIMINAL_DEFENSE, **GENERIC_INTAKE_FIELDS)
        assert validator.phase_progress(state) == 50

    def test_empty_and_complete(self, validator, make_state):
        assert validator.phase_progress(make_state(INTAKE)) == 0
        assert validator.phase_progress(make_state(INTAKE, **GENERIC_INTAKE_FIELDS)) == 100

    def test_nothing_required(self, validator, make_state):
        assert validator.phase_progress(make_state(PROCEEDINGS, CaseType.CONTRACT_DISPUTE)) == 100

    def test_terminal(self, validator, make_state):
        assert validator.phase_progress(make_state(CLOSURE)) == 0


class TestCaseTypeWorkflow:
    def test_criminal_defense(self, validator):
        workflow = validator.case_type_workflow(CaseType.CRIMINAL_DEFENSE)
        assert len(workflow) == 1
        rule = workflow[0]
        assert (rule.from_phase, rule.to_phase) == (INTAKE, PREPARATION)
        assert rule.required_fields == (
            "clientInformation",
            "caseDescription",
            "initialEvidence",
            "bailHearingScheduled",
            "evidenceSecured",
            "witnessStatements",
        )
        assert [c.field for c in rule.conditions] == ["riskAssessmentCompleted", "pleaBargain"]
        assert rule.allowed_roles == (Role.ADMIN, Role.ATTORNEY)

    def test_labor_dispute_augments_two_phases(self, validator):
        workflow = validator.case_type_workflow(CaseType.LABOR_DISPUTE)
        assert [rule.to_phase for rule in workflow] == [PREPARATION, PROCEEDINGS]
        assert workflow[1].required_fields[-3:] == ("employmentContract", "payrollRecords", "grievanceDocumentation")

    def test_no_augmentations(self, fixed_clock):
        rule_set = RuleSet(
            transitions=BUILTIN_TRANSITIONS,
            case_type_rules=(CaseTypeRule(case_type=CaseType.SPECIAL_MATTERS),),
        )
        validator = TransitionValidator.from_rule_set(rule_set, clock=fixed_clock)
        assert validator.case_type_workflow(CaseType.SPECIAL_MATTERS) == []
        assert validator.case_type_workflow(CaseType.LABOR_DISPUTE) == []


class TestStatusTransitions:
    """Status changes within a phase."""

    def test_intake_activation(self, validator):
        assert validator.validate_status_transition(INTAKE, CaseStatus.DRAFT, CaseStatus.ACTIVE).is_valid

    def test_rejection_during_intake(self, validator):
        assert validator.validate_status_transition(INTAKE, CaseStatus.DRAFT, CaseStatus.CANCELLED).is_valid

    def test_undefined_change(self, validator):
        result = validator.validate_status_transition(RESOLUTION, CaseStatus.COMPLETED, CaseStatus.ACTIVE)
        assert result.errors == [
            "Status transition from COMPLETED to ACTIVE is not defined for phase RESOLUTION_POST_PROCEEDING"
        ]

    def test_hold_and_resume_during_proceedings(self, validator):
        assert validator.validate_status_transition(PROCEEDINGS, CaseStatus.ACTIVE, CaseStatus.ON_HOLD).is_valid
        assert validator.validate_status_transition(PROCEEDINGS, CaseStatus.ON_HOLD, CaseStatus.ACTIVE).is_valid

    def test_disallowed_rule_reports_reason(self, fixed_clock):
        policy = PhasePolicy(
            phase=PROCEEDINGS,
            status_rules=(
                StatusRule(
                    from_statuses=(CaseStatus.ACTIVE,),
                    to_statuses=(CaseStatus.CANCELLED,),
                    allowed=False,
                    reason="Cases in court cannot be cancelled",
                ),
                StatusRule(
                    from_statuses=(CaseStatus.ON_HOLD,),
                    to_statuses=(CaseStatus.CANCELLED,),
                    allowed=False,
                ),
            ),
        )
        rule_set = RuleSet(
            transitions=BUILTIN_TRANSITIONS,
            case_type_rules=tuple(BUILTIN_CASE_TYPE_RULES.values()),
            phase_policies=(policy,),
        )
        validator = TransitionValidator.from_rule_set(rule_set, clock=fixed_clock)

        result = validator.validate_status_transition(PROCEEDINGS, CaseStatus.ACTIVE, CaseStatus.CANCELLED)
        assert result.errors == ["Cases in court cannot be cancelled"]
        result = validator.validate_status_transition(PROCEEDINGS, CaseStatus.ON_HOLD, CaseStatus.CANCELLED)
        assert result.errors == ["Status transition from ON_HOLD to CANCELLED is not allowed"]

    def test_phase_without_policy_accepts_any_change(self, labor_only_validator):
        result = labor_only_validator.validate_status_transition(
            CLOSURE, CaseStatus.COMPLETED, CaseStatus.ACTIVE
        )
        assert result.is_valid

    def test_duplicate_policy_rejected(self, fixed_clock):
        rule_set = RuleSet(
            transitions=BUILTIN_TRANSITIONS,
            case_type_rules=tuple(BUILTIN_CASE_TYPE_RULES.values()),
            phase_policies=BUILTIN_PHASE_POLICIES + BUILTIN_PHASE_POLICIES[:1],
        )
        with pytest.raises(RuleConfigurationError, match="Duplicate phase policy for INTAKE_RISK_ASSESSMENT"):
            TransitionValidator.from_rule_set(rule_set, clock=fixed_clock)


class TestPhaseCompletion:
    """Exit criteria for the current phase."""

    READY_INTAKE = {
        "clientInformation": "Jane Doe",
        "caseDescription": "Unpaid invoice",
        "initialContactDate": "2025-05-01",
        "conflictCheckCompleted": True,
    }

    def test_complete_intake(self, validator, make_state):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE, **self.READY_INTAKE)
        result = validator.validate_phase_completion(state)
        assert result.is_valid
        assert result.warnings == []

    def test_missing_fields_and_unset_flags(self, validator, make_state):
        state = make_state(INTAKE, CaseType.CRIMINAL_DEFENSE, clientInformation="John Roe")
        result = validator.validate_phase_completion(state)
        assert result.errors == [
            "Cannot complete phase INTAKE_RISK_ASSESSMENT. Missing required fields: caseDescription, initialContactDate",
            "Criminal defense cases require arrest information and police report number",
            "Conflict check must be completed before ending intake phase",
        ]

    def test_false_flag_blocks(self, validator, make_state):
        metadata = dict(self.READY_INTAKE, conflictCheckCompleted=False)
        result = validator.validate_phase_completion(make_state(INTAKE, CaseType.CONTRACT_DISPUTE, **metadata))
        assert result.errors == ["Conflict check must be completed before ending intake phase"]

    def test_non_blocking_flags_warn(self, validator, make_state):
        state = make_state(
            PROCEEDINGS,
            CaseType.CONTRACT_DISPUTE,
            courtDocumentsFiled=True,
            hearingScheduled=True,
            evidenceSubmitted=True,
            allHearingsAttended=True,
        )
        result = validator.validate_phase_completion(state)
        assert result.is_valid
        assert result.warnings == ["Not all evidence has been submitted in court"]

    def test_metadata_override(self, validator, make_state):
        state = make_state(INTAKE, CaseType.CONTRACT_DISPUTE)
        assert validator.validate_phase_completion(state, metadata=self.READY_INTAKE).is_valid

    def test_phase_without_policy(self, labor_only_validator, make_state):
        result = labor_only_validator.validate_phase_completion(make_state(CLOSURE, CaseType.LABOR_DISPUTE))
        assert result.errors == ["No validation rules found for phase: CLOSURE_REVIEW_ARCHIVING"]
