"""Built-in transition table and case-type rules.

Phase rules are keyed by the phase being entered. The INTAKE_RISK_ASSESSMENT
entry of each case type lists the case-opening requirements (checked by
`TransitionValidator.validate_intake`); no transition enters intake, so they
never affect phase transitions.
"""

from typing import Dict

from lexcase_core_lib.models.case import CaseStatus, CaseType, Phase, Role
from lexcase_core_lib.models.rules import (
    Advisory,
    ApprovalRule,
    CaseTypeCompletionRequirement,
    CaseTypeRule,
    CompletionCheck,
    Condition,
    ConditionOperator,
    DocumentRequirement,
    FeeStructure,
    IntakeWarning,
    PhasePolicy,
    PhaseRule,
    RuleSet,
    StatusRule,
    TimelineConstraint,
    TransitionRule,
)

INTAKE = Phase.INTAKE_RISK_ASSESSMENT
PREPARATION = Phase.PRE_PROCEEDING_PREPARATION
PROCEEDINGS = Phase.FORMAL_PROCEEDINGS
RESOLUTION = Phase.RESOLUTION_POST_PROCEEDING
CLOSURE = Phase.CLOSURE_REVIEW_ARCHIVING

LEGAL_STAFF = (Role.ADMIN, Role.ATTORNEY)


def _is_true(field: str) -> Condition:
    return Condition(field=field, operator=ConditionOperator.EQUALS, value=True)


def _exists(field: str) -> Condition:
    return Condition(field=field, operator=ConditionOperator.EXISTS)


def _if_true_require(guard: str, required: str) -> Condition:
    return Condition(
        field=guard,
        operator=ConditionOperator.EQUALS,
        value=True,
        requires_field=required,
    )


def _documents(phase: Phase, *document_types: str, required: bool = True):
    return tuple(
        DocumentRequirement(document_type=t, phase=phase, required=required)
        for t in document_types
    )


# ============================================================
# Transition Table
# ============================================================

BUILTIN_TRANSITIONS = (
    TransitionRule(
        from_phase=INTAKE,
        to_phase=PREPARATION,
        required_fields=('clientInformation', 'caseDescription', 'initialEvidence'),
        conditions=(_is_true('riskAssessmentCompleted'),),
        allowed_roles=LEGAL_STAFF,
    ),
    TransitionRule(
        from_phase=PREPARATION,
        to_phase=PROCEEDINGS,
        required_fields=('legalResearch', 'documentPreparation', 'witnessPreparation'),
        conditions=(_is_true('preparationCompleted'),),
        allowed_roles=LEGAL_STAFF,
    ),
    TransitionRule(
        from_phase=PREPARATION,
        to_phase=CLOSURE,
        conditions=(_is_true('caseSettled'),),
        allowed_roles=LEGAL_STAFF,
    ),
    TransitionRule(
        from_phase=PROCEEDINGS,
        to_phase=RESOLUTION,
        conditions=(_is_true('proceedingsCompleted'),),
        allowed_roles=LEGAL_STAFF,
    ),
    TransitionRule(
        from_phase=PROCEEDINGS,
        to_phase=CLOSURE,
        conditions=(_is_true('caseDismissed'),),
        allowed_roles=LEGAL_STAFF,
    ),
    TransitionRule(
        from_phase=RESOLUTION,
        to_phase=CLOSURE,
        required_fields=('finalJudgment', 'settlementAgreement', 'appealPeriod'),
        conditions=(_is_true('resolutionCompleted'),),
        allowed_roles=LEGAL_STAFF,
    ),
    # Rejection: any open phase straight to closure
    TransitionRule(
        from_phase=None,
        to_phase=CLOSURE,
        conditions=(_is_true('caseRejected'),),
        allowed_roles=LEGAL_STAFF,
    ),
)


# ============================================================
# Case-Type Rules
# ============================================================

BUILTIN_CASE_TYPE_RULES: Dict[CaseType, CaseTypeRule] = {
    CaseType.LABOR_DISPUTE: CaseTypeRule(
        case_type=CaseType.LABOR_DISPUTE,
        prohibited_fields=('criminalRecord', 'medicalHistory'),
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'employerInformation', 'employeeInformation', 'employmentContract',
                    'disputeDetails', 'employmentDates',
                ),
                conditions=(_if_true_require('unionMember', 'unionContract'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                conditions=(_if_true_require('severancePay', 'severanceAgreement'),),
            ),
            PhaseRule(
                phase=PROCEEDINGS,
                additional_required_fields=('employmentContract', 'payrollRecords', 'grievanceDocumentation'),
                conditions=(_is_true('laborBoardNotified'), _is_true('employmentHistoryVerified')),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'EmploymentContract', 'PayStubs', 'TerminationLetter')
            + _documents(PREPARATION, 'LaborComplaint')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=30),
            TimelineConstraint(phase=PREPARATION, max_duration_days=60),
        ),
        fee_structures=(FeeStructure.CONTINGENCY, FeeStructure.HOURLY),
        advisories=(
            Advisory(
                to_phase=PROCEEDINGS,
                message='Attempt mediation through the labor bureau before formal proceedings',
                unless_field='mediationAttempted',
            ),
        ),
    ),

    CaseType.MEDICAL_MALPRACTICE: CaseTypeRule(
        case_type=CaseType.MEDICAL_MALPRACTICE,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'patientInformation', 'healthcareProvider', 'incidentDate',
                    'injuryDescription', 'medicalRecords',
                ),
                conditions=(_if_true_require('emergencyTreatment', 'emergencyRecords'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                additional_required_fields=('medicalRecords', 'expertReports', 'hospitalDocumentation'),
                conditions=(
                    _is_true('medicalRecordsReviewed'),
                    _is_true('expertConsultationCompleted'),
                    _if_true_require('permanentInjury', 'lifeCarePlan'),
                ),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'MedicalRecords', 'IncidentReport', 'ConsentForms')
            + _documents(PREPARATION, 'ExpertReport')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=90),
            TimelineConstraint(phase=PREPARATION, max_duration_days=180),
        ),
        fee_structures=(FeeStructure.CONTINGENCY,),
        advisories=(
            Advisory(
                to_phase=PREPARATION,
                message='Consider consulting with medical experts early in the preparation phase',
            ),
            Advisory(
                to_phase=PREPARATION,
                message='Statute of limitations should be verified for medical malpractice case',
                unless_field='statuteOfLimitationsChecked',
            ),
        ),
        intake_warnings=(
            IntakeWarning(
                field='statuteOfLimitationsChecked',
                message='Statute of limitations should be verified immediately for medical malpractice cases',
            ),
        ),
        approvals=(
            ApprovalRule(phase=PREPARATION, approver_roles=(Role.ADMIN,)),
            ApprovalRule(phase=PROCEEDINGS, approver_roles=(Role.ADMIN,)),
        ),
    ),

    CaseType.CRIMINAL_DEFENSE: CaseTypeRule(
        case_type=CaseType.CRIMINAL_DEFENSE,
        prohibited_fields=('plaintiffDemands', 'settlementAmount'),
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'defendantInformation', 'charges', 'arrestDate',
                    'courtInformation', 'policeReports',
                ),
                conditions=(_if_true_require('felony', 'preliminaryHearingDate'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                additional_required_fields=('bailHearingScheduled', 'evidenceSecured', 'witnessStatements'),
                conditions=(_if_true_require('pleaBargain', 'pleaAgreement'),),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'ArrestRecords', 'PoliceReports', 'ChargingDocuments')
            + _documents(PREPARATION, 'BailDocuments')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=14),
            TimelineConstraint(phase=PREPARATION, max_duration_days=90),
        ),
        fee_structures=(FeeStructure.FLAT, FeeStructure.HOURLY, FeeStructure.RETAINER),
        advisories=(
            Advisory(
                from_phase=INTAKE,
                to_phase=PREPARATION,
                message='Consider plea bargain options before proceeding to formal proceedings',
            ),
            Advisory(
                to_phase=PROCEEDINGS,
                message='Bail has not been posted for criminal defense case',
                unless_field='bailPosted',
            ),
        ),
        intake_warnings=(
            IntakeWarning(
                field='constitutionalRightsReviewed',
                message='Constitutional rights should be reviewed immediately',
            ),
        ),
        approvals=(
            ApprovalRule(phase=PROCEEDINGS, approver_roles=(Role.ADMIN,)),
            ApprovalRule(phase=RESOLUTION, approver_roles=(Role.ADMIN,)),
        ),
    ),

    CaseType.DIVORCE_FAMILY: CaseTypeRule(
        case_type=CaseType.DIVORCE_FAMILY,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'marriageInformation', 'spouseInformation', 'childrenInformation',
                    'assetInformation', 'incomeInformation',
                ),
                conditions=(_if_true_require('minorChildren', 'childCustodyPreferences'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                conditions=(_if_true_require('highConflict', 'parentingCoordinator'),),
            ),
            PhaseRule(
                phase=PROCEEDINGS,
                additional_required_fields=('marriageCertificate', 'financialDisclosures', 'childCustodyPlan'),
                conditions=(_is_true('mediationAttempted'), _exists('custodyAgreement')),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'MarriageCertificate', 'BirthCertificates')
            + _documents(PREPARATION, 'FinancialStatements', 'PropertyDeeds')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=30),
            TimelineConstraint(phase=PREPARATION, max_duration_days=120),
        ),
        fee_structures=(FeeStructure.FLAT, FeeStructure.HOURLY, FeeStructure.RETAINER),
        advisories=(
            Advisory(
                to_phase=PROCEEDINGS,
                message='Mediation should be attempted before formal proceedings',
            ),
            Advisory(
                to_phase=PROCEEDINGS,
                message='Child custody arrangements should be confirmed for divorce cases',
                unless_field='minorChildrenInvolved',
            ),
        ),
        approvals=(
            ApprovalRule(phase=PROCEEDINGS, approver_roles=(Role.ADMIN,)),
        ),
    ),

    CaseType.INHERITANCE_DISPUTE: CaseTypeRule(
        case_type=CaseType.INHERITANCE_DISPUTE,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'deceasedInformation', 'willInformation', 'beneficiaryInformation',
                    'assetInventory', 'executorInformation',
                ),
                conditions=(_if_true_require('noWill', 'intestacyInformation'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                additional_required_fields=('deathCertificate', 'willDocument', 'probateCourtFiling'),
                conditions=(
                    _exists('willLocated'),
                    _is_true('heirsIdentified'),
                    _if_true_require('contested', 'contestGrounds'),
                ),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'DeathCertificate', 'WillDocument')
            + _documents(PREPARATION, 'AssetInventory', 'ProbateDocuments')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=60),
            TimelineConstraint(phase=PREPARATION, max_duration_days=365),
        ),
        fee_structures=(FeeStructure.HOURLY, FeeStructure.FLAT),
    ),

    CaseType.CONTRACT_DISPUTE: CaseTypeRule(
        case_type=CaseType.CONTRACT_DISPUTE,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'contractInformation', 'partiesInvolved', 'breachDetails',
                    'damagesClaimed', 'contractValue',
                ),
            ),
            PhaseRule(
                phase=PREPARATION,
                conditions=(_if_true_require('international', 'jurisdictionAnalysis'),),
            ),
            PhaseRule(
                phase=PROCEEDINGS,
                additional_required_fields=('contractDocument', 'breachEvidence', 'correspondence'),
                conditions=(
                    _is_true('contractAnalyzed'),
                    _is_true('breachDocumented'),
                    _if_true_require('liquidatedDamages', 'enforceabilityAnalysis'),
                ),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'ContractDocument', 'BreachEvidence', 'Correspondence')
            + _documents(PREPARATION, 'ExpertReport', required=False)
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=45),
            TimelineConstraint(phase=PREPARATION, max_duration_days=90),
        ),
        fee_structures=(FeeStructure.HOURLY, FeeStructure.CONTINGENCY, FeeStructure.FLAT),
        intake_warnings=(
            IntakeWarning(
                field='contractAnalyzed',
                message='Contract should be thoroughly analyzed for all potential claims and defenses',
            ),
        ),
    ),

    CaseType.ADMINISTRATIVE_CASE: CaseTypeRule(
        case_type=CaseType.ADMINISTRATIVE_CASE,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'agencyInformation', 'caseNumber', 'violationDetails',
                    'hearingInformation', 'regulatoryCitations',
                ),
                conditions=(_if_true_require('licenseSuspension', 'licenseDetails'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                conditions=(_if_true_require('emergencyHearing', 'emergencyMotion'),),
            ),
            PhaseRule(
                phase=RESOLUTION,
                additional_required_fields=('agencyDecision', 'appealDocumentation', 'complianceReport'),
                conditions=(_is_true('administrativeHearingCompleted'), _is_true('evidenceSubmitted')),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'AgencyNotice', 'ViolationReport')
            + _documents(PREPARATION, 'Regulations', 'HearingNotice')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=30),
            TimelineConstraint(phase=PREPARATION, max_duration_days=60),
        ),
        fee_structures=(FeeStructure.HOURLY, FeeStructure.FLAT),
    ),

    CaseType.DEMOLITION_CASE: CaseTypeRule(
        case_type=CaseType.DEMOLITION_CASE,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'propertyInformation', 'demolitionOrder', 'ownerInformation',
                    'contractorInformation', 'safetyPlan',
                ),
                conditions=(_if_true_require('historicProperty', 'heritageApproval'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                conditions=(_if_true_require('asbestos', 'abatementPlan'),),
            ),
            PhaseRule(
                phase=PROCEEDINGS,
                additional_required_fields=('propertySurvey', 'demolitionPermit', 'environmentalAssessment'),
                conditions=(_is_true('propertyInspectionCompleted'), _is_true('noticesServed')),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'DemolitionPermit', 'PropertySurvey')
            + _documents(PREPARATION, 'SafetyPlan', 'ContractorLicense')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=45),
            TimelineConstraint(phase=PREPARATION, max_duration_days=30),
        ),
        fee_structures=(FeeStructure.FLAT, FeeStructure.HOURLY),
    ),

    CaseType.SPECIAL_MATTERS: CaseTypeRule(
        case_type=CaseType.SPECIAL_MATTERS,
        phase_rules=(
            PhaseRule(
                phase=INTAKE,
                additional_required_fields=(
                    'matterDescription', 'partiesInvolved', 'jurisdiction',
                    'legalBasis', 'reliefSought',
                ),
                conditions=(_if_true_require('classAction', 'classCertification'),),
            ),
            PhaseRule(
                phase=PREPARATION,
                additional_required_fields=('caseAssessment', 'expertReferral', 'specializedDocumentation'),
                conditions=(
                    _is_true('specializedAssessmentCompleted'),
                    _is_true('expertConsultationScheduled'),
                    _if_true_require('constitutionalIssue', 'constitutionalAnalysis'),
                ),
            ),
        ),
        document_requirements=(
            _documents(INTAKE, 'LegalMemorandum', 'JurisdictionAnalysis')
            + _documents(PREPARATION, 'ExpertReport', required=False)
            + _documents(PREPARATION, 'StrategyDocument')
        ),
        timeline_constraints=(
            TimelineConstraint(phase=INTAKE, max_duration_days=60),
            TimelineConstraint(phase=PREPARATION, max_duration_days=90),
        ),
        fee_structures=(
            FeeStructure.HOURLY, FeeStructure.CONTINGENCY, FeeStructure.FLAT, FeeStructure.RETAINER,
        ),
    ),
}

# Exit criteria and status changes per phase. Statuses: DRAFT is a case still
# in intake, ON_HOLD a pending case, CANCELLED a case closed without an outcome.
BUILTIN_PHASE_POLICIES = (
    PhasePolicy(
        phase=INTAKE,
        completion_fields=('clientInformation', 'caseDescription', 'initialContactDate'),
        case_type_requirements=(
            CaseTypeCompletionRequirement(
                case_type=CaseType.CRIMINAL_DEFENSE,
                required_fields=('arrestDate', 'charges', 'policeReportNumber'),
                message='Criminal defense cases require arrest information and police report number',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.MEDICAL_MALPRACTICE,
                required_fields=('incidentDate', 'healthcareProvider', 'injuryDescription'),
                message='Medical malpractice cases require incident details and healthcare provider information',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.DIVORCE_FAMILY,
                required_fields=('marriageDate', 'spouseInformation', 'childrenInformation'),
                message='Divorce/Family cases require marriage and family information',
            ),
        ),
        completion_checks=(
            CompletionCheck(
                field='conflictCheckCompleted',
                message='Conflict check must be completed before ending intake phase',
            ),
        ),
        status_rules=(
            StatusRule(
                from_statuses=(CaseStatus.DRAFT,),
                to_statuses=(CaseStatus.ACTIVE, CaseStatus.ON_HOLD),
            ),
            StatusRule(
                from_statuses=(CaseStatus.DRAFT,),
                to_statuses=(CaseStatus.CANCELLED,),
                reason='Case can be rejected during intake',
            ),
        ),
    ),
    PhasePolicy(
        phase=PREPARATION,
        completion_fields=('legalResearchCompleted', 'documentPreparationStarted', 'strategyDefined'),
        case_type_requirements=(
            CaseTypeCompletionRequirement(
                case_type=CaseType.CRIMINAL_DEFENSE,
                required_fields=('bailHearingScheduled', 'evidenceSecured', 'witnessList'),
                message='Criminal defense requires bail hearing and evidence securing',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.MEDICAL_MALPRACTICE,
                required_fields=('expertConsultationCompleted', 'medicalRecordsReviewed', 'violationAnalysis'),
                message='Medical malpractice requires expert consultation and medical record review',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.CONTRACT_DISPUTE,
                required_fields=('contractAnalyzed', 'breachIdentified', 'damagesCalculated'),
                message='Contract disputes require contract analysis and breach identification',
            ),
        ),
        completion_checks=(
            CompletionCheck(
                field='clientAgreementSigned',
                message='Client agreement must be signed before ending preparation phase',
            ),
            CompletionCheck(
                field='deadlinesMet',
                message='Some preparation deadlines may not have been met',
                blocking=False,
            ),
        ),
        status_rules=(
            StatusRule(
                from_statuses=(CaseStatus.DRAFT, CaseStatus.ON_HOLD),
                to_statuses=(CaseStatus.ACTIVE,),
            ),
        ),
    ),
    PhasePolicy(
        phase=PROCEEDINGS,
        completion_fields=('courtDocumentsFiled', 'hearingScheduled', 'evidenceSubmitted'),
        case_type_requirements=(
            CaseTypeCompletionRequirement(
                case_type=CaseType.CRIMINAL_DEFENSE,
                required_fields=('arraignmentCompleted', 'pleaEntered', 'trialDateSet'),
                message='Criminal defense requires arraignment and plea entry',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.DIVORCE_FAMILY,
                required_fields=('mediationCompleted', 'custodyAgreement', 'assetDivision'),
                message='Divorce cases require mediation and custody agreements',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.ADMINISTRATIVE_CASE,
                required_fields=('administrativeHearingScheduled', 'evidencePackageSubmitted'),
                message='Administrative cases require hearing scheduling and evidence submission',
            ),
        ),
        completion_checks=(
            CompletionCheck(
                field='allHearingsAttended',
                message='All required hearings must be attended before ending proceedings phase',
            ),
            CompletionCheck(
                field='allEvidenceSubmitted',
                message='Not all evidence has been submitted in court',
                blocking=False,
            ),
        ),
        status_rules=(
            StatusRule(
                from_statuses=(CaseStatus.ACTIVE,),
                to_statuses=(CaseStatus.ON_HOLD,),
                reason='Case may be pending during proceedings',
            ),
            StatusRule(
                from_statuses=(CaseStatus.ON_HOLD,),
                to_statuses=(CaseStatus.ACTIVE,),
            ),
        ),
    ),
    PhasePolicy(
        phase=RESOLUTION,
        completion_fields=('judgmentReceived', 'resolutionDocumented', 'appealPeriodStarted'),
        case_type_requirements=(
            CaseTypeCompletionRequirement(
                case_type=CaseType.CRIMINAL_DEFENSE,
                required_fields=('sentencingCompleted', 'appealConsidered', 'probationTerms'),
                message='Criminal defense requires sentencing completion and appeal consideration',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.CONTRACT_DISPUTE,
                required_fields=('judgmentEnforced', 'settlementReceived', 'damagesCollected'),
                message='Contract disputes require judgment enforcement and settlement',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.INHERITANCE_DISPUTE,
                required_fields=('willProbated', 'assetsDistributed', 'taxesPaid'),
                message='Inheritance disputes require will probate and asset distribution',
            ),
        ),
        completion_checks=(
            CompletionCheck(
                field='finalJudgmentReceived',
                message='Final judgment must be received before ending resolution phase',
            ),
        ),
        status_rules=(
            StatusRule(
                from_statuses=(CaseStatus.ACTIVE, CaseStatus.ON_HOLD),
                to_statuses=(CaseStatus.COMPLETED,),
            ),
        ),
    ),
    PhasePolicy(
        phase=CLOSURE,
        completion_fields=('finalDocumentation', 'clientNotified', 'feesSettled'),
        case_type_requirements=(
            CaseTypeCompletionRequirement(
                case_type=CaseType.CRIMINAL_DEFENSE,
                required_fields=('recordExpunged', 'probationCompleted', 'restrictionsLifted'),
                message='Criminal defense requires record handling and probation completion',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.DIVORCE_FAMILY,
                required_fields=('childSupportArranged', 'visitationSchedule', 'nameChangeProcessed'),
                message='Divorce cases require child support and visitation arrangements',
            ),
            CaseTypeCompletionRequirement(
                case_type=CaseType.MEDICAL_MALPRACTICE,
                required_fields=('medicalBillsPaid', 'insuranceClaimsSettled', 'followUpCare'),
                message='Medical malpractice requires medical billing and insurance settlement',
            ),
        ),
        status_rules=(
            StatusRule(
                from_statuses=(CaseStatus.ACTIVE, CaseStatus.ON_HOLD),
                to_statuses=(CaseStatus.COMPLETED,),
            ),
            StatusRule(
                from_statuses=(CaseStatus.ACTIVE, CaseStatus.ON_HOLD),
                to_statuses=(CaseStatus.CANCELLED,),
                reason='Case can be closed directly from active status',
            ),
        ),
    ),
)


def builtin_rule_set() -> RuleSet:
    """The built-in transition table, case-type rules and phase policies as a `RuleSet`"""
    return RuleSet(
        transitions=BUILTIN_TRANSITIONS,
        case_type_rules=tuple(BUILTIN_CASE_TYPE_RULES.values()),
        phase_policies=BUILTIN_PHASE_POLICIES,
    )
