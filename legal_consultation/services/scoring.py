"""Confidence, success-probability and suggestion heuristics."""

from typing import List, Optional

from ..models.schemas import CaseType, LegalReference, ValidationResult

MAX_SCORE = 0.95
NO_REFERENCE_CONFIDENCE = 0.3
DEFAULT_SUCCESS_PROBABILITY = 0.5

# Illustrative base rates, not derived from case outcomes
BASE_SUCCESS_RATES = {
    CaseType.COMMERCIAL: 0.75,
    CaseType.CIVIL: 0.70,
    CaseType.CRIMINAL: 0.60,
    CaseType.LABOR: 0.80,
    CaseType.FAMILY: 0.65,
    CaseType.REAL_ESTATE: 0.85,
    CaseType.INTELLECTUAL_PROPERTY: 0.70,
    CaseType.ADMINISTRATIVE: 0.60,
    CaseType.CYBER_CRIME: 0.55,
    CaseType.INHERITANCE: 0.75,
}

CASE_TYPE_SUGGESTIONS = {
    CaseType.COMMERCIAL: [
        "Consider reviewing commercial registration requirements",
        "Check for any required government approvals",
    ],
    CaseType.CIVIL: [
        "Review the contract terms and obligations of each party",
        "Consider an amicable settlement before filing a claim",
    ],
    CaseType.CRIMINAL: [
        "Preserve all evidence and record the timeline of events",
        "Confirm the procedural deadlines with the Public Prosecution",
    ],
    CaseType.LABOR: [
        "Review labor law compliance requirements",
        "Consider HRDF registration status",
    ],
    CaseType.FAMILY: [
        "Verify Sharia law compliance",
        "Consider mediation options",
    ],
    CaseType.REAL_ESTATE: [
        "Verify the property title deed and its registration",
        "Check municipal and zoning approvals",
    ],
    CaseType.INTELLECTUAL_PROPERTY: [
        "Confirm registration with the Saudi Authority for Intellectual Property",
        "Document evidence of first use and any infringement",
    ],
    CaseType.ADMINISTRATIVE: [
        "Check the deadline for filing a grievance with the Board of Grievances",
        "Gather all correspondence with the government entity",
    ],
    CaseType.CYBER_CRIME: [
        "Preserve digital evidence before it is altered or deleted",
        "Consider reporting the incident to the competent authorities",
    ],
    CaseType.INHERITANCE: [
        "Obtain the deed of inheritance listing all heirs",
        "Review Sharia shares before distributing the estate",
    ],
}

UNIVERSAL_SUGGESTIONS = [
    "Consult with a qualified lawyer for specific advice",
    "Review all relevant documentation",
]

def average_relevance(references: List[LegalReference]) -> float:
    if not references:
        return 0.0
    return sum(ref.relevance_score for ref in references) / len(references)

def _clamp(value: float) -> float:
    return round(min(max(value, 0.0), MAX_SCORE), 4)

class ConfidenceScorer:
    def score(
        self,
        references: List[LegalReference],
        answer: str,
        validation: ValidationResult
    ) -> float:
        # Answers without citable authority stay at a flat low confidence
        if not references:
            return NO_REFERENCE_CONFIDENCE

        confidence = average_relevance(references) * 0.4 + validation.confidence * 0.4
        if len(answer) > 200:
            confidence += 0.1
        if len(answer) > 500:
            confidence += 0.1
        return _clamp(confidence)

class SuccessEstimator:
    def estimate(self, references: List[LegalReference], case_type: Optional[CaseType] = None) -> float:
        if case_type is None or not references:
            return DEFAULT_SUCCESS_PROBABILITY

        probability = BASE_SUCCESS_RATES.get(case_type, DEFAULT_SUCCESS_PROBABILITY)
        probability += average_relevance(references) * 0.2
        return _clamp(probability)

class SuggestionEngine:
    def suggest(self, case_type: Optional[CaseType] = None) -> List[str]:
        suggestions = list(CASE_TYPE_SUGGESTIONS.get(case_type, [])) if case_type else []
        suggestions.extend(UNIVERSAL_SUGGESTIONS)
        return suggestions
