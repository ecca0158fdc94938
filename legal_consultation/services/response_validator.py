from typing import List

from ..models.schemas import LegalReference, ValidationResult

BASELINE_CONFIDENCE = 0.8
MIN_CONFIDENCE = 0.3

GENERIC_PHRASES = [
    "in general",
    "typically",
    "usually",
    "generally speaking",
    "as a rule",
]

JURISDICTION_KEYWORDS = [
    "سعودي",
    "saudi",
    "نظام",
    "قانون",
    "شريعة",
    "محكمة",
    "court",
    "law",
]

OUTDATED_PHRASES = [
    "old law",
    "previous system",
    "former regulation",
]

GENERIC_ISSUE = "Response appears to be generic, not specific to Saudi law"
MISSING_CONTEXT_ISSUE = "Response lacks Saudi legal context"
OUTDATED_ISSUE = "Response may contain outdated legal information"

RECOMMENDATIONS = {
    GENERIC_ISSUE: "Consider adding specific Saudi legal references",
    MISSING_CONTEXT_ISSUE: "Include Saudi legal system context",
    OUTDATED_ISSUE: "Verify information is current and up-to-date",
}

class ResponseValidator:
    """Heuristic checks on a generated answer.

    Each failed check adds one issue and lowers the validation confidence
    from 0.8, never below 0.3.
    """

    def validate(self, answer: str, references: List[LegalReference]) -> ValidationResult:
        issues = []
        confidence = BASELINE_CONFIDENCE
        text = answer.lower()

        if self._is_generic(text):
            issues.append(GENERIC_ISSUE)
            confidence -= 0.2

        if not self._has_jurisdiction_context(text):
            issues.append(MISSING_CONTEXT_ISSUE)
            confidence -= 0.1

        if self._has_outdated_info(text):
            issues.append(OUTDATED_ISSUE)
            confidence -= 0.1

        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            confidence=round(max(confidence, MIN_CONFIDENCE), 4),
            recommendations=[RECOMMENDATIONS[issue] for issue in issues],
        )

    def _is_generic(self, text: str) -> bool:
        return any(phrase in text for phrase in GENERIC_PHRASES)

    def _has_jurisdiction_context(self, text: str) -> bool:
        return any(keyword.lower() in text for keyword in JURISDICTION_KEYWORDS)

    def _has_outdated_info(self, text: str) -> bool:
        return any(phrase in text for phrase in OUTDATED_PHRASES)
