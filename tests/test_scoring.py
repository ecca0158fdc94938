"""
Tests for confidence, success probability and suggestions.
"""

import pytest

from legal_consultation.models.schemas import CaseType, LegalReference, ValidationResult
from legal_consultation.services.scoring import (
    CASE_TYPE_SUGGESTIONS, UNIVERSAL_SUGGESTIONS, ConfidenceScorer, SuccessEstimator,
    SuggestionEngine, average_relevance
)


def make_reference(score, ref_id="r1"):
    return LegalReference(
        id=ref_id, title="t", article="a", law="l", source="s", relevance_score=score
    )


def make_validation(confidence):
    return ValidationResult(is_valid=True, issues=[], confidence=confidence, recommendations=[])


class TestConfidenceScorer:
    def setup_method(self):
        self.scorer = ConfidenceScorer()

    def test_no_references_is_flat_low_confidence(self):
        assert self.scorer.score([], "x" * 900, make_validation(0.8)) == 0.3

    def test_short_answer(self):
        confidence = self.scorer.score([make_reference(0.5)], "short", make_validation(0.8))
        assert confidence == pytest.approx(0.5 * 0.4 + 0.8 * 0.4)

    def test_length_bonuses(self):
        refs = [make_reference(0.5)]
        validation = make_validation(0.5)

        medium = self.scorer.score(refs, "x" * 300, validation)
        long = self.scorer.score(refs, "x" * 600, validation)

        assert medium == pytest.approx(0.2 + 0.2 + 0.1)
        assert long == pytest.approx(0.2 + 0.2 + 0.2)

    def test_capped(self):
        refs = [make_reference(1.0), make_reference(1.0, "r2")]
        assert self.scorer.score(refs, "x" * 600, make_validation(1.0)) == 0.95


class TestSuccessEstimator:
    def setup_method(self):
        self.estimator = SuccessEstimator()

    def test_defaults_without_case_type_or_references(self):
        assert self.estimator.estimate([make_reference(0.9)], None) == 0.5
        assert self.estimator.estimate([], CaseType.LABOR) == 0.5

    def test_base_rate_plus_relevance(self):
        probability = self.estimator.estimate([make_reference(0.5)], CaseType.CRIMINAL)
        assert probability == pytest.approx(0.6 + 0.1)

    def test_capped(self):
        probability = self.estimator.estimate([make_reference(1.0)], CaseType.REAL_ESTATE)
        assert probability == 0.95

    def test_average_relevance(self):
        refs = [make_reference(0.2), make_reference(0.6, "r2")]
        assert average_relevance(refs) == pytest.approx(0.4)
        assert average_relevance([]) == 0.0


class TestSuggestionEngine:
    def test_labor_suggestions(self):
        suggestions = SuggestionEngine().suggest(CaseType.LABOR)

        assert suggestions == [
            "Review labor law compliance requirements",
            "Consider HRDF registration status",
            "Consult with a qualified lawyer for specific advice",
            "Review all relevant documentation",
        ]

    def test_universal_only_without_case_type(self):
        assert SuggestionEngine().suggest(None) == UNIVERSAL_SUGGESTIONS

    @pytest.mark.parametrize("case_type", list(CaseType))
    def test_every_case_type_has_specific_suggestions(self, case_type):
        suggestions = SuggestionEngine().suggest(case_type)

        assert suggestions[:len(CASE_TYPE_SUGGESTIONS[case_type])] == CASE_TYPE_SUGGESTIONS[case_type]
        assert suggestions[-2:] == UNIVERSAL_SUGGESTIONS

    def test_returned_list_is_a_copy(self):
        engine = SuggestionEngine()
        engine.suggest(CaseType.LABOR).append("mutated")

        assert "mutated" not in engine.suggest(CaseType.LABOR)
        assert "mutated" not in UNIVERSAL_SUGGESTIONS
