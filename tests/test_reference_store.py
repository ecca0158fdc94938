"""
Tests for lexical relevance and the legal reference store.
"""

import pytest

from legal_consultation.models.schemas import CaseType
from legal_consultation.services.reference_store import (
    REFERENCE_SOURCE, LegalReferenceEntry, ReferenceStore, category_for
)
from legal_consultation.services.relevance import (
    is_relevant, matching_words, relevance_score, words_match
)


LABOR_QUERY = "ما هي حقوق العامل في نظام العمل؟"


def make_entry(entry_id, body_text, category="labor_law"):
    return LegalReferenceEntry(
        id=entry_id,
        title=f"Title {entry_id}",
        law_name="Labor Law",
        article_label=f"Article {entry_id}",
        body_text=body_text,
        category=category,
        last_updated="2024-01-01",
    )


class TestRelevance:
    def test_words_match_in_either_direction(self):
        assert words_match("العامل", "للعامل")
        assert words_match("العمل؟", "العمل")
        assert not words_match("حقوق", "الحق")

    def test_matching_words_keeps_repeated_query_words(self):
        assert matching_words("wage wage", "minimum wage rules") == ["wage", "wage"]

    def test_single_matching_word_is_not_relevant(self):
        assert not is_relevant("wage dispute", "minimum wage rules")

    def test_two_matching_words_are_relevant(self):
        assert is_relevant("minimum wage dispute", "minimum wage rules")

    def test_score_counts_matching_pairs_per_query_word(self):
        # "wage" matches twice, "rules" once, "dispute" never
        score = relevance_score("wage rules dispute", "wage and wage rules")
        assert score == pytest.approx(1.0)

        score = relevance_score("wage dispute", "wage rules")
        assert score == pytest.approx(0.5)

    def test_score_is_capped_at_one(self):
        assert relevance_score("a b", "a a a a b b") == 1.0

    def test_empty_query_scores_zero(self):
        assert relevance_score("   ", "anything at all") == 0.0

    def test_matching_is_case_insensitive(self):
        assert is_relevant("Minimum WAGE", "minimum wage rules")


class TestReferenceStore:
    def test_category_for_case_type(self):
        assert category_for(CaseType.LABOR) == "labor_law"
        assert category_for("real_estate") == "real_estate_law"

    def test_loads_bundled_knowledge(self, reference_store):
        assert reference_store.entry_count >= 5
        assert {"commercial_law", "labor_law", "civil_law"} <= set(reference_store.categories)

    def test_labor_rights_query_finds_worker_rights_article(self, reference_store):
        references = reference_store.find_relevant(LABOR_QUERY, "labor_law")

        ids = [ref.id for ref in references]
        assert "lab_1" in ids

        lab_1 = next(ref for ref in references if ref.id == "lab_1")
        assert lab_1.title == "حقوق العامل"
        assert lab_1.article == "المادة 5"
        assert lab_1.source == REFERENCE_SOURCE
        assert 0.0 < lab_1.relevance_score <= 1.0

    def test_no_category_returns_nothing(self, reference_store):
        assert reference_store.find_relevant(LABOR_QUERY) == []

    def test_unknown_category_returns_nothing(self, reference_store):
        assert reference_store.find_relevant(LABOR_QUERY, "maritime_law") == []

    def test_results_sorted_and_limited(self):
        entries = [
            make_entry(f"e{i}", "wage rules " + "overtime " * i)
            for i in range(8)
        ]
        store = ReferenceStore(entries)

        references = store.find_relevant("wage rules overtime", "labor_law", max_results=5)

        assert len(references) == 5
        scores = [ref.relevance_score for ref in references]
        assert scores == sorted(scores, reverse=True)

    def test_irrelevant_entries_are_skipped(self):
        store = ReferenceStore([
            make_entry("hit", "employer must pay overtime wage"),
            make_entry("miss", "registration of commercial names"),
        ])

        references = store.find_relevant("overtime wage claim", "labor_law")

        assert [ref.id for ref in references] == ["hit"]

    def test_from_dict_uses_section_name_when_article_has_no_law(self):
        store = ReferenceStore.from_dict({
            "labor_law": {
                "name": "نظام العمل",
                "articles": [{
                    "id": "x1",
                    "title": "Wages",
                    "article": "Article 1",
                    "content": "wage rules apply",
                }],
            }
        })

        [entry] = store.entries("labor_law")
        assert entry.law_name == "نظام العمل"
        assert entry.last_updated == ""
