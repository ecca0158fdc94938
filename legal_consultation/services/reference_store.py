import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models.schemas import CaseType, LegalReference
from .relevance import is_relevant, relevance_score

logger = logging.getLogger(__name__)

DEFAULT_KNOWLEDGE_PATH = Path(__file__).resolve().parent.parent / "data" / "legal_knowledge.json"
REFERENCE_SOURCE = "Saudi Legal Database"

@dataclass(frozen=True)
class LegalReferenceEntry:
    id: str
    title: str
    law_name: str
    article_label: str
    body_text: str
    category: str
    last_updated: str

def category_for(case_type: Union[CaseType, str]) -> str:
    """Knowledge category holding the law for ``case_type``."""
    value = case_type.value if isinstance(case_type, CaseType) else case_type
    return f"{value}_law"

class ReferenceStore:
    """Read-only, categorised legal knowledge built once at startup."""

    def __init__(self, entries: List[LegalReferenceEntry]):
        categories: Dict[str, List[LegalReferenceEntry]] = {}
        for entry in entries:
            categories.setdefault(entry.category, []).append(entry)
        self._categories: Dict[str, Tuple[LegalReferenceEntry, ...]] = {
            name: tuple(items) for name, items in categories.items()
        }

    @classmethod
    def from_dict(cls, knowledge: Dict[str, Any]) -> "ReferenceStore":
        entries = []
        for category, section in knowledge.items():
            for article in section.get("articles", []):
                entries.append(LegalReferenceEntry(
                    id=article["id"],
                    title=article["title"],
                    law_name=article.get("law", section.get("name", "")),
                    article_label=article["article"],
                    body_text=article["content"],
                    category=category,
                    last_updated=article.get("last_updated", ""),
                ))
        return cls(entries)

    @classmethod
    def from_json(cls, path: Optional[Union[str, Path]] = None) -> "ReferenceStore":
        knowledge_path = Path(path) if path else DEFAULT_KNOWLEDGE_PATH
        with open(knowledge_path, "r", encoding="utf-8") as f:
            knowledge = json.load(f)

        store = cls.from_dict(knowledge)
        logger.info(f"Loaded {store.entry_count} legal reference entries from {knowledge_path}")
        return store

    @property
    def categories(self) -> List[str]:
        return sorted(self._categories)

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self._categories.values())

    def entries(self, category: str) -> Tuple[LegalReferenceEntry, ...]:
        return self._categories.get(category, ())

    def find_relevant(
        self,
        query: str,
        category: Optional[str] = None,
        max_results: int = 5
    ) -> List[LegalReference]:
        """Up to ``max_results`` entries of ``category`` relevant to ``query``.

        Only category-scoped knowledge is searched: without a category, or for
        an unknown one, the result is empty.
        """
        if not category:
            return []

        references = []
        for entry in self.entries(category):
            if not is_relevant(query, entry.body_text):
                continue
            references.append(LegalReference(
                id=entry.id,
                title=entry.title,
                article=entry.article_label,
                law=entry.law_name,
                source=REFERENCE_SOURCE,
                relevance_score=relevance_score(query, entry.body_text),
            ))

        references.sort(key=lambda ref: ref.relevance_score, reverse=True)
        return references[:max_results]
