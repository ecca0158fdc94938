import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from ..models.database import AnswerImprovement, LawyerFeedback
from ..models.schemas import ConsultationResponse, LegalReference, VerificationLevel

logger = logging.getLogger(__name__)

LEGAL_TERMS = [
    "overtime", "ساعات إضافية",
    "company", "شركة",
    "contract", "عقد",
    "labor", "عمل",
    "commercial", "تجاري",
    "court", "محكمة",
]
PATTERN_OVERLAP_RATIO = 0.6

FIRM_VERIFIED_SOURCE = "Your Firm Verified"
LAWYER_VERIFIED_SOURCE = "Lawyer Verified"
MAX_VERIFIED_REFERENCES = 5

def generate_question_pattern(query: str) -> str:
    """Reduce a query to its known legal terms, or its normalised text."""
    cleaned = re.sub(r"[^\w\s]", "", query.lower())
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    found_terms = [term for term in LEGAL_TERMS if term in cleaned]
    return " ".join(found_terms) if found_terms else cleaned

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps from the database are stored in UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)

def patterns_match(first: str, second: str) -> bool:
    first_words = first.lower().split()
    second_words = second.lower().split()
    if not first_words or not second_words:
        return False

    overlap = [word for word in first_words if word in second_words]
    return len(overlap) >= min(len(first_words), len(second_words)) * PATTERN_OVERLAP_RATIO

class ResponseEnhancer:
    """Post-processes an assembled consultation response.

    Implementations return a new response and never mutate the one given.
    """

    async def enhance(
        self,
        response: ConsultationResponse,
        original_query: str,
        firm_id: Optional[str] = None
    ) -> ConsultationResponse:
        raise NotImplementedError

class PassThroughEnhancer(ResponseEnhancer):
    async def enhance(
        self,
        response: ConsultationResponse,
        original_query: str,
        firm_id: Optional[str] = None
    ) -> ConsultationResponse:
        return response.model_copy(update={
            "verification_level": VerificationLevel.UNVERIFIED,
            "can_provide_feedback": True,
        })

@dataclass(frozen=True)
class ImprovementMatch:
    improved_answer: str
    legal_references: List[str]
    verification_level: str
    verification_date: Optional[datetime]
    firm_specific: bool

class FeedbackEnhancer(ResponseEnhancer):
    """Substitutes verified improved answers recorded from lawyer feedback.

    Improvements from the caller's own firm win over global ones.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory
        self._fallback = PassThroughEnhancer()

    async def enhance(
        self,
        response: ConsultationResponse,
        original_query: str,
        firm_id: Optional[str] = None
    ) -> ConsultationResponse:
        match = await asyncio.to_thread(self.find_improvement, original_query, firm_id)
        if match is None:
            return await self._fallback.enhance(response, original_query, firm_id)

        logger.info(f"Applying verified improvement to consultation {response.id}")
        source = FIRM_VERIFIED_SOURCE if match.firm_specific else LAWYER_VERIFIED_SOURCE
        relevance = 0.98 if match.firm_specific else 0.95
        references = [
            LegalReference(
                id=f"ref-{index}",
                title=reference,
                article=reference,
                law=reference,
                source=source,
                relevance_score=relevance,
            )
            for index, reference in enumerate(match.legal_references[:MAX_VERIFIED_REFERENCES])
        ]

        if match.verification_level == "lawyer_verified":
            verification_level = VerificationLevel.LAWYER_VERIFIED
        else:
            verification_level = VerificationLevel.EXPERT_VERIFIED

        return response.model_copy(update={
            "answer": match.improved_answer,
            "references": references,
            "verification_level": verification_level,
            "last_updated": (
                match.verification_date.isoformat()
                if match.verification_date else response.last_updated
            ),
            "can_provide_feedback": True,
        })

    def find_improvement(self, query: str, firm_id: Optional[str] = None) -> Optional[ImprovementMatch]:
        pattern = generate_question_pattern(query)
        db = self.session_factory()
        try:
            improvement = None
            firm_specific = False
            if firm_id:
                improvement = self._find_firm_improvement(db, pattern, firm_id)
                firm_specific = improvement is not None

            if improvement is None:
                improvement = self._find_global_improvement(db, pattern)

            if improvement is None:
                return None

            improvement.usage_count = (improvement.usage_count or 0) + 1
            improvement.last_used = datetime.now(timezone.utc)
            db.commit()

            return ImprovementMatch(
                improved_answer=improvement.improved_answer,
                legal_references=list(improvement.legal_references or []),
                verification_level=improvement.verification_level,
                verification_date=as_utc(improvement.verification_date),
                firm_specific=firm_specific,
            )
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _find_firm_improvement(
        self, db: Session, pattern: str, firm_id: str
    ) -> Optional[AnswerImprovement]:
        candidates = db.query(AnswerImprovement).join(
            LawyerFeedback, AnswerImprovement.feedback_id == LawyerFeedback.id
        ).filter(
            LawyerFeedback.law_firm_id == firm_id,
            AnswerImprovement.is_active.is_(True)
        ).order_by(
            AnswerImprovement.created_at.desc(), AnswerImprovement.id.desc()
        ).all()

        for improvement in candidates:
            if patterns_match(improvement.question_pattern, pattern):
                return improvement
        return None

    def _find_global_improvement(self, db: Session, pattern: str) -> Optional[AnswerImprovement]:
        candidates = db.query(AnswerImprovement).filter(
            AnswerImprovement.is_active.is_(True)
        ).order_by(
            AnswerImprovement.usage_count.desc(), AnswerImprovement.id.desc()
        ).all()

        for improvement in candidates:
            if patterns_match(improvement.question_pattern, pattern):
                return improvement
        return None
