import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ..models.database import AnswerImprovement, LawyerFeedback
from ..models.schemas import FeedbackCreate, FeedbackStatus, ImprovementCreate, UrgencyLevel
from .enhancer import generate_question_pattern

logger = logging.getLogger(__name__)

def submit_feedback(
    db: Session,
    feedback_data: FeedbackCreate,
    user_id: Optional[str] = None,
    law_firm_id: Optional[str] = None
) -> LawyerFeedback:
    """Record a lawyer's rating of a consultation answer."""
    try:
        feedback = LawyerFeedback(
            consultation_id=feedback_data.consultation_id,
            user_id=user_id,
            law_firm_id=law_firm_id,
            rating=feedback_data.rating,
            feedback_type=feedback_data.feedback_type.value,
            comment=feedback_data.comment,
            improvement_suggestion=feedback_data.improvement_suggestion,
            urgency_level=feedback_data.urgency_level.value,
            original_query=feedback_data.original_query,
            original_answer=feedback_data.original_answer,
            status=FeedbackStatus.PENDING.value
        )

        db.add(feedback)
        db.commit()
        db.refresh(feedback)

        if feedback_data.urgency_level in (UrgencyLevel.HIGH, UrgencyLevel.CRITICAL):
            logger.warning(
                f"High priority feedback received: {feedback.urgency_level} - {feedback.id}"
            )

        logger.info(f"Stored feedback {feedback.id} for consultation {feedback.consultation_id}")
        return feedback

    except Exception as e:
        logger.error(f"Error storing feedback for {feedback_data.consultation_id}: {str(e)}")
        db.rollback()
        raise

def create_improvement(
    db: Session,
    feedback_id: int,
    improvement_data: ImprovementCreate
) -> AnswerImprovement:
    """Store a verified improved answer and mark its feedback implemented."""
    feedback = db.query(LawyerFeedback).filter(LawyerFeedback.id == feedback_id).first()
    if not feedback:
        raise LookupError(f"Feedback {feedback_id} not found")

    try:
        improvement = AnswerImprovement(
            feedback_id=feedback.id,
            original_answer=feedback.original_answer,
            improved_answer=improvement_data.improved_answer,
            legal_references=list(improvement_data.legal_references),
            verification_level=improvement_data.verification_level.value,
            verified_by=improvement_data.verified_by,
            verification_date=datetime.now(timezone.utc),
            question_pattern=generate_question_pattern(feedback.original_query),
            is_active=True,
            usage_count=0
        )
        db.add(improvement)

        feedback.status = FeedbackStatus.IMPLEMENTED.value
        db.commit()
        db.refresh(improvement)

        logger.info(f"Created improvement {improvement.id} from feedback {feedback_id}")
        return improvement

    except Exception as e:
        logger.error(f"Error creating improvement for feedback {feedback_id}: {str(e)}")
        db.rollback()
        raise
