from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..database import get_db
from ..dependencies import get_consultation_service
from ..errors import EnhancementFailure, GenerationFailure, ValidationError
from ..models.schemas import (
    ConsultationEnvelope, ConsultationRequest, FeedbackCreate, FeedbackResponse,
    ImprovementCreate, ImprovementResponse
)
from ..services import ConsultationService
from ..services.feedback import create_improvement, submit_feedback

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI Consultation"])

@router.post("/consultation", response_model=ConsultationEnvelope)
async def create_consultation(
    consultation_request: ConsultationRequest,
    x_law_firm_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    service: ConsultationService = Depends(get_consultation_service)
):
    """Get an AI legal consultation."""
    try:
        response = await service.process_consultation(
            consultation_request,
            firm_id=x_law_firm_id,
            user_id=x_user_id
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except (GenerationFailure, EnhancementFailure) as e:
        logger.error(f"AI consultation error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process consultation"
        )

    return ConsultationEnvelope(
        data=response,
        message="Consultation completed successfully"
    )

@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    feedback_data: FeedbackCreate,
    x_law_firm_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db)
):
    """Submit a lawyer's feedback on a consultation answer."""
    try:
        return submit_feedback(db, feedback_data, user_id=x_user_id, law_firm_id=x_law_firm_id)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store feedback"
        )

@router.post(
    "/feedback/{feedback_id}/improvements",
    response_model=ImprovementResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_feedback_improvement(
    feedback_id: int,
    improvement_data: ImprovementCreate,
    db: Session = Depends(get_db)
):
    """Record a verified improved answer for a feedback item."""
    try:
        return create_improvement(db, feedback_id, improvement_data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store improvement"
        )
