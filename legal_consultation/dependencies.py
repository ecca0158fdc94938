"""Service instances shared by the route handlers."""

from fastapi import HTTPException
import logging
from typing import Optional

from .config import settings
from .database import SessionLocal
from .services import (
    ClaudeClient, ConsultationService, FeedbackEnhancer, FirmContextCache,
    LawyerPreferenceResolver, PassThroughEnhancer, ReferenceStore,
    SQLAlchemyFirmContextLoader, SQLAlchemyPreferenceStore
)

logger = logging.getLogger(__name__)

# Global service instances
reference_store: Optional[ReferenceStore] = None
consultation_service: Optional[ConsultationService] = None

def init_services():
    """Build the consultation pipeline once at startup."""
    global reference_store, consultation_service

    reference_store = ReferenceStore.from_json(settings.knowledge_base_path)

    if settings.enable_feedback_enhancer:
        enhancer = FeedbackEnhancer(SessionLocal)
    else:
        enhancer = PassThroughEnhancer()

    consultation_service = ConsultationService(
        reference_store=reference_store,
        generator=ClaudeClient(),
        enhancer=enhancer,
        firm_cache=FirmContextCache(
            loader=SQLAlchemyFirmContextLoader(SessionLocal),
            ttl_seconds=settings.firm_context_ttl_seconds
        ),
        preference_resolver=LawyerPreferenceResolver(SQLAlchemyPreferenceStore(SessionLocal))
    )
    logger.info(f"Consultation service ready ({type(enhancer).__name__})")

def get_consultation_service() -> ConsultationService:
    """Get consultation service instance."""
    if not consultation_service:
        raise HTTPException(status_code=503, detail="Consultation service not available")
    return consultation_service
