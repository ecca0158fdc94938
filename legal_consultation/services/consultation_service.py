import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from ..config import settings
from ..errors import EnhancementFailure, GenerationFailure, ValidationError
from ..models.schemas import (
    ConsultationRequest, ConsultationResponse, FirmContext, LawyerPreferences
)
from .claude_client import ResponseGenerator
from .context_composer import ContextComposer
from .enhancer import ResponseEnhancer
from .firm_context import FirmContextCache
from .lawyer_preferences import LawyerPreferenceResolver
from .reference_store import ReferenceStore, category_for
from .response_validator import ResponseValidator
from .scoring import ConfidenceScorer, SuccessEstimator, SuggestionEngine

logger = logging.getLogger(__name__)

LEGAL_DISCLAIMERS = [
    "This is general legal information, not specific legal advice",
    "Always consult with a qualified Saudi lawyer for specific cases",
    "Laws may have changed since last update",
    "Court interpretations may vary",
    "This information is for educational purposes only",
]

REQUEST_ERROR_MESSAGES = {
    ("query", "missing"): "Query is required",
    ("query", "string_type"): "Query is required",
    ("query", "string_too_short"): "Query must be at least 10 characters long",
    ("query", "string_too_long"): "Query cannot exceed 1000 characters",
    ("case_type", "enum"): "Invalid case type provided",
    ("context", "string_too_long"): "Context cannot exceed 500 characters",
    ("language", "enum"): "Language must be en, ar, or both",
}

def parse_consultation_request(payload: Any) -> ConsultationRequest:
    """Validate a raw request body into a ConsultationRequest."""
    try:
        return ConsultationRequest.model_validate(payload)
    except SchemaValidationError as e:
        details = []
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "body"
            message = REQUEST_ERROR_MESSAGES.get((field, error["type"]), error["msg"])
            details.append({"field": field, "message": message})
        raise ValidationError(details[0]["message"], details) from e

class ConsultationService:
    """Answers a legal query with cited, scored and enhanced advice.

    Pipeline: reference retrieval, firm and lawyer context (fetched
    concurrently, both optional), prompt composition, generation,
    validation, scoring and finally the response enhancer. Generation and
    enhancement failures are fatal; context lookups are best-effort.
    """

    def __init__(
        self,
        reference_store: ReferenceStore,
        generator: ResponseGenerator,
        enhancer: ResponseEnhancer,
        firm_cache: Optional[FirmContextCache] = None,
        preference_resolver: Optional[LawyerPreferenceResolver] = None,
        composer: Optional[ContextComposer] = None,
        validator: Optional[ResponseValidator] = None,
        confidence_scorer: Optional[ConfidenceScorer] = None,
        success_estimator: Optional[SuccessEstimator] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        max_references: Optional[int] = None,
        enhancement_timeout: Optional[float] = None
    ):
        self.reference_store = reference_store
        self.generator = generator
        self.enhancer = enhancer
        self.firm_cache = firm_cache
        self.preference_resolver = preference_resolver
        self.composer = composer or ContextComposer()
        self.validator = validator or ResponseValidator()
        self.confidence_scorer = confidence_scorer or ConfidenceScorer()
        self.success_estimator = success_estimator or SuccessEstimator()
        self.suggestion_engine = suggestion_engine or SuggestionEngine()
        self.max_references = (
            max_references if max_references is not None else settings.max_references
        )
        self.enhancement_timeout = (
            enhancement_timeout if enhancement_timeout is not None else settings.enhancement_timeout
        )

    async def process_consultation(
        self,
        request: Union[ConsultationRequest, Mapping[str, Any]],
        firm_id: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> ConsultationResponse:
        if not isinstance(request, ConsultationRequest):
            request = parse_consultation_request(request)

        case_type = request.case_type.value if request.case_type else None
        logger.info(
            f"Processing AI consultation (case_type={case_type}, language={request.language.value}, "
            f"firm={firm_id}, user={user_id})"
        )

        category = category_for(request.case_type) if request.case_type else None
        references = self.reference_store.find_relevant(
            request.query, category, max_results=self.max_references
        )

        firm_context, lawyer_prefs = await asyncio.gather(
            self._get_firm_context(firm_id),
            self._get_lawyer_preferences(user_id)
        )

        prompt = self.composer.compose(request, references, firm_context, lawyer_prefs)
        answer = await self._generate(prompt, request.query)

        validation = self.validator.validate(answer, references)
        response = ConsultationResponse(
            id=str(uuid.uuid4()),
            answer=answer,
            confidence=self.confidence_scorer.score(references, answer, validation),
            references=references if request.include_references else [],
            suggestions=self.suggestion_engine.suggest(request.case_type),
            success_probability=self.success_estimator.estimate(references, request.case_type),
            validation=validation,
            disclaimers=list(LEGAL_DISCLAIMERS),
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

        enhanced = await self._enhance(response, request.query, firm_id)
        # Verified improvements carry their own references
        if not request.include_references and enhanced.references:
            enhanced = enhanced.model_copy(update={"references": []})
        logger.info(
            f"AI consultation {enhanced.id} completed (confidence={enhanced.confidence}, "
            f"references={len(enhanced.references)})"
        )
        return enhanced

    async def _get_firm_context(self, firm_id: Optional[str]) -> Optional[FirmContext]:
        if not firm_id or self.firm_cache is None:
            return None
        try:
            return await asyncio.to_thread(self.firm_cache.get, firm_id)
        except Exception as e:
            logger.error(f"Error loading firm context for {firm_id}: {str(e)}")
            return None

    async def _get_lawyer_preferences(self, user_id: Optional[str]) -> Optional[LawyerPreferences]:
        if not user_id or self.preference_resolver is None:
            return None
        return await self.preference_resolver.resolve(user_id)

    async def _generate(self, prompt: str, query: str) -> str:
        try:
            return await self.generator.generate(prompt, query)
        except GenerationFailure:
            raise
        except Exception as e:
            logger.error(f"Error generating AI response: {str(e)}")
            raise GenerationFailure("Failed to generate AI response") from e

    async def _enhance(
        self,
        response: ConsultationResponse,
        query: str,
        firm_id: Optional[str]
    ) -> ConsultationResponse:
        try:
            enhanced = await asyncio.wait_for(
                self.enhancer.enhance(response, query, firm_id),
                timeout=self.enhancement_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Response enhancement timed out for consultation {response.id}")
            raise EnhancementFailure("Timed out enhancing AI response") from e
        except Exception as e:
            logger.error(f"Error enhancing consultation {response.id}: {str(e)}")
            raise EnhancementFailure("Failed to enhance AI response") from e

        if not isinstance(enhanced, ConsultationResponse):
            raise EnhancementFailure("Enhancer returned an invalid response")
        return enhanced
