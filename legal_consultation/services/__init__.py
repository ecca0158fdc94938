from .claude_client import ClaudeClient, ResponseGenerator
from .consultation_service import ConsultationService, parse_consultation_request
from .context_composer import ContextComposer
from .enhancer import FeedbackEnhancer, PassThroughEnhancer, ResponseEnhancer
from .firm_context import FirmContextCache, SQLAlchemyFirmContextLoader
from .lawyer_preferences import LawyerPreferenceResolver, SQLAlchemyPreferenceStore
from .reference_store import ReferenceStore

__all__ = [
    "ClaudeClient",
    "ResponseGenerator",
    "ConsultationService",
    "parse_consultation_request",
    "ContextComposer",
    "ResponseEnhancer",
    "PassThroughEnhancer",
    "FeedbackEnhancer",
    "FirmContextCache",
    "SQLAlchemyFirmContextLoader",
    "LawyerPreferenceResolver",
    "SQLAlchemyPreferenceStore",
    "ReferenceStore"
]
