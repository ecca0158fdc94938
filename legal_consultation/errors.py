"""Error taxonomy for the consultation engine."""

from typing import Any, Dict, List, Optional


class ConsultationError(Exception):
    """Base class for consultation failures."""


class ValidationError(ConsultationError):
    """The consultation request violates a shape constraint.

    Raised before any external call is made and never retried.
    """

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class GenerationFailure(ConsultationError):
    """The generative backend was unreachable, timed out or returned an error."""


class EnhancementFailure(ConsultationError):
    """The response enhancer failed after a successful generation."""


class PreferenceLookupFailure(ConsultationError):
    """The lawyer preference store could not be read."""
