from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

class CaseType(str, Enum):
    COMMERCIAL = "commercial"
    CIVIL = "civil"
    CRIMINAL = "criminal"
    LABOR = "labor"
    FAMILY = "family"
    REAL_ESTATE = "real_estate"
    INTELLECTUAL_PROPERTY = "intellectual_property"
    ADMINISTRATIVE = "administrative"
    CYBER_CRIME = "cyber_crime"
    INHERITANCE = "inheritance"

class Language(str, Enum):
    EN = "en"
    AR = "ar"
    BOTH = "both"

class VerificationLevel(str, Enum):
    UNVERIFIED = "unverified"
    LAWYER_VERIFIED = "lawyer_verified"
    EXPERT_VERIFIED = "expert_verified"

# Consultation Schemas
class ConsultationRequest(BaseModel):
    query: str = Field(..., min_length=10, max_length=1000)
    case_type: Optional[CaseType] = None
    context: Optional[str] = Field(default=None, max_length=500)
    language: Language = Language.AR
    include_references: bool = True

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

class LegalReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    article: str
    law: str
    source: str
    relevance_score: float = Field(..., ge=0.0, le=1.0)

class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    issues: List[str]
    confidence: float
    recommendations: List[str]

class FirmContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    specializations: List[str] = Field(default_factory=list)
    success_patterns: str = ""
    preferred_approaches: str = ""

class LawyerPreferences(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    preferred_language: Language = Language.BOTH
    response_style: Optional[str] = "formal"
    detail_level: Optional[str] = "standard"
    specializations: List[str] = Field(default_factory=list)
    risk_tolerance: Optional[str] = "medium"
    client_communication_style: Optional[str] = "formal"
    include_examples: bool = True
    include_citations: bool = True

    @field_validator("specializations", mode="before")
    @classmethod
    def default_specializations(cls, value):
        return value or []

class ConsultationResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    answer: str
    confidence: float = Field(..., ge=0.0, le=0.95)
    references: List[LegalReference]
    suggestions: List[str]
    success_probability: float = Field(..., ge=0.0, le=0.95)
    validation: ValidationResult
    disclaimers: List[str] = Field(..., min_length=1)
    last_updated: str
    verification_level: Optional[VerificationLevel] = None
    can_provide_feedback: bool = False

class ConsultationEnvelope(BaseModel):
    success: bool = True
    data: ConsultationResponse
    message: str

# Feedback Schemas
class FeedbackType(str, Enum):
    INACCURATE = "inaccurate"
    INCOMPLETE = "incomplete"
    OUTDATED = "outdated"
    WRONG_JURISDICTION = "wrong_jurisdiction"
    MISSING_PROCEDURE = "missing_procedure"
    INCORRECT_REFERENCE = "incorrect_reference"
    PERFECT = "perfect"

class FeedbackStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    IMPLEMENTED = "implemented"

class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class ImprovementVerification(str, Enum):
    ADMIN_CORRECTED = "admin_corrected"
    LAWYER_VERIFIED = "lawyer_verified"

class FeedbackCreate(BaseModel):
    consultation_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    feedback_type: FeedbackType
    comment: Optional[str] = Field(default=None, max_length=1000)
    improvement_suggestion: Optional[str] = Field(default=None, max_length=1000)
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    original_query: str = Field(..., min_length=1)
    original_answer: str = Field(..., min_length=1)

class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    consultation_id: str
    user_id: Optional[str]
    law_firm_id: Optional[str]
    rating: int
    feedback_type: FeedbackType
    urgency_level: UrgencyLevel
    status: FeedbackStatus
    created_at: datetime

class ImprovementCreate(BaseModel):
    improved_answer: str = Field(..., min_length=1)
    legal_references: List[str] = Field(default_factory=list)
    verification_level: ImprovementVerification
    verified_by: Optional[str] = None

class ImprovementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    feedback_id: int
    improved_answer: str
    legal_references: List[str]
    verification_level: ImprovementVerification
    question_pattern: str
    is_active: bool
    created_at: datetime

# Health Check Schema
class HealthCheck(BaseModel):
    status: str
    timestamp: datetime
    version: str
    services: dict
