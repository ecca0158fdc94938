from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

class LawyerPreference(Base):
    __tablename__ = "lawyer_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    law_firm_id = Column(String(64), index=True, nullable=False)
    preferred_language = Column(String(8), default="both", nullable=False)
    response_style = Column(String(32), default="formal")
    detail_level = Column(String(32), default="standard")
    specializations = Column(JSON, default=list)  # e.g. ["commercial", "family"]
    risk_tolerance = Column(String(16), default="medium")
    client_communication_style = Column(String(32), default="formal")
    include_examples = Column(Boolean, default=True, nullable=False)
    include_citations = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

class LawyerFeedback(Base):
    __tablename__ = "lawyer_feedback"

    id = Column(Integer, primary_key=True, index=True)
    consultation_id = Column(String(64), index=True, nullable=False)
    user_id = Column(String(64), index=True)
    law_firm_id = Column(String(64), index=True)
    rating = Column(Integer, nullable=False)
    feedback_type = Column(String(32), nullable=False)
    comment = Column(Text)
    improvement_suggestion = Column(Text)
    urgency_level = Column(String(16), default="medium", nullable=False)
    original_query = Column(Text, nullable=False)
    original_answer = Column(Text, nullable=False)
    status = Column(String(32), default="pending", nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    improvements = relationship("AnswerImprovement", back_populates="feedback")

class AnswerImprovement(Base):
    __tablename__ = "answer_improvements"

    id = Column(Integer, primary_key=True, index=True)
    feedback_id = Column(Integer, ForeignKey("lawyer_feedback.id"), index=True, nullable=False)
    original_answer = Column(Text, nullable=False)
    improved_answer = Column(Text, nullable=False)
    legal_references = Column(JSON, default=list)
    verification_level = Column(String(32), nullable=False)  # admin_corrected / lawyer_verified
    verified_by = Column(String(64))
    verification_date = Column(DateTime(timezone=True))
    question_pattern = Column(Text, index=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    usage_count = Column(Integer, default=0, nullable=False)
    last_used = Column(DateTime(timezone=True))
    created_at = Column(DateTime, default=func.now())

    # Relationships
    feedback = relationship("LawyerFeedback", back_populates="improvements")
