"""
Shared fixtures for the consultation engine tests.

No test talks to the Anthropic API: generation goes through fakes, and
persistence uses an in-memory SQLite database.
"""

import os

# Must be set before legal_consultation.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ANTHROPIC_API_KEY"] = "test-key"

import asyncio
from datetime import datetime, timezone

import pytest

from legal_consultation.database import SessionLocal, engine
from legal_consultation.models.database import Base
from legal_consultation.models.schemas import ConsultationResponse, ValidationResult
from legal_consultation.services.claude_client import ResponseGenerator
from legal_consultation.services.enhancer import PassThroughEnhancer, ResponseEnhancer
from legal_consultation.services.reference_store import ReferenceStore


SAUDI_ANSWER = (
    "Under the Saudi Labor Law (نظام العمل), article 5 grants every worker the right "
    "to a fair wage equal to that of colleagues doing the same work. An employer who "
    "pays less must justify the difference on objective grounds such as experience or "
    "qualifications. Workers may file a claim before the labor court after first "
    "attempting an amicable settlement through the Ministry of Human Resources. "
    "Keep copies of the employment contract, salary slips and any written "
    "correspondence, because the court will rely on documentary evidence when "
    "assessing the claim and calculating any wage differences owed to the worker."
)


class FakeGenerator(ResponseGenerator):
    """Records prompts and returns a canned answer (or raises)."""

    def __init__(self, answer=SAUDI_ANSWER, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def generate(self, prompt_text, user_query):
        self.calls.append((prompt_text, user_query))
        if self.error is not None:
            raise self.error
        return self.answer


class HangingGenerator(ResponseGenerator):
    def __init__(self):
        self.started = asyncio.Event()

    async def generate(self, prompt_text, user_query):
        self.started.set()
        await asyncio.Event().wait()


class RecordingEnhancer(ResponseEnhancer):
    def __init__(self):
        self.calls = []
        self._inner = PassThroughEnhancer()

    async def enhance(self, response, original_query, firm_id=None):
        self.calls.append((response, original_query, firm_id))
        return await self._inner.enhance(response, original_query, firm_id)


class FailingEnhancer(ResponseEnhancer):
    async def enhance(self, response, original_query, firm_id=None):
        raise RuntimeError("feedback store unavailable")


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def reference_store():
    return ReferenceStore.from_json()


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def recording_enhancer():
    return RecordingEnhancer()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_session_factory():
    """Fresh schema in the shared in-memory database."""
    Base.metadata.create_all(bind=engine)
    yield SessionLocal
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def base_response():
    return ConsultationResponse(
        id="consultation-1",
        answer="Original answer under Saudi law.",
        confidence=0.3,
        references=[],
        suggestions=["Review all relevant documentation"],
        success_probability=0.5,
        validation=ValidationResult(
            is_valid=True, issues=[], confidence=0.8, recommendations=[]
        ),
        disclaimers=["This is general legal information, not specific legal advice"],
        last_updated=datetime.now(timezone.utc).isoformat(),
    )
