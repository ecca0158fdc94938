import asyncio
import logging
from typing import Optional

import anthropic
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from ..config import settings
from ..errors import GenerationFailure

logger = logging.getLogger(__name__)

EMPTY_ANSWER_FALLBACK = "I apologize, but I could not generate a response."

class ResponseGenerator:
    """Produces an answer for a user query under a composed system prompt.

    Implementations raise GenerationFailure on any backend error.
    """

    async def generate(self, prompt_text: str, user_query: str) -> str:
        raise NotImplementedError

class ClaudeClient(ResponseGenerator):
    """Generates consultation answers from a composed system prompt.

    Calls are not retried; errors and timeouts surface as GenerationFailure.
    """

    def __init__(self, llm: Optional[BaseChatModel] = None, timeout: Optional[float] = None):
        self.llm = llm if llm is not None else self._create_anthropic_llm()
        self.timeout = timeout if timeout is not None else settings.generation_timeout
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", "{context}"),
            ("human", "{query}")
        ])
        self.chain = self.prompt | self.llm | StrOutputParser()

    def _create_anthropic_llm(self) -> ChatAnthropic:
        return ChatAnthropic(
            model=settings.claude_model,
            anthropic_api_key=settings.anthropic_api_key,
            max_tokens=settings.generation_max_tokens,
            temperature=settings.generation_temperature,
            default_request_timeout=settings.generation_timeout,
            max_retries=0
        )

    async def generate(self, prompt_text: str, user_query: str) -> str:
        try:
            answer = await asyncio.wait_for(
                self.chain.ainvoke({"context": prompt_text, "query": user_query}),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Claude request timed out after {self.timeout}s")
            raise GenerationFailure("Timed out generating AI response") from e
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {str(e)}")
            raise GenerationFailure("Failed to generate AI response") from e
        except Exception as e:
            logger.error(f"Error generating AI response: {str(e)}")
            raise GenerationFailure("Failed to generate AI response") from e

        return answer.strip() or EMPTY_ANSWER_FALLBACK
