"""Reasoning capability: the single non-deterministic step, behind a narrow interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from job_spec_engine.config import LLM_TEMPERATURE, MODEL_NAME, OPENAI_API_KEY
from job_spec_engine.errors import ReasoningCallError
from job_spec_engine.utils.helpers import parse_llm_json
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)


class ReasoningCapability(ABC):
    """Turns fixed instructions plus a serialized profile into one JSON object."""

    @abstractmethod
    async def generate(self, instructions: str, user_message: str) -> Dict[str, Any]:
        """Return the parsed JSON object. Raise on transport or parse failure."""
        ...


class OpenAIReasoningCapability(ReasoningCapability):
    """OpenAI chat completions in JSON-object mode."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = MODEL_NAME,
        temperature: float = LLM_TEMPERATURE,
        client=None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._client = client

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(self, instructions: str, user_message: str) -> Dict[str, Any]:
        if not self._api_key and self._client is None:
            logger.error("OPENAI_API_KEY is not set; cannot generate search spec")
            raise ReasoningCallError("OPENAI_API_KEY is not set")

        response = await self._get_client().chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": user_message},
            ],
            temperature=self._temperature,
            response_format={"type": "json_object"},
        )
        choice = response.choices[0] if response.choices else None
        content: Optional[str] = choice.message.content if choice and choice.message else None
        if not content:
            raise ReasoningCallError("Model returned no output")
        parsed = parse_llm_json(content)
        if parsed is None:
            raise ReasoningCallError("Model output is not a JSON object")
        return parsed
