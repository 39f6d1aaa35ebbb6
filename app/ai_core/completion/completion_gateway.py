"""
Completion Gateway Module

Forwards a validated user prompt to the hosted chat-completion API and returns
the generated text. No retries: failures are surfaced to the caller at once.
"""

import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.ai_core.prompts import ASSISTANT_SYSTEM_PROMPT
from app.config import Settings
from app.services.errors import (
    EmptyResponseFailure,
    GatewayFailure,
    ValidationFailure,
)
from app.utils import validate_question

logger = logging.getLogger(__name__)


class CompletionGateway:
    """
    Asks the assistant model a single question.
    """

    def __init__(self, settings: Settings, llm: Optional[Any] = None):
        """
        Initialize the gateway.

        Args:
            settings: Application settings (API key, model, sampling parameters)
            llm: Optional pre-built chat model; built from settings when omitted
        """
        self.model = settings.openai_model
        self.temperature = settings.temperature
        self.max_tokens = settings.max_tokens

        if llm is None:
            llm = ChatOpenAI(
                model=settings.openai_model,
                api_key=settings.openai_api_key,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
                max_retries=0,
            )
        self.llm = llm

    async def ask(self, prompt: Any) -> str:
        """
        Send a prompt to the assistant model.

        Args:
            prompt: The user's question (non-empty, at most 2000 characters)

        Returns:
            The generated answer text

        Raises:
            ValidationFailure: If the prompt is empty, too long or not text
            EmptyResponseFailure: If the model returned no usable text
            GatewayFailure: If the API call itself failed
        """
        is_valid, message = validate_question(prompt)
        if not is_valid:
            raise ValidationFailure(message)

        messages = [
            SystemMessage(content=ASSISTANT_SYSTEM_PROMPT),
            HumanMessage(content=prompt.strip()),
        ]

        try:
            logger.info(
                f"Asking assistant (model={self.model}, prompt_length={len(prompt)})"
            )
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Completion API call failed: {e}")
            raise GatewayFailure(str(e) or "Completion API call failed") from e

        answer = self._extract_text(response)
        if not answer:
            logger.warning("Completion API returned no usable text")
            raise EmptyResponseFailure("No response from AI assistant")

        logger.info(f"Assistant answered ({len(answer)} characters)")
        return answer

    @staticmethod
    def _extract_text(response: Any) -> str:
        """
        Pull plain text out of a chat model response.

        Content is either a string or a list of content blocks
        (strings or {"type": "text", "text": ...} dicts).
        """
        content = getattr(response, "content", None)

        if isinstance(content, str):
            return content.strip()

        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(block.get("text") or "")
            return "".join(parts).strip()

        return ""
