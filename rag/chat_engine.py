"""
rag/chat_engine.py
==================

Remote generative-AI consultation via OpenAI chat completions.

This is the optional half of the consultation pipeline. It never raises to
its caller: every call comes back as either RemoteOk (the model's text) or
RemoteErr (why it didn't work), and the caller decides what to do next.
There is no retry - a failed call is reported once and the orchestrator
falls back to the local answer.

Usage:
    from rag.chat_engine import ConsultationChatEngine

    engine = ConsultationChatEngine()
    if engine.is_configured():
        result = await engine.complete("I can't sleep", history=[])
        if result.ok:
            print(result.text)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from openai import AsyncOpenAI

from config import LLM_MAX_TOKENS, LLM_MODEL, LLM_TEMPERATURE, OPENAI_API_KEY

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

REASON_UNAVAILABLE = "unavailable"
REASON_CALL_FAILED = "call_failed"


@dataclass(frozen=True)
class RemoteOk:
    """The remote model answered."""
    text: str
    ok = True


@dataclass(frozen=True)
class RemoteErr:
    """
    The remote model could not answer.

    Attributes:
        reason: "unavailable" (no credentials) or "call_failed"
        detail: Human-readable cause, for logs only
    """
    reason: str
    detail: str = ""
    ok = False


RemoteResult = Union[RemoteOk, RemoteErr]


# =============================================================================
# PROMPTS
# =============================================================================

SYSTEM_PROMPT = """You are a knowledgeable and compassionate Ayurvedic practitioner (Vaidya) providing health consultations based on ancient Ayurvedic wisdom from texts like Charaka Samhita, Sushruta Samhita, and Ashtanga Hridaya.

{dosha_context}

Guidelines:
1. Provide advice rooted in authentic Ayurvedic principles
2. Reference classical texts when appropriate
3. Consider the three doshas (Vata, Pitta, Kapha) in your recommendations
4. Suggest dietary changes, lifestyle modifications, herbs, and daily routines (Dinacharya)
5. Be warm, supportive, and use simple language
6. Always remind users that your advice is educational and not a substitute for medical care
7. If the condition seems serious, recommend consulting a healthcare professional
8. Use Ayurvedic terms but explain them in simple English

Format your responses with clear structure using **bold** for headings and bullet points for lists."""

DOSHA_CONTEXT_TEMPLATE = (
    "The user's dominant dosha is {dosha}. "
    "Consider this when providing recommendations."
)


def build_system_prompt(profile_hint: Optional[str] = None) -> str:
    dosha_context = DOSHA_CONTEXT_TEMPLATE.format(dosha=profile_hint) if profile_hint else ""
    return SYSTEM_PROMPT.format(dosha_context=dosha_context)


def build_messages(
    query: str,
    history: list[dict],
    profile_hint: Optional[str] = None,
) -> list[dict]:
    """
    Build the chat-completion message list.

    Args:
        query: The user's current message
        history: Prior turns as {"role", "content"} dicts, oldest first
        profile_hint: Optional dominant dosha from the user's assessment

    Returns:
        list[dict]: [system, *history, user]
    """
    messages = [{"role": "system", "content": build_system_prompt(profile_hint)}]
    for msg in history:
        messages.append({"role": msg["role"], "content": msg["content"]})
    messages.append({"role": "user", "content": query})
    return messages


# =============================================================================
# CHAT ENGINE CLASS
# =============================================================================

class ConsultationChatEngine:
    """
    OpenAI-backed consultation client.

    The API key is read from config (OPENAI_API_KEY) unless one is passed in.
    The underlying client is created lazily on first use.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = LLM_MODEL,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
    ):
        self._api_key = OPENAI_API_KEY if api_key is None else api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client. Retries are disabled."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
        return self._client

    def is_configured(self) -> bool:
        """Check if an OpenAI API key is configured."""
        return bool(self._api_key)

    async def complete(
        self,
        query: str,
        history: list[dict],
        profile_hint: Optional[str] = None,
    ) -> RemoteResult:
        """
        Ask the remote model for a consultation answer.

        Never raises: auth, network and malformed-response problems all come
        back as RemoteErr.
        """
        if not self.is_configured():
            return RemoteErr(REASON_UNAVAILABLE, "OPENAI_API_KEY not set")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(query, history, profile_hint),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            text = response.choices[0].message.content
        except Exception as e:
            logger.warning("Remote consultation call failed: %s", type(e).__name__)
            return RemoteErr(REASON_CALL_FAILED, f"{type(e).__name__}: {e}")

        if not isinstance(text, str) or not text.strip():
            return RemoteErr(REASON_CALL_FAILED, "empty or malformed completion")

        return RemoteOk(text)
