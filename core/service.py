"""
core/service.py - Consultation Orchestrator
============================================

This module provides the main API for the consultation engine. The UI (or
the FastAPI backend) should ONLY call `ConsultationService.submit_query()`.

For every user turn:
1. Append the user's message to the session history
2. Search the local corpora and rank the results (always, no failure mode)
3. If the remote model is configured, ask it for an answer
4. If it isn't configured, or the call fails, build the answer locally
   from the ranked results instead
5. Attach the ranked results as sources either way and append the answer

Citations never come from the remote model. They are always the local
search results for the raw query, so every answer can be checked against
the bundled texts whichever path wrote the prose.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from config import TOP_K_RESULTS
from core.corpus import CorpusStore, load_corpus
from core.fusion import search_knowledge_base
from core.history import ConsultationSession
from core.models import Message, Role, SearchResult
from core.synthesizer import synthesize_response
from rag.chat_engine import (
    REASON_CALL_FAILED,
    REASON_UNAVAILABLE,
    ConsultationChatEngine,
    RemoteErr,
    RemoteResult,
)

logger = logging.getLogger(__name__)


# =============================================================================
# STATE
# =============================================================================

class ConsultationState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    REMOTE_ATTEMPT = "remote_attempt"
    REMOTE_SUCCESS = "remote_success"
    REMOTE_FAILURE = "remote_failure"
    LOCAL_FALLBACK = "local_fallback"
    COMPLETED = "completed"


PATH_REMOTE = "remote"
PATH_LOCAL = "local"


class ConsultationBusyError(RuntimeError):
    """A query was submitted while the previous one was still in flight."""


class RemoteConsultant(Protocol):
    """What the orchestrator needs from a remote model client."""

    def is_configured(self) -> bool: ...

    async def complete(
        self,
        query: str,
        history: list[dict],
        profile_hint: Optional[str] = None,
    ) -> RemoteResult: ...


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class ConsultationService:
    """
    Per-turn state machine for consultations.

    States for one turn:
        IDLE -> DISPATCHING -> [REMOTE_ATTEMPT -> REMOTE_SUCCESS | REMOTE_FAILURE]
             -> [LOCAL_FALLBACK] -> COMPLETED

    Attributes:
        state: Current state
        last_transitions: States visited during the most recent turn
        last_path: "remote" or "local" - which path wrote the last answer
    """

    def __init__(
        self,
        corpus: Optional[CorpusStore] = None,
        remote: Optional[RemoteConsultant] = None,
        top_k: int = TOP_K_RESULTS,
    ):
        self.corpus = corpus if corpus is not None else load_corpus()
        self.remote = remote
        self.top_k = top_k
        self.state = ConsultationState.IDLE
        self.last_transitions: list[ConsultationState] = []
        self.last_path: Optional[str] = None

    def _enter(self, state: ConsultationState) -> None:
        self.state = state
        self.last_transitions.append(state)

    def search(self, query: str) -> list[SearchResult]:
        """Ranked local citations for a query."""
        return search_knowledge_base(query, self.corpus, top_k=self.top_k)

    def remote_configured(self) -> bool:
        if self.remote is None:
            return False
        try:
            return bool(self.remote.is_configured())
        except Exception as e:
            logger.warning("Remote capability check failed: %s", e)
            return False

    async def _call_remote(
        self,
        query: str,
        history: list[dict],
        profile_hint: Optional[str],
    ) -> RemoteResult:
        try:
            return await self.remote.complete(query, history, profile_hint)
        except Exception as e:
            # Clients are expected to return RemoteErr, but don't trust that
            return RemoteErr(REASON_CALL_FAILED, f"{type(e).__name__}: {e}")

    async def submit_query(
        self,
        text: str,
        session: ConsultationSession,
        profile_hint: Optional[str] = None,
    ) -> Message:
        """
        Process one user turn and return the assistant's reply.

        Args:
            text: The user's raw complaint or question
            session: The session's history; both messages are appended to it
            profile_hint: Optional dominant dosha, passed to the remote model only

        Returns:
            Message: The assistant reply, with ranked local sources attached

        Raises:
            ConsultationBusyError: If a turn is already in progress
        """
        query = text.strip()
        if self.state not in (ConsultationState.IDLE, ConsultationState.COMPLETED):
            raise ConsultationBusyError(f"Consultation in progress ({self.state.value})")

        self.last_transitions = []
        self.last_path = None

        try:
            session.append(Message(role=Role.USER, text=query))
            self._enter(ConsultationState.DISPATCHING)

            sources = self.search(query)
            logger.debug("Local search returned %d sources", len(sources))

            answer: Optional[str] = None
            if self.remote_configured():
                self._enter(ConsultationState.REMOTE_ATTEMPT)
                result = await self._call_remote(
                    query,
                    session.remote_history(exclude_last=1),
                    profile_hint,
                )
                if result.ok:
                    self._enter(ConsultationState.REMOTE_SUCCESS)
                    answer = result.text
                    self.last_path = PATH_REMOTE
                else:
                    self._enter(ConsultationState.REMOTE_FAILURE)
                    logger.warning(
                        "Remote consultation failed (%s), using local answer: %s",
                        result.reason,
                        result.detail,
                    )
            else:
                logger.debug("Remote consultation %s, using local answer", REASON_UNAVAILABLE)

            if answer is None:
                self._enter(ConsultationState.LOCAL_FALLBACK)
                answer = synthesize_response(sources)
                self.last_path = PATH_LOCAL

            message = Message(role=Role.ASSISTANT, text=answer, sources=list(sources))
            session.append(message)
            self._enter(ConsultationState.COMPLETED)
            return message
        finally:
            if self.state is not ConsultationState.COMPLETED:
                self.state = ConsultationState.IDLE


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

# Global service instance for simple usage
_service: Optional[ConsultationService] = None


def get_service() -> ConsultationService:
    """Get or create the default service (bundled corpus + OpenAI client)."""
    global _service
    if _service is None:
        _service = ConsultationService(remote=ConsultationChatEngine())
    return _service
