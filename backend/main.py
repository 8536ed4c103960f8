"""
backend/main.py
===============

FastAPI backend for the NayaVed consultation engine.

Provides REST API endpoints for the consultation screen:
- POST /consultation - Send a complaint and get an answer with sources
- GET /search - Ranked sources only, no answer text
- GET /suggestions - Example complaints for quick-start buttons
- GET /health - Health check endpoint

Run with:
    uvicorn backend.main:app --reload --port 8000
"""

import logging
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(PROJECT_ROOT / ".env")

from config import LOG_LEVEL, MAX_SESSIONS, SUGGESTED_QUERIES
from core.corpus import load_corpus
from core.history import ConsultationSession
from core.service import ConsultationBusyError, ConsultationService
from rag.chat_engine import ConsultationChatEngine

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class ConsultationRequest(BaseModel):
    """Request model for consultation endpoint."""
    message: str = Field(..., min_length=1, max_length=2000, description="User's complaint or question")
    session_id: Optional[str] = Field(None, description="Session to continue; omit to start a new one")
    profile_hint: Optional[str] = Field(None, max_length=20, description="Dominant dosha from the user's assessment")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class Source(BaseModel):
    """Source citation model."""
    kind: str = Field(..., description="'article', 'remedy', 'text' or 'dosha'")
    id: str
    title: str
    excerpt: str
    relevance: int
    citation: Optional[str] = None


class MessageModel(BaseModel):
    id: str
    role: str
    text: str
    timestamp: str
    sources: list[Source] = Field(default_factory=list)


class ConsultationResponse(BaseModel):
    """Response model for consultation endpoint."""
    session_id: str
    message: MessageModel


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    corpus_loaded: bool
    remote_configured: bool
    corpus: Optional[dict] = None


# =============================================================================
# FASTAPI APP
# =============================================================================

app = FastAPI(
    title="NayaVed Consultation API",
    description="Ayurvedic consultation engine with cited answers",
    version="1.0.0",
)

# CORS configuration
ALLOWED_ORIGINS = [
    "http://localhost:8081",      # Expo dev server
    "http://127.0.0.1:8081",
    "https://nayaved.app",
    "https://www.nayaved.app",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# One (history, orchestrator) pair per session, in process memory only.
# Ordered by last use, capped at MAX_SESSIONS.
_sessions: "OrderedDict[str, tuple[ConsultationSession, ConsultationService]]" = OrderedDict()
_remote: Optional[ConsultationChatEngine] = None


def get_remote() -> ConsultationChatEngine:
    """Get or create the shared remote client."""
    global _remote
    if _remote is None:
        _remote = ConsultationChatEngine()
    return _remote


def get_session(session_id: Optional[str]) -> tuple[str, ConsultationSession, ConsultationService]:
    """
    Look up a session, or start a new one if the id is missing or unknown.

    New sessions always get a server-generated id. When the map is full the
    least recently used session is dropped.
    """
    if session_id and session_id in _sessions:
        _sessions.move_to_end(session_id)
        session, service = _sessions[session_id]
        return session_id, session, service

    session_id = uuid4().hex
    session = ConsultationSession()
    service = ConsultationService(corpus=load_corpus(), remote=get_remote())
    _sessions[session_id] = (session, service)
    while len(_sessions) > MAX_SESSIONS:
        evicted, _ = _sessions.popitem(last=False)
        logger.info("Session limit reached, dropped session %s", evicted)
    return session_id, session, service


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """
    Health check endpoint.

    Returns the corpus loading state and whether the remote model is set up.
    Without a remote model the API still answers, using local templates.
    """
    remote_configured = get_remote().is_configured()
    try:
        stats = load_corpus().stats()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Corpus failed to load: %s", e)
        return HealthResponse(
            status="unhealthy",
            corpus_loaded=False,
            remote_configured=remote_configured,
        )

    return HealthResponse(
        status="healthy" if remote_configured else "degraded",
        corpus_loaded=True,
        remote_configured=remote_configured,
        corpus=stats,
    )


@app.post("/consultation", response_model=ConsultationResponse, tags=["Consultation"])
async def consultation(request: ConsultationRequest):
    """
    Send a complaint and get an answer with sources.

    The sources are always the local search results for the message,
    whether the answer text came from the remote model or the local
    templates. Pass the returned session_id back to continue the chat.
    """
    try:
        session_id, session, service = get_session(request.session_id)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Corpus failed to load: %s", e)
        raise HTTPException(status_code=503, detail="Knowledge base not available.")

    try:
        message = await service.submit_query(
            request.message,
            session,
            profile_hint=request.profile_hint,
        )
    except ConsultationBusyError:
        raise HTTPException(
            status_code=409,
            detail="A consultation is already in progress for this session.",
        )
    
    return ConsultationResponse(session_id=session_id, message=MessageModel(**message.to_dict()))


@app.get("/search", response_model=list[Source], tags=["Consultation"])
async def search(q: str = Query(..., min_length=1, max_length=2000)):
    """Get the ranked sources for a query without generating an answer."""
    try:
        corpus = load_corpus()
    except (FileNotFoundError, ValueError):
        raise HTTPException(status_code=503, detail="Knowledge base not available.")
    service = ConsultationService(corpus=corpus)
    return [Source(**r.to_dict()) for r in service.search(q)]


@app.get("/suggestions", response_model=list[str], tags=["Consultation"])
async def suggestions():
    """Example complaints for the quick-start buttons."""
    return SUGGESTED_QUERIES


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
