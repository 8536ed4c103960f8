"""
core/models.py - Knowledge Records and Consultation Data Structures
===================================================================

The four bundled corpora hold different kinds of records. They are loaded
once and never mutated, so every record here is a frozen dataclass.

Search output is a single flat type, SearchResult, tagged with the kind of
record it came from. Keeping one result type (rather than one per corpus)
is what lets the fuser merge everything with a plain sort.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4


# =============================================================================
# KNOWLEDGE RECORDS
# =============================================================================

class ResultKind(str, Enum):
    """Which corpus a search result came from."""
    ARTICLE = "article"
    REMEDY = "remedy"
    TEXT = "text"
    DOSHA = "dosha"


@dataclass(frozen=True)
class Article:
    """A wellness article from the Learn section."""
    id: str
    title: str
    excerpt: str
    tags: tuple[str, ...] = ()
    category: str = ""


@dataclass(frozen=True)
class Remedy:
    """
    A quick-fix remedy for a common complaint.

    Attributes:
        problem: Symptoms the remedy addresses, used as the display title
        remedy: The remedy itself
        rationale: Why it works, in Ayurvedic terms
        citation: Classical text reference
    """
    id: str
    problem: str
    remedy: str
    rationale: str = ""
    citation: str = ""


@dataclass(frozen=True)
class TextExcerpt:
    """An English rendering of a passage from a classical text."""
    id: str
    title: str
    body: str
    keywords: tuple[str, ...] = ()
    source: str = ""


@dataclass(frozen=True)
class ModernImbalance:
    issue: str
    cause: str
    solution: str


@dataclass(frozen=True)
class DoshaGuide:
    """
    Reference guide for one dosha.

    Attributes:
        name: "Vata", "Pitta" or "Kapha"
        modern_imbalances: Modern-life issues this dosha is prone to
        when_imbalanced: Symptom phrases seen when the dosha is aggravated
    """
    id: str
    name: str
    modern_imbalances: tuple[ModernImbalance, ...] = ()
    when_imbalanced: tuple[str, ...] = ()

    def issues(self) -> list["DoshaIssue"]:
        """Project each modern imbalance into a standalone DoshaIssue."""
        return [
            DoshaIssue(
                id=f"{self.id}:{index}",
                dosha=self.name,
                issue=imbalance.issue,
                cause=imbalance.cause,
                solution=imbalance.solution,
            )
            for index, imbalance in enumerate(self.modern_imbalances)
        ]


@dataclass(frozen=True)
class DoshaIssue:
    """One (dosha, modern imbalance) pair, derived from a DoshaGuide."""
    id: str
    dosha: str
    issue: str
    cause: str
    solution: str


# =============================================================================
# SEARCH OUTPUT
# =============================================================================

@dataclass(frozen=True)
class SearchResult:
    """
    One ranked citation.

    Built fresh for every query and never reused across queries, so
    `relevance` always belongs to the query that produced it.
    """
    kind: ResultKind
    id: str
    title: str
    excerpt: str
    relevance: int
    citation: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "relevance": self.relevance,
            "citation": self.citation,
        }


# =============================================================================
# CONVERSATION
# =============================================================================

class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def _new_message_id() -> str:
    return uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Message:
    """
    A single chat message.

    Attributes:
        role: Who said it
        text: Message body (markdown)
        sources: Ranked citations; only set on assistant messages
        id: Unique message id
        timestamp: When the message was created (UTC)
    """
    role: Role
    text: str
    sources: Optional[list[SearchResult]] = None
    id: str = field(default_factory=_new_message_id)
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "sources": [s.to_dict() for s in self.sources or []],
        }
