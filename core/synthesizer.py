"""
core/synthesizer.py - Local Response Templates
===============================================

Builds the answer text when the remote model is not available (or failed),
using only the ranked search results.

The answer is assembled from fixed templates:
1. A header and body for the top result, depending on its kind
2. An optional one-line callout from the best result of a *different* kind
3. A closing disclaimer

Nothing here is random or stateful, so the same ranked list always renders
the same text.
"""

import re
from typing import Optional

from config import SECONDARY_MIN_SCORE
from core.models import ResultKind, SearchResult


# =============================================================================
# RESPONSE MESSAGES
# =============================================================================

NO_MATCH_MESSAGE = """
I couldn't find specific guidance for that in our Ayurvedic knowledge base.

**Recommendation:** Please consult with a qualified Ayurvedic practitioner (Vaidya) who can assess your unique constitution and provide personalized guidance.

You can also try:
- Our diagnostic tools to understand your dosha
- The Learn section for general wellness practices
- Asking about specific symptoms like sleep, digestion, or stress
""".strip()

DISCLAIMER = (
    "*This is educational guidance based on Ayurvedic texts. "
    "For persistent issues, please consult a practitioner.*"
)

DOSHA_QUIZ_NUDGE = (
    "This appears to be related to dosha imbalance. "
    "Consider taking the Dosha Quiz for personalized recommendations."
)

LEARN_SECTION_POINTER = "Read the full article in the Learn section for detailed guidance."

# Decorative emoji used in article titles
_EMOJI = re.compile("[\U0001F300-\U0001FAFF\u2600-\u27BF\u200d\ufe0f]")


def clean_title(title: str) -> str:
    """Strip decorative emoji from a title."""
    return _EMOJI.sub("", title).strip()


# =============================================================================
# TEMPLATES
# =============================================================================

def _render_primary(top: SearchResult) -> str:
    if top.kind is ResultKind.REMEDY:
        text = f'**For "{top.title}":**\n\n**Ayurvedic Remedy:** {top.excerpt}\n\n'
        if top.citation:
            text += f"*Referenced in: {top.citation}*\n\n"
        return text

    if top.kind is ResultKind.TEXT:
        text = f"**Ancient Wisdom on this topic:**\n\n{top.excerpt}\n\n"
        if top.citation:
            text += f"*From: {top.citation}*\n\n"
        return text

    if top.kind is ResultKind.DOSHA:
        return f"**{top.title}:**\n\n{top.excerpt}\n\n{DOSHA_QUIZ_NUDGE}\n\n"

    return (
        f'**Understanding "{clean_title(top.title)}":**\n\n'
        f"{top.excerpt}\n\n{LEARN_SECTION_POINTER}\n\n"
    )


def pick_secondary(results: list[SearchResult]) -> Optional[SearchResult]:
    """
    Find the first result whose kind differs from the top result's.

    Only results scoring above SECONDARY_MIN_SCORE qualify.
    """
    if not results:
        return None
    top = results[0]
    for result in results[1:]:
        if result.kind is not top.kind and result.relevance > SECONDARY_MIN_SCORE:
            return result
    return None


def _render_secondary(result: SearchResult) -> str:
    if result.kind is ResultKind.REMEDY:
        return f"**Quick Fix:** {result.excerpt}\n\n"
    if result.kind is ResultKind.TEXT:
        return f"**Classical Reference:** {result.title}\n\n"
    return ""


# =============================================================================
# MAIN FUNCTION
# =============================================================================

def synthesize_response(results: list[SearchResult]) -> str:
    """
    Compose an answer from ranked search results.

    Args:
        results: Ranked results, best first (may be empty)

    Returns:
        The markdown answer text
    """
    if not results:
        return NO_MATCH_MESSAGE

    response = _render_primary(results[0])

    secondary = pick_secondary(results)
    if secondary is not None:
        response += _render_secondary(secondary)

    return response + DISCLAIMER
