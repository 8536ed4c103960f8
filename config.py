"""
config.py - Configuration settings for the NayaVed consultation engine
======================================================================

This file centralizes all configuration values. Sensitive values like API
keys come from environment variables (or a .env file).
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Base directory (where this file lives)
BASE_DIR = Path(__file__).parent

# Bundled reference corpora (articles, remedies, texts, dosha guides),
# shipped as package data of `core`
DATA_DIR = BASE_DIR / "core" / "data"
CORPUS_DIR = Path(os.getenv("NAYAVED_CORPUS_DIR", str(DATA_DIR)))

# =============================================================================
# RETRIEVAL CONFIGURATION
# =============================================================================

# Maximum number of ranked results attached to an answer as sources
TOP_K_RESULTS = 5

# Article and text excerpts are cut to this many characters (plus "...")
EXCERPT_PREVIEW_CHARS = 150

# Tokens of this length or shorter are dropped from the query
MIN_TOKEN_LENGTH = 3

# A secondary callout is only added for results scoring above this
SECONDARY_MIN_SCORE = 20

# =============================================================================
# SCORING CONFIGURATION
# =============================================================================

ARTICLE_WEIGHTS = {
    "title_phrase": 100,    # full query appears inside the title
    "title_word": 30,
    "excerpt_word": 15,
    "tag_word": 20,
    "title_expanded": 10,
    "excerpt_expanded": 5,
}

REMEDY_WEIGHTS = {
    "problem_phrase": 120,  # full query appears inside the problem text
    "problem_word": 40,
    "remedy_word": 20,
    "rationale_word": 10,
    "problem_expanded": 15,
    "remedy_expanded": 8,
}

TEXT_WEIGHTS = {
    "keyword_in_query": 50,
    "keyword_word": 25,
    "body_word": 15,
    "keyword_expanded": 10,
}

DOSHA_WEIGHTS = {
    "issue_word": 35,
    "cause_word": 20,
    "symptom_word": 15,
}

# Minimum score for a record of each kind to be considered at all
MIN_SCORES = {
    "article": 15,
    "remedy": 20,
    "text": 25,
    "dosha": 30,
}

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

# OpenAI API key - the remote path is only attempted when this is set
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# Model to use for consultation responses
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")

# Temperature controls randomness (0 = deterministic, 1 = creative)
LLM_TEMPERATURE = 0.4

# Maximum tokens in the response
LLM_MAX_TOKENS = 1024

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

# Most HTTP sessions held in memory; the least recently used is dropped first
MAX_SESSIONS = int(os.getenv("NAYAVED_MAX_SESSIONS", "100"))

# =============================================================================
# UI CONFIGURATION
# =============================================================================

# First assistant message of every session. Never sent to the remote model.
SEED_GREETING = (
    "Namaste! I'm your Ayurvedic guide, powered by ancient wisdom from the "
    "Charaka Samhita and other classical texts.\n\n"
    "**How I can help:**\n"
    "- Describe any health concern or symptom\n"
    "- Ask about Ayurvedic remedies\n"
    "- Learn about your dosha imbalances\n"
    "- Get lifestyle and diet recommendations\n\n"
    "*Note: I only provide guidance found in authentic Ayurvedic texts. For "
    "conditions not covered, I'll recommend consulting a practitioner.*\n\n"
    "What's troubling you today?"
)

# Example complaints offered as quick-start buttons
SUGGESTED_QUERIES = [
    "I can't sleep at night",
    "Feeling anxious and stressed",
    "Digestion problems",
    "Too much screen time",
    "Low energy and fatigue",
]
