"""
core/fusion.py - Multi-Corpus Search and Ranking
=================================================

Runs every corpus scorer for a query, keeps the candidates that clear their
own corpus's minimum score, and fuses them into one ranked list.

Because every candidate is a SearchResult, fusing is a single sort on
`relevance` (stable, so ties keep corpus order: articles, remedies, texts,
dosha guides) followed by a cut to the top K.
"""

import logging

from config import EXCERPT_PREVIEW_CHARS, MIN_SCORES, TOP_K_RESULTS
from core.corpus import CorpusStore
from core.models import ResultKind, SearchResult
from core.query import ParsedQuery, parse_query
from core.scoring import score_article, score_dosha_guide, score_remedy, score_text

logger = logging.getLogger(__name__)


def _preview(text: str) -> str:
    return text[:EXCERPT_PREVIEW_CHARS] + "..."


# =============================================================================
# PER-CORPUS CANDIDATES
# =============================================================================

def article_candidates(corpus: CorpusStore, query: ParsedQuery) -> list[SearchResult]:
    results = []
    for article in corpus.articles:
        relevance = score_article(article, query)
        if relevance >= MIN_SCORES["article"]:
            results.append(SearchResult(
                kind=ResultKind.ARTICLE,
                id=article.id,
                title=article.title,
                excerpt=_preview(article.excerpt),
                relevance=relevance,
            ))
    return results


def remedy_candidates(corpus: CorpusStore, query: ParsedQuery) -> list[SearchResult]:
    results = []
    for remedy in corpus.remedies:
        relevance = score_remedy(remedy, query)
        if relevance >= MIN_SCORES["remedy"]:
            results.append(SearchResult(
                kind=ResultKind.REMEDY,
                id=remedy.id,
                title=remedy.problem,
                excerpt=remedy.remedy,
                relevance=relevance,
                citation=remedy.citation or None,
            ))
    return results


def text_candidates(corpus: CorpusStore, query: ParsedQuery) -> list[SearchResult]:
    results = []
    for text in corpus.texts:
        relevance = score_text(text, query)
        if relevance >= MIN_SCORES["text"]:
            results.append(SearchResult(
                kind=ResultKind.TEXT,
                id=text.id,
                title=text.title,
                excerpt=_preview(text.body),
                relevance=relevance,
                citation=text.source or None,
            ))
    return results


def dosha_candidates(corpus: CorpusStore, query: ParsedQuery) -> list[SearchResult]:
    results = []
    for guide in corpus.dosha_guides:
        relevance, issue = score_dosha_guide(guide, query)
        # Symptom-only hits have no matched imbalance and are dropped
        if relevance >= MIN_SCORES["dosha"] and issue is not None:
            results.append(SearchResult(
                kind=ResultKind.DOSHA,
                id=issue.id,
                title=f"{guide.name} Dosha - {issue.issue}",
                excerpt=issue.solution,
                relevance=relevance,
            ))
    return results


# =============================================================================
# FUSION
# =============================================================================

def fuse_results(candidates: list[SearchResult], top_k: int = TOP_K_RESULTS) -> list[SearchResult]:
    """
    Rank already-thresholded candidates from all corpora.

    Args:
        candidates: Results from every corpus, in corpus order
        top_k: Maximum number of results to keep

    Returns:
        list[SearchResult]: Highest relevance first, at most top_k long
    """
    ranked = sorted(candidates, key=lambda r: r.relevance, reverse=True)
    return ranked[:top_k]


def search_knowledge_base(
    query: str,
    corpus: CorpusStore,
    top_k: int = TOP_K_RESULTS,
) -> list[SearchResult]:
    """
    Search all four corpora and return one ranked list of citations.

    Pure with respect to the corpus: the same query always gives the same
    results in the same order. An unmatched query gives an empty list.
    """
    parsed = parse_query(query)

    candidates = []
    candidates.extend(article_candidates(corpus, parsed))
    candidates.extend(remedy_candidates(corpus, parsed))
    candidates.extend(text_candidates(corpus, parsed))
    candidates.extend(dosha_candidates(corpus, parsed))

    results = fuse_results(candidates, top_k=top_k)
    logger.debug(
        "Search matched %d candidates, returning %d", len(candidates), len(results)
    )
    return results
