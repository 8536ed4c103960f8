"""
core/scoring.py - Per-Corpus Relevance Scoring
===============================================

Each corpus has its own scoring function because each record kind has
different fields worth matching. All scores are plain integer sums of the
weights in config.py; there is no normalization, so a score only means
something relative to other results for the same query.

Matching is case-insensitive substring matching: the word "sleep" matches
"asleep" and "sleeplessness".
"""

from typing import Optional

from config import ARTICLE_WEIGHTS, DOSHA_WEIGHTS, REMEDY_WEIGHTS, TEXT_WEIGHTS
from core.models import Article, DoshaGuide, DoshaIssue, Remedy, TextExcerpt
from core.query import ParsedQuery


def _phrase_in(field: str, query: ParsedQuery) -> bool:
    # An empty query would otherwise match every field
    return bool(query.text) and query.text in field


def _count_in(terms, field: str) -> int:
    return sum(1 for term in terms if term in field)


def score_article(article: Article, query: ParsedQuery) -> int:
    """
    Score an article against a query.

    Title hits dominate, then tags, then the excerpt. Synonyms only count
    when they were not typed by the user.
    """
    w = ARTICLE_WEIGHTS
    title = article.title.lower()
    excerpt = article.excerpt.lower()
    tags = " ".join(article.tags).lower()
    extra = query.extra_terms()

    score = 0
    if _phrase_in(title, query):
        score += w["title_phrase"]
    score += w["title_word"] * _count_in(query.words, title)
    score += w["excerpt_word"] * _count_in(query.words, excerpt)
    score += w["tag_word"] * _count_in(query.words, tags)
    score += w["title_expanded"] * _count_in(extra, title)
    score += w["excerpt_expanded"] * _count_in(extra, excerpt)
    return score


def score_remedy(remedy: Remedy, query: ParsedQuery) -> int:
    """Score a quick-fix remedy. The problem description carries the most weight."""
    w = REMEDY_WEIGHTS
    problem = remedy.problem.lower()
    remedy_text = remedy.remedy.lower()
    rationale = remedy.rationale.lower()
    extra = query.extra_terms()

    score = 0
    if _phrase_in(problem, query):
        score += w["problem_phrase"]
    score += w["problem_word"] * _count_in(query.words, problem)
    score += w["remedy_word"] * _count_in(query.words, remedy_text)
    score += w["rationale_word"] * _count_in(query.words, rationale)
    score += w["problem_expanded"] * _count_in(extra, problem)
    score += w["remedy_expanded"] * _count_in(extra, remedy_text)
    return score


def score_text(text: TextExcerpt, query: ParsedQuery) -> int:
    """
    Score a classical text excerpt.

    Keywords are the main signal: a keyword inside the query scores high,
    and every query word that overlaps a keyword (either way round) adds
    a smaller bonus.
    """
    w = TEXT_WEIGHTS
    keywords = [k.lower() for k in text.keywords]
    body = text.body.lower()
    keyword_string = " ".join(keywords)

    score = 0
    for keyword in keywords:
        if keyword in query.text:
            score += w["keyword_in_query"]
        for word in query.words:
            if keyword in word or word in keyword:
                score += w["keyword_word"]
    score += w["body_word"] * _count_in(query.words, body)
    score += w["keyword_expanded"] * _count_in(query.extra_terms(), keyword_string)
    return score


def score_dosha_guide(
    guide: DoshaGuide,
    query: ParsedQuery,
) -> tuple[int, Optional[DoshaIssue]]:
    """
    Score a dosha guide and pick the modern imbalance it matched.

    Returns:
        tuple[int, Optional[DoshaIssue]]: (score, matched issue)
            - An issue-text hit always becomes the matched issue (last one wins)
            - A cause-text hit only does so when nothing matched yet
            - Symptom hits add score but never pick an issue
    """
    w = DOSHA_WEIGHTS
    issues = guide.issues()
    score = 0
    matched: Optional[DoshaIssue] = None

    for issue in issues:
        issue_text = issue.issue.lower()
        cause_text = issue.cause.lower()
        for word in query.words:
            if word in issue_text:
                score += w["issue_word"]
                matched = issue
            if word in cause_text:
                score += w["cause_word"]
                if matched is None:
                    matched = issue

    for symptom in guide.when_imbalanced:
        score += w["symptom_word"] * _count_in(query.words, symptom.lower())

    return score, matched
