"""
core/corpus.py - Read-Only Corpus Store
========================================

Loads the four bundled reference corpora from JSON and holds them in memory:
- articles.json: Learn-section wellness articles
- remedies.json: quick-fix remedies for common complaints
- texts.json: passages from classical Ayurvedic texts
- dosha_guides.json: one guide per dosha with its modern imbalances

The corpora are fixed reference data. They are loaded once per process
(cached) and never written to afterwards, so the store can be shared freely.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from config import CORPUS_DIR
from core.models import (
    Article,
    DoshaGuide,
    DoshaIssue,
    ModernImbalance,
    Remedy,
    ResultKind,
    TextExcerpt,
)

logger = logging.getLogger(__name__)

ARTICLES_FILE = "articles.json"
REMEDIES_FILE = "remedies.json"
TEXTS_FILE = "texts.json"
DOSHA_GUIDES_FILE = "dosha_guides.json"

KnowledgeRecord = Union[Article, Remedy, TextExcerpt, DoshaIssue]


# =============================================================================
# CORPUS STORE
# =============================================================================

class CorpusStore:
    """
    Immutable in-memory collections of every knowledge record.

    Usage:
        store = load_corpus()
        for remedy in store.remedies:
            ...
    """

    def __init__(
        self,
        articles=(),
        remedies=(),
        texts=(),
        dosha_guides=(),
    ):
        self._articles = tuple(articles)
        self._remedies = tuple(remedies)
        self._texts = tuple(texts)
        self._dosha_guides = tuple(dosha_guides)

    @property
    def articles(self) -> tuple[Article, ...]:
        return self._articles

    @property
    def remedies(self) -> tuple[Remedy, ...]:
        return self._remedies

    @property
    def texts(self) -> tuple[TextExcerpt, ...]:
        return self._texts

    @property
    def dosha_guides(self) -> tuple[DoshaGuide, ...]:
        return self._dosha_guides

    def dosha_issues(self) -> list[DoshaIssue]:
        """Every (dosha, modern imbalance) pair across all guides."""
        issues = []
        for guide in self._dosha_guides:
            issues.extend(guide.issues())
        return issues

    def get(self, kind: Union[ResultKind, str], record_id: str) -> Optional[KnowledgeRecord]:
        """
        Look up a single record by kind and id.

        For dosha records, `record_id` may be a guide id (returns that
        guide's first issue) or an issue id like "vata:2".
        """
        kind = ResultKind(kind)

        if kind is ResultKind.DOSHA:
            candidates = self.dosha_issues()
            for issue in candidates:
                if issue.id == record_id:
                    return issue
            for issue in candidates:
                if issue.id.split(":", 1)[0] == record_id:
                    return issue
            return None

        collection = {
            ResultKind.ARTICLE: self._articles,
            ResultKind.REMEDY: self._remedies,
            ResultKind.TEXT: self._texts,
        }[kind]
        for record in collection:
            if record.id == record_id:
                return record
        return None

    def stats(self) -> dict:
        """
        Get record counts for each corpus.

        Returns:
            dict: Counts of articles, remedies, texts, guides and dosha issues
        """
        return {
            "articles": len(self._articles),
            "remedies": len(self._remedies),
            "texts": len(self._texts),
            "dosha_guides": len(self._dosha_guides),
            "dosha_issues": sum(len(g.modern_imbalances) for g in self._dosha_guides),
        }


# =============================================================================
# LOADING
# =============================================================================

def _read_records(path: Path) -> list[dict]:
    """
    Read a JSON array of records from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a JSON array
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Corpus file not found at {path}. "
            "Check NAYAVED_CORPUS_DIR or reinstall the bundled data."
        )

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path.name}: invalid JSON ({e})") from e

    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a list of records")
    return data


def _build(path: Path, factory) -> list:
    records = []
    for index, raw in enumerate(_read_records(path)):
        try:
            records.append(factory(raw))
        except (KeyError, TypeError) as e:
            raise ValueError(f"{path.name}: malformed record #{index} ({e})") from e
    return records


def _article(raw: dict) -> Article:
    return Article(
        id=raw["id"],
        title=raw["title"],
        excerpt=raw["excerpt"],
        tags=tuple(raw.get("tags", [])),
        category=raw.get("category", ""),
    )


def _remedy(raw: dict) -> Remedy:
    return Remedy(
        id=raw["id"],
        problem=raw["problem"],
        remedy=raw["remedy"],
        rationale=raw.get("why", ""),
        citation=raw.get("manuscript", ""),
    )


def _text(raw: dict) -> TextExcerpt:
    return TextExcerpt(
        id=raw["id"],
        title=raw["title"],
        body=raw["englishText"],
        keywords=tuple(raw.get("keywords", [])),
        source=raw.get("source", ""),
    )


def _dosha_guide(raw: dict) -> DoshaGuide:
    return DoshaGuide(
        id=raw["id"],
        name=raw["name"],
        modern_imbalances=tuple(
            ModernImbalance(issue=m["issue"], cause=m["cause"], solution=m["solution"])
            for m in raw.get("modernImbalances", [])
        ),
        when_imbalanced=tuple(raw.get("whenImbalanced", [])),
    )


def _load(corpus_dir: Path) -> CorpusStore:
    store = CorpusStore(
        articles=_build(corpus_dir / ARTICLES_FILE, _article),
        remedies=_build(corpus_dir / REMEDIES_FILE, _remedy),
        texts=_build(corpus_dir / TEXTS_FILE, _text),
        dosha_guides=_build(corpus_dir / DOSHA_GUIDES_FILE, _dosha_guide),
    )
    logger.info("Loaded corpus from %s: %s", corpus_dir, store.stats())
    return store


@lru_cache(maxsize=4)
def _load_cached(corpus_dir: str) -> CorpusStore:
    return _load(Path(corpus_dir))


def load_corpus(corpus_dir: Path = CORPUS_DIR) -> CorpusStore:
    """
    Load the bundled corpora (cached per directory).

    Args:
        corpus_dir: Directory containing the four corpus JSON files

    Returns:
        CorpusStore: The loaded, read-only store

    Raises:
        FileNotFoundError: If a corpus file is missing
        ValueError: If a corpus file is malformed
    """
    return _load_cached(str(Path(corpus_dir).resolve()))
