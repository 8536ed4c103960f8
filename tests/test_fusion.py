"""
Tests for cross-corpus search and ranking
"""
import pytest

from core.corpus import CorpusStore
from core.fusion import fuse_results, search_knowledge_base
from core.models import (
    Article,
    DoshaGuide,
    ModernImbalance,
    Remedy,
    ResultKind,
    SearchResult,
    TextExcerpt,
)


def test_search_ranks_across_corpora(corpus):
    """Scores for "sleep": remedy 160, article 155, text 100, vata 50"""
    results = search_knowledge_base("sleep", corpus)

    assert [(r.kind, r.id, r.relevance) for r in results] == [
        (ResultKind.REMEDY, "r-sleep", 160),
        (ResultKind.ARTICLE, "a-sleep", 155),
        (ResultKind.TEXT, "t-sleep", 100),
        (ResultKind.DOSHA, "vata:0", 50),
    ]


def test_result_fields_per_kind(corpus):
    results = {r.kind: r for r in search_knowledge_base("sleep", corpus)}

    remedy = results[ResultKind.REMEDY]
    assert remedy.title == "Trouble falling asleep, waking up at night"
    assert remedy.excerpt == "Nutmeg milk before bed"
    assert remedy.citation == "Charaka Samhita - Sutrasthana 21"

    text = results[ResultKind.TEXT]
    assert text.excerpt == "For sleeplessness, massage the feet with warm oil...."
    assert text.citation == "Ashtanga Hridayam"

    dosha = results[ResultKind.DOSHA]
    assert dosha.title == "Vata Dosha - Insomnia and broken sleep"
    assert dosha.excerpt == "Warm oil foot massage."


def test_search_is_deterministic(bundled_corpus):
    first = search_knowledge_base("feeling anxious and stressed at work", bundled_corpus)
    second = search_knowledge_base("feeling anxious and stressed at work", bundled_corpus)

    assert first
    assert first == second


def test_remedy_threshold_boundary():
    """A remedy scoring exactly 20 is included; one scoring 18 is not"""
    corpus = CorpusStore(remedies=[
        Remedy(id="at-20", problem="Bloating", remedy="Ginger tea", rationale=""),
        # "tired": rationale word (10) + "fatigue" synonym in remedy (8)
        Remedy(id="at-18", problem="Heaviness", remedy="Rest for fatigue", rationale="When tired"),
    ])

    assert [r.id for r in search_knowledge_base("ginger", corpus)] == ["at-20"]
    assert search_knowledge_base("tired", corpus) == []


def test_article_threshold_boundary():
    corpus = CorpusStore(articles=[
        Article(id="at-15", title="Evening habits", excerpt="A walk after dinner helps digestion."),
    ])

    # excerpt word only: exactly 15
    assert [r.relevance for r in search_knowledge_base("walk", corpus)] == [15]
    # "stomach" only reaches the excerpt through its synonym "digestion": 5
    assert search_knowledge_base("stomach", corpus) == []


def test_text_threshold_boundary():
    corpus = CorpusStore(texts=[
        # "tired" in the body (15) + "fatigue" synonym in the keywords (10)
        TextExcerpt(id="at-25", title="", body="Warm oil soothes tired feet", keywords=("fatigue remedy",)),
        # "fatigue" and "exhausted" synonyms in the keywords only: 20
        TextExcerpt(id="at-20", title="", body="", keywords=("fatigue", "exhausted")),
    ])

    results = search_knowledge_base("tired", corpus)

    assert [(r.id, r.relevance) for r in results] == [("at-25", 25)]


def _raw_food_guide(symptoms=()):
    return DoshaGuide(
        id="vata",
        name="Vata",
        modern_imbalances=(ModernImbalance("Constipation", "Cold raw food", "Warm soups."),),
        when_imbalanced=symptoms,
    )


def test_dosha_cause_only_hit_below_threshold_is_dropped():
    # cause match (20) sets the matched issue but stays under 30
    corpus = CorpusStore(dosha_guides=[_raw_food_guide()])

    assert search_knowledge_base("raw", corpus) == []


def test_dosha_cause_and_symptom_hit_clears_threshold():
    # cause (20) + symptom (15)
    corpus = CorpusStore(dosha_guides=[_raw_food_guide(symptoms=("Craving raw snacks",))])

    results = search_knowledge_base("raw", corpus)

    assert [(r.kind, r.id, r.relevance) for r in results] == [(ResultKind.DOSHA, "vata:0", 35)]
    assert results[0].title == "Vata Dosha - Constipation"


def test_dosha_symptom_only_hit_is_discarded(corpus):
    # 45 points from symptoms alone, but no modern imbalance matched
    results = search_knowledge_base("difficulty falling dry", corpus)

    assert all(r.kind is not ResultKind.DOSHA for r in results)


def test_top_k_cap():
    corpus = CorpusStore(remedies=[
        Remedy(id=f"pain-{i}", problem=f"Pain type {i}", remedy="Warm oil") for i in range(8)
    ])

    results = search_knowledge_base("pain", corpus)

    assert len(results) == 5


def test_fuse_results_sorts_descending_and_keeps_tie_order():
    candidates = [
        SearchResult(ResultKind.ARTICLE, "a", "A", "", 40),
        SearchResult(ResultKind.REMEDY, "r", "R", "", 90),
        SearchResult(ResultKind.TEXT, "t", "T", "", 40),
    ]

    assert [r.id for r in fuse_results(candidates)] == ["r", "a", "t"]
    assert [r.id for r in fuse_results(candidates, top_k=1)] == ["r"]


@pytest.mark.parametrize("query", ["xyzzy plugh", "", "   "])
def test_unmatched_query_returns_empty(bundled_corpus, query):
    assert search_knowledge_base(query, bundled_corpus) == []


def test_bundled_sleep_query_finds_sleep_remedy(bundled_corpus):
    results = search_knowledge_base("I can't sleep at night", bundled_corpus)

    assert any(r.kind is ResultKind.REMEDY and r.id == "sleep" for r in results)
