"""
Tests for local response templates
"""
from core.models import ResultKind, SearchResult
from core.synthesizer import (
    DISCLAIMER,
    NO_MATCH_MESSAGE,
    clean_title,
    pick_secondary,
    synthesize_response,
)


def _result(kind, relevance, title="Title", excerpt="Excerpt", citation=None, id="x"):
    return SearchResult(kind=kind, id=id, title=title, excerpt=excerpt, relevance=relevance, citation=citation)


def test_no_results_gives_fixed_apology():
    response = synthesize_response([])

    assert response == NO_MATCH_MESSAGE
    assert "practitioner" in response
    assert "diagnostic tools" in response


def test_remedy_template_with_citation():
    response = synthesize_response([
        _result(ResultKind.REMEDY, 90, title="Can't sleep", excerpt="Nutmeg milk", citation="Charaka 21"),
    ])

    assert response.startswith('**For "Can\'t sleep":**\n\n**Ayurvedic Remedy:** Nutmeg milk\n\n')
    assert "*Referenced in: Charaka 21*" in response
    assert response.endswith(DISCLAIMER)


def test_remedy_template_without_citation():
    response = synthesize_response([_result(ResultKind.REMEDY, 90)])

    assert "Referenced in" not in response


def test_text_template():
    response = synthesize_response([
        _result(ResultKind.TEXT, 60, excerpt="Warm oil on the feet...", citation="Ashtanga Hridayam"),
    ])

    assert response.startswith("**Ancient Wisdom on this topic:**\n\nWarm oil on the feet...")
    assert "*From: Ashtanga Hridayam*" in response


def test_dosha_template_nudges_toward_quiz():
    response = synthesize_response([
        _result(ResultKind.DOSHA, 50, title="Vata Dosha - Insomnia", excerpt="Warm milk."),
    ])

    assert response.startswith("**Vata Dosha - Insomnia:**\n\nWarm milk.")
    assert "Dosha Quiz" in response


def test_article_template_strips_emoji():
    response = synthesize_response([
        _result(ResultKind.ARTICLE, 70, title="💤 Why You Wake Up at 3 AM"),
    ])

    assert response.startswith('**Understanding "Why You Wake Up at 3 AM":**')
    assert "Learn section" in response


def test_secondary_is_first_result_of_a_different_kind():
    """[Remedy@90, Remedy@80, TextExcerpt@60] -> the text excerpt is the callout"""
    results = [
        _result(ResultKind.REMEDY, 90, excerpt="First remedy", id="r1"),
        _result(ResultKind.REMEDY, 80, excerpt="Second remedy", id="r2"),
        _result(ResultKind.TEXT, 60, title="Sushruta Samhita - Joints", id="t1"),
    ]

    assert pick_secondary(results).id == "t1"

    response = synthesize_response(results)
    assert "**Classical Reference:** Sushruta Samhita - Joints" in response
    assert "Second remedy" not in response


def test_secondary_remedy_callout():
    response = synthesize_response([
        _result(ResultKind.TEXT, 100),
        _result(ResultKind.REMEDY, 40, excerpt="Ginger tea before meals"),
    ])

    assert "**Quick Fix:** Ginger tea before meals" in response


def test_secondary_requires_score_above_20():
    results = [_result(ResultKind.REMEDY, 90), _result(ResultKind.TEXT, 20)]

    assert pick_secondary(results) is None
    assert "Classical Reference" not in synthesize_response(results)


def test_secondary_article_or_dosha_adds_no_callout():
    response = synthesize_response([
        _result(ResultKind.REMEDY, 90, excerpt="Main"),
        _result(ResultKind.DOSHA, 50, excerpt="Dosha solution"),
    ])

    assert "Dosha solution" not in response


def test_synthesis_is_pure():
    results = [_result(ResultKind.REMEDY, 90), _result(ResultKind.TEXT, 60)]

    assert synthesize_response(results) == synthesize_response(list(results))


def test_clean_title():
    assert clean_title("🧘‍♀️ Calming an Anxious Mind") == "Calming an Anxious Mind"
    assert clean_title("Plain title") == "Plain title"
