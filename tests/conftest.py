"""
Shared fixtures: a tiny hand-built corpus with known scores, the bundled
corpus, and fake remote clients (no network).
"""

import pytest

from core.corpus import CorpusStore, load_corpus
from core.models import Article, DoshaGuide, ModernImbalance, Remedy, TextExcerpt
from rag.chat_engine import REASON_CALL_FAILED, RemoteErr, RemoteOk


@pytest.fixture
def corpus():
    """Small corpus; scores for "sleep" are worked out in test_fusion.py."""
    return CorpusStore(
        articles=[
            Article(
                id="a-sleep",
                title="Sleep Better Tonight",
                excerpt="Simple evening habits for deep rest.",
                tags=("sleep", "routine"),
            ),
        ],
        remedies=[
            Remedy(
                id="r-sleep",
                problem="Trouble falling asleep, waking up at night",
                remedy="Nutmeg milk before bed",
                rationale="Vata rises at night.",
                citation="Charaka Samhita - Sutrasthana 21",
            ),
            Remedy(
                id="r-acid",
                problem="Burning sensation, acid reflux",
                remedy="Cooling foods",
                rationale="Excess Pitta.",
            ),
        ],
        texts=[
            TextExcerpt(
                id="t-sleep",
                title="Ashtanga Hridayam - Sleep Disorders",
                body="For sleeplessness, massage the feet with warm oil.",
                keywords=("insomnia", "sleep", "nutmeg"),
                source="Ashtanga Hridayam",
            ),
        ],
        dosha_guides=[
            DoshaGuide(
                id="vata",
                name="Vata",
                modern_imbalances=(
                    ModernImbalance(
                        issue="Insomnia and broken sleep",
                        cause="Late-night screens",
                        solution="Warm oil foot massage.",
                    ),
                    ModernImbalance(
                        issue="Constipation",
                        cause="Cold raw food",
                        solution="Warm soups.",
                    ),
                ),
                when_imbalanced=("Difficulty falling asleep", "Dry skin"),
            ),
        ],
    )


@pytest.fixture
def bundled_corpus():
    return load_corpus()


class FakeRemote:
    """Configurable stand-in for ConsultationChatEngine."""

    def __init__(self, configured=True, reply="Hello", error=None, raises=None):
        self.configured = configured
        self.reply = reply
        self.error = error
        self.raises = raises
        self.calls = []

    def is_configured(self):
        return self.configured

    async def complete(self, query, history, profile_hint=None):
        self.calls.append({"query": query, "history": history, "profile_hint": profile_hint})
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return RemoteErr(REASON_CALL_FAILED, self.error)
        return RemoteOk(self.reply)


@pytest.fixture
def ok_remote():
    return FakeRemote(reply="Hello")


@pytest.fixture
def failing_remote():
    return FakeRemote(error="HTTP 500")


@pytest.fixture
def raising_remote():
    return FakeRemote(raises=ConnectionError("network down"))


@pytest.fixture
def unconfigured_remote():
    return FakeRemote(configured=False)
