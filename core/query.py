"""
core/query.py - Query Tokenizing and Synonym Expansion
======================================================

Turns a raw complaint ("feeling anxious and can't sleep") into the pieces the
scorers need: the lower-cased query, its filtered words, and an expanded set
of related terms.

Expansion is one level deep and only adds terms - the original words are
always kept. Multi-word keys in the table (e.g. "back pain") never match a
single token.
"""

from dataclasses import dataclass

from config import MIN_TOKEN_LENGTH

SYNONYMS: dict[str, list[str]] = {
    "anxious": ["anxiety", "worried", "nervous"],
    "anxiety": ["anxious", "worried", "stress"],
    "sleep": ["insomnia", "sleeplessness", "rest"],
    "insomnia": ["sleep", "sleeplessness"],
    "tired": ["fatigue", "exhausted", "drained"],
    "fatigue": ["tired", "exhausted", "energy"],
    "stomach": ["digestion", "digestive", "bloating"],
    "digestion": ["stomach", "digestive", "agni"],
    "acidity": ["acid reflux", "heartburn", "gastric"],
    "heartburn": ["acidity", "acid reflux"],
    "skin": ["acne", "rash", "complexion"],
    "acne": ["skin", "pimple"],
    "weight": ["obesity", "fat", "heavy"],
    "focus": ["concentration", "attention", "memory"],
    "concentration": ["focus", "attention"],
    "angry": ["irritable", "anger", "frustration"],
    "irritable": ["angry", "anger"],
    "sad": ["depression", "low mood"],
    "depression": ["sad", "depressed", "low"],
    "phone": ["screen", "digital", "scrolling"],
    "screen": ["phone", "digital", "eyes"],
    "headache": ["head pain", "migraine"],
    "cold": ["cough", "congestion"],
    "cough": ["cold", "respiratory"],
    "joint": ["arthritis", "stiffness"],
    "back pain": ["spine", "back"],
    "stress": ["stressed", "tension", "pressure"],
}


@dataclass(frozen=True)
class ParsedQuery:
    """
    Everything the scorers need to know about one query.

    Attributes:
        text: The full query, lower-cased and stripped
        words: Whitespace tokens longer than two characters, in query order
        expanded: Words plus their synonyms
    """
    text: str
    words: tuple[str, ...]
    expanded: frozenset[str]

    def extra_terms(self) -> list[str]:
        """Expanded terms that are not already query words, sorted."""
        return sorted(self.expanded.difference(self.words))


def tokenize(query: str) -> list[str]:
    """Lower-case, split on whitespace, drop tokens of two chars or fewer."""
    return [w for w in query.lower().split() if len(w) >= MIN_TOKEN_LENGTH]


def expand_query(query: str) -> set[str]:
    """
    Expand a query with related terms from the synonym table.

    Example:
        >>> sorted(expand_query("anxious"))
        ['anxiety', 'anxious', 'nervous', 'worried']
    """
    words = tokenize(query)
    expanded = set(words)
    for word in words:
        expanded.update(SYNONYMS.get(word, ()))
    return expanded


def parse_query(query: str) -> ParsedQuery:
    return ParsedQuery(
        text=query.lower().strip(),
        words=tuple(tokenize(query)),
        expanded=frozenset(expand_query(query)),
    )
