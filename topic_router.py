from typing import FrozenSet, List, Optional, Tuple

# Priority order matters: the first topic with a matching keyword wins.
TOPIC_KEYWORDS: List[Tuple[str, FrozenSet[str]]] = [
    ("shipping", frozenset({"shipping", "delivery", "ship"})),
    ("refund",   frozenset({"return", "refund"})),
    ("privacy",  frozenset({"privacy", "data", "gdpr"})),
    ("terms",    frozenset({"terms", "conditions"})),
    ("faqs",     frozenset({"faq", "question", "how"})),
]


def first_match(text: str, table: List[Tuple[str, FrozenSet[str]]]) -> Optional[str]:
    """Label of the first row whose keywords occur as substrings of ``text``."""
    low = (text or "").lower()
    for label, keywords in table:
        if any(k in low for k in keywords):
            return label
    return None


def classify(message: str) -> Optional[str]:
    return first_match(message, TOPIC_KEYWORDS)
