import re
from typing import Any

_NON_WORD = re.compile(r"[^\w\s]")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_title(title: str) -> str:
    """Comparison form of a credit title: lowercase, single spaces, no punctuation."""
    return _NON_WORD.sub("", normalize_text(title)).strip()


def token_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the whitespace token sets of two normalized titles."""
    if not a or not b:
        return 0.0
    words_a = set(a.split())
    words_b = set(b.split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def vote_key(value: Any) -> str:
    return str(value).strip().lower()


def is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False
