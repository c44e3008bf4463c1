"""
Keyword Extraction Helpers

Lexical frequency heuristic for the salient terms of a thought.
"""

import re
from collections import Counter


# Tokens this short carry little topic signal
MIN_KEYWORD_LENGTH = 5

DEFAULT_KEYWORD_LIMIT = 5

KEYWORD_STOPWORDS = frozenset([
    "about", "above", "across", "after", "again",
    "which", "there", "their", "these", "those", "where", "while",
    "would", "could", "should", "being", "other",
])

PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


def extract_keywords(text: str, limit: int = DEFAULT_KEYWORD_LIMIT) -> list[str]:
    """
    Return the most frequent salient words in text.

    Ties keep the order in which the words first appear.

    Args:
        text: Thought or prompt text
        limit: Maximum number of keywords to return

    Returns:
        Up to `limit` lowercase keywords, most frequent first
    """
    words = PUNCTUATION_PATTERN.sub("", text.lower()).split()
    counts = Counter(
        word for word in words
        if len(word) >= MIN_KEYWORD_LENGTH and word not in KEYWORD_STOPWORDS
    )
    return [word for word, _ in counts.most_common(limit)]


def shared_keywords(keywords_a: list[str], keywords_b: list[str]) -> list[str]:
    """Keywords of `keywords_a` that also appear in `keywords_b`, in order."""
    other = set(keywords_b)
    return [kw for kw in keywords_a if kw in other]
