"""
Sequential Thinking Shared Utilities

Tokenization, negation detection, and numeric helpers used across
the helper modules.
"""

import math
import re


# =============================================================================
# Tokenization
# =============================================================================

WORD_PATTERN = re.compile(r"[\w']+")

# Function words ignored when comparing thoughts against each other or
# against the prompt. Kept small: these are lexical heuristics only.
STOPWORDS = frozenset([
    "the", "and", "for", "with", "that", "this", "from", "into", "onto",
    "are", "was", "were", "will", "have", "has", "had", "been", "being",
    "but", "then", "than", "them", "they", "their", "there", "these",
    "those", "what", "which", "when", "where", "while", "who", "how",
    "its", "our", "your", "you", "can", "could", "would", "should",
    "may", "might", "also", "just", "some", "any", "all", "each",
    "about", "above", "across", "after", "again", "very", "such",
    "use", "using", "need", "needs", "make", "first", "next", "step",
])

MIN_TERM_LENGTH = 3


def tokenize(text: str) -> list[str]:
    """Split text into lowercase word tokens, keeping apostrophes."""
    return WORD_PATTERN.findall(text.lower())


def content_terms(text: str, min_length: int = MIN_TERM_LENGTH) -> set[str]:
    """
    Extract the set of content-bearing terms from text.

    Drops stopwords, negation words, and tokens shorter than min_length.
    """
    return {
        token for token in tokenize(text)
        if len(token) >= min_length
        and token not in STOPWORDS
        and token not in NEGATION_PATTERNS
    }


# =============================================================================
# Negation Detection
# =============================================================================

NEGATION_PATTERNS = frozenset([
    "not", "no", "never", "neither", "none", "without",
    "cannot", "can't", "won't", "wouldn't", "shouldn't",
    "isn't", "aren't", "wasn't", "weren't", "hasn't", "haven't",
    "doesn't", "don't", "didn't", "couldn't", "mustn't"
])


def detect_negation(text: str) -> set:
    """Detect negation words in text."""
    return set(tokenize(text)) & NEGATION_PATTERNS


# =============================================================================
# Text Utilities
# =============================================================================

def truncate_text(text: str, max_length: int = 50) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def word_count(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


# =============================================================================
# Numeric Utilities
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))
