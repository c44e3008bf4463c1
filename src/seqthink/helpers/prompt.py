"""
Prompt Analysis Helpers

Turns the free text of the first thought into prompt metadata:
goals, constraints, domains, task type, complexity, priority and
keywords. Pattern-table matching only, no language model involved.
"""

import re
from typing import Any

from seqthink.helpers.keywords import extract_keywords
from seqthink.utils import tokenize, word_count


# =============================================================================
# Pattern Tables
# =============================================================================

SENTENCE_SPLIT = re.compile(r"(?<=[.!?;])\s+|\n+")

CONSTRAINT_MARKERS = frozenset([
    "must", "should", "without", "only", "avoid", "never", "cannot",
    "can't", "don't", "within", "limit", "limited", "require", "requires",
    "required", "ensure", "under", "maximum", "minimum", "no",
])

DOMAIN_PATTERNS: list[tuple[str, list[str]]] = [
    ("database", ["db", "database", "schema", "table", "sql", "query", "column", "index"]),
    ("api", ["api", "endpoint", "route", "request", "response", "http", "rest"]),
    ("backend", ["server", "backend", "service", "queue", "worker"]),
    ("frontend", ["ui", "ux", "frontend", "component", "page", "layout", "css"]),
    ("algorithms", ["algorithm", "sort", "sorting", "search", "graph", "tree", "complexity", "list", "array"]),
    ("testing", ["test", "tests", "pytest", "verify", "validation", "coverage"]),
    ("data", ["data", "dataset", "pipeline", "csv", "analysis", "statistics"]),
    ("security", ["security", "auth", "authentication", "encryption", "token", "permission"]),
    ("infrastructure", ["deploy", "deployment", "docker", "kubernetes", "cloud", "infrastructure"]),
    ("mathematics", ["prove", "proof", "equation", "theorem", "integral", "probability"]),
]

TASK_TYPE_PATTERNS: list[tuple[str, list[str]]] = [
    ("debugging", ["debug", "fix", "bug", "error", "crash", "failing", "broken"]),
    ("design", ["design", "architect", "architecture", "plan", "structure", "approach"]),
    ("analysis", ["analyze", "analyse", "evaluate", "compare", "assess", "investigate", "review"]),
    ("implementation", ["implement", "build", "create", "write", "code", "develop", "add"]),
    ("optimization", ["optimize", "optimise", "improve", "speed", "faster", "performance"]),
    ("explanation", ["explain", "describe", "why", "understand", "summarize"]),
]

HIGH_PRIORITY_MARKERS = frozenset(["urgent", "asap", "critical", "immediately", "blocker", "important"])
LOW_PRIORITY_MARKERS = frozenset(["eventually", "someday", "optional", "later", "whenever"])

MAX_GOALS = 5
PROMPT_KEYWORD_LIMIT = 10

# Size score cutoffs for complexity
SIMPLE_SCORE_MAX = 2
MEDIUM_SCORE_MAX = 5
WORDS_PER_COMPLEXITY_POINT = 50


# =============================================================================
# Classification
# =============================================================================

def split_sentences(text: str) -> list[str]:
    """Split prompt text into trimmed, non-empty sentences."""
    return [s.strip() for s in SENTENCE_SPLIT.split(text) if s and s.strip()]


def is_constraint(sentence: str) -> bool:
    """Check whether a sentence states a constraint rather than a goal."""
    return bool(set(tokenize(sentence)) & CONSTRAINT_MARKERS)


def detect_domains(text: str) -> list[str]:
    """Match prompt words against the domain pattern table."""
    words = set(tokenize(text))
    return [domain for domain, patterns in DOMAIN_PATTERNS if words & set(patterns)]


def detect_task_type(text: str) -> str:
    """Return the first task type whose verbs appear in the text."""
    words = set(tokenize(text))
    for task_type, patterns in TASK_TYPE_PATTERNS:
        if words & set(patterns):
            return task_type
    return "general"


def estimate_prompt_complexity(
    goals: list[str],
    constraints: list[str],
    domains: list[str],
    words: int
) -> str:
    """Bucket a prompt into simple/medium/complex by size."""
    score = len(goals) + len(constraints) + len(domains) + words / WORDS_PER_COMPLEXITY_POINT
    if score <= SIMPLE_SCORE_MAX:
        return "simple"
    elif score <= MEDIUM_SCORE_MAX:
        return "medium"
    return "complex"


def detect_priority(text: str) -> str:
    """Infer priority from urgency markers."""
    words = set(tokenize(text))
    if words & HIGH_PRIORITY_MARKERS:
        return "high"
    if words & LOW_PRIORITY_MARKERS:
        return "low"
    return "medium"


def analyze_prompt(prompt: str) -> dict[str, Any]:
    """
    Build prompt metadata from the original prompt text.

    Args:
        prompt: Text of the first thought

    Returns:
        Metadata dict with goals, constraints, domains, task_type,
        complexity, priority and keywords
    """
    goals: list[str] = []
    constraints: list[str] = []
    for sentence in split_sentences(prompt):
        if is_constraint(sentence):
            constraints.append(sentence)
        else:
            goals.append(sentence)

    if not goals:
        goals = [prompt.strip()]
    goals = goals[:MAX_GOALS]

    domains = detect_domains(prompt)

    return {
        "goals": goals,
        "constraints": constraints,
        "domains": domains,
        "task_type": detect_task_type(prompt),
        "complexity": estimate_prompt_complexity(goals, constraints, domains, word_count(prompt)),
        "priority": detect_priority(prompt),
        "keywords": extract_keywords(prompt, limit=PROMPT_KEYWORD_LIMIT),
    }


def domain_terms(domain: str) -> set[str]:
    """Words that signal a domain: its name plus its pattern words."""
    for name, patterns in DOMAIN_PATTERNS:
        if name == domain:
            return {name, *patterns}
    return {domain.lower()}
