"""Sequential Thinking helpers package."""

from seqthink.helpers.validation import validate_thought_data
from seqthink.helpers.keywords import extract_keywords
from seqthink.helpers.contradictions import check_contradictions
from seqthink.helpers.alignment import analyze_thought_alignment
from seqthink.helpers.prompt import analyze_prompt
from seqthink.helpers.quality import assess_thought_quality

__all__ = [
    "validate_thought_data",
    "extract_keywords",
    "check_contradictions",
    "analyze_thought_alignment",
    "analyze_prompt",
    "assess_thought_quality",
]
