"""
passadvisor.suggestions

Turn evaluator output into a deduplicated suggestion list and produce
example replacement passwords (using generator) to demonstrate stronger choices.
Every example is run back through the evaluator before it is offered.
"""

import logging
import random
from typing import Dict, List, Optional

from .evaluator import ContextLike, StrengthLevel, analyze
from .generator import DEFAULT_LENGTH, RandomSourceUnavailable, generate

logger = logging.getLogger(__name__)

# generated candidates tried per requested example
MAX_ATTEMPTS = 5


def _dedupe(items) -> List[str]:
    return list(dict.fromkeys(items))


def example_passwords(
    count: int = 1,
    context: ContextLike = None,
    length: int = DEFAULT_LENGTH,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Generate up to `count` passwords that analyze as Very Strong."""
    examples: List[str] = []
    for _ in range(count):
        for _attempt in range(MAX_ATTEMPTS):
            candidate = generate(length=length, rng=rng)
            result = analyze(candidate, context)
            if result is not None and result.level is StrengthLevel.VERY_STRONG:
                examples.append(candidate)
                break
        else:
            logger.warning("no very strong example after %d attempts", MAX_ATTEMPTS)
    return examples


def suggest_improvements(
    password: str,
    context: ContextLike = None,
    examples: int = 1,
    rng: Optional[random.Random] = None,
) -> Optional[Dict]:
    """
    Return None for an empty password, otherwise:
    {
        "result": AnalysisResult,
        "suggestions": [str],  # evaluator suggestions, duplicates removed, order kept
        "examples": [str],     # stronger generated passwords; empty when already Very Strong
        "examples_error": Optional[str],  # set when the random source failed
    }
    """
    result = analyze(password, context)
    if result is None:
        return None

    suggestions = _dedupe(result.suggestions)
    found: List[str] = []
    error = None
    if result.level < StrengthLevel.VERY_STRONG and examples > 0:
        try:
            found = example_passwords(examples, context=context, rng=rng)
        except RandomSourceUnavailable as e:
            logger.warning("no example passwords: %s", e)
            error = str(e)

    return {
        "result": result,
        "suggestions": suggestions,
        "examples": found,
        "examples_error": error,
    }
