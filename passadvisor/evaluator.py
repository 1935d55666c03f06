"""
passadvisor.evaluator

Password strength evaluator:
- analyze(password, context): score (0-100), strength level, ordered suggestions,
  crack-time estimate, breach and personal-information flags
- level_for_score(score): fixed step function from score to StrengthLevel
- estimate_entropy / estimate_crack_time: rough length * log2(pool) model
- has_* detectors used by analyze, exposed for reuse and testing

Everything here is a pure function of its arguments and the static tables.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .tables import (
    COMMON_PATTERNS,
    DIGIT_POOL,
    KNOWN_WEAK_PASSWORDS,
    LOWER_POOL,
    SEQUENTIAL_PATTERNS,
    SYMBOL_POOL,
    UPPER_POOL,
)

logger = logging.getLogger(__name__)

# high-end offline attack; illustrative only
GUESSES_PER_SECOND = 1e10

# shown instead of the entropy estimate for long but low-scoring passwords
DICTIONARY_ATTACK_ESTIMATE = "minutes (dictionary attack)"
DICTIONARY_ATTACK_MAX_SCORE = 40

INSTANT = "instant"

MIN_CONTEXT_LENGTH = 3

# accepted mapping keys -> ContextInfo attribute
_CONTEXT_ALIASES = {
    "name": "name",
    "birth_year": "birth_year",
    "birthYear": "birth_year",
    "mobile": "mobile",
    "fav_word": "fav_word",
    "favWord": "fav_word",
}

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"[^A-Za-z0-9]")
_REPEAT_RE = re.compile(r"(.)\1{2,}")

SUGGEST_LENGTH = "Increase length to at least 8 characters"
SUGGEST_LOWER = "Add lowercase letters"
SUGGEST_UPPER = "Add uppercase letters"
SUGGEST_DIGITS = "Add numbers"
SUGGEST_SPECIAL = "Add special characters (@, #, $, etc.)"
SUGGEST_REPEATS = "Avoid repeating characters"
SUGGEST_SEQUENCES = "Avoid sequential patterns (e.g., 123, abc)"
SUGGEST_COMMON = "Avoid common words"
SUGGEST_PERSONAL = "Remove personal information"
SUGGEST_BREACHED = "This password appears in lists of leaked passwords; choose a different one"
VERY_STRONG_MESSAGE = "This is a very strong password"


class StrengthLevel(IntEnum):
    VERY_WEAK = 0
    WEAK = 1
    MEDIUM = 2
    STRONG = 3
    VERY_STRONG = 4

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def meter_fraction(self) -> float:
        """Relative width of a strength meter for this level (0.2 .. 1.0)."""
        return (self.value + 1) / len(StrengthLevel)


_LEVEL_LABELS = {
    StrengthLevel.VERY_WEAK: "Very Weak",
    StrengthLevel.WEAK: "Weak",
    StrengthLevel.MEDIUM: "Medium",
    StrengthLevel.STRONG: "Strong",
    StrengthLevel.VERY_STRONG: "Very Strong",
}

# (lower bound, level), highest first
_LEVEL_THRESHOLDS = (
    (80, StrengthLevel.VERY_STRONG),
    (60, StrengthLevel.STRONG),
    (40, StrengthLevel.MEDIUM),
    (20, StrengthLevel.WEAK),
    (0, StrengthLevel.VERY_WEAK),
)


@dataclass(frozen=True)
class ContextInfo:
    """Optional personal details the password should not contain."""

    name: Optional[str] = None
    birth_year: Optional[str] = None
    mobile: Optional[str] = None
    fav_word: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Optional[str]]]) -> "ContextInfo":
        """
        Build from a dict. Keys may be snake_case (``birth_year``) or
        camelCase (``birthYear``). Other keys are logged and ignored.
        """
        data = data or {}
        fields = {}
        for key, value in data.items():
            attr = _CONTEXT_ALIASES.get(key)
            if attr is None:
                logger.warning("ignoring unknown context field %r", key)
                continue
            if value is not None or attr not in fields:
                fields[attr] = value
        return cls(**fields)

    def values(self) -> List[str]:
        """Field values long enough to be meaningful (raw length, no stripping)."""
        out = []
        for value in (self.name, self.birth_year, self.mobile, self.fav_word):
            if value is None:
                continue
            value = str(value)
            if len(value) >= MIN_CONTEXT_LENGTH:
                out.append(value)
        return out


ContextLike = Union[ContextInfo, Mapping[str, Optional[str]], None]


@dataclass(frozen=True)
class AnalysisResult:
    score: int
    level: StrengthLevel
    suggestions: Tuple[str, ...]
    crack_time: str
    breach_detected: bool = False
    personal_info_detected: bool = False
    entropy_bits: float = 0.0
    crack_seconds: float = field(default=0.0, repr=False)

    @property
    def label(self) -> str:
        return self.level.label

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "level": self.level.label,
            "meter_fraction": self.level.meter_fraction,
            "suggestions": list(self.suggestions),
            "crack_time": self.crack_time,
            "breach_detected": self.breach_detected,
            "personal_info_detected": self.personal_info_detected,
            "entropy_bits": round(self.entropy_bits, 2),
        }


def _as_context(context: ContextLike) -> ContextInfo:
    if isinstance(context, ContextInfo):
        return context
    return ContextInfo.from_mapping(context)


def level_for_score(score: int) -> StrengthLevel:
    """Map a score to its level; out-of-range scores are clamped first."""
    score = max(0, min(100, score))
    for lower, level in _LEVEL_THRESHOLDS:
        if score >= lower:
            return level
    return StrengthLevel.VERY_WEAK


def character_pool(password: str) -> int:
    pool = 0
    if _LOWER_RE.search(password):
        pool += LOWER_POOL
    if _UPPER_RE.search(password):
        pool += UPPER_POOL
    if _DIGIT_RE.search(password):
        pool += DIGIT_POOL
    if _SPECIAL_RE.search(password):
        pool += SYMBOL_POOL
    return pool


def estimate_entropy(password: str) -> float:
    """
    Rough entropy estimate: length * log2(pool size), where the pool is the
    sum of the sizes of the character classes that actually appear.
    """
    pool = character_pool(password)
    if pool == 0:
        return 0.0
    return len(password) * math.log2(pool)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def humanize_seconds(seconds: float) -> str:
    minute = 60
    hour = 60 * minute
    day = 24 * hour
    year = 365 * day

    if seconds < 1:
        return "< 1 second"
    if seconds < minute:
        return _plural(int(seconds), "second")
    if seconds < hour:
        return _plural(int(seconds // minute), "minute")
    if seconds < day:
        return _plural(int(seconds // hour), "hour")
    if seconds < 30 * day:
        return _plural(int(seconds // day), "day")
    if seconds < year:
        return _plural(int(seconds // (30 * day)), "month")
    if seconds < 100 * year:
        return _plural(int(seconds // year), "year")
    return "centuries"


def estimate_crack_time(password: str, score: int) -> Tuple[str, float]:
    """
    Return (display string, raw seconds) for an offline attack at
    GUESSES_PER_SECOND. A score below DICTIONARY_ATTACK_MAX_SCORE with more
    than a day of nominal brute force is assumed dictionary-crackable and
    shown as DICTIONARY_ATTACK_ESTIMATE.
    """
    entropy = estimate_entropy(password)
    if entropy == 0.0:
        return INSTANT, 0.0

    try:
        seconds = 2.0 ** entropy / GUESSES_PER_SECOND
    except OverflowError:
        seconds = math.inf

    if score < DICTIONARY_ATTACK_MAX_SCORE and seconds > 24 * 60 * 60:
        return DICTIONARY_ATTACK_ESTIMATE, seconds
    return humanize_seconds(seconds), seconds


def is_known_weak(password: str) -> bool:
    return password.lower() in KNOWN_WEAK_PASSWORDS


def has_repeated_characters(password: str) -> bool:
    """True for any character repeated three or more times in a row."""
    return _REPEAT_RE.search(password) is not None


def has_sequential_pattern(password: str, patterns: Iterable[str] = SEQUENTIAL_PATTERNS) -> bool:
    lower = password.lower()
    for seq in patterns:
        if seq in lower or seq[::-1] in lower:
            return True
    return False


def has_common_pattern(password: str, patterns: Iterable[str] = COMMON_PATTERNS) -> bool:
    lower = password.lower()
    return any(word in lower for word in patterns)


def contains_personal_info(password: str, context: ContextLike) -> bool:
    lower = password.lower()
    return any(value.lower() in lower for value in _as_context(context).values())


def _breach_result(password: str) -> AnalysisResult:
    return AnalysisResult(
        score=0,
        level=StrengthLevel.VERY_WEAK,
        suggestions=(SUGGEST_BREACHED, SUGGEST_COMMON),
        crack_time=INSTANT,
        breach_detected=True,
        entropy_bits=estimate_entropy(password),
    )


def analyze(password: str, context: ContextLike = None) -> Optional[AnalysisResult]:
    """
    Score a password.

    Returns None for an empty password (nothing to analyze), otherwise a
    fresh AnalysisResult. An exact known-weak match short-circuits to score 0.
    """
    if not password:
        return None

    if is_known_weak(password):
        logger.debug("known weak password matched (length=%d)", len(password))
        return _breach_result(password)

    score = 0
    suggestions: List[str] = []

    length = len(password)
    if length > 12:
        score += 25
    elif length >= 8:
        score += 15
    else:
        suggestions.append(SUGGEST_LENGTH)

    has_lower = _LOWER_RE.search(password) is not None
    has_upper = _UPPER_RE.search(password) is not None
    has_digit = _DIGIT_RE.search(password) is not None
    has_special = _SPECIAL_RE.search(password) is not None

    if has_lower:
        score += 10
    else:
        suggestions.append(SUGGEST_LOWER)
    if has_upper:
        score += 15
    else:
        suggestions.append(SUGGEST_UPPER)
    if has_digit:
        score += 15
    else:
        suggestions.append(SUGGEST_DIGITS)
    if has_special:
        score += 20
    else:
        suggestions.append(SUGGEST_SPECIAL)

    if has_lower and has_upper and has_digit and has_special:
        score += 15

    # deductions
    if has_repeated_characters(password):
        score -= 10
        suggestions.append(SUGGEST_REPEATS)

    if has_sequential_pattern(password):
        score -= 15
        suggestions.append(SUGGEST_SEQUENCES)

    if has_common_pattern(password):
        score -= 20
        suggestions.append(SUGGEST_COMMON)

    personal = contains_personal_info(password, context)
    if personal:
        score -= 30
        suggestions.append(SUGGEST_PERSONAL)

    score = max(0, min(100, score))
    level = level_for_score(score)

    if not suggestions and level is StrengthLevel.VERY_STRONG:
        suggestions.append(VERY_STRONG_MESSAGE)

    crack_time, seconds = estimate_crack_time(password, score)
    logger.debug(
        "analyzed password (length=%d): score=%d level=%s personal_info=%s",
        length, score, level.label, personal,
    )
    return AnalysisResult(
        score=score,
        level=level,
        suggestions=tuple(suggestions),
        crack_time=crack_time,
        personal_info_detected=personal,
        entropy_bits=estimate_entropy(password),
        crack_seconds=seconds,
    )
