"""
passadvisor.tables

Static lookup tables shared by the evaluator and the generator.
All tables are frozensets/strings, built once at import time and never mutated.
"""

import string
from typing import FrozenSet, Iterable

# whole-password matches (compared against the lowercased password)
KNOWN_WEAK_PASSWORDS: FrozenSet[str] = frozenset({
    "password123", "admin", "qwerty123", "iloveyou", "welcome", "123456",
    "password", "12345678", "123456789", "letmein",
    "1234567890", "qwerty", "abc123", "111111", "123123", "password1",
    "admin123", "welcome1", "changeme", "default", "root", "toor",
    "guest", "monkey", "dragon", "sunshine", "princess", "football",
    "trustno1", "000000",
})

# substring matches, unlike the whole-password KNOWN_WEAK_PASSWORDS
COMMON_PATTERNS: FrozenSet[str] = frozenset({
    "password", "passw0rd", "admin", "welcome", "letmein", "iloveyou",
    "monkey", "dragon", "sunshine", "princess", "football", "baseball",
    "master", "login", "hello", "secret", "shadow", "trustno1",
    "superman", "batman", "qwerty", "abc123", "111111", "changeme",
})

KEYBOARD_ROWS = ("qwertyuiop", "asdfghjkl", "zxcvbnm")


def _runs(source: str, size: int) -> Iterable[str]:
    """Every contiguous slice of `source` with the given size."""
    return (source[i:i + size] for i in range(len(source) - size + 1))


def _build_sequential_patterns(size: int = 5) -> FrozenSet[str]:
    patterns = set()
    for source in (string.ascii_lowercase, string.digits) + KEYBOARD_ROWS:
        patterns.update(_runs(source, size))
    # longer keyboard walks people actually type
    patterns.update({"qwerty", "asdfgh", "zxcvbn"})
    return frozenset(patterns)


# checked together with each entry's reversal
SEQUENTIAL_PATTERNS: FrozenSet[str] = _build_sequential_patterns()

# pool sizes used for the entropy estimate; the symbol pool is an approximation
LOWER_POOL = 26
UPPER_POOL = 26
DIGIT_POOL = 10
SYMBOL_POOL = 32

# generator alphabet: 26 + 26 + 10 + 28 = 90 characters
GENERATOR_SYMBOLS = "!@#$%^&*()_+~|}{[]:;?><,./-="
GENERATOR_CLASSES = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    GENERATOR_SYMBOLS,
)
GENERATOR_ALPHABET = "".join(GENERATOR_CLASSES)
