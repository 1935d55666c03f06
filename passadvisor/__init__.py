"""PassAdvisor: password strength advisor and generator."""

from .evaluator import AnalysisResult, ContextInfo, StrengthLevel, analyze
from .generator import RandomSourceUnavailable, generate

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "ContextInfo",
    "StrengthLevel",
    "RandomSourceUnavailable",
    "analyze",
    "generate",
]
