"""Sentio mood-journal analysis package.

Public entrypoints:
- EmotionAnalyzer(config=..., lexicon=...).analyze(text) -> AnalysisResult
- KeywordEmotionClassifier(lexicon).classify(text) -> AnalysisResult
- resolve(emotions) -> MoodAdvice
"""

from .domain.emotions import (
    EMOTIONS,
    LABEL_ORDER,
    AnalysisResult,
    MoodAdvice,
    make_distribution,
)
from .domain.fallback import KeywordEmotionClassifier
from .domain.resolver import resolve
from .services.analysis_service import EmotionAnalyzer

__all__ = [
    "EMOTIONS",
    "LABEL_ORDER",
    "AnalysisResult",
    "MoodAdvice",
    "make_distribution",
    "KeywordEmotionClassifier",
    "resolve",
    "EmotionAnalyzer",
]
