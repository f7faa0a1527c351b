# sentio/domain/fallback.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Optional

from sentio.domain.emotions import (
    FALLBACK_EMOTIONS,
    AnalysisResult,
    dominant_emotion,
    make_distribution,
)
from sentio.domain.lexicon import PHRASE_WEIGHT, WORD_WEIGHT, Lexicon, get_default_lexicon
from sentio.domain.resolver import resolve

logger = logging.getLogger(__name__)

# 최다 감정 비율이 이보다 낮으면 "뚜렷한 감정 없음"으로 보고 neutral 처리
SIGNIFICANCE_THRESHOLD = 0.25

NO_SIGNAL_ADVICE = "Thanks for sharing. If you add a bit more detail, I can help better."


class KeywordEmotionClassifier:
    """
    네트워크 없이 키워드/구절 가중치로 감정 분포를 만드는 폴백 분류기.

    매칭 규칙 (분류 결과에 영향을 주므로 임의로 '단어 단위'로 바꾸지 말 것)
    - 구절: 소문자 원문에 구절이 부분 문자열로 있으면 +2
    - 단어: 공백으로 나눈 토큰이 키워드를 '포함'하면 +1
      (감정별로 토큰당 최대 +1, 한 토큰이 여러 감정에 동시에 걸릴 수 있음)
    """

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_default_lexicon()

    def count_emotions(self, text: str) -> Dict[str, int]:
        """감정별 정수 카운트 (joy, sadness, anger, fear, surprise)."""
        text_lower = text.lower()
        words = text_lower.split()
        counts: Dict[str, int] = defaultdict(int)
        for emotion in FALLBACK_EMOTIONS:
            counts[emotion] = 0

        # 구절 가산 (2점)
        for emotion, phrases in self.lexicon.phrases.items():
            for phrase in phrases:
                if phrase in text_lower:
                    counts[emotion] += PHRASE_WEIGHT

        # 단어 매칭 (1점)
        for word in words:
            for emotion, keywords in self.lexicon.keywords.items():
                if any(keyword in word for keyword in keywords):
                    counts[emotion] += WORD_WEIGHT

        return dict(counts)

    def classify(self, text: str) -> AnalysisResult:
        counts = self.count_emotions(text or "")
        total = sum(counts.values())

        if total == 0:
            return AnalysisResult(
                mood="Neutral",
                score=1.0,
                emotions=make_distribution({"neutral": 1.0}),
                advice=NO_SIGNAL_ADVICE,
                is_fallback=True,
            )

        proportions = {emotion: count / total for emotion, count in counts.items()}
        emotions = make_distribution(proportions)

        dominant, max_score = dominant_emotion(emotions, order=FALLBACK_EMOTIONS)
        if max_score < SIGNIFICANCE_THRESHOLD:
            # 비율은 유지하고 라벨만 neutral. 이 라벨은 아래 디버그 로그에만 쓰인다
            dominant = "neutral"

        # 보조 감정도 복합 규칙에 반영되도록 원래 비율 그대로 넘긴다
        outcome = resolve(emotions)
        logger.debug(
            "키워드 폴백 분석: counts=%s, dominant=%s, mood=%s",
            counts,
            dominant,
            outcome.mood,
        )

        return AnalysisResult(
            mood=outcome.mood,
            score=max_score,
            emotions=emotions,
            advice=outcome.advice,
            is_fallback=True,
        )
