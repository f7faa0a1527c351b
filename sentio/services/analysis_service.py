# sentio/services/analysis_service.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from sentio.core.config import InferenceConfig, load_inference_config
from sentio.domain.emotions import AnalysisResult, dominant_emotion, make_distribution
from sentio.domain.fallback import KeywordEmotionClassifier
from sentio.domain.lexicon import Lexicon
from sentio.domain.resolver import resolve
from sentio.infra.inference_client import (
    HuggingFaceEmotionClient,
    InferenceFailure,
    InferenceSuccess,
)

logger = logging.getLogger(__name__)

EMPTY_TEXT_ADVICE = "Write something to analyze your mood!"


def default_emotion_result() -> AnalysisResult:
    """빈 입력에 대한 고정 neutral 결과 (네트워크 호출 없음)."""
    return AnalysisResult(
        mood="neutral",
        score=1.0,
        emotions=make_distribution({"neutral": 1.0}),
        advice=EMPTY_TEXT_ADVICE,
        is_fallback=False,
    )


class EmotionAnalyzer:
    """
    일기 감정 분석 게이트웨이.

    파이프라인:
    1) 빈 텍스트 → 고정 neutral 결과
    2) API 키 미설정 → 키워드 폴백 (영구 폴백 모드, 오류 아님)
    3) 원격 분류 1회 시도 → 성공이면 분포로 무드/조언 결정
    4) 실패 결과(전송 오류, 비정상 응답, 알 수 없는 형태) → 키워드 폴백

    analyze() 는 어떤 경우에도 예외를 던지지 않고 AnalysisResult 를 돌려준다.
    """

    def __init__(
        self,
        config: Optional[InferenceConfig] = None,
        lexicon: Optional[Lexicon] = None,
        client: Optional[HuggingFaceEmotionClient] = None,
        fallback: Optional[KeywordEmotionClassifier] = None,
    ):
        self.config = config or load_inference_config()
        self.client = client or HuggingFaceEmotionClient(self.config)
        self.fallback = fallback or KeywordEmotionClassifier(lexicon)

        if not self.config.remote_enabled:
            logger.warning("Hugging Face API 키가 없습니다. 키워드 폴백 분석을 사용합니다.")

    @property
    def mode(self) -> str:
        return "remote" if self.config.remote_enabled else "fallback"

    def analyze(self, text: str) -> AnalysisResult:
        if not text or not text.strip():
            return default_emotion_result()

        if not self.config.remote_enabled:
            return self.fallback.classify(text)

        try:
            outcome = self.client.classify(text)
            if outcome.ok:
                return self._compose(outcome)
        except Exception as e:
            # 응답 필드 매핑 중 예기치 못한 오류도 폴백으로 전환
            logger.exception("감정 분석 중 예상치 못한 오류")
            outcome = InferenceFailure(reason="internal_error", detail={"message": str(e)})

        logger.warning("원격 감정 분석 실패(%s), 키워드 분석으로 전환합니다.", outcome.reason)
        return self.fallback.classify(text)

    def _compose(self, outcome: InferenceSuccess) -> AnalysisResult:
        emotions = outcome.emotions
        dominant, score = dominant_emotion(emotions)
        result = resolve(emotions)
        logger.info("원격 감정 분석 완료: dominant=%s, mood=%s", dominant, result.mood)

        return AnalysisResult(
            mood=result.mood,
            score=score,
            emotions=emotions,
            advice=result.advice,
            is_fallback=False,
        )


@lru_cache(maxsize=1)
def get_analyzer() -> EmotionAnalyzer:
    """분석기는 프로세스에서 한 번만 생성 (요청마다 사전 로드 금지)."""
    return EmotionAnalyzer()
