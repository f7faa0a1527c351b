# sentio/domain/emotions.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

# 정규 감정 집합 (모든 분포는 이 키를 전부 가진다)
EMOTIONS: Tuple[str, ...] = (
    "joy",
    "sadness",
    "anger",
    "fear",
    "surprise",
    "disgust",
    "neutral",
)

# 원격 분류 모델의 위치 기반 점수 배열 순서
LABEL_ORDER: Tuple[str, ...] = (
    "anger",
    "disgust",
    "fear",
    "joy",
    "neutral",
    "sadness",
    "surprise",
)

# 키워드 폴백이 점수를 매기는 감정 (순서 = 동점 시 우선순위)
FALLBACK_EMOTIONS: Tuple[str, ...] = ("joy", "sadness", "anger", "fear", "surprise")

EmotionDistribution = Mapping[str, float]


def make_distribution(scores: Optional[Mapping[str, float]] = None) -> EmotionDistribution:
    """
    정규 감정 집합의 모든 키를 가진 읽기 전용 분포를 만든다.

    - 관측되지 않은 감정은 0.0
    - 집합에 없는 키는 버린다
    - 합이 1일 필요는 없음 (multi-label 분류기 출력 허용)
    """
    scores = scores or {}
    data = {emotion: float(scores.get(emotion, 0.0) or 0.0) for emotion in EMOTIONS}
    return MappingProxyType(data)


def dominant_emotion(
    emotions: Mapping[str, float],
    order: Iterable[str] = LABEL_ORDER,
    default: str = "neutral",
) -> Tuple[str, float]:
    """order 순서대로 훑으며 점수가 '엄격히' 가장 큰 감정을 찾는다 (동점이면 먼저 본 감정)."""
    best_key = default
    best_val = 0.0
    for key in order:
        val = float(emotions.get(key, 0.0) or 0.0)
        if val > best_val:
            best_key, best_val = key, val
    return best_key, best_val


@dataclass(frozen=True)
class MoodAdvice:
    """분포에서 결정된 무드 라벨과 응원 메시지."""

    mood: str
    advice: str


@dataclass(frozen=True)
class AnalysisResult:
    """일기 한 편에 대한 감정 분석 결과.

    - mood: 결정된 무드 라벨 (예: "Happy", "Sad & Angry")
    - score: 지배 감정의 신뢰도 (폴백은 최다 키워드 비율)
    - emotions: 정규 감정 분포 (읽기 전용)
    - advice: 응원/조언 메시지
    - is_fallback: 키워드 폴백 경로로 계산되었는지 여부
    """

    mood: str
    score: float
    emotions: EmotionDistribution
    advice: str
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """프론트/저장용 dict (키 이름은 기존 클라이언트와 호환)."""
        return {
            "mood": self.mood,
            "score": self.score,
            "emotions": dict(self.emotions),
            "advice": self.advice,
            "isFallback": self.is_fallback,
        }
