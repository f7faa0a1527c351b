# sentio/infra/inference_client.py
"""
원격 감정 분류 API(Hugging Face Inference API) 호출 + 응답 정규화.

응답 형태가 모델/버전마다 다르기 때문에, 알려진 형태를 순서대로 엄격하게 검증해 보고
처음 통과한 형태로 해석한다 (tagged-variant parse).

  1) [{"label": "joy", "score": 0.8}, ...]
  2) [0.1, 0.0, 0.05, 0.7, 0.05, 0.08, 0.02]      (LABEL_ORDER 위치 기반)
  3) [[{"label": "joy", "score": 0.8}, ...]]      (1번을 한 겹 더 감싼 형태)
  4) [[0.1, 0.0, 0.05, 0.7, 0.05, 0.08, 0.02]]    (2번을 한 겹 더 감싼 형태)

어느 것도 통과하지 못하면 실패 결과를 돌려주고, 호출 측에서 키워드 폴백으로 전환한다.
이 모듈은 호출자에게 예외를 던지지 않는다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Dict, List, Optional, Tuple, Union

import requests
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from sentio.core.config import InferenceConfig
from sentio.domain.emotions import EMOTIONS, LABEL_ORDER, EmotionDistribution, make_distribution
from sentio.exceptions import InferenceError

logger = logging.getLogger(__name__)


# ---------------------------
# 응답 스키마
# ---------------------------

# bool 은 숫자로 받지 않고, 점수는 [0, 1] 범위만 허용한다
_Number = Union[
    Annotated[StrictInt, Field(ge=0, le=1)],
    Annotated[StrictFloat, Field(ge=0, le=1, allow_inf_nan=False)],
]


class LabelScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: StrictStr
    score: Optional[_Number] = None


_LabelScores = Annotated[List[LabelScore], Field(min_length=1)]
_ScoreVector = Annotated[List[_Number], Field(min_length=1)]

_LABEL_SCORES = TypeAdapter(_LabelScores)
_SCORE_VECTOR = TypeAdapter(_ScoreVector)
_NESTED_LABEL_SCORES = TypeAdapter(Annotated[List[_LabelScores], Field(min_length=1)])
_NESTED_SCORE_VECTOR = TypeAdapter(Annotated[List[_ScoreVector], Field(min_length=1)])


def _from_label_scores(items: List[LabelScore]) -> Dict[str, float]:
    scores: Dict[str, float] = {}
    for item in items:
        key = item.label.strip().lower()
        if key in EMOTIONS:
            scores[key] = float(item.score or 0.0)
    return scores


def _from_score_vector(values: List[float]) -> Dict[str, float]:
    # LABEL_ORDER 보다 긴 배열의 나머지 값은 버린다
    return {label: float(value) for label, value in zip(LABEL_ORDER, values)}


_VARIANTS: Tuple[Tuple[str, TypeAdapter, Callable[[Any], Dict[str, float]]], ...] = (
    ("label_scores", _LABEL_SCORES, _from_label_scores),
    ("score_vector", _SCORE_VECTOR, _from_score_vector),
    ("nested_label_scores", _NESTED_LABEL_SCORES, lambda v: _from_label_scores(v[0])),
    ("nested_score_vector", _NESTED_SCORE_VECTOR, lambda v: _from_score_vector(v[0])),
)


# ---------------------------
# 결과 타입
# ---------------------------

@dataclass(frozen=True)
class InferenceSuccess:
    """정규화까지 끝난 원격 추론 결과."""

    emotions: EmotionDistribution
    shape: str
    raw: Any = None

    ok = True


@dataclass(frozen=True)
class InferenceFailure:
    """폴백으로 보내야 하는 원격 추론 실패 (전송 오류, 비정상 응답, 알 수 없는 형태 등)."""

    reason: str
    detail: Dict[str, Any] = field(default_factory=dict)

    ok = False


InferenceOutcome = Union[InferenceSuccess, InferenceFailure]


def normalize_emotion_payload(payload: Any) -> Tuple[str, Dict[str, float]]:
    """
    응답 payload 를 알려진 형태 순서대로 검증해서 {감정: 점수} 로 바꾼다.

    어떤 형태에도 맞지 않거나, 인식 가능한 감정 라벨이 하나도 없으면 InferenceError.
    """
    for shape, adapter, convert in _VARIANTS:
        try:
            parsed = adapter.validate_python(payload)
        except ValidationError:
            continue

        scores = convert(parsed)
        if not scores:
            raise InferenceError(f"인식 가능한 감정 라벨이 없습니다 (shape={shape})")
        return shape, scores

    raise InferenceError("알 수 없는 응답 형태입니다.")


def parse_inference_payload(payload: Any) -> InferenceOutcome:
    """payload → InferenceSuccess / InferenceFailure."""
    try:
        shape, scores = normalize_emotion_payload(payload)
    except InferenceError as e:
        return InferenceFailure(reason="unrecognized_shape", detail={"message": str(e)})

    return InferenceSuccess(emotions=make_distribution(scores), shape=shape, raw=payload)


class HuggingFaceEmotionClient:
    """Hugging Face Inference API 텍스트 감정 분류 호출 래퍼 (1회 시도, 재시도 없음)."""

    def __init__(self, config: InferenceConfig):
        self.config = config

    def _build_request(self, text: str) -> Dict[str, Any]:
        return {
            "url": self.config.endpoint_url,
            "headers": {
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            "json": {
                "inputs": text,
                "options": {"wait_for_model": self.config.wait_for_model},
            },
            "timeout": self.config.timeout,
        }

    def classify(self, text: str) -> InferenceOutcome:
        if not self.config.remote_enabled:
            return InferenceFailure(reason="not_configured")

        request = self._build_request(text)
        logger.info("감정 분류 API 호출: model=%s", self.config.model)

        try:
            response = requests.post(
                request["url"],
                headers=request["headers"],
                json=request["json"],
                timeout=request["timeout"],
            )
        except requests.RequestException as e:
            logger.warning("감정 분류 API 전송 실패: %s", e)
            return InferenceFailure(reason="transport_error", detail={"message": str(e)})

        if not response.ok:
            logger.warning("감정 분류 API 비정상 응답: status=%s", response.status_code)
            return InferenceFailure(
                reason="http_status",
                detail={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("감정 분류 API 응답 JSON 파싱 실패: %s", e)
            return InferenceFailure(reason="malformed_json", detail={"message": str(e)})

        outcome = parse_inference_payload(payload)
        if not outcome.ok:
            logger.warning("감정 분류 API 응답 형태를 해석할 수 없습니다: %s", outcome.detail)
        return outcome
