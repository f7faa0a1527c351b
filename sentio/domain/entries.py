# sentio/domain/entries.py
"""
일기 레코드(외부 저장소 journal_entries 테이블) 형태 정의.

저장소 I/O 는 하지 않는다. 분석 결과를 저장용 dict 로 만들고,
저장소에서 읽어온 레코드의 mood_data 를 인사이트 집계용으로 정리만 한다.

레코드 형태:
  {user_id, content, mood, mood_data, sentiment_score, created_at}
  mood_data = JSON 문자열 {emotions, dominantEmotion, advice, timestamp}
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from sentio.domain.emotions import FALLBACK_EMOTIONS, AnalysisResult

logger = logging.getLogger(__name__)

# 예전 버전 mood_data 는 emotions 없이 최상위에 감정 점수를 직접 넣었다
_LEGACY_EMOTION_KEYS = ("joy", "sadness", "anger")


def _iso_now(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat()


# 저장소가 끝자리 0을 잘라 내보내는 소수 초(.12, .5 등). fromisoformat 은 3.11 전까지 3/6자리만 받는다
_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def _pad_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """ISO8601 문자열(끝의 'Z' 포함) 또는 datetime → datetime. 시간대가 없으면 UTC 로 본다."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(_pad_fraction, text, count=1)
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_mood_data(analysis: AnalysisResult, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "emotions": dict(analysis.emotions),
        "dominantEmotion": analysis.mood or "neutral",
        "advice": analysis.advice or "",
        "timestamp": _iso_now(now),
    }


def build_entry_record(
    user_id: str,
    content: str,
    analysis: AnalysisResult,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """분석 결과를 외부 저장소에 넣을 일기 레코드 dict 로 만든다."""
    created_at = _iso_now(now)
    mood_data = build_mood_data(analysis, now)

    return {
        "user_id": user_id,
        "content": content,
        "mood": analysis.mood or "neutral",
        "mood_data": json.dumps(mood_data, ensure_ascii=False),
        "sentiment_score": analysis.score or 0,
        "created_at": created_at,
    }


def _empty_emotions() -> Dict[str, float]:
    return {emotion: 0.0 for emotion in FALLBACK_EMOTIONS}


def parse_mood_data(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    저장된 레코드의 mood_data 를 {emotions, dominantEmotion, advice, timestamp} 로 정리한다.

    - 문자열이면 JSON 파싱 (실패하면 None → 호출 측에서 해당 레코드를 건너뜀)
    - emotions 가 없으면 예전 형식(joy/sadness/anger 최상위 키)을 옮겨 담는다
    - mood_data 자체가 없으면 entry.mood / created_at 으로 기본값 생성
    """
    raw = entry.get("mood_data")

    if not raw:
        return {
            "emotions": _empty_emotions(),
            "dominantEmotion": entry.get("mood") or "neutral",
            "advice": "",
            "timestamp": entry.get("created_at"),
        }

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning("mood_data 파싱 실패 (id=%s): %s", entry.get("id"), e)
            return None

    if not isinstance(raw, dict):
        logger.warning("mood_data 형식이 올바르지 않습니다 (id=%s)", entry.get("id"))
        return None

    mood_data = dict(raw)
    if not mood_data.get("emotions"):
        emotions = _empty_emotions()
        for key in _LEGACY_EMOTION_KEYS:
            if mood_data.get(key) is not None:
                emotions[key] = mood_data[key]
        mood_data["emotions"] = emotions

    return mood_data


def normalize_entry(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """mood_data 를 dict 로 정리한 레코드 사본. 정리할 수 없으면 None."""
    mood_data = parse_mood_data(entry)
    if mood_data is None:
        return None
    out = dict(entry)
    out["mood_data"] = mood_data
    return out
