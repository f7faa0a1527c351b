# sentio/domain/aggregation.py
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sentio.domain.emotions import dominant_emotion
from sentio.domain.entries import normalize_entry, parse_timestamp

logger = logging.getLogger(__name__)

# 파이 차트 카테고리: dominantEmotion 문자열에 포함된 단어로 판정 (위에서부터, 처음 맞는 것)
PIE_CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("happy", ("happy", "joy", "excited")),
    ("sad", ("sad", "sadness", "unhappy")),
    ("angry", ("angry", "anger", "frustrated")),
    ("fear", ("fear", "anxious", "worried")),
    ("surprise", ("surprise", "surprised", "shocked")),
)

# 최근 기록 카드 표시 기준
RECENT_ENTRIES_LIMIT = 10
PREVIEW_LENGTH = 100
SIGNIFICANT_EMOTION_SCORE = 0.1


def _entry_dominant(entry: Dict[str, Any]) -> str:
    mood_data = entry.get("mood_data") or {}
    if not isinstance(mood_data, dict):
        mood_data = {}
    return str(mood_data.get("dominantEmotion") or entry.get("mood") or "neutral").lower()


def categorize_mood(label: str) -> str:
    label = (label or "").lower()
    for category, needles in PIE_CATEGORIES:
        if any(n in label for n in needles):
            return category
    return "neutral"


def build_mood_distribution(entries: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """레코드별 지배 감정을 파이 차트 카테고리로 세어 돌려준다."""
    counts = {category: 0 for category, _ in PIE_CATEGORIES}
    counts["neutral"] = 0
    for entry in entries:
        counts[categorize_mood(_entry_dominant(entry))] += 1
    return counts


def average_mood_label(entries: List[Dict[str, Any]]) -> Optional[str]:
    """sentiment_score 평균 → Positive(>0.3) / Negative(<-0.3) / Neutral. 레코드가 없으면 None."""
    if not entries:
        return None

    avg = sum(float(e.get("sentiment_score") or 0) for e in entries) / len(entries)
    if avg > 0.3:
        return "Positive"
    if avg < -0.3:
        return "Negative"
    return "Neutral"


def _dated(entries: Iterable[Dict[str, Any]]) -> List[Tuple[datetime, Dict[str, Any]]]:
    out: List[Tuple[datetime, Dict[str, Any]]] = []
    for entry in entries:
        created_at = entry.get("created_at")
        if not created_at:
            continue
        try:
            out.append((parse_timestamp(created_at), entry))
        except (TypeError, ValueError):
            logger.warning("created_at 형식이 올바르지 않아 건너뜁니다: %r", created_at)
    return out


def calculate_streak(entries: Iterable[Dict[str, Any]]) -> int:
    """
    가장 최근 작성일부터 거슬러 올라가며 연속 작성 일수를 센다.

    - 날짜(달력 기준) 단위로 묶으므로 같은 날 여러 번 써도 하루
    - 하루라도 비면 중단
    """
    days = sorted({ts.date() for ts, _entry in _dated(entries)}, reverse=True)
    if not days:
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak


def build_daily_trend(
    entries: Iterable[Dict[str, Any]],
    today: date,
    days: int = 7,
) -> List[Dict[str, Any]]:
    """최근 days 일의 날짜별 포인트 (하루에 여러 개면 가장 늦은 레코드)."""
    latest: Dict[date, Tuple[datetime, Dict[str, Any]]] = {}
    for ts, entry in _dated(entries):
        day = ts.date()
        if day not in latest or ts > latest[day][0]:
            latest[day] = (ts, entry)

    points: List[Dict[str, Any]] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        hit = latest.get(day)
        entry = hit[1] if hit else None
        points.append(
            {
                "date": day.isoformat(),
                "label": day.strftime("%a"),
                "mood": entry.get("mood") if entry else None,
                "score": float(entry.get("sentiment_score") or 0) if entry else 0.0,
            }
        )
    return points


def _round_percent(score: float) -> int:
    return int(math.floor(score * 100 + 0.5))


def significant_emotions(emotions: Dict[str, Any]) -> List[Dict[str, Any]]:
    """점수 0.1 초과 감정만, 점수 내림차순, 반올림 퍼센트로."""
    scored: List[Tuple[str, float]] = []
    for emotion, score in (emotions or {}).items():
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            continue
        if score > SIGNIFICANT_EMOTION_SCORE:
            scored.append((emotion, float(score)))

    scored.sort(key=lambda kv: kv[1], reverse=True)
    return [{"emotion": emotion, "percentage": _round_percent(score)} for emotion, score in scored]


def build_recent_entries(
    entries: Iterable[Dict[str, Any]],
    limit: int = RECENT_ENTRIES_LIMIT,
) -> List[Dict[str, Any]]:
    """
    최근 기록 목록 카드용 데이터.

    - created_at 최신순으로 limit 개
    - dominantEmotion 이 저장돼 있지 않으면 emotions 최댓값으로 채움 (없으면 neutral)
    - 본문은 PREVIEW_LENGTH 자 넘으면 잘라서 '...' 붙임
    """
    dated = sorted(_dated(entries), key=lambda pair: pair[0], reverse=True)

    out: List[Dict[str, Any]] = []
    for ts, entry in dated[:limit]:
        mood_data = entry.get("mood_data")
        if not isinstance(mood_data, dict):
            mood_data = {}
        emotions = mood_data.get("emotions")
        if not isinstance(emotions, dict):
            emotions = {}

        dominant = mood_data.get("dominantEmotion")
        if not dominant:
            numeric = {
                k: v for k, v in emotions.items()
                if isinstance(v, (int, float)) and not isinstance(v, bool)
            }
            dominant, _score = dominant_emotion(numeric, order=tuple(numeric))

        content = str(entry.get("content") or "")
        if len(content) > PREVIEW_LENGTH:
            content = content[:PREVIEW_LENGTH] + "..."

        out.append(
            {
                "id": entry.get("id"),
                "created_at": ts.isoformat(),
                "mood": entry.get("mood"),
                "dominantEmotion": dominant,
                "preview": content,
                "advice": mood_data.get("advice") or "",
                "emotions": significant_emotions(emotions),
            }
        )
    return out


def build_insights(
    entries: Iterable[Dict[str, Any]],
    today: Optional[date] = None,
    days: int = 7,
) -> Dict[str, Any]:
    """저장소에서 읽은 레코드 목록 → 차트/요약 카드용 집계 결과."""
    today = today or date.today()

    normalized: List[Dict[str, Any]] = []
    for entry in entries:
        n = normalize_entry(entry)
        if n is not None:
            normalized.append(n)

    return {
        "total_entries": len(normalized),
        "average_mood": average_mood_label(normalized),
        "streak": calculate_streak(normalized),
        "mood_distribution": build_mood_distribution(normalized),
        "trend": build_daily_trend(normalized, today=today, days=days),
        "recent_entries": build_recent_entries(normalized),
    }
