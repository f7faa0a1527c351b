# sentio/usecases/analyze_entry.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sentio.domain.aggregation import build_insights
from sentio.domain.entries import build_entry_record
from sentio.exceptions import EntryDataError
from sentio.services.analysis_service import EmotionAnalyzer

MAX_TREND_DAYS = 90


def _validate_entry(user_id: Optional[str], text: str) -> None:
    if not user_id or not str(user_id).strip():
        raise EntryDataError("user_id 가 필요합니다.")
    if not text or not text.strip():
        raise EntryDataError("저장할 일기 내용을 입력해 주세요.")


def run_analyze_usecase(analyzer: EmotionAnalyzer, text: str) -> Dict[str, Any]:
    """일기 텍스트 한 편 분석 (빈 텍스트도 기본 결과로 응답)."""
    return analyzer.analyze(text or "").to_dict()


def run_entry_record_usecase(
    analyzer: EmotionAnalyzer,
    user_id: str,
    text: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    저장 직전 유즈케이스.

    1) 입력 검증 (user_id, 본문)
    2) 감정 분석
    3) 외부 저장소에 넣을 레코드 dict 생성 (저장 자체는 클라이언트/저장소 담당)
    """
    _validate_entry(user_id, text)
    content = text.strip()

    analysis = analyzer.analyze(content)
    record = build_entry_record(user_id=str(user_id).strip(), content=content, analysis=analysis, now=now)

    return {
        "analysis": analysis.to_dict(),
        "record": record,
    }


def run_insights_usecase(
    entries: List[Dict[str, Any]],
    today: Optional[date] = None,
    days: int = 7,
) -> Dict[str, Any]:
    if days < 1 or days > MAX_TREND_DAYS:
        raise EntryDataError(f"days 는 1 이상 {MAX_TREND_DAYS} 이하여야 합니다.")
    return build_insights(entries, today=today, days=days)
