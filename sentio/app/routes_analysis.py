# sentio/app/routes_analysis.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Union
from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from sentio.exceptions import EntryDataError
from sentio.services.analysis_service import EmotionAnalyzer, get_analyzer
from sentio.usecases.analyze_entry import (
    run_analyze_usecase,
    run_entry_record_usecase,
    run_insights_usecase,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# ---------------------------
# 요청(Request) 스키마
# ---------------------------

class AnalyzeRequest(BaseModel):
    text: str = Field("", description="분석할 일기 원문")


class EntryRecordRequest(BaseModel):
    user_id: str = Field(..., description="외부 인증 서비스의 사용자 id")
    text: str = Field(..., description="저장할 일기 원문")


class InsightsRequest(BaseModel):
    entries: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="저장소에서 읽어온 journal_entries 레코드 목록",
    )
    today: Optional[date] = Field(None, description="기준 날짜 (기본: 오늘)")
    days: int = Field(7, description="추이 차트에 포함할 일수")

# ---------------------------
# 응답(Response) 스키마
# ---------------------------

class AnalysisPayload(BaseModel):
    mood: str
    score: float
    emotions: Dict[str, float]
    advice: str
    isFallback: bool = False


class AnalyzeSuccessResponse(BaseModel):
    status: Literal["ok"] = "ok"
    result: AnalysisPayload


class EntryRecord(BaseModel):
    user_id: str
    content: str
    mood: str
    mood_data: str
    sentiment_score: float
    created_at: str


class EntryRecordSuccessResponse(BaseModel):
    status: Literal["ok"] = "ok"
    analysis: AnalysisPayload
    record: EntryRecord


class InsightsSuccessResponse(BaseModel):
    status: Literal["ok"] = "ok"
    insights: Dict[str, Any]


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    error_type: str
    message: str


def _internal_error() -> ErrorResponse:
    return ErrorResponse(
        error_type="internal_error",
        message="서버 내부 오류가 발생했습니다. 잠시 후 다시 시도해 주세요.",
    )

# ---------------------------
# 라우트
# ---------------------------

@router.post(
    "/analyze",
    response_model=Union[AnalyzeSuccessResponse, ErrorResponse],
)
def analyze_route(
    req: AnalyzeRequest,
    analyzer: EmotionAnalyzer = Depends(get_analyzer),
):
    """
    일기 한 편 감정 분석 API.

    - 입력: 일기 텍스트
    - 출력: 무드 라벨, 지배 감정 점수, 감정 분포, 조언, 폴백 여부
    """
    try:
        result = run_analyze_usecase(analyzer, req.text)
        return AnalyzeSuccessResponse(result=result)
    except Exception:
        logger.exception("예상치 못한 내부 오류")
        return _internal_error()


@router.post(
    "/entries/record",
    response_model=Union[EntryRecordSuccessResponse, ErrorResponse],
)
def entry_record_route(
    req: EntryRecordRequest,
    analyzer: EmotionAnalyzer = Depends(get_analyzer),
):
    """저장소에 넣을 일기 레코드를 만들어 돌려준다 (저장은 클라이언트가 수행)."""
    try:
        payload = run_entry_record_usecase(analyzer, user_id=req.user_id, text=req.text)
        return EntryRecordSuccessResponse(**payload)

    except EntryDataError as e:
        logger.warning("일기 데이터 오류: %s", e)
        return ErrorResponse(error_type="entry_data_error", message=str(e))

    except Exception:
        logger.exception("예상치 못한 내부 오류")
        return _internal_error()


@router.post(
    "/insights",
    response_model=Union[InsightsSuccessResponse, ErrorResponse],
)
def insights_route(req: InsightsRequest):
    """레코드 목록 → 무드 분포/추이/연속 작성일 집계."""
    try:
        insights = run_insights_usecase(req.entries, today=req.today, days=req.days)
        return InsightsSuccessResponse(insights=insights)

    except EntryDataError as e:
        logger.warning("인사이트 요청 오류: %s", e)
        return ErrorResponse(error_type="entry_data_error", message=str(e))

    except Exception:
        logger.exception("예상치 못한 내부 오류")
        return _internal_error()
