# sentio/app/routes_health.py

from __future__ import annotations

from fastapi import APIRouter, Depends

from sentio.services.analysis_service import EmotionAnalyzer, get_analyzer

router = APIRouter()


@router.get("/health")
def health(analyzer: EmotionAnalyzer = Depends(get_analyzer)):
    """
    단순 헬스 체크 엔드포인트.

    - 서버가 살아있는지 + 현재 추론 모드(remote / fallback) 확인
    """
    return {
        "status": "ok",
        "service": "sentio-mood-analyzer",
        "inference_mode": analyzer.mode,
    }
