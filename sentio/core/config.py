# sentio/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from sentio.exceptions import ConfigError

# 프로젝트 루트 디렉토리
BASE_DIR = Path(__file__).resolve().parents[2]

# 패키지 디렉토리 (sentio/)
PACKAGE_DIR = Path(__file__).resolve().parents[1]

# .env 로딩
ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

# 로그 레벨 (.env의 LOG_LEVEL로 조절, 기본 INFO)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS 설정
# - .env 에 CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:8000" 처럼 넣으면 그 값 사용
# - 없으면 기본으로 전부 허용(["*"])
_cors_raw = os.getenv("CORS_ORIGINS", "")
if _cors_raw:
    CORS_ORIGINS = [o.strip() for o in _cors_raw.split(",") if o.strip()]
else:
    CORS_ORIGINS = ["*"]

DEFAULT_EMOTION_MODEL = "j-hartmann/emotion-english-distilroberta-base"
DEFAULT_MODEL_URL_TEMPLATE = "https://api-inference.huggingface.co/models/{model}"


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


@dataclass(frozen=True)
class InferenceConfig:
    """원격 감정 분류(Hugging Face Inference API) 호출 설정.

    - api_key: 비어 있으면 원격 호출을 아예 하지 않고 키워드 폴백 모드로 동작
    - model: 감정 분류 모델 id
    - url_template: {model} 자리에 모델 id가 들어가는 엔드포인트 템플릿
    - wait_for_model: 모델 워밍업 중이면 응답을 기다리도록 요청
    - timeout: 요청 타임아웃(초). 재시도는 하지 않는다.
    """

    api_key: str = ""
    model: str = DEFAULT_EMOTION_MODEL
    url_template: str = DEFAULT_MODEL_URL_TEMPLATE
    wait_for_model: bool = True
    timeout: float = 30.0

    @property
    def endpoint_url(self) -> str:
        return self.url_template.format(model=self.model)

    @property
    def remote_enabled(self) -> bool:
        return bool(self.api_key)


def load_inference_config() -> InferenceConfig:
    """
    환경변수 기준으로 원격 추론 설정 로드

    환경변수
    - HUGGINGFACE_API_KEY (별칭: VITE_HUGGINGFACE_API_KEY, default: 없음 → 폴백 모드)
    - EMOTION_MODEL (default: j-hartmann/emotion-english-distilroberta-base)
    - HF_MODEL_URL_TEMPLATE (default: https://api-inference.huggingface.co/models/{model})
    - HF_WAIT_FOR_MODEL (default: 1)
    - HF_TIMEOUT_SECONDS (default: 30)
    - HF_MODEL_URL_TEMPLATE 에 {model} 자리가 없으면 ConfigError
    """
    api_key = (
        os.getenv("HUGGINGFACE_API_KEY")
        or os.getenv("VITE_HUGGINGFACE_API_KEY")
        or ""
    ).strip()

    url_template = os.getenv("HF_MODEL_URL_TEMPLATE", DEFAULT_MODEL_URL_TEMPLATE).strip()
    if "{model}" not in url_template:
        raise ConfigError(f"HF_MODEL_URL_TEMPLATE 에 {{model}} 자리가 없습니다: {url_template!r}")

    return InferenceConfig(
        api_key=api_key,
        model=os.getenv("EMOTION_MODEL", DEFAULT_EMOTION_MODEL).strip() or DEFAULT_EMOTION_MODEL,
        url_template=url_template,
        wait_for_model=_env_bool("HF_WAIT_FOR_MODEL", True),
        timeout=_env_float("HF_TIMEOUT_SECONDS", 30.0),
    )
