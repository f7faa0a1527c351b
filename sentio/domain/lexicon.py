# sentio/domain/lexicon.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from sentio.domain.emotions import EMOTIONS
from sentio.exceptions import LexiconLoadError
from sentio.infra.paths import get_lexicon_path
from sentio.infra.yaml_io import load_yaml

logger = logging.getLogger(__name__)

WORD_WEIGHT = 1
PHRASE_WEIGHT = 2


@dataclass(frozen=True)
class Lexicon:
    """키워드 폴백용 감정 사전 (프로세스 전역, 읽기 전용).

    - keywords: {감정: (키워드, ...)}  토큰 부분 문자열 매칭, 가중치 1
    - phrases : {감정: (구절, ...)}    원문 부분 문자열 매칭, 가중치 2
    """

    keywords: Mapping[str, Tuple[str, ...]]
    phrases: Mapping[str, Tuple[str, ...]]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lexicon":
        return cls(
            keywords=_freeze_section(data.get("keywords"), "keywords"),
            phrases=_freeze_section(data.get("phrases"), "phrases"),
        )


def _freeze_section(raw: Any, name: str) -> Mapping[str, Tuple[str, ...]]:
    """{감정: [문자열, ...]} 섹션을 검증하고 소문자 튜플로 고정한다."""
    if raw is None:
        return MappingProxyType({})
    if not isinstance(raw, dict):
        raise LexiconLoadError(f"'{name}' 섹션은 감정별 목록(dict)이어야 합니다.")

    out: Dict[str, Tuple[str, ...]] = {}
    for emotion, words in raw.items():
        if emotion not in EMOTIONS:
            raise LexiconLoadError(f"알 수 없는 감정 키입니다: {name}.{emotion}")
        if not isinstance(words, list):
            raise LexiconLoadError(f"'{name}.{emotion}' 값은 목록이어야 합니다.")

        seen = set()
        items = []
        for w in words:
            if not isinstance(w, str) or not w.strip():
                continue
            w = w.strip().lower()
            if w not in seen:
                seen.add(w)
                items.append(w)
        out[emotion] = tuple(items)

    return MappingProxyType(out)


def load_lexicon(path: Optional[Path] = None) -> Lexicon:
    """감정 사전 YAML 을 로드한다. 형식이 맞지 않으면 LexiconLoadError."""
    path = path or get_lexicon_path()
    data = load_yaml(path)

    if not isinstance(data, dict) or not isinstance(data.get("emotion_lexicon"), dict):
        raise LexiconLoadError(f"'emotion_lexicon' 루트 키가 없습니다: {path}")

    lexicon = Lexicon.from_dict(data["emotion_lexicon"])
    logger.info(
        "감정 사전 로드 완료: %s (keywords=%d, phrases=%d)",
        path,
        sum(len(v) for v in lexicon.keywords.values()),
        sum(len(v) for v in lexicon.phrases.values()),
    )
    return lexicon


@lru_cache(maxsize=1)
def get_default_lexicon() -> Lexicon:
    """기본 사전은 프로세스에서 한 번만 로드해서 재사용."""
    return load_lexicon()
