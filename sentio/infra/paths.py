# sentio/infra/paths.py
import os
from pathlib import Path

from sentio.core.config import PACKAGE_DIR

DATA_DIR = PACKAGE_DIR / "data"

DEFAULT_LEXICON_PATH = DATA_DIR / "emotion_lexicon.yaml"


def get_lexicon_path() -> Path:
    """SENTIO_LEXICON_PATH 가 있으면 그 경로, 없으면 패키지 기본 사전."""
    override = os.getenv("SENTIO_LEXICON_PATH", "").strip()
    if override:
        return Path(override)
    return DEFAULT_LEXICON_PATH
