# sentio/infra/yaml_io.py
from pathlib import Path
from typing import Any

import yaml

from sentio.exceptions import LexiconLoadError


def load_yaml(path: Path) -> Any:
    """YAML 파일을 로드하여 파이썬 객체로 반환한다."""
    if not path.exists():
        raise LexiconLoadError(f"YAML 파일을 찾을 수 없습니다: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LexiconLoadError(f"YAML 파싱에 실패했습니다: {path} ({e})") from e
