#  sentio/cli.py
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from sentio.core.config import LOG_LEVEL, load_inference_config
from sentio.domain.lexicon import load_lexicon
from sentio.services.analysis_service import EmotionAnalyzer


def build_analyzer(offline: bool = False, lexicon_path: Optional[str] = None) -> EmotionAnalyzer:
    """CLI 와 스크립트에서 같은 설정으로 분석기를 만들기 위한 factory."""
    config = load_inference_config()
    if offline:
        config = replace(config, api_key="")

    lexicon = load_lexicon(Path(lexicon_path)) if lexicon_path else None
    return EmotionAnalyzer(config=config, lexicon=lexicon)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="일기 텍스트의 감정/무드를 분석해 JSON 으로 출력한다.")
    ap.add_argument("--text", required=True)
    ap.add_argument("--offline", action="store_true", help="원격 API 없이 키워드 분석만 사용한다.")
    ap.add_argument("--lexicon", default=None, help="감정 사전 YAML 경로 (기본: 패키지 내장 사전)")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    analyzer = build_analyzer(offline=args.offline, lexicon_path=args.lexicon)
    result = analyzer.analyze(args.text)

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
