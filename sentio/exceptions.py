# sentio/exceptions.py
"""
프로젝트 전역에서 공통으로 사용하는 예외 정의 모듈.

- ConfigError      : 설정/환경(.env 등) 문제
- LexiconLoadError : 감정 키워드 사전 YAML 로딩 문제
- EntryDataError   : 웹/입력 데이터 검증 실패
- InferenceError   : 원격 감정 분류 호출 및 응답 파싱 실패 (게이트웨이 내부에서만 사용)
"""


class ConfigError(RuntimeError):
    """환경 설정(.env 등) 문제."""
    pass


class LexiconLoadError(IOError):
    """감정 키워드 사전 파일 로딩 실패."""
    pass


class EntryDataError(ValueError):
    """사용자 id / 일기 본문 등 입력 데이터 검증 실패."""
    pass


class InferenceError(RuntimeError):
    """원격 추론 호출, 응답 포맷, 파싱 과정에서 발생하는 오류."""
    pass
