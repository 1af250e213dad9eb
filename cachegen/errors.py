"""
Exception hierarchy for the cache wrapper generator.

생성 파이프라인의 각 단계(스캔, 파싱, 렌더링, 쓰기)에서 발생하는 오류를 정의합니다.
모든 오류는 실행 전체를 중단시키며, CLI에서 한 번에 처리됩니다.
"""

from typing import Optional


class GeneratorError(Exception):
    """
    생성기 오류의 기본 클래스

    Args:
        message: 사람이 읽을 수 있는 오류 메시지
        details: 추가 컨텍스트 (경로, 라인 번호 등)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ScanError(GeneratorError):
    """입력 디렉토리를 탐색할 수 없음"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, {"path": path} if path else None)
        self.path = path


class ParseError(GeneratorError):
    """입력 파일이 올바른 Go 소스가 아님"""

    def __init__(self, message: str, path: str = "", line: int = 0):
        details = {}
        if path:
            details["path"] = path
        if line:
            details["line"] = line
        super().__init__(message, details)
        self.path = path
        self.line = line


class RenderError(GeneratorError):
    """템플릿 렌더링 실패 (생성기 자체의 버그)"""

    def __init__(self, message: str, template: str = ""):
        super().__init__(message, {"template": template} if template else None)
        self.template = template


class WriteError(GeneratorError):
    """출력 파일 쓰기 실패"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, {"path": path} if path else None)
        self.path = path
