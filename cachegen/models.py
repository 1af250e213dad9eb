"""
Data models for cache wrapper generation.

이 모듈은 Go 소스 파싱 결과와 캐시 정책 결정을 저장하기 위한 데이터 모델을 제공합니다.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class Parameter:
    """메서드 매개변수 정보"""
    name: str
    type: str
    variadic: bool = False

    @property
    def call_arg(self) -> str:
        """원본 메서드 호출 시 전달할 인자 표현"""
        return f"{self.name}..." if self.variadic else self.name


@dataclass
class FieldInfo:
    """구조체 필드 정보"""
    name: str
    type: str


@dataclass
class StructInfo:
    """구조체 정보 (정보 출력용, 생성에는 사용되지 않음)"""
    name: str
    fields: List[FieldInfo] = field(default_factory=list)
    line_number: int = 0


@dataclass
class ImportInfo:
    """import 선언 정보"""
    path: str
    alias: Optional[str] = None

    @property
    def package_name(self) -> str:
        """코드에서 참조되는 패키지 이름"""
        if self.alias:
            return self.alias
        return self.path.rstrip("/").split("/")[-1]


@dataclass
class KeyTemplate:
    """캐시 키 포맷 문자열과 포맷 인자 목록"""
    format: str
    args: List[str] = field(default_factory=list)

    @property
    def args_str(self) -> str:
        return ", ".join(self.args)


@dataclass
class MethodInfo:
    """Queries 리시버에 바인딩된 메서드 정보"""
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    results: List[str] = field(default_factory=list)
    line_number: int = 0

    # 한정자(qualifier) 단계에서 채워짐
    qualified_parameters: List[Parameter] = field(default_factory=list)
    qualified_results: List[str] = field(default_factory=list)
    first_result: str = "interface{}"

    # 캐시 정책 단계에서 채워짐
    cacheable: bool = False
    use_cache: bool = False
    key: Optional[KeyTemplate] = None

    @property
    def context_param(self) -> Optional[Parameter]:
        """첫 번째 매개변수 (context 전달용)"""
        return self.parameters[0] if self.parameters else None

    @property
    def key_parameters(self) -> List[Parameter]:
        """캐시 키에 포함되는 매개변수 (context 제외)"""
        return self.parameters[1:]

    @property
    def returns_error(self) -> bool:
        return bool(self.results) and self.results[-1] == "error"

    @property
    def params_str(self) -> str:
        params = self.qualified_parameters or self.parameters
        return ", ".join(f"{p.name} {p.type}" for p in params)

    @property
    def results_str(self) -> str:
        return ", ".join(self.qualified_results or self.results)

    @property
    def results_clause(self) -> str:
        """시그니처의 반환 부분 (반환값이 없으면 빈 문자열)"""
        results = self.qualified_results or self.results
        if not results:
            return ""
        if len(results) == 1:
            return f" {results[0]}"
        return f" ({', '.join(results)})"

    @property
    def args_str(self) -> str:
        return ", ".join(p.call_arg for p in self.parameters)


@dataclass
class FileInfo:
    """단일 Go 소스 파일의 파싱 결과"""
    path: str
    package: str = ""
    imports: List[ImportInfo] = field(default_factory=list)
    structs: List[StructInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)


@dataclass
class GenerationUnit:
    """입력 파일 하나와 정책이 적용된 메서드 목록의 쌍"""
    source_path: Path
    methods: List[MethodInfo] = field(default_factory=list)
    imports: List[ImportInfo] = field(default_factory=list)

    @property
    def output_name(self) -> str:
        """출력 파일 이름 (입력 파일의 base name)"""
        return Path(self.source_path).name

    @property
    def uses_cache(self) -> bool:
        return any(m.use_cache for m in self.methods)
