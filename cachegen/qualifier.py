"""
Type qualification for generated code.

원본 선언의 타입 문자열을 생성 코드에서 사용할 타입으로 변환합니다.
기본 타입은 그대로 두고, 나머지는 models 패키지의 도메인 타입으로 간주하여 한정합니다.
"""

import logging
from typing import Iterable

from .config import GO_BUILTIN_TYPES
from .models import MethodInfo, Parameter

logger = logging.getLogger(__name__)

# 벗겨낸 뒤 다시 붙이는 타입 접두 표식
TYPE_MARKERS = ("[]", "*", "...")

# 한정하지 않고 그대로 두는 복합 타입 형태
COMPOSITE_PREFIXES = ("map[", "func(", "func ", "chan ", "<-chan", "struct{", "struct {", "interface{", "interface {", "[")


class TypeQualifier:
    """models 네임스페이스 타입 한정자"""

    def __init__(self, models_alias: str = "models", builtin_types: Iterable[str] = GO_BUILTIN_TYPES):
        self.models_alias = models_alias
        self.builtin_types = frozenset(builtin_types)

    def qualify(self, raw: str) -> str:
        """
        타입 문자열 한정

        공백으로 구분된 두 토큰("이름 타입")이면 두 번째 토큰만 한정하고
        첫 번째 토큰은 그대로 다시 붙입니다.

        Args:
            raw: 원본 선언의 타입 문자열

        Returns:
            생성 코드용 타입 문자열
        """
        tokens = raw.split(" ", 1)
        if len(tokens) == 2 and not raw.startswith(COMPOSITE_PREFIXES):
            return f"{tokens[0]} {self.qualify(tokens[1])}"

        prefix = ""
        name = raw
        while True:
            marker = next((m for m in TYPE_MARKERS if name.startswith(m)), None)
            if marker is None:
                break
            prefix += marker
            name = name[len(marker):]

        return prefix + self._qualify_name(name)

    def _qualify_name(self, name: str) -> str:
        if not name or name in self.builtin_types:
            return name
        if name.startswith(COMPOSITE_PREFIXES):
            return name
        # 이미 패키지로 한정된 타입 (time.Time, sql.NullString)
        if "." in name:
            return name
        return f"{self.models_alias}.{name}"

    def qualify_method(self, method: MethodInfo) -> MethodInfo:
        """메서드의 매개변수(첫 번째 제외)와 반환 타입을 한정"""
        qualified = []
        for index, param in enumerate(method.parameters):
            type_str = param.type if index == 0 else self.qualify(param.type)
            qualified.append(Parameter(name=param.name, type=type_str, variadic=param.variadic))

        method.qualified_parameters = qualified
        method.qualified_results = [self.qualify(r) for r in method.results]
        if method.qualified_results:
            method.first_result = method.qualified_results[0]

        logger.debug(f"{method.name}: ({method.params_str}) ({method.results_str})")
        return method
