"""
Cache policy: cacheability and cache key derivation.

메서드 이름 접두사로 캐시 여부를 결정하고, 매개변수로부터 캐시 키 템플릿을 만듭니다.
"""

import logging
from typing import Iterable

from .config import MUTATION_PREFIXES
from .models import KeyTemplate, MethodInfo

logger = logging.getLogger(__name__)


class CachePolicy:
    """이름 규칙 기반 캐시 정책"""

    def __init__(self, mutation_prefixes: Iterable[str] = MUTATION_PREFIXES, key_prefix: str = "cache"):
        """
        초기화

        Args:
            mutation_prefixes: 캐시에서 제외할 메서드 이름 접두사 (순서 유지, 대소문자 구분)
            key_prefix: 캐시 키의 첫 번째 구성요소
        """
        self.mutation_prefixes = tuple(mutation_prefixes)
        self.key_prefix = key_prefix

    def is_cacheable(self, name: str) -> bool:
        """변경 접두사 중 하나라도 일치하면 캐시하지 않음"""
        return not any(name.startswith(prefix) for prefix in self.mutation_prefixes)

    def key_template(self, method: MethodInfo) -> KeyTemplate:
        """
        캐시 키 템플릿 생성

        형식: "<prefix>:<메서드 이름>:%v:...:%v" (context를 제외한 매개변수마다 %v 하나)
        """
        args = [p.name for p in method.key_parameters]
        placeholders = ":".join("%v" for _ in args)
        return KeyTemplate(
            format=f"{self.key_prefix}:{method.name}:{placeholders}",
            args=args
        )

    def has_cache_candidate(self, method: MethodInfo) -> bool:
        """
        캐시에 저장할 값이 있는지 확인

        (T) 또는 (T, error) 형태의 반환과 context 매개변수가 있어야 합니다.
        """
        results = method.results
        if not results or results[0] == "error" or len(results) > 2:
            return False
        if len(results) == 2 and results[1] != "error":
            return False
        return method.context_param is not None

    def apply(self, method: MethodInfo) -> MethodInfo:
        """메서드에 캐시 정책 결정을 기록"""
        method.cacheable = self.is_cacheable(method.name)
        method.key = self.key_template(method)
        method.use_cache = method.cacheable and self.has_cache_candidate(method)

        logger.debug(
            f"{method.name}: cacheable={method.cacheable}, use_cache={method.use_cache}, "
            f"key={method.key.format}"
        )
        return method
