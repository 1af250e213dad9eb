"""
Generator configuration.

생성 실행 1회 동안 변하지 않는 설정값(리시버 이름, 패키지 경로, 캐시 정책 규칙)을 보관합니다.
기본값은 sqlc로 생성된 telegcat-core 데이터 접근 계층에 맞춰져 있습니다.
"""

from dataclasses import dataclass
from typing import Tuple

# Go 기본 타입 허용 목록 (한정하지 않고 그대로 출력)
GO_BUILTIN_TYPES: Tuple[str, ...] = (
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    "float32", "float64",
    "complex64", "complex128",
    "string", "byte", "rune",
    "bool",
    "error", "any",
    "unsafe.Pointer",
    "interface{}",
)

# 이 접두사로 시작하는 메서드는 데이터를 변경하므로 캐시하지 않음
MUTATION_PREFIXES: Tuple[str, ...] = (
    "Set", "Insert", "Update", "SoftDelete", "Create", "Delete",
)


@dataclass
class GeneratorConfig:
    """생성기 설정"""
    receiver: str = "Queries"
    suffix: str = ".sql.go"
    package_name: str = "cache"
    db_import: str = "telegcat-core/sql/database"
    db_alias: str = "sqlc"
    models_import: str = "telegcat-core/sql/models"
    models_alias: str = "models"
    key_prefix: str = "cache"
    core_filename: str = "core.go"
    builtin_types: Tuple[str, ...] = GO_BUILTIN_TYPES
    mutation_prefixes: Tuple[str, ...] = MUTATION_PREFIXES

    @classmethod
    def from_args(cls, args) -> "GeneratorConfig":
        """argparse 결과에서 설정 생성"""
        config = cls(
            receiver=args.receiver,
            suffix=args.suffix,
            package_name=args.package,
            db_import=args.db_import,
            db_alias=args.db_alias,
            models_import=args.models_import,
            models_alias=args.models_alias,
        )
        if args.exclude_prefix:
            config.mutation_prefixes = tuple(args.exclude_prefix)
        return config
