#!/usr/bin/env python3
"""
Main script for cache wrapper generation.

이 스크립트는 전체 생성 파이프라인을 실행합니다:
1. core 파일 생성
2. 입력 디렉토리에서 *.sql.go 파일 탐색
3. 파일별 파싱 → 타입 한정 → 캐시 정책 → 코드 생성
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import GeneratorConfig, MUTATION_PREFIXES
from .errors import GeneratorError, ParseError, ScanError
from .generator import WrapperGenerator
from .models import FileInfo, GenerationUnit
from .parser import GoSourceParser
from .policy import CachePolicy
from .qualifier import TypeQualifier
from .scanner import SourceScanner

logger = logging.getLogger(__name__)


class WrapperPipeline:
    """분석부터 파일 쓰기까지의 생성 파이프라인"""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.parser = GoSourceParser(receiver=self.config.receiver)
        self.qualifier = TypeQualifier(
            models_alias=self.config.models_alias,
            builtin_types=self.config.builtin_types
        )
        self.policy = CachePolicy(
            mutation_prefixes=self.config.mutation_prefixes,
            key_prefix=self.config.key_prefix
        )

    def build_unit(self, file_info: FileInfo) -> GenerationUnit:
        """파싱 결과에 타입 한정과 캐시 정책을 적용"""
        for method in file_info.methods:
            self.qualifier.qualify_method(method)
            self.policy.apply(method)

        return GenerationUnit(
            source_path=Path(file_info.path),
            methods=file_info.methods,
            imports=file_info.imports
        )

    def analyze(self, path: Path) -> GenerationUnit:
        """단일 파일 분석"""
        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"UTF-8이 아닌 소스: {e}", path=str(path)) from e
        except OSError as e:
            raise ScanError(f"파일 읽기 실패: {e}", path=str(path)) from e

        file_info = self.parser.parse(source, str(path))
        if not file_info.methods:
            logger.warning(f"{path}: *{self.config.receiver} 리시버 메서드가 없습니다")
        return self.build_unit(file_info)

    def run(self, source_root: str, output_dir: str) -> List[Path]:
        """
        전체 파이프라인 실행

        첫 번째 오류에서 중단되며, 그 전에 쓰인 파일은 그대로 남습니다.

        Args:
            source_root: 입력 디렉토리
            output_dir: 출력 디렉토리

        Returns:
            생성된 파일 경로 목록 (core 파일이 첫 번째)
        """
        generator = WrapperGenerator(output_dir, self.config)
        written = []

        core_path = generator.generate_core()
        print(f"Generated: {core_path}")
        written.append(core_path)

        scanner = SourceScanner(source_root, suffix=self.config.suffix)
        for path in scanner.find_files():
            unit = self.analyze(path)
            out_path = generator.generate_unit(unit)
            print(f"Generated: {out_path}")
            written.append(out_path)

        return written


def build_arg_parser() -> argparse.ArgumentParser:
    """명령행 인자 파서 생성"""
    defaults = GeneratorConfig()
    parser = argparse.ArgumentParser(
        prog="cachegen",
        description="sqlc Queries 메서드용 캐시 래퍼 생성기"
    )
    parser.add_argument(
        "source_root",
        help="*.sql.go 파일을 찾을 입력 디렉토리"
    )
    parser.add_argument(
        "output_dir",
        help="생성된 Go 파일을 쓸 출력 디렉토리"
    )
    parser.add_argument(
        "--receiver",
        default=defaults.receiver,
        help=f"래핑할 리시버 타입 이름 (기본값: {defaults.receiver})"
    )
    parser.add_argument(
        "--suffix",
        default=defaults.suffix,
        help=f"입력 파일 접미사 (기본값: {defaults.suffix})"
    )
    parser.add_argument(
        "--package",
        default=defaults.package_name,
        help=f"생성 코드의 패키지 이름 (기본값: {defaults.package_name})"
    )
    parser.add_argument(
        "--db-import",
        default=defaults.db_import,
        help=f"원본 데이터 접근 패키지 경로 (기본값: {defaults.db_import})"
    )
    parser.add_argument(
        "--db-alias",
        default=defaults.db_alias,
        help=f"원본 데이터 접근 패키지 별칭 (기본값: {defaults.db_alias})"
    )
    parser.add_argument(
        "--models-import",
        default=defaults.models_import,
        help=f"도메인 모델 패키지 경로 (기본값: {defaults.models_import})"
    )
    parser.add_argument(
        "--models-alias",
        default=defaults.models_alias,
        help=f"도메인 모델 패키지 이름 (기본값: {defaults.models_alias})"
    )
    parser.add_argument(
        "--exclude-prefix",
        action="append",
        metavar="PREFIX",
        help=f"캐시에서 제외할 메서드 접두사, 반복 지정 (기본값: {' '.join(MUTATION_PREFIXES)})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="디버그 로그 출력"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = GeneratorConfig.from_args(args)
    pipeline = WrapperPipeline(config)

    try:
        written = pipeline.run(args.source_root, args.output_dir)
    except GeneratorError as e:
        logger.error(f"생성 실패: {e}")
        return 1

    logger.info(f"생성 완료: {len(written)}개 파일 ({Path(args.output_dir)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
