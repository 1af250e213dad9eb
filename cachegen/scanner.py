"""
Source scanner for cache wrapper generation.

이 모듈은 입력 디렉토리를 재귀적으로 탐색하여 sqlc가 생성한 Go 파일을 찾습니다.
"""

import logging
from pathlib import Path
from typing import List

from .errors import ScanError

logger = logging.getLogger(__name__)


class SourceScanner:
    """소스 파일 스캐너"""

    def __init__(self, source_root: str, suffix: str = ".sql.go"):
        """
        초기화

        Args:
            source_root: 탐색할 루트 디렉토리
            suffix: 입력 파일 이름 접미사
        """
        self.source_root = Path(source_root)
        self.suffix = suffix

    def find_files(self) -> List[Path]:
        """
        접미사가 일치하는 파일 목록 반환 (경로순 정렬)

        Raises:
            ScanError: 루트 디렉토리가 없거나 디렉토리가 아닌 경우
        """
        if not self.source_root.is_dir():
            raise ScanError("입력 디렉토리를 찾을 수 없음", path=str(self.source_root))

        files = sorted(
            path for path in self.source_root.rglob("*")
            if path.is_file() and path.name.endswith(self.suffix)
        )

        logger.info(f"{self.source_root}: {len(files)}개의 {self.suffix} 파일 발견")
        return files
