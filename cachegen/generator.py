"""
Go cache wrapper generator using Jinja2 templates.

이 모듈은 분석된 메서드 정보를 바탕으로 캐시 데코레이터 Go 코드를 생성합니다.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Set

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .config import GeneratorConfig
from .errors import RenderError, WriteError
from .models import GenerationUnit, ImportInfo, MethodInfo

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

# 타입 문자열에서 "패키지.이름" 형태의 참조를 찾음
PACKAGE_REF = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\.[A-Za-z_]")

# 래퍼 본문에서 선언하는 리시버/지역 변수 이름
WRAPPER_LOCALS = ("c", "key", "val", "err", "cached", "result", "payload")


class WrapperGenerator:
    """캐시 래퍼 코드 생성기"""

    def __init__(self, output_dir: str, config: Optional[GeneratorConfig] = None,
                 template_dir: Optional[str] = None):
        """
        초기화

        Args:
            output_dir: 출력 디렉토리 경로
            config: 생성기 설정
            template_dir: Jinja2 템플릿 디렉토리 경로 (기본값: 패키지 내장 템플릿)
        """
        self.output_dir = Path(output_dir)
        self.config = config or GeneratorConfig()
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR

        # Jinja2 환경 설정
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

        # 커스텀 필터 등록
        self.env.filters['local_names'] = self.local_names

    def render_core(self) -> str:
        """캐시 접근 인터페이스와 CachedQueries 컨테이너 렌더링"""
        return self._render(
            "core.go.j2",
            package_name=self.config.package_name,
            receiver=self.config.receiver,
            db_alias=self.config.db_alias,
            db_import=self.config.db_import
        )

    def render_unit(self, unit: GenerationUnit) -> str:
        """입력 파일 하나에 대한 래퍼 코드 렌더링"""
        return self._render(
            "wrapper.go.j2",
            package_name=self.config.package_name,
            receiver=self.config.receiver,
            imports=self.import_lines(unit),
            methods=unit.methods
        )

    def import_lines(self, unit: GenerationUnit) -> List[str]:
        """
        생성 코드에 필요한 import 목록 계산

        표준 라이브러리 그룹과 그 외 그룹을 빈 문자열로 구분하여 반환합니다.
        """
        referenced = self._referenced_packages(unit)
        imports = {}

        if unit.uses_cache:
            imports["encoding/json"] = ImportInfo(path="encoding/json")
            imports["fmt"] = ImportInfo(path="fmt")

        if self.config.models_alias in referenced:
            models = ImportInfo(path=self.config.models_import)
            if models.package_name != self.config.models_alias:
                models.alias = self.config.models_alias
            imports[models.path] = models

        for imp in unit.imports:
            if imp.package_name in referenced and imp.package_name != self.config.models_alias:
                imports.setdefault(imp.path, imp)

        std = sorted(p for p in imports if "." not in p.split("/")[0])
        other = sorted(p for p in imports if p not in std)

        lines = [self._import_line(imports[p]) for p in std]
        if std and other:
            lines.append("")
        lines.extend(self._import_line(imports[p]) for p in other)
        return lines

    def _referenced_packages(self, unit: GenerationUnit) -> Set[str]:
        names = set()
        for method in unit.methods:
            types = [p.type for p in method.qualified_parameters or method.parameters]
            types.extend(method.qualified_results or method.results)
            if method.use_cache:
                types.append(method.first_result)
            for type_str in types:
                names.update(PACKAGE_REF.findall(type_str))
        return names

    @staticmethod
    def local_names(method: MethodInfo) -> Dict[str, str]:
        """
        매개변수 이름과 겹치지 않는 리시버/지역 변수 이름 선택

        겹치면 숫자 접미사를 붙입니다 (key → key1).
        """
        taken = {p.name for p in method.parameters}
        names = {}
        for base in WRAPPER_LOCALS:
            name = base
            counter = 1
            while name in taken:
                name = f"{base}{counter}"
                counter += 1
            taken.add(name)
            names[base] = name
        return names

    @staticmethod
    def _import_line(imp: ImportInfo) -> str:
        if imp.alias:
            return f'{imp.alias} "{imp.path}"'
        return f'"{imp.path}"'

    def _render(self, template_name: str, **context) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(f"템플릿 렌더링 실패: {e}", template=template_name) from e

    def write(self, name: str, text: str) -> Path:
        """
        출력 디렉토리에 파일 쓰기 (상위 디렉토리 자동 생성)

        Raises:
            WriteError: 파일 시스템 오류
        """
        out_path = self.output_dir / name
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"파일 쓰기 실패: {e}", path=str(out_path)) from e
        return out_path

    def generate_core(self) -> Path:
        """core 파일 생성"""
        return self.write(self.config.core_filename, self.render_core())

    def generate_unit(self, unit: GenerationUnit) -> Path:
        """입력 파일에 대응하는 래퍼 파일 생성"""
        out_path = self.write(unit.output_name, self.render_unit(unit))
        logger.info(
            f"{unit.output_name}: {len(unit.methods)}개 메서드, "
            f"{sum(1 for m in unit.methods if m.use_cache)}개 캐시 적용"
        )
        return out_path
