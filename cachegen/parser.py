"""
Go source parser for sqlc-generated data access code.

이 모듈은 tree-sitter로 Go 소스를 파싱하여 Queries 리시버에 바인딩된 메서드,
구조체, import 선언을 구조화된 데이터로 추출합니다.
"""

import logging
from typing import List, Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser

from .errors import ParseError
from .models import (
    FieldInfo, FileInfo, ImportInfo, MethodInfo, Parameter, StructInfo
)

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tsgo.language())


class GoSourceParser:
    """Go 소스 파서"""

    def __init__(self, receiver: str = "Queries"):
        """
        초기화

        Args:
            receiver: 래핑 대상 메서드의 리시버 타입 이름 (포인터 리시버만 인식)
        """
        self.receiver = receiver
        self._parser = Parser(GO_LANGUAGE)

    def parse(self, source: str, path: str = "<source>") -> FileInfo:
        """
        Go 소스 텍스트를 파싱

        Args:
            source: Go 소스 코드
            path: 오류 메시지에 사용할 파일 경로

        Returns:
            FileInfo: 파싱된 파일 정보 (선언 순서 유지)

        Raises:
            ParseError: 구문 오류가 있거나 package 절이 없는 경우
        """
        code = source.encode("utf-8")
        tree = self._parser.parse(code)
        root = tree.root_node

        if root.has_error:
            line = self._first_error_line(root)
            raise ParseError(f"Go 구문 오류: {path}", path=path, line=line)

        # 주석을 제외한 첫 번째 선언은 package 절이어야 함
        first = next((n for n in root.named_children if n.type != "comment"), None)
        if first is None or first.type != "package_clause":
            line = first.start_point[0] + 1 if first is not None else 1
            raise ParseError(f"package 절이 없음: {path}", path=path, line=line)

        file_info = FileInfo(path=path)

        for node in root.named_children:
            if node.type == "package_clause":
                file_info.package = self._package_name(node, code)
            elif node.type == "import_declaration":
                file_info.imports.extend(self._parse_imports(node, code))
            elif node.type == "type_declaration":
                file_info.structs.extend(self._parse_structs(node, code))
            elif node.type == "method_declaration":
                method = self._parse_method(node, code)
                if method is not None:
                    file_info.methods.append(method)

        for struct in file_info.structs:
            logger.debug(
                f"구조체 {struct.name} ({path}:{struct.line_number}): "
                f"{', '.join(f.name for f in struct.fields)}"
            )

        logger.debug(
            f"{path}: package {file_info.package}, "
            f"{len(file_info.methods)}개 메서드, {len(file_info.structs)}개 구조체"
        )
        return file_info

    def _package_name(self, node: Node, code: bytes) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return self._text(child, code)
        return ""

    def _parse_imports(self, node: Node, code: bytes) -> List[ImportInfo]:
        """import 선언 파싱 (단일 / 괄호 목록 모두 처리)"""
        imports = []
        specs = []
        for child in node.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(c for c in child.named_children if c.type == "import_spec")

        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            alias_node = spec.child_by_field_name("name")
            alias = self._text(alias_node, code) if alias_node is not None else None
            imports.append(ImportInfo(
                path=self._text(path_node, code).strip('"`'),
                alias=alias
            ))
        return imports

    def _parse_structs(self, node: Node, code: bytes) -> List[StructInfo]:
        """type 선언에서 구조체 추출"""
        specs = [c for c in node.named_children if c.type == "type_spec"]
        for child in node.named_children:
            if child.type == "type_spec_list":
                specs.extend(c for c in child.named_children if c.type == "type_spec")

        structs = []
        for spec in specs:
            type_node = spec.child_by_field_name("type")
            name_node = spec.child_by_field_name("name")
            if type_node is None or name_node is None or type_node.type != "struct_type":
                continue

            struct = StructInfo(
                name=self._text(name_node, code),
                line_number=spec.start_point[0] + 1
            )
            for field_list in type_node.named_children:
                if field_list.type != "field_declaration_list":
                    continue
                for decl in field_list.named_children:
                    if decl.type != "field_declaration":
                        continue
                    field_type_node = decl.child_by_field_name("type")
                    field_type = self.render_type(field_type_node, code) if field_type_node else ""
                    names = decl.children_by_field_name("name")
                    if not names:
                        # 임베디드 필드
                        struct.fields.append(FieldInfo(name=field_type.lstrip("*"), type=field_type))
                    for name in names:
                        struct.fields.append(FieldInfo(name=self._text(name, code), type=field_type))
            structs.append(struct)
        return structs

    def _parse_method(self, node: Node, code: bytes) -> Optional[MethodInfo]:
        """메서드 선언 파싱 (리시버가 *<receiver>가 아니면 None)"""
        receiver = node.child_by_field_name("receiver")
        if receiver is None or not self._is_target_receiver(receiver, code):
            return None

        name_node = node.child_by_field_name("name")
        method = MethodInfo(
            name=self._text(name_node, code),
            line_number=node.start_point[0] + 1
        )

        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            method.parameters = self._parse_parameters(params_node, code)

        result_node = node.child_by_field_name("result")
        if result_node is not None:
            method.results = self._parse_results(result_node, code)

        return method

    def _is_target_receiver(self, receiver: Node, code: bytes) -> bool:
        decls = [c for c in receiver.named_children if c.type == "parameter_declaration"]
        if not decls:
            return False
        type_node = decls[0].child_by_field_name("type")
        if type_node is None or type_node.type != "pointer_type":
            return False
        target = type_node.named_children[0] if type_node.named_children else None
        return (
            target is not None
            and target.type == "type_identifier"
            and self._text(target, code) == self.receiver
        )

    def _parse_parameters(self, node: Node, code: bytes) -> List[Parameter]:
        """매개변수 목록 파싱 (이름이 여러 개인 선언은 이름별로 분리)"""
        params = []
        for decl in node.named_children:
            if decl.type not in ("parameter_declaration", "variadic_parameter_declaration"):
                continue
            variadic = decl.type == "variadic_parameter_declaration"
            type_node = decl.child_by_field_name("type")
            type_str = self.render_type(type_node, code)
            if variadic:
                type_str = "..." + type_str

            names = decl.children_by_field_name("name")
            if not names:
                # 이름 없는 매개변수에는 위치 기반 이름 부여
                params.append(Parameter(name=f"arg{len(params)}", type=type_str, variadic=variadic))
                continue
            for name in names:
                params.append(Parameter(name=self._text(name, code), type=type_str, variadic=variadic))
        return params

    def _parse_results(self, node: Node, code: bytes) -> List[str]:
        """반환 타입 목록 파싱"""
        if node.type != "parameter_list":
            return [self.render_type(node, code)]

        results = []
        for decl in node.named_children:
            if decl.type != "parameter_declaration":
                continue
            type_str = self.render_type(decl.child_by_field_name("type"), code)
            count = max(1, len(decl.children_by_field_name("name")))
            results.extend([type_str] * count)
        return results

    def render_type(self, node: Optional[Node], code: bytes) -> str:
        """
        타입 노드를 문자열로 변환

        포인터, 슬라이스, 배열, 맵, 한정 식별자를 재귀적으로 처리하며,
        그 외의 형태는 소스 텍스트를 그대로 사용합니다.
        """
        if node is None:
            return ""

        kind = node.type
        if kind in ("type_identifier", "identifier"):
            return self._text(node, code)
        if kind == "qualified_type":
            package = node.child_by_field_name("package")
            name = node.child_by_field_name("name")
            return f"{self._text(package, code)}.{self._text(name, code)}"
        if kind == "pointer_type":
            return "*" + self.render_type(node.named_children[0], code)
        if kind == "slice_type":
            return "[]" + self.render_type(node.child_by_field_name("element"), code)
        if kind == "array_type":
            length = self._text(node.child_by_field_name("length"), code)
            return f"[{length}]" + self.render_type(node.child_by_field_name("element"), code)
        if kind == "map_type":
            key = self.render_type(node.child_by_field_name("key"), code)
            value = self.render_type(node.child_by_field_name("value"), code)
            return f"map[{key}]{value}"
        if kind == "parenthesized_type" and node.named_children:
            return self.render_type(node.named_children[0], code)
        if kind == "interface_type" and not node.named_children:
            return "interface{}"

        return " ".join(self._text(node, code).split())

    def _first_error_line(self, root: Node) -> int:
        """첫 번째 ERROR/MISSING 노드의 라인 번호 (1부터 시작)"""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0] + 1
            if node.has_error:
                stack.extend(reversed(node.children))
        return 0

    @staticmethod
    def _text(node: Node, code: bytes) -> str:
        return code[node.start_byte:node.end_byte].decode("utf-8")
