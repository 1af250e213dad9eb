"""
Tests for the Go source parser.

이 모듈은 tree-sitter 기반 Go 파서의 기능을 검증하는 테스트를 포함합니다.
"""

import logging

import pytest

from cachegen.errors import ParseError
from cachegen.models import Parameter
from cachegen.parser import GoSourceParser


def _wrap(body: str) -> str:
    return "package database\n\nimport \"context\"\n\n" + body


class TestGoSourceParser:
    """GoSourceParser 테스트"""

    @pytest.fixture
    def parser(self):
        return GoSourceParser()

    def test_parser_initialization(self):
        """PRESERVE: 파서 초기화 테스트"""
        parser = GoSourceParser(receiver="Store")
        assert parser.receiver == "Store"

    def test_methods_in_source_order(self, parser, users_source):
        """메서드가 선언 순서대로 추출되는지 확인"""
        file_info = parser.parse(users_source, "users.sql.go")

        assert file_info.package == "database"
        assert [m.name for m in file_info.methods] == [
            "GetUserByID", "DeleteUser", "ListOrders", "FindByEmail", "UpdateUserEmail"
        ]

    def test_parameters_and_results(self, parser, users_source):
        """매개변수와 반환 타입 추출"""
        file_info = parser.parse(users_source, "users.sql.go")
        get_user = file_info.methods[0]

        assert get_user.parameters == [
            Parameter(name="ctx", type="context.Context"),
            Parameter(name="id", type="int64"),
        ]
        assert get_user.results == ["User", "error"]
        assert get_user.line_number > 0

    def test_single_result_without_parentheses(self, parser, users_source):
        file_info = parser.parse(users_source, "users.sql.go")
        delete_user = file_info.methods[1]

        assert delete_user.results == ["error"]

    def test_composite_types(self, parser, users_source):
        """슬라이스, 포인터, 한정 식별자 타입 렌더링"""
        file_info = parser.parse(users_source, "users.sql.go")
        methods = {m.name: m for m in file_info.methods}

        assert methods["ListOrders"].results == ["[]Order", "error"]
        assert methods["FindByEmail"].parameters[1].type == "sql.NullString"
        assert methods["FindByEmail"].results == ["*User", "error"]

    def test_map_and_empty_interface_types(self, parser):
        source = _wrap(
            "func (q *Queries) Stats(ctx context.Context, filter map[string]int64, extra interface{}) "
            "(map[string][]Order, error) {\n\treturn nil, nil\n}\n"
        )
        method = parser.parse(source).methods[0]

        assert method.parameters[1].type == "map[string]int64"
        assert method.parameters[2].type == "interface{}"
        assert method.results == ["map[string][]Order", "error"]

    def test_grouped_parameter_names(self, parser):
        """같은 타입을 공유하는 이름은 각각 매개변수가 됨"""
        source = _wrap(
            "func (q *Queries) GetRange(ctx context.Context, from, to int64) ([]Order, error) {\n"
            "\treturn nil, nil\n}\n"
        )
        method = parser.parse(source).methods[0]

        assert [p.name for p in method.parameters] == ["ctx", "from", "to"]
        assert [p.type for p in method.parameters] == ["context.Context", "int64", "int64"]

    def test_variadic_parameter(self, parser):
        source = _wrap(
            "func (q *Queries) GetMany(ctx context.Context, ids ...int64) ([]User, error) {\n"
            "\treturn nil, nil\n}\n"
        )
        method = parser.parse(source).methods[0]
        ids = method.parameters[1]

        assert ids.type == "...int64"
        assert ids.variadic is True
        assert method.args_str == "ctx, ids..."

    def test_named_results(self, parser):
        source = _wrap(
            "func (q *Queries) CountUsers(ctx context.Context) (n int64, err error) {\n"
            "\treturn 0, nil\n}\n"
        )
        method = parser.parse(source).methods[0]

        assert method.results == ["int64", "error"]

    def test_unnamed_parameters_get_positional_names(self, parser):
        source = _wrap(
            "func (q *Queries) Ping(context.Context, int64) error {\n\treturn nil\n}\n"
        )
        method = parser.parse(source).methods[0]

        assert [p.name for p in method.parameters] == ["arg0", "arg1"]

    def test_no_results(self, parser):
        source = _wrap("func (q *Queries) Touch(ctx context.Context) {\n}\n")
        method = parser.parse(source).methods[0]

        assert method.results == []

    def test_only_pointer_receiver_of_target_type(self, parser):
        """값 리시버, 다른 타입 리시버, 일반 함수는 제외"""
        source = _wrap(
            "func New(db DBTX) *Queries {\n\treturn &Queries{db: db}\n}\n\n"
            "func (q Queries) ValueReceiver(ctx context.Context) error {\n\treturn nil\n}\n\n"
            "func (o *Other) OtherReceiver(ctx context.Context) error {\n\treturn nil\n}\n\n"
            "func (q *Queries) WithTx(tx *sql.Tx) *Queries {\n\treturn q\n}\n"
        )
        file_info = parser.parse(source)

        assert [m.name for m in file_info.methods] == ["WithTx"]
        assert file_info.methods[0].results == ["*Queries"]

    def test_custom_receiver(self):
        source = _wrap("func (s *Store) GetThing(ctx context.Context) (Thing, error) {\n\treturn Thing{}, nil\n}\n")
        file_info = GoSourceParser(receiver="Store").parse(source)

        assert [m.name for m in file_info.methods] == ["GetThing"]

    def test_structs_collected(self, parser, users_source):
        """구조체와 필드 수집 (정보 출력용)"""
        file_info = parser.parse(users_source, "users.sql.go")
        structs = {s.name: s for s in file_info.structs}

        assert set(structs) == {"ListUsersParams", "GetUserRow"}
        assert [(f.name, f.type) for f in structs["ListUsersParams"].fields] == [
            ("Limit", "int32"), ("Offset", "int32")
        ]
        assert [f.name for f in structs["GetUserRow"].fields] == ["ID", "TeamID", "Email"]
        assert structs["GetUserRow"].fields[2].type == "sql.NullString"

    def test_imports_collected(self, parser):
        source = (
            "package database\n\n"
            "import (\n\t\"context\"\n\tpg \"github.com/jackc/pgx/v5/pgtype\"\n)\n\n"
            "import \"time\"\n"
        )
        file_info = parser.parse(source)

        assert [(i.path, i.alias) for i in file_info.imports] == [
            ("context", None),
            ("github.com/jackc/pgx/v5/pgtype", "pg"),
            ("time", None),
        ]
        assert [i.package_name for i in file_info.imports] == ["context", "pg", "time"]


class TestParseErrors:
    """구문 오류 처리 테스트"""

    def test_syntax_error_raises(self, broken_source):
        """PRESERVE: 잘못된 소스는 ParseError 발생"""
        parser = GoSourceParser()

        with pytest.raises(ParseError) as exc_info:
            parser.parse(broken_source, "broken.sql.go")

        assert exc_info.value.path == "broken.sql.go"
        assert exc_info.value.line >= 1
        assert "broken.sql.go" in str(exc_info.value)

    def test_empty_file_is_valid(self):
        file_info = GoSourceParser().parse("package database\n")

        assert file_info.methods == []
        assert file_info.structs == []

    def test_missing_package_clause_raises(self):
        """package 절이 없는 소스는 Go 파일이 아님"""
        source = (
            "import \"context\"\n\n"
            "func (q *Queries) GetUser(ctx context.Context, id int64) (User, error) {\n"
            "\treturn User{}, nil\n}\n"
        )

        with pytest.raises(ParseError) as exc_info:
            GoSourceParser().parse(source, "nopkg.sql.go")

        assert exc_info.value.path == "nopkg.sql.go"
        assert exc_info.value.line == 1

    def test_empty_source_raises(self):
        with pytest.raises(ParseError):
            GoSourceParser().parse("// only a comment\n", "comment.sql.go")

    def test_comment_before_package_clause(self):
        file_info = GoSourceParser().parse("// Code generated by sqlc.\n\npackage database\n")
        assert file_info.package == "database"


class TestDebugListing:
    """구조체/패키지 디버그 출력 테스트"""

    def test_struct_and_package_logged(self, users_source, caplog):
        caplog.set_level(logging.DEBUG, logger="cachegen.parser")

        GoSourceParser().parse(users_source, "users.sql.go")

        assert "구조체 ListUsersParams (users.sql.go:15): Limit, Offset" in caplog.text
        assert "users.sql.go: package database" in caplog.text
