"""
Shared fixtures for cache wrapper generator tests.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# 저장소 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))


USERS_SQL_GO = '''// Code generated by sqlc. DO NOT EDIT.
// source: users.sql

package database

import (
	"context"
	"database/sql"
)

const getUserByID = `-- name: GetUserByID :one
SELECT id, name, email FROM users WHERE id = $1
`

type ListUsersParams struct {
	Limit  int32
	Offset int32
}

type GetUserRow struct {
	ID, TeamID int64
	Email      sql.NullString
}

func (q *Queries) GetUserByID(ctx context.Context, id int64) (User, error) {
	row := q.db.QueryRowContext(ctx, getUserByID, id)
	var i User
	err := row.Scan(&i.ID, &i.Name, &i.Email)
	return i, err
}

func (q *Queries) DeleteUser(ctx context.Context, id int64) error {
	_, err := q.db.ExecContext(ctx, "DELETE FROM users WHERE id = $1", id)
	return err
}

func (q *Queries) ListOrders(ctx context.Context, userID int64) ([]Order, error) {
	return nil, nil
}

func (q *Queries) FindByEmail(ctx context.Context, email sql.NullString) (*User, error) {
	return nil, nil
}

func (q *Queries) UpdateUserEmail(ctx context.Context, id int64, email string) (User, error) {
	return User{}, nil
}
'''

BROKEN_SQL_GO = '''package database

func (q *Queries) Broken(ctx context.Context, id int64 (User, error) {
	return User{}, nil
'''


@pytest.fixture
def users_source():
    """sqlc 스타일 샘플 Go 소스"""
    return USERS_SQL_GO


@pytest.fixture
def broken_source():
    """구문 오류가 있는 Go 소스"""
    return BROKEN_SQL_GO


@pytest.fixture
def temp_output_dir():
    """임시 출력 디렉토리 생성"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)
