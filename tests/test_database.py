"""
Tests for the positional-placeholder query executor.
"""

import pytest

from app.core.database import execute_positional, positional_text, to_named_binds
from app.models import Company


class TestNamedBinds:
    """Tests for $n -> :pn rewriting"""

    def test_rewrites_placeholders(self):
        sql, params = to_named_binds("SELECT * FROM t WHERE a = $1 AND b <= $2", ["x", 5])

        assert sql == "SELECT * FROM t WHERE a = :p1 AND b <= :p2"
        assert params == {"p1": "x", "p2": 5}

    def test_multi_digit_positions(self):
        values = list(range(1, 12))
        sql, params = to_named_binds("VALUES ($10, $11, $1)", values)

        assert sql == "VALUES (:p10, :p11, :p1)"
        assert params["p11"] == 11

    def test_no_placeholders(self):
        assert to_named_binds("SELECT 1", []) == ("SELECT 1", {})

    def test_missing_value(self):
        with pytest.raises(ValueError):
            to_named_binds("SELECT * FROM t WHERE a = $2", ["only one"])


class TestExecutePositional:
    """Tests running positional SQL against SQLite"""

    def test_select_with_params(self, db_session, seed):
        rows = execute_positional(
            db_session,
            "SELECT handle FROM companies WHERE num_employees >= $1 ORDER BY handle",
            [2],
        ).all()

        assert [row.handle for row in rows] == ["c2", "c3"]

    def test_ilike_becomes_like_on_sqlite(self, db_session, seed):
        clause = positional_text(db_session, "SELECT * FROM companies WHERE name ILIKE $1", ["%c1%"])
        assert "ILIKE" not in str(clause)

        rows = execute_positional(
            db_session, "SELECT handle FROM companies WHERE name ILIKE $1", ["%c1%"]
        ).all()
        assert [row.handle for row in rows] == ["c1"]

    def test_update_rowcount(self, db_session, seed):
        result = execute_positional(
            db_session,
            'UPDATE companies SET "num_employees"=$1 WHERE handle = $2',
            [42, "c1"],
        )
        db_session.commit()

        assert result.rowcount == 1
        assert db_session.query(Company).filter(Company.handle == "c1").one().num_employees == 42
