"""
sqlweave - Fluent parameterized SQL construction
Copyright © 2025 Ilona Tag

This file is part of sqlweave.

sqlweave is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

sqlweave is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with sqlweave. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/sqlweave>.
"""

import pytest

from sqlweave import (
  And,
  Eq,
  Gt,
  Or,
  RenderAbort,
  StructuralError,
  alias,
  case,
  expr,
  placeholders,
  select,
  statement_builder,
)


def test_select_builder_full_statement():
  sub = select("aa", "bb").from_("dd")
  b = (
    select("a", "b")
      .prefix("WITH prefix AS ?", 0)
      .distinct()
      .columns("c")
      .column("IF(d IN (" + placeholders(3) + "), 1, 0) as stat_column", 1, 2, 3)
      .column(expr("a > ?", 100))
      .column(alias(Eq(b=[101, 102, 103]), "b_alias"))
      .column(alias(sub, "subq"))
      .from_("e")
      .join_clause("CROSS JOIN j1")
      .join("j2")
      .left_join("j3")
      .right_join("j4")
      .inner_join("j5")
      .cross_join("j6")
      .where("f = ?", 4)
      .where(Eq(g=5))
      .where({"h": 6})
      .where(Eq(i=[7, 8, 9]))
      .where(Or(expr("j = ?", 10), And(Eq(k=11), expr("true"))))
      .group_by("l")
      .having("m = n")
      .order_by_clause("? DESC", 1)
      .order_by("o ASC", "p DESC")
      .limit(12)
      .offset(13)
      .suffix("FETCH FIRST ? ROWS ONLY", 14)
  )

  sql, args = b.to_sql()

  assert sql == (
    "WITH prefix AS ? "
    "SELECT DISTINCT a, b, c, IF(d IN (?,?,?), 1, 0) as stat_column, a > ?, "
    "(b IN (?,?,?)) AS b_alias, "
    "(SELECT aa, bb FROM dd) AS subq "
    "FROM e "
    "CROSS JOIN j1 JOIN j2 LEFT JOIN j3 RIGHT JOIN j4 INNER JOIN j5 CROSS JOIN j6 "
    "WHERE f = ? AND g = ? AND h = ? AND i IN (?,?,?) AND (j = ? OR (k = ? AND true)) "
    "GROUP BY l HAVING m = n ORDER BY ? DESC, o ASC, p DESC LIMIT 12 OFFSET 13 "
    "FETCH FIRST ? ROWS ONLY"
  )
  assert args == [0, 1, 2, 3, 100, 101, 102, 103, 4, 5, 6, 7, 8, 9, 10, 11, 1, 14]


def test_select_with_dollar_placeholders():
  sql, args = (
    select("a")
      .from_("b")
      .where("c = ? AND d = ?", 1, 2)
      .placeholder_format("dollar")
      .to_sql()
  )
  assert sql == "SELECT a FROM b WHERE c = $1 AND d = $2"
  assert args == [1, 2]


def test_nested_select_is_numbered_once_by_the_outer_statement():
  dollar = statement_builder.placeholder_format("dollar")
  nested = (
    dollar.select("*")
      .prefix("NOT EXISTS (")
      .from_("bar")
      .where("y = ?", 42)
      .suffix(")")
  )
  sql, args = dollar.select("*").from_("foo").where("x = ?").where(nested).to_sql()

  assert sql == "SELECT * FROM foo WHERE x = $1 AND NOT EXISTS ( SELECT * FROM bar WHERE y = $2 )"
  assert args == [42]


def test_from_select_aliases_the_subquery():
  sub = select("c").from_("d").where(Eq(i=0))
  sql, args = select("a", "b").from_select(sub, "subq").placeholder_format("dollar").to_sql()
  assert sql == "SELECT a, b FROM (SELECT c FROM d WHERE i = $1) AS subq"
  assert args == [0]


def test_where_ignores_empty_predicates():
  sql, args = select("*").from_("t").where(None).where("").to_sql()
  assert sql == "SELECT * FROM t"
  assert args == []


def test_where_with_empty_map_is_true():
  assert select("test").where(Eq()).to_sql() == ("SELECT test WHERE (1=1)", [])


def test_select_without_from():
  assert select("1").to_sql() == ("SELECT 1", [])


def test_select_with_case_column():
  status = case("status").when("1", "'on'").else_("'off'")
  sql, _ = select("id").column(alias(status, "state")).from_("t").to_sql()
  assert sql == "SELECT id, (CASE status WHEN 1 THEN 'on' ELSE 'off' END) AS state FROM t"


def test_having_uses_where_forms():
  sql, args = (
    select("dept", "count(*)")
      .from_("emp")
      .group_by("dept")
      .having(Gt({"count(*)": 5}))
      .having("max(salary) < ?", 1000)
      .to_sql()
  )
  assert sql == (
    "SELECT dept, count(*) FROM emp GROUP BY dept "
    "HAVING count(*) > ? AND max(salary) < ?"
  )
  assert args == [5, 1000]


def test_options_and_remove_limit_offset():
  base = select("id").options("SQL_NO_CACHE").from_("t").limit(5).offset(10)
  assert base.to_sql()[0] == "SELECT SQL_NO_CACHE id FROM t LIMIT 5 OFFSET 10"
  assert base.remove_limit().remove_offset().to_sql()[0] == "SELECT SQL_NO_CACHE id FROM t"


def test_limit_zero_is_rendered():
  assert select("id").from_("t").limit(0).to_sql()[0] == "SELECT id FROM t LIMIT 0"


def test_negative_limit_is_rejected():
  with pytest.raises(ValueError):
    select("id").limit(-1)


def test_select_without_columns_fails():
  with pytest.raises(StructuralError) as excinfo:
    select().from_("t").to_sql()
  assert "at least one result column" in str(excinfo.value)


def test_try_and_must_variants():
  rendered = select().from_("t").try_sql()
  assert rendered.sql == ""
  assert rendered.args == []
  assert isinstance(rendered.error, StructuralError)

  ok = select("a").from_("t").try_sql()
  assert ok == ("SELECT a FROM t", [], None)

  with pytest.raises(RenderAbort) as excinfo:
    select().must_sql()
  assert isinstance(excinfo.value.__cause__, StructuralError)


def test_strict_statement_rejects_count_mismatch():
  from sqlweave import CompositionError

  stmt = select("*").from_("t").where("a = ? AND b = ?", 1).strict_args()
  with pytest.raises(CompositionError):
    stmt.to_sql()
  assert stmt.strict_args(False).to_sql() == ("SELECT * FROM t WHERE a = ? AND b = ?", [1])


def test_builders_are_immutable():
  base = select("*").from_("users")
  active = base.where(Eq(active=True))
  admins = base.where(Eq(role="admin"))

  assert base.to_sql() == ("SELECT * FROM users", [])
  assert active.to_sql() == ("SELECT * FROM users WHERE active = ?", [True])
  assert admins.to_sql() == ("SELECT * FROM users WHERE role = ?", ["admin"])


def test_where_rejects_other_predicate_types():
  from sqlweave import CompositionError

  with pytest.raises(CompositionError) as excinfo:
    select("a").from_("t").where(42).to_sql()
  assert "expected string-keyed mapping, string or fragment, not int" in str(excinfo.value)


def test_escaped_marker_in_nested_fragment_survives_to_statement_rewrite():
  sql, args = (
    select("a")
      .from_("t")
      .where(expr("data ?? 'k' AND id = ?", 1))
      .placeholder_format("dollar")
      .to_sql()
  )
  assert sql == "SELECT a FROM t WHERE data ? 'k' AND id = $1"
  assert args == [1]
