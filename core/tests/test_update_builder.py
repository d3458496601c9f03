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

from sqlweave import Eq, StructuralError, case, expr, select, update


def test_update_builder_full_statement():
  b = (
    update("")
      .prefix("WITH prefix AS ?", 0)
      .table("a")
      .set("b", expr("? + 1", 1))
      .set_map({"c": 2})
      .set("c1", case("status").when("1", "2").when("2", "1"))
      .set("c2", case().when("a = 2", expr("?", "foo")).when("a = 3", expr("?", "bar")))
      .set("c3", select("a").from_("b"))
      .where("d = ?", 3)
      .order_by("e")
      .limit(4)
      .offset(5)
      .suffix("RETURNING ?", 6)
  )

  sql, args = b.to_sql()
  assert sql == (
    "WITH prefix AS ? "
    "UPDATE a SET b = ? + 1, c = ?, "
    "c1 = CASE status WHEN 1 THEN 2 WHEN 2 THEN 1 END, "
    "c2 = CASE WHEN a = 2 THEN ? WHEN a = 3 THEN ? END, "
    "c3 = (SELECT a FROM b) "
    "WHERE d = ? "
    "ORDER BY e LIMIT 4 OFFSET 5 "
    "RETURNING ?"
  )
  assert args == [0, 1, 2, "foo", "bar", 3, 6]


def test_update_with_dollar_placeholders():
  sql, args = update("test").set("x", 1).set("y", 2).placeholder_format("dollar").to_sql()
  assert sql == "UPDATE test SET x = $1, y = $2"
  assert args == [1, 2]


def test_update_set_map_is_sorted():
  sql, args = update("t").set_map({"z": 3, "a": 1}).where(Eq(id=9)).to_sql()
  assert sql == "UPDATE t SET a = ?, z = ? WHERE id = ?"
  assert args == [1, 3, 9]


def test_update_binds_none_as_value():
  assert update("t").set("x", None).to_sql() == ("UPDATE t SET x = ?", [None])


def test_update_requires_table():
  with pytest.raises(StructuralError) as excinfo:
    update("").set("x", 1).to_sql()
  assert "must specify a table" in str(excinfo.value)


def test_update_requires_set_clause():
  with pytest.raises(StructuralError) as excinfo:
    update("x").to_sql()
  assert "at least one Set clause" in str(excinfo.value)
