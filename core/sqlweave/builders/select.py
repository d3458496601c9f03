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

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from ..errors import StructuralError
from ..rendering.buffer import SqlBuffer
from ..rendering.expr import Alias
from ..rendering.fragment import Sqlizer
from ..rendering.parts import Part, WherePart, new_part, new_where_part
from .base import FilteredStatement


@dataclass(frozen=True)
class SelectBuilder(FilteredStatement):
  """
  Builds SELECT statements.

    select("id", "name").from_("users").where(Eq(active=True)).limit(10)
    -> "SELECT id, name FROM users WHERE active = ? LIMIT 10", [True]
  """
  select_options: Tuple[str, ...] = ()
  column_parts: Tuple[Part, ...] = ()
  from_part: Optional[Sqlizer] = None
  join_parts: Tuple[Part, ...] = ()
  group_bys: Tuple[str, ...] = ()
  having_parts: Tuple[WherePart, ...] = ()

  # A select spliced in as a value is a sub-query.
  parenthesize_when_nested = True

  # -------------------------------------------------------------------------
  # Result columns
  # -------------------------------------------------------------------------

  def distinct(self) -> "SelectBuilder":
    """Add a DISTINCT clause."""
    return self.options("DISTINCT")

  def options(self, *options: str) -> "SelectBuilder":
    """Add keywords between SELECT and the column list, e.g. SQL_NO_CACHE."""
    return replace(self, select_options=self.select_options + tuple(options))

  def columns(self, *columns: str) -> "SelectBuilder":
    """Add result columns."""
    parts = tuple(new_part(c) for c in columns)
    return replace(self, column_parts=self.column_parts + parts)

  def column(self, column: Any, *args: Any) -> "SelectBuilder":
    """
    Add one result column, as SQL with args or as a fragment.

      column("IF(col IN (?,?), 1, 0) AS col", 1, 2)
      column(alias(case("x").when("1", "'one'"), "x_name"))
    """
    return replace(self, column_parts=self.column_parts + (new_part(column, *args),))

  # -------------------------------------------------------------------------
  # FROM / JOIN
  # -------------------------------------------------------------------------

  def from_(self, table: str) -> "SelectBuilder":
    return replace(self, from_part=new_part(table))

  def from_select(self, sub: "SelectBuilder", alias: str) -> "SelectBuilder":
    """FROM a sub-select: FROM (SELECT ...) AS alias."""
    return replace(self, from_part=Alias(sub, alias))

  def join_clause(self, pred: Any, *args: Any) -> "SelectBuilder":
    """Add a full join clause, e.g. join_clause("CROSS JOIN t2")."""
    return replace(self, join_parts=self.join_parts + (new_part(pred, *args),))

  def join(self, join: str, *args: Any) -> "SelectBuilder":
    return self.join_clause("JOIN " + join, *args)

  def left_join(self, join: str, *args: Any) -> "SelectBuilder":
    return self.join_clause("LEFT JOIN " + join, *args)

  def right_join(self, join: str, *args: Any) -> "SelectBuilder":
    return self.join_clause("RIGHT JOIN " + join, *args)

  def inner_join(self, join: str, *args: Any) -> "SelectBuilder":
    return self.join_clause("INNER JOIN " + join, *args)

  def cross_join(self, join: str, *args: Any) -> "SelectBuilder":
    return self.join_clause("CROSS JOIN " + join, *args)

  # -------------------------------------------------------------------------
  # GROUP BY / HAVING
  # -------------------------------------------------------------------------

  def group_by(self, *group_bys: str) -> "SelectBuilder":
    return replace(self, group_bys=self.group_bys + tuple(group_bys))

  def having(self, pred: Any, *args: Any) -> "SelectBuilder":
    """Add a HAVING expression; same argument forms as where()."""
    if pred is None or pred == "":
      return self
    return replace(self, having_parts=self.having_parts + (new_where_part(pred, *args),))

  # -------------------------------------------------------------------------
  # Rendering
  # -------------------------------------------------------------------------

  def _render(self, buf: SqlBuffer) -> None:
    if not self.column_parts:
      raise StructuralError("select statements must have at least one result column")

    buf.write("SELECT ")
    if self.select_options:
      buf.write(" ".join(self.select_options) + " ")

    buf.write_parts(self.column_parts, ", ")

    if self.from_part is not None:
      buf.write_clause(" FROM ", (self.from_part,), "")

    buf.write_clause(" ", self.join_parts, " ")
    self._write_where(buf)

    if self.group_bys:
      buf.write(" GROUP BY " + ", ".join(self.group_bys))

    buf.write_clause(" HAVING ", self.having_parts, " AND ")
    self._write_order_limit_offset(buf)
