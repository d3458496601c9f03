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
from typing import Any, List, Mapping, Optional, Tuple

from ..errors import StructuralError
from ..rendering.buffer import SqlBuffer
from ..rendering.fragment import MARKER, splice_value
from ..rendering.values import BindValue, Nested, bind
from .base import StatementBase
from .select import SelectBuilder


@dataclass(frozen=True)
class InsertBuilder(StatementBase):
  """
  Builds INSERT (or REPLACE) statements.

    insert("users").columns("id", "name").values(1, "ann").values(2, "bob")
    -> "INSERT INTO users (id,name) VALUES (?,?),(?,?)", [1, "ann", 2, "bob"]
  """
  statement_keyword: str = "INSERT"
  insert_options: Tuple[str, ...] = ()
  into_table: str = ""
  column_names: Tuple[str, ...] = ()
  rows: Tuple[Tuple[BindValue, ...], ...] = ()
  select_part: Optional[SelectBuilder] = None

  def options(self, *options: str) -> "InsertBuilder":
    """Add keywords between INSERT and INTO, e.g. IGNORE."""
    return replace(self, insert_options=self.insert_options + tuple(options))

  def into(self, table: str) -> "InsertBuilder":
    return replace(self, into_table=table)

  def columns(self, *columns: str) -> "InsertBuilder":
    return replace(self, column_names=self.column_names + tuple(columns))

  def values(self, *values: Any) -> "InsertBuilder":
    """Add one row of values. Fragments are inlined, everything else is bound."""
    row = tuple(bind(v) for v in values)
    return replace(self, rows=self.rows + (row,))

  def set_map(self, clauses: Mapping[str, Any]) -> "InsertBuilder":
    """
    Set columns and a single row of values from a mapping, in sorted column
    order. Replaces any columns and rows set before.
    """
    keys = sorted(clauses)
    row = tuple(bind(clauses[k]) for k in keys)
    return replace(self, column_names=tuple(keys), rows=(row,))

  def select(self, sub: SelectBuilder) -> "InsertBuilder":
    """INSERT ... SELECT: rows come from `sub` instead of VALUES."""
    return replace(self, select_part=sub)

  def _render_row(self, row: Tuple[BindValue, ...], args: List[Any]) -> str:
    values: List[str] = []
    for value in row:
      if isinstance(value, Nested):
        value_sql, value_args = splice_value(value.raw)
        values.append(value_sql)
        args.extend(value_args)
      else:
        values.append(MARKER)
        args.append(value.raw)
    return f"({','.join(values)})"

  def _render(self, buf: SqlBuffer) -> None:
    if not self.into_table:
      raise StructuralError("insert statements must specify a table")
    if not self.rows and self.select_part is None:
      raise StructuralError(
        "insert statements must have at least one set of values or select clause"
      )

    buf.write(self.statement_keyword + " ")
    if self.insert_options:
      buf.write(" ".join(self.insert_options) + " ")

    buf.write(f"INTO {self.into_table} ")
    if self.column_names:
      buf.write(f"({','.join(self.column_names)}) ")

    if self.select_part is not None:
      buf.write_sql(self.select_part, trailer="")
      return

    args: List[Any] = []
    rows_sql = ",".join(self._render_row(row, args) for row in self.rows)
    buf.write("VALUES " + rows_sql)
    buf.args.extend(args)
