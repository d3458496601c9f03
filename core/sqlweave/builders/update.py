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
from typing import Any, List, Mapping, Tuple

from ..errors import StructuralError
from ..rendering.buffer import SqlBuffer
from ..rendering.fragment import MARKER, splice_value
from ..rendering.values import BindValue, Nested, bind
from .base import FilteredStatement


@dataclass(frozen=True)
class UpdateBuilder(FilteredStatement):
  """
  Builds UPDATE statements.

    update("users").set("name", "ann").where(Eq(id=1))
    -> "UPDATE users SET name = ? WHERE id = ?", ["ann", 1]
  """
  table_name: str = ""
  set_clauses: Tuple[Tuple[str, BindValue], ...] = ()

  def table(self, table: str) -> "UpdateBuilder":
    return replace(self, table_name=table)

  def set(self, column: str, value: Any) -> "UpdateBuilder":
    """
    Add a SET clause. A fragment value is inlined (a sub-select in
    parentheses), anything else is bound.
    """
    return replace(self, set_clauses=self.set_clauses + ((column, bind(value)),))

  def set_map(self, clauses: Mapping[str, Any]) -> "UpdateBuilder":
    """Call set() for each pair, in sorted column order."""
    builder = self
    for key in sorted(clauses):
      builder = builder.set(key, clauses[key])
    return builder

  def _render(self, buf: SqlBuffer) -> None:
    if not self.table_name:
      raise StructuralError("update statements must specify a table")
    if not self.set_clauses:
      raise StructuralError("update statements must have at least one Set clause")

    buf.write(f"UPDATE {self.table_name} SET ")

    set_sqls: List[str] = []
    for column, value in self.set_clauses:
      if isinstance(value, Nested):
        value_sql, value_args = splice_value(value.raw)
        buf.args.extend(value_args)
      else:
        value_sql = MARKER
        buf.args.append(value.raw)
      set_sqls.append(f"{column} = {value_sql}")
    buf.write(", ".join(set_sqls))

    self._write_where(buf)
    self._write_order_limit_offset(buf)
