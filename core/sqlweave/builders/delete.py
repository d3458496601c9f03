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

from ..errors import StructuralError
from ..rendering.buffer import SqlBuffer
from .base import FilteredStatement


@dataclass(frozen=True)
class DeleteBuilder(FilteredStatement):
  """Builds DELETE statements."""
  from_table: str = ""

  def from_(self, table: str) -> "DeleteBuilder":
    return replace(self, from_table=table)

  def _render(self, buf: SqlBuffer) -> None:
    if not self.from_table:
      raise StructuralError("delete statements must specify a From table")

    buf.write(f"DELETE FROM {self.from_table}")
    self._write_where(buf)
    self._write_order_limit_offset(buf)
