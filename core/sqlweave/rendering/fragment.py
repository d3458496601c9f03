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

from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Optional, Tuple

from ..errors import RenderAbort, SqlweaveError


MARKER = "?"
ESCAPED_MARKER = "??"

# Portable true/false literals.
SQL_TRUE = "(1=1)"
SQL_FALSE = "(1=0)"


class Rendered(NamedTuple):
  """Result of try_sql(): either (sql, args) or an error, never both."""
  sql: str
  args: List[Any]
  error: Optional[SqlweaveError] = None


class Sqlizer(ABC):
  """
  Base class for every composable SQL fragment.

  to_sql() returns the SQL text and the ordered list of bound args, or
  raises a SqlweaveError. to_sql_raw() is the same render without the
  final placeholder rewrite; statements override it, plain fragments
  never rewrite so both are identical there.
  """

  # Sub-selects need parentheses when spliced in as a value.
  parenthesize_when_nested = False

  @abstractmethod
  def to_sql(self) -> Tuple[str, List[Any]]:
    raise NotImplementedError

  def to_sql_raw(self) -> Tuple[str, List[Any]]:
    return self.to_sql()

  def try_sql(self) -> Rendered:
    """Render and return the error instead of raising it."""
    try:
      sql, args = self.to_sql()
    except SqlweaveError as exc:
      return Rendered("", [], exc)
    return Rendered(sql, args, None)

  def must_sql(self) -> Tuple[str, List[Any]]:
    """Render or abort with RenderAbort."""
    try:
      return self.to_sql()
    except SqlweaveError as exc:
      raise RenderAbort(f"{type(self).__name__} failed to render: {exc}") from exc


def nested_to_sql(fragment: Sqlizer) -> Tuple[str, List[Any]]:
  """Render a child fragment without rewriting its placeholders."""
  sql, args = fragment.to_sql_raw()
  return sql, list(args)


def splice_value(fragment: Sqlizer) -> Tuple[str, List[Any]]:
  """Render a fragment used in value position, e.g. `col = (SELECT ...)`."""
  sql, args = nested_to_sql(fragment)
  if fragment.parenthesize_when_nested:
    sql = f"({sql})"
  return sql, args
