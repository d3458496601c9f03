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

from typing import Any, Iterable, List, Tuple

from .fragment import Sqlizer, nested_to_sql


class SqlBuffer:
  """
  Accumulates SQL text and bound args while a statement is written.

  Fragments are rendered raw, one after another; the first failing
  fragment raises and nothing rendered so far is returned.
  """

  def __init__(self) -> None:
    self._chunks: List[str] = []
    self.args: List[Any] = []

  def write(self, text: str) -> None:
    self._chunks.append(text)

  def write_sql(self, item: Sqlizer, trailer: str = " ") -> None:
    """Write one fragment followed by `trailer`."""
    sql, args = nested_to_sql(item)
    self._chunks.append(sql)
    self._chunks.append(trailer)
    self.args.extend(args)

  def write_parts(self, parts: Iterable[Sqlizer], sep: str) -> None:
    """
    Write fragments separated by `sep`. Fragments that render to empty SQL
    are skipped and get no separator.
    """
    written = 0
    for part in parts:
      sql, args = nested_to_sql(part)
      if not sql:
        continue
      if written:
        self._chunks.append(sep)
      self._chunks.append(sql)
      self.args.extend(args)
      written += 1

  def write_clause(
    self,
    keyword: str,
    parts: Iterable[Sqlizer],
    sep: str,
    trailer: str = "",
  ) -> None:
    """
    Write `keyword`, the joined parts and `trailer`, e.g. " WHERE a = ? AND b = ?".
    Nothing is written when every part renders empty.
    """
    sql, args = append_to_sql(parts, sep)
    if sql:
      self._chunks.append(keyword)
      self._chunks.append(sql)
      self._chunks.append(trailer)
      self.args.extend(args)

  def to_sql(self) -> Tuple[str, List[Any]]:
    return "".join(self._chunks), list(self.args)


def append_to_sql(parts: Iterable[Sqlizer], sep: str) -> Tuple[str, List[Any]]:
  """Render `parts` joined by `sep` into one (sql, args) pair."""
  buf = SqlBuffer()
  buf.write_parts(parts, sep)
  return buf.to_sql()
