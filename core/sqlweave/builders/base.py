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

import logging
from abc import abstractmethod
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple, TypeVar

from ..errors import CompositionError
from ..rendering.buffer import SqlBuffer
from ..rendering.expr import Expr
from ..rendering.fragment import Sqlizer
from ..rendering.parts import Part, WherePart, new_part, new_where_part
from ..rendering.placeholders import (
  PlaceholderStyle,
  count_markers,
  get_placeholder_style,
  replace_placeholders,
)

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="StatementBase")
F = TypeVar("F", bound="FilteredStatement")


def _non_negative(name: str, value: int) -> int:
  value = int(value)
  if value < 0:
    raise ValueError(f"{name} must be non-negative, got {value}")
  return value


@dataclass(frozen=True)
class StatementBase(Sqlizer):
  """
  Shared state and rendering for statement builders.

  Builders are frozen: every method returns a new builder, so a base
  builder can be shared and extended without the variants seeing each
  other's clauses.
  """
  placeholder_style: PlaceholderStyle = PlaceholderStyle.QUESTION
  strict: bool = False
  prefixes: Tuple[Sqlizer, ...] = ()
  suffixes: Tuple[Sqlizer, ...] = ()

  # -------------------------------------------------------------------------
  # Format
  # -------------------------------------------------------------------------

  def placeholder_format(self: S, style: Optional[str | PlaceholderStyle] = None) -> S:
    """Set the placeholder style; a name or None resolves via env/profile."""
    return replace(self, placeholder_style=get_placeholder_style(style))

  def strict_args(self: S, strict: bool = True) -> S:
    """Reject renders whose marker count differs from the number of args."""
    return replace(self, strict=strict)

  # -------------------------------------------------------------------------
  # Prefix / suffix
  # -------------------------------------------------------------------------

  def prefix(self: S, sql: str, *args: Any) -> S:
    """Add an expression to the beginning of the statement."""
    return self.prefix_expr(Expr(sql, args))

  def prefix_expr(self: S, fragment: Sqlizer) -> S:
    return replace(self, prefixes=self.prefixes + (fragment,))

  def suffix(self: S, sql: str, *args: Any) -> S:
    """Add an expression to the end of the statement, e.g. RETURNING."""
    return self.suffix_expr(Expr(sql, args))

  def suffix_expr(self: S, fragment: Sqlizer) -> S:
    return replace(self, suffixes=self.suffixes + (fragment,))

  # -------------------------------------------------------------------------
  # Rendering
  # -------------------------------------------------------------------------

  @abstractmethod
  def _render(self, buf: SqlBuffer) -> None:
    """Write the statement body (between prefixes and suffixes)."""
    raise NotImplementedError

  def to_sql_raw(self) -> Tuple[str, List[Any]]:
    """Render with `?` markers left in place, for nesting into other statements."""
    buf = SqlBuffer()
    buf.write_clause("", self.prefixes, " ", trailer=" ")
    self._render(buf)
    buf.write_clause(" ", self.suffixes, " ")
    return buf.to_sql()

  def to_sql(self) -> Tuple[str, List[Any]]:
    """Render the statement into SQL in its placeholder style plus bound args."""
    sql, args = self.to_sql_raw()

    if self.strict:
      markers = count_markers(sql)
      if markers != len(args):
        raise CompositionError(
          f"{type(self).__name__} rendered {markers} placeholders for {len(args)} args"
        )

    sql = replace_placeholders(sql, self.placeholder_style)
    logger.debug(
      "Rendered %s (%s) with %d args", type(self).__name__, self.placeholder_style.name, len(args)
    )
    return sql, args


@dataclass(frozen=True)
class FilteredStatement(StatementBase):
  """Statement with WHERE, ORDER BY, LIMIT and OFFSET clauses."""
  where_parts: Tuple[WherePart, ...] = ()
  order_by_parts: Tuple[Part, ...] = ()
  limit_count: Optional[int] = None
  offset_count: Optional[int] = None

  def where(self: F, pred: Any, *args: Any) -> F:
    """
    Add a WHERE expression; multiple calls are joined with AND.

    `pred` may be:
      - a string with `?` markers, bound to `args`:   where("a = ?", 1)
      - a fragment:                                   where(Or(Eq(a=1), Gt(b=2)))
      - a column->value mapping, treated as Eq:       where({"a": 1})
    None or "" is ignored.
    """
    if pred is None or pred == "":
      return self
    return replace(self, where_parts=self.where_parts + (new_where_part(pred, *args),))

  def order_by(self: F, *order_bys: str) -> F:
    """Add ORDER BY expressions, e.g. order_by("name", "id DESC")."""
    parts = tuple(new_part(o) for o in order_bys)
    return replace(self, order_by_parts=self.order_by_parts + parts)

  def order_by_clause(self: F, pred: Any, *args: Any) -> F:
    """Add an ORDER BY expression with bound args."""
    return replace(self, order_by_parts=self.order_by_parts + (new_part(pred, *args),))

  def limit(self: F, limit: int) -> F:
    return replace(self, limit_count=_non_negative("limit", limit))

  def remove_limit(self: F) -> F:
    return replace(self, limit_count=None)

  def offset(self: F, offset: int) -> F:
    return replace(self, offset_count=_non_negative("offset", offset))

  def remove_offset(self: F) -> F:
    return replace(self, offset_count=None)

  def _write_where(self, buf: SqlBuffer) -> None:
    buf.write_clause(" WHERE ", self.where_parts, " AND ")

  def _write_order_limit_offset(self, buf: SqlBuffer) -> None:
    buf.write_clause(" ORDER BY ", self.order_by_parts, ", ")

    if self.limit_count is not None:
      buf.write(f" LIMIT {self.limit_count}")

    if self.offset_count is not None:
      buf.write(f" OFFSET {self.offset_count}")
