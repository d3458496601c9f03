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

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from ..errors import CompositionError
from .fragment import ESCAPED_MARKER, MARKER, Sqlizer, nested_to_sql
from .placeholders import count_markers
from .values import BindValue, Nested, bind


def compose(sql: str, args: Iterable[Any], strict: bool = False) -> Tuple[str, List[Any]]:
  """
  Splice nested fragments into the markers of `sql`.

  Each non-escaped marker consumes the next arg. A fragment arg is rendered
  and its SQL replaces the marker; a plain arg keeps the marker. `??` is
  copied through and consumes nothing. Leftover args are appended to the
  result; surplus markers are left alone.

    compose("count(?)", [Expr("nullif(a,?)", ("b",))])
    -> ("count(nullif(a,?))", ["b"])
  """
  bound = [bind(a) for a in args]

  if strict:
    markers = count_markers(sql)
    if markers != len(bound):
      raise CompositionError(
        f"expression {sql!r} has {markers} placeholders for {len(bound)} args"
      )

  # Nothing to splice: text and args pass through unchanged.
  if not any(isinstance(b, Nested) for b in bound):
    return sql, [b.raw for b in bound]

  out: List[str] = []
  out_args: List[Any] = []
  rest = sql
  pos = 0

  while pos < len(bound) and rest:
    i = rest.find(MARKER)
    if i < 0:
      break
    if rest.startswith(ESCAPED_MARKER, i):
      out.append(rest[:i + 2])
      rest = rest[i + 2:]
      continue

    value = bound[pos]
    if isinstance(value, Nested):
      nested_sql, nested_args = nested_to_sql(value.raw)
      out.append(rest[:i])
      out.append(nested_sql)
      out_args.extend(nested_args)
    else:
      out.append(rest[:i + 1])
      out_args.append(value.raw)

    pos += 1
    rest = rest[i + 1:]

  out.append(rest)
  out_args.extend(b.raw for b in bound[pos:])
  return "".join(out), out_args


@dataclass(frozen=True)
class Expr(Sqlizer):
  """
  SQL fragment with bound args, e.g. Expr("FROM_UNIXTIME(?)", (ts,)).

  Args may themselves be fragments; they are expanded in place of their
  marker when rendered.
  """
  sql: str
  args: Tuple[Any, ...] = ()
  strict: bool = False
  _bound: Tuple[BindValue, ...] = field(init=False, repr=False, compare=False)

  def __post_init__(self):
    object.__setattr__(self, "args", tuple(self.args))
    object.__setattr__(self, "_bound", tuple(bind(a) for a in self.args))

  def to_sql(self) -> Tuple[str, List[Any]]:
    return compose(self.sql, self._bound, strict=self.strict)


@dataclass(frozen=True)
class Concat(Sqlizer):
  """Concatenation of plain strings and fragments, with no separator."""
  parts: Tuple[Any, ...] = ()

  def to_sql(self) -> Tuple[str, List[Any]]:
    chunks: List[str] = []
    args: List[Any] = []
    for part in self.parts:
      if isinstance(part, str):
        chunks.append(part)
      elif isinstance(part, Sqlizer):
        part_sql, part_args = nested_to_sql(part)
        chunks.append(part_sql)
        args.extend(part_args)
      else:
        raise CompositionError(f"{part!r} is not a string or fragment")
    return "".join(chunks), args


@dataclass(frozen=True)
class Alias(Sqlizer):
  """Aliased fragment, rendered as `(<sql>) AS <alias>`."""
  expr: Sqlizer
  alias: str

  def to_sql(self) -> Tuple[str, List[Any]]:
    sql, args = nested_to_sql(self.expr)
    return f"({sql}) AS {self.alias}", args


# ---------------------------------------------------------------------------
# Convenience constructors
# ---------------------------------------------------------------------------

def expr(sql: str, *args: Any) -> Expr:
  """
  Build an expression from a SQL fragment and args.

  Example:
      expr("FROM_UNIXTIME(?)", ts)
      expr("JOIN t1 ON ?", And(Eq(id=1), expr("NOT c1")))
  """
  return Expr(sql, args)


def expr_strict(sql: str, *args: Any) -> Expr:
  """Like expr(), but raises CompositionError if marker and arg counts differ."""
  return Expr(sql, args, strict=True)


def concat(*parts: Any) -> Concat:
  """
  Concatenate strings and fragments.

  Example:
      name = expr("CONCAT(?, ' ', ?)", first, last)
      concat("COALESCE(full_name,", name, ")")
  """
  return Concat(tuple(parts))


def alias(fragment: Sqlizer, name: str) -> Alias:
  """Alias a column expression, e.g. select().column(alias(case_expr, "kind"))."""
  return Alias(fragment, name)
