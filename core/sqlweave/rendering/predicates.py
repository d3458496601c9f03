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

"""
Predicate sugar for WHERE/HAVING clauses.

A predicate map turns {column: value} into per-column comparisons joined
by AND, visiting columns in sorted order so the output is stable:

  Eq(b=2, a=1)                -> "a = ? AND b = ?", [1, 2]
  Eq(id=[1, 2, 3])            -> "id IN (?,?,?)",   [1, 2, 3]
  NotEq(name=None)            -> "name IS NOT NULL", []
  Gt(age=18)                  -> "age > ?",          [18]

And/Or fold any fragments into one parenthesized condition.
"""

from abc import abstractmethod
from typing import Any, List, Mapping, Optional, Tuple

from ..errors import CompositionError, InvalidPredicateError
from .fragment import MARKER, SQL_FALSE, SQL_TRUE, Sqlizer, nested_to_sql, splice_value
from .placeholders import placeholders
from .values import BindValue, ListValue, Nested, Null, bind


class PredicateMap(Sqlizer):
  """Immutable column->value mapping rendered as AND-joined comparisons."""

  __slots__ = ("_entries",)

  def __init__(self, mapping: Optional[Mapping[str, Any]] = None, /, **columns: Any):
    merged = dict(mapping or {})
    merged.update(columns)
    self._entries: Tuple[Tuple[str, BindValue], ...] = tuple(
      (key, bind(merged[key])) for key in sorted(merged)
    )

  def items(self) -> List[Tuple[str, Any]]:
    return [(key, value.raw) for key, value in self._entries]

  def __eq__(self, other: object) -> bool:
    if type(other) is not type(self):
      return NotImplemented
    return self._entries == other._entries

  __hash__ = None

  def __repr__(self) -> str:
    return f"{type(self).__name__}({dict(self.items())!r})"

  def __len__(self) -> int:
    return len(self._entries)

  def to_sql(self) -> Tuple[str, List[Any]]:
    if not self._entries:
      return SQL_TRUE, []

    exprs: List[str] = []
    args: List[Any] = []
    for key, value in self._entries:
      exprs.append(self._render_entry(key, value.resolve(key), args))
    return " AND ".join(exprs), args

  @abstractmethod
  def _render_entry(self, key: str, value: BindValue, args: List[Any]) -> str:
    raise NotImplementedError

  def _render_operand(self, key: str, opr: str, value: BindValue, args: List[Any]) -> str:
    if isinstance(value, Nested):
      sub_sql, sub_args = splice_value(value.raw)
      args.extend(sub_args)
      return f"{key} {opr} {sub_sql}"
    args.append(value.raw)
    return f"{key} {opr} {MARKER}"


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

class Eq(PredicateMap):
  """
  Equality sugar. None becomes IS NULL, a list or tuple becomes IN (...),
  and an empty list becomes the false literal.
  """

  __slots__ = ()

  equal_opr = "="
  in_opr = "IN"
  null_opr = "IS"
  in_empty_expr = SQL_FALSE

  def _render_entry(self, key: str, value: BindValue, args: List[Any]) -> str:
    if isinstance(value, Null):
      return f"{key} {self.null_opr} NULL"

    if isinstance(value, ListValue):
      if not value.items:
        return self.in_empty_expr
      args.extend(value.items)
      return f"{key} {self.in_opr} ({placeholders(len(value.items))})"

    return self._render_operand(key, self.equal_opr, value, args)


class NotEq(Eq):
  """Negated equality: <>, NOT IN, IS NOT NULL; an empty list is always true."""

  __slots__ = ()

  equal_opr = "<>"
  in_opr = "NOT IN"
  null_opr = "IS NOT"
  in_empty_expr = SQL_TRUE


# ---------------------------------------------------------------------------
# Ordering comparisons
# ---------------------------------------------------------------------------

class _Comparison(PredicateMap):
  __slots__ = ()

  opr = "<"

  def _render_entry(self, key: str, value: BindValue, args: List[Any]) -> str:
    if isinstance(value, Null):
      raise InvalidPredicateError("cannot use null with less than or greater than operators")
    if isinstance(value, ListValue):
      raise InvalidPredicateError(
        "cannot use list or tuple with less than or greater than operators"
      )
    return self._render_operand(key, self.opr, value, args)


class Lt(_Comparison):
  __slots__ = ()
  opr = "<"


class LtOrEq(_Comparison):
  __slots__ = ()
  opr = "<="


class Gt(_Comparison):
  __slots__ = ()
  opr = ">"


class GtOrEq(_Comparison):
  __slots__ = ()
  opr = ">="


# ---------------------------------------------------------------------------
# Pattern matching
# ---------------------------------------------------------------------------

class _Pattern(PredicateMap):
  __slots__ = ()

  opr = "LIKE"

  def _render_entry(self, key: str, value: BindValue, args: List[Any]) -> str:
    if isinstance(value, Null):
      raise InvalidPredicateError("cannot use null with like operators")
    if isinstance(value, ListValue):
      raise InvalidPredicateError("cannot use list or tuple with like operators")
    return self._render_operand(key, self.opr, value, args)


class Like(_Pattern):
  __slots__ = ()
  opr = "LIKE"


class NotLike(_Pattern):
  __slots__ = ()
  opr = "NOT LIKE"


class ILike(_Pattern):
  __slots__ = ()
  opr = "ILIKE"


class NotILike(_Pattern):
  __slots__ = ()
  opr = "NOT ILIKE"


# ---------------------------------------------------------------------------
# Conjunctions
# ---------------------------------------------------------------------------

class _Conjunction(Sqlizer):
  __slots__ = ("_parts",)

  sep = " AND "
  default_expr = SQL_TRUE

  def __init__(self, *fragments: Any):
    # And(a, b) and And([a, b]) are equivalent.
    if len(fragments) == 1 and isinstance(fragments[0], (list, tuple)):
      fragments = tuple(fragments[0])
    self._parts: Tuple[Any, ...] = tuple(fragments)

  @property
  def parts(self) -> Tuple[Any, ...]:
    return self._parts

  def __eq__(self, other: object) -> bool:
    if type(other) is not type(self):
      return NotImplemented
    return self._parts == other._parts

  __hash__ = None

  def __repr__(self) -> str:
    return f"{type(self).__name__}{self._parts!r}"

  def to_sql(self) -> Tuple[str, List[Any]]:
    if not self._parts:
      return self.default_expr, []

    sql_parts: List[str] = []
    args: List[Any] = []
    for part in self._parts:
      if not isinstance(part, Sqlizer):
        raise CompositionError(f"{part!r} is not a fragment")
      part_sql, part_args = nested_to_sql(part)
      if part_sql:
        sql_parts.append(part_sql)
        args.extend(part_args)

    if not sql_parts:
      return "", args
    return f"({self.sep.join(sql_parts)})", args


class And(_Conjunction):
  """AND of fragments; zero fragments render the true literal."""
  __slots__ = ()
  sep = " AND "
  default_expr = SQL_TRUE


class Or(_Conjunction):
  """OR of fragments; zero fragments render the false literal."""
  __slots__ = ()
  sep = " OR "
  default_expr = SQL_FALSE
