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

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from ..errors import CompositionError
from .fragment import Sqlizer, nested_to_sql
from .predicates import Eq


@dataclass(frozen=True)
class Part(Sqlizer):
  """
  A clause piece given either as raw SQL plus args or as a fragment.

  Used for columns, joins, prefixes, suffixes and CASE operands. A None
  predicate renders as empty SQL and is skipped by the clause writers.
  """
  pred: Any
  args: Tuple[Any, ...] = ()

  def to_sql(self) -> Tuple[str, List[Any]]:
    pred = self.pred
    if pred is None:
      return "", []
    if isinstance(pred, Sqlizer):
      return nested_to_sql(pred)
    if isinstance(pred, str):
      return pred, list(self.args)
    raise CompositionError(f"expected string or fragment, not {type(pred).__name__}")


@dataclass(frozen=True)
class WherePart(Part):
  """Part for WHERE/HAVING that also accepts a column->value mapping (as Eq)."""

  def __post_init__(self):
    if isinstance(self.pred, Mapping):
      object.__setattr__(self, "pred", Eq(self.pred))

  def to_sql(self) -> Tuple[str, List[Any]]:
    if self.pred is None or isinstance(self.pred, (str, Sqlizer)):
      return super().to_sql()
    raise CompositionError(
      f"expected string-keyed mapping, string or fragment, not {type(self.pred).__name__}"
    )


def new_part(pred: Any, *args: Any) -> Part:
  return Part(pred, tuple(args))


def new_where_part(pred: Any, *args: Any) -> WherePart:
  return WherePart(pred, tuple(args))
