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
from typing import Any, List, Optional, Tuple

from ..errors import StructuralError
from ..rendering.buffer import SqlBuffer
from ..rendering.fragment import Sqlizer
from ..rendering.parts import Part, new_part


@dataclass(frozen=True)
class WhenPart:
  """One `WHEN <when> THEN <then>` pair."""
  when: Part
  then: Part


@dataclass(frozen=True)
class CaseBuilder(Sqlizer):
  """
  Builds a CASE expression for use inside other statements.

    case("status").when("1", "'on'").else_("'off'")
    -> "CASE status WHEN 1 THEN 'on' ELSE 'off' END"

    case().when(Eq(a=2), expr("?", "foo"))
    -> "CASE WHEN a = ? THEN ? END", [2, "foo"]

  Operands are raw SQL strings or fragments; values must be bound
  explicitly through expr().
  """
  what: Optional[Part] = None
  when_parts: Tuple[WhenPart, ...] = ()
  else_part: Optional[Part] = None

  def when(self, when: Any, then: Any) -> "CaseBuilder":
    return replace(self, when_parts=self.when_parts + (WhenPart(new_part(when), new_part(then)),))

  def else_(self, value: Any) -> "CaseBuilder":
    return replace(self, else_part=new_part(value))

  def to_sql(self) -> Tuple[str, List[Any]]:
    if not self.when_parts:
      raise StructuralError("case expression must contain at least one WHEN clause")

    buf = SqlBuffer()
    buf.write("CASE ")
    if self.what is not None:
      buf.write_sql(self.what)

    for part in self.when_parts:
      buf.write("WHEN ")
      buf.write_sql(part.when)
      buf.write("THEN ")
      buf.write_sql(part.then)

    if self.else_part is not None:
      buf.write("ELSE ")
      buf.write_sql(self.else_part)

    buf.write("END")
    return buf.to_sql()


def case(what: Any = None) -> CaseBuilder:
  """
  Start a CASE expression; `what` is the optional operand after CASE.

    case("status").when("1", "2")  -> "CASE status WHEN 1 THEN 2 END"
  """
  if what is None:
    return CaseBuilder()
  return CaseBuilder(what=new_part(what))
