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

from typing import Any, List, Sequence

from ..errors import DebugMismatchError, SqlweaveError
from .fragment import ESCAPED_MARKER, MARKER, Sqlizer


def interpolate(sql: str, args: Sequence[Any]) -> str:
  """
  Put each arg, quoted as '<value>', in place of its marker.

  Raises:
      DebugMismatchError: if markers and args do not line up.
  """
  out: List[str] = []
  rest = sql
  i = 0
  while True:
    p = rest.find(MARKER)
    if p < 0:
      break
    if rest.startswith(ESCAPED_MARKER, p):
      out.append(rest[:p])
      out.append(MARKER)
      rest = rest[p + 2:]
      continue
    if i >= len(args):
      raise DebugMismatchError(
        f"too many placeholders in {sql!r} for {len(args)} args"
      )
    out.append(rest[:p])
    out.append(f"'{args[i]}'")
    rest = rest[p + 1:]
    i += 1

  if i < len(args):
    raise DebugMismatchError(
      f"not enough placeholders in {sql!r} for {len(args)} args"
    )
  out.append(rest)
  return "".join(out)


def debug_sql(fragment: Sqlizer) -> str:
  """
  Show the approximate SQL a fragment would execute, args inlined.

  For display only: the output is not escaped and must never be executed.
  Works on the raw render, so the placeholder style does not matter.
  Failures come back as "[to_sql error: ...]" or "[debug_sql error: ...]".
  """
  try:
    sql, args = fragment.to_sql_raw()
  except SqlweaveError as exc:
    return f"[to_sql error: {exc}]"

  try:
    return interpolate(sql, args)
  except DebugMismatchError as exc:
    return f"[debug_sql error: {exc}]"
