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

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..rendering.parts import WherePart, new_where_part
from ..rendering.placeholders import PlaceholderStyle, get_placeholder_style, get_strict_args
from .delete import DeleteBuilder
from .insert import InsertBuilder
from .select import SelectBuilder
from .update import UpdateBuilder


@dataclass(frozen=True)
class StatementBuilder:
  """
  Factory for statements that share a placeholder style, strictness and
  WHERE clauses.

    pg = StatementBuilder().placeholder_format("dollar")
    pg.select("*").from_("users").where("id = ?", 1).to_sql()
    -> ("SELECT * FROM users WHERE id = $1", [1])
  """
  placeholder_style: PlaceholderStyle = PlaceholderStyle.QUESTION
  strict: bool = False
  where_parts: Tuple[WherePart, ...] = ()

  @classmethod
  def from_config(cls, name: Optional[str] = None) -> "StatementBuilder":
    """Build from the active configuration (explicit name, env, profile)."""
    return cls(placeholder_style=get_placeholder_style(name), strict=get_strict_args())

  def placeholder_format(self, style: Optional[str | PlaceholderStyle] = None) -> "StatementBuilder":
    return dataclasses.replace(self, placeholder_style=get_placeholder_style(style))

  def strict_args(self, strict: bool = True) -> "StatementBuilder":
    return dataclasses.replace(self, strict=strict)

  def where(self, pred: Any, *args: Any) -> "StatementBuilder":
    """Add a WHERE clause to every SELECT, UPDATE and DELETE built from here."""
    if pred is None or pred == "":
      return self
    return dataclasses.replace(self, where_parts=self.where_parts + (new_where_part(pred, *args),))

  def select(self, *columns: str) -> SelectBuilder:
    return SelectBuilder(
      placeholder_style=self.placeholder_style,
      strict=self.strict,
      where_parts=self.where_parts,
    ).columns(*columns)

  def insert(self, into: str) -> InsertBuilder:
    return InsertBuilder(
      placeholder_style=self.placeholder_style,
      strict=self.strict,
    ).into(into)

  def replace(self, into: str) -> InsertBuilder:
    """REPLACE INTO (MySQL/SQLite)."""
    return InsertBuilder(
      placeholder_style=self.placeholder_style,
      strict=self.strict,
      statement_keyword="REPLACE",
    ).into(into)

  def update(self, table: str) -> UpdateBuilder:
    return UpdateBuilder(
      placeholder_style=self.placeholder_style,
      strict=self.strict,
      where_parts=self.where_parts,
    ).table(table)

  def delete(self, from_: str = "") -> DeleteBuilder:
    return DeleteBuilder(
      placeholder_style=self.placeholder_style,
      strict=self.strict,
      where_parts=self.where_parts,
    ).from_(from_)


# ---------------------------------------------------------------------------
# Module-level shortcuts on a default (question mark) statement builder
# ---------------------------------------------------------------------------

statement_builder = StatementBuilder()


def select(*columns: str) -> SelectBuilder:
  """select("id", "name") -> SELECT id, name ..."""
  return statement_builder.select(*columns)


def insert(into: str) -> InsertBuilder:
  return statement_builder.insert(into)


def replace(into: str) -> InsertBuilder:
  return statement_builder.replace(into)


def update(table: str) -> UpdateBuilder:
  return statement_builder.update(table)


def delete(from_: str = "") -> DeleteBuilder:
  return statement_builder.delete(from_)
