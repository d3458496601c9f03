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

"""
Error taxonomy for sqlweave.

All errors raised while rendering a fragment derive from SqlweaveError, so
callers can handle every library failure with a single except clause.
RenderAbort is the exception: it is raised by must_sql() and is meant to
escape ordinary error handling.
"""


class SqlweaveError(Exception):
  """Base class for all rendering errors."""


class CompositionError(SqlweaveError):
  """A part is neither a string nor a fragment, or markers and args disagree in strict mode."""


class InvalidPredicateError(SqlweaveError):
  """A null or list value was passed to a comparison or pattern predicate map."""


class StructuralError(SqlweaveError):
  """A statement is missing a required clause (table, columns, SET, WHEN, ...)."""


class DebugMismatchError(SqlweaveError):
  """
  Marker/argument count mismatch found by the debug renderer.

  Only raised and caught inside sqlweave.rendering.debug; callers receive
  a diagnostic string instead.
  """


class RenderAbort(RuntimeError):
  """Raised by must_sql() when rendering fails. Chained to the original error."""
