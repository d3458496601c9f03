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
Bindable values.

Every value handed to a fragment is classified exactly once, when the
fragment is built, into one of:

  Scalar     - any plain value, bound as a single argument
  Null       - None
  ListValue  - list or tuple, expanded to one marker per element
  Nested     - a Sqlizer, rendered and spliced in place of its marker
  Adaptable  - an object exposing sql_value(), unwrapped at render time

Only list and tuple count as lists. Strings, bytes, sets, generators and
other iterables are scalars and are bound as-is.
"""

from dataclasses import dataclass
from typing import Any, Protocol, Tuple, runtime_checkable

from ..errors import CompositionError
from .fragment import Sqlizer


@runtime_checkable
class Valuer(Protocol):
  """Driver-side value adapter, e.g. a nullable wrapper type."""

  def sql_value(self) -> Any:
    ...


class BindValue:
  """Base class of the bindable value variants. Each variant keeps the original as `raw`."""

  def resolve(self, key: str = "") -> "BindValue":
    return self


@dataclass(frozen=True)
class Scalar(BindValue):
  raw: Any


@dataclass(frozen=True)
class Null(BindValue):
  raw: Any = None


@dataclass(frozen=True)
class ListValue(BindValue):
  raw: Any
  items: Tuple[Any, ...]


@dataclass(frozen=True)
class Nested(BindValue):
  raw: Sqlizer


@dataclass(frozen=True)
class Adaptable(BindValue):
  raw: Valuer

  def resolve(self, key: str = "") -> BindValue:
    """Call the adapter and classify what it produced. Adapters are unwrapped once."""
    try:
      value = self.raw.sql_value()
    except Exception as exc:
      raise CompositionError(
        f"value adapter {type(self.raw).__name__} failed for {key!r}: {exc}"
      ) from exc
    bound = bind(value)
    if isinstance(bound, Adaptable):
      return Scalar(value)
    return bound


def bind(value: Any) -> BindValue:
  """Classify a Python value into its bindable variant."""
  if isinstance(value, BindValue):
    return value
  if value is None:
    return Null()
  if isinstance(value, Sqlizer):
    return Nested(value)
  if isinstance(value, (list, tuple)):
    return ListValue(value, tuple(value))
  if isinstance(value, Valuer):
    return Adaptable(value)
  return Scalar(value)
