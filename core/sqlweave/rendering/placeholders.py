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
from enum import Enum
from typing import Dict, Optional

from ..config import profiles
from ..config.env import env_bool, env_str
from .fragment import ESCAPED_MARKER, MARKER

logger = logging.getLogger(__name__)


class PlaceholderStyle(Enum):
  """
  Target placeholder syntax. The value is the prefix written before the
  1-based argument index; QUESTION writes the bare marker instead.
  """
  QUESTION = "?"
  DOLLAR = "$"
  COLON = ":"
  AT_P = "@p"

  @property
  def numbered(self) -> bool:
    return self is not PlaceholderStyle.QUESTION

  def render(self, position: int) -> str:
    if not self.numbered:
      return MARKER
    return f"{self.value}{position}"


# ---------------------------------------------------------------------------
# Rewrite pass
# ---------------------------------------------------------------------------

def replace_placeholders(sql: str, style: PlaceholderStyle) -> str:
  """
  Rewrite every marker in fully-composed SQL into the style's syntax.

  `??` is collapsed to a literal `?` and does not advance the counter.
  Numbered styles count 1..N in text order.

    replace_placeholders("a = ? AND b = ?", PlaceholderStyle.DOLLAR)
    -> "a = $1 AND b = $2"
  """
  out = []
  position = 1
  i = 0
  while True:
    p = sql.find(MARKER, i)
    if p < 0:
      break
    out.append(sql[i:p])
    if sql.startswith(ESCAPED_MARKER, p):
      out.append(MARKER)
      i = p + 2
      continue
    out.append(style.render(position))
    position += 1
    i = p + 1
  out.append(sql[i:])
  return "".join(out)


def count_markers(sql: str) -> int:
  """Count non-escaped markers, i.e. the number of args the text expects."""
  count = 0
  i = 0
  while True:
    p = sql.find(MARKER, i)
    if p < 0:
      return count
    if sql.startswith(ESCAPED_MARKER, p):
      i = p + 2
      continue
    count += 1
    i = p + 1


def placeholders(count: int) -> str:
  """Return `count` markers joined by commas, e.g. placeholders(3) -> "?,?,?"."""
  if count < 1:
    return ""
  return ",".join([MARKER] * count)


# ---------------------------------------------------------------------------
# Style selection
# ---------------------------------------------------------------------------

_STYLE_REGISTRY: Dict[str, PlaceholderStyle] = {
  "question": PlaceholderStyle.QUESTION,
  "dollar": PlaceholderStyle.DOLLAR,
  "colon": PlaceholderStyle.COLON,
  "atp": PlaceholderStyle.AT_P,
}


def get_available_style_names() -> list[str]:
  return sorted(_STYLE_REGISTRY)


def _load_active_profile() -> Optional[profiles.Profile]:
  try:
    return profiles.load_profile()
  except (FileNotFoundError, KeyError, OSError, ValueError) as exc:
    # No usable profile is a normal setup; resolution falls through.
    logger.debug("No sqlweave profile loaded: %s", exc)
    return None


def _resolve_style_name(explicit: Optional[str] = None) -> str:
  """
  Resolve a placeholder style name from (in order):

  1. explicit argument
  2. SQLWEAVE_PLACEHOLDER_STYLE environment variable
  3. active profile.default_placeholder_style
  4. hard fallback 'question'
  """
  if explicit:
    return explicit.lower()

  env_name = env_str("SQLWEAVE_PLACEHOLDER_STYLE")
  if env_name:
    return env_name.lower()

  profile = _load_active_profile()
  if profile is not None and profile.default_placeholder_style:
    return profile.default_placeholder_style.lower()

  return "question"


def get_placeholder_style(name: Optional[str | PlaceholderStyle] = None) -> PlaceholderStyle:
  """
  Return the PlaceholderStyle to render statements with.

  Raises:
      ValueError: if the resolved name is not registered.
  """
  if isinstance(name, PlaceholderStyle):
    return name

  style_name = _resolve_style_name(name)

  try:
    style = _STYLE_REGISTRY[style_name]
  except KeyError as exc:
    available = ", ".join(get_available_style_names())
    raise ValueError(
      f"Unknown placeholder style: {style_name!r}. "
      f"Available styles: {available}."
    ) from exc

  logger.debug("Using placeholder style %s", style.name)
  return style


def get_strict_args() -> bool:
  """
  Whether statements should reject marker/argument count mismatches.

  SQLWEAVE_STRICT_ARGS wins over the active profile's `strict_args`.
  """
  if env_str("SQLWEAVE_STRICT_ARGS") is not None:
    return env_bool("SQLWEAVE_STRICT_ARGS")

  profile = _load_active_profile()
  if profile is not None:
    return bool(profile.strict_args)
  return False
