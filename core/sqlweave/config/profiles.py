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

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .env import env_str

"""
Profile loading for sqlweave.

Profiles define environment-specific rendering defaults:
- the placeholder style statements are rendered with
- whether marker/argument count mismatches are rejected

Example sqlweave_profiles.yaml:

  active_profile: pg
  profiles:
    pg:
      default_placeholder_style: dollar
      strict_args: true
    mssql:
      default_placeholder_style: atp
"""

PROFILES_FILENAME = "sqlweave_profiles.yaml"


@dataclass
class Profile:
  name: str

  # question | dollar | colon | atp
  default_placeholder_style: str = "question"

  # Reject statements whose marker count differs from their arg count
  strict_args: bool = False


def _find_profiles_path(explicit_path: str | None = None) -> Path:
  """
  Locate sqlweave_profiles.yaml in several common locations:

  1. explicit_path argument (if provided and exists)
  2. SQLWEAVE_PROFILES_PATH environment variable (if set and exists)
  3. ./config/sqlweave_profiles.yaml and ~/.config/sqlweave/sqlweave_profiles.yaml

  Raises:
      FileNotFoundError: if no suitable file can be found.
  """
  candidates: list[Path] = []

  if explicit_path:
    candidates.append(Path(explicit_path))

  env_path = env_str("SQLWEAVE_PROFILES_PATH")
  if env_path:
    candidates.append(Path(env_path))

  candidates += [
    Path.cwd() / "config" / PROFILES_FILENAME,
    Path.home() / ".config" / "sqlweave" / PROFILES_FILENAME,
  ]

  for c in candidates:
    if c and c.exists():
      return c

  raise FileNotFoundError(
    f"{PROFILES_FILENAME} not found in expected locations. "
    "Provide an explicit path or configure SQLWEAVE_PROFILES_PATH."
  )


def load_profile(profiles_path: Optional[str] = None) -> Profile:
  """
  Load and return the current active profile.

  Resolution order:
    - SQLWEAVE_PROFILE env var
    - `active_profile` key in sqlweave_profiles.yaml
    - default 'default'
  """
  path = _find_profiles_path(profiles_path)

  with open(path, "r", encoding="utf-8") as f:
    try:
      data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
      raise ValueError(f"Invalid {PROFILES_FILENAME} at {path}: {exc}") from exc

  if not isinstance(data, dict):
    raise ValueError(f"Invalid {PROFILES_FILENAME} at {path}: expected a mapping at the top level")

  active = os.getenv("SQLWEAVE_PROFILE", data.get("active_profile", "default"))
  profiles = data.get("profiles") or {}
  if not isinstance(profiles, dict):
    raise ValueError(f"Invalid {PROFILES_FILENAME} at {path}: `profiles` must be a mapping")

  if active not in profiles:
    available = ", ".join(sorted(profiles)) if profiles else "(none)"
    raise KeyError(
      f"Active profile '{active}' not found in {PROFILES_FILENAME} "
      f"at {path}. Available profiles: {available}."
    )

  p = profiles[active] or {}
  if not isinstance(p, dict):
    raise ValueError(f"Invalid {PROFILES_FILENAME} at {path}: profile {active!r} must be a mapping")

  return Profile(
    name=active,
    default_placeholder_style=p.get("default_placeholder_style", "question") or "question",
    strict_args=bool(p.get("strict_args", False)),
  )
