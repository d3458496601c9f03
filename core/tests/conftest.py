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

import pytest


SQLWEAVE_ENV_VARS = (
  "SQLWEAVE_PLACEHOLDER_STYLE",
  "SQLWEAVE_STRICT_ARGS",
  "SQLWEAVE_PROFILE",
  "SQLWEAVE_PROFILES_PATH",
)


@pytest.fixture(autouse=True)
def clean_sqlweave_env(monkeypatch, tmp_path):
  """
  Run every test without sqlweave env overrides and away from any
  sqlweave_profiles.yaml in the working or home directory.
  """
  for key in SQLWEAVE_ENV_VARS:
    monkeypatch.delenv(key, raising=False)
  monkeypatch.chdir(tmp_path)
  monkeypatch.setenv("HOME", str(tmp_path))
  yield
