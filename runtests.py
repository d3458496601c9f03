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

import sys
from pathlib import Path

import pytest


def main():
  """Put core/ on sys.path and run pytest."""
  root = Path(__file__).resolve().parent
  core = root / "core"

  # Ensure the source root is on sys.path so 'sqlweave' can be imported
  if str(core) not in sys.path:
    sys.path.insert(0, str(core))

  return pytest.main([str(core / "tests"), *sys.argv[1:]])


if __name__ == "__main__":
  raise SystemExit(main())
