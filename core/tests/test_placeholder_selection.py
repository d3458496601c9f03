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

from sqlweave import PlaceholderStyle, StatementBuilder, get_placeholder_style
from sqlweave.rendering.placeholders import get_available_style_names, get_strict_args


class DummyProfile:
  """Simple profile stub used for placeholder style resolution tests."""

  def __init__(self, default_placeholder_style: str, strict_args: bool = False) -> None:
    self.default_placeholder_style = default_placeholder_style
    self.strict_args = strict_args


def _forbid_profile_loading(monkeypatch, reason: str) -> None:
  from sqlweave.config import profiles as profiles_mod

  monkeypatch.setattr(
    profiles_mod,
    "load_profile",
    lambda *args, **kwargs: (_ for _ in ()).throw(AssertionError(reason)),
  )


def test_explicit_name_bypasses_env_and_profile(monkeypatch):
  """
  When a name is passed explicitly to get_placeholder_style(),
  it must not depend on env vars or profiles.
  """
  _forbid_profile_loading(monkeypatch, "load_profile must not be called for explicit name")
  monkeypatch.setenv("SQLWEAVE_PLACEHOLDER_STYLE", "colon")

  assert get_placeholder_style("dollar") is PlaceholderStyle.DOLLAR
  assert get_placeholder_style("ATP") is PlaceholderStyle.AT_P


def test_enum_member_is_returned_as_is(monkeypatch):
  _forbid_profile_loading(monkeypatch, "load_profile must not be called for an enum member")
  assert get_placeholder_style(PlaceholderStyle.COLON) is PlaceholderStyle.COLON


def test_env_override_used_without_loading_profile(monkeypatch):
  _forbid_profile_loading(monkeypatch, "load_profile must not be called when env override is set")
  monkeypatch.setenv("SQLWEAVE_PLACEHOLDER_STYLE", "Colon")

  assert get_placeholder_style() is PlaceholderStyle.COLON


def test_profile_default_used_when_no_env(monkeypatch):
  from sqlweave.config import profiles as profiles_mod

  dummy_profile = DummyProfile(default_placeholder_style="atp")
  monkeypatch.setattr(profiles_mod, "load_profile", lambda *args, **kwargs: dummy_profile)

  assert get_placeholder_style() is PlaceholderStyle.AT_P


def test_missing_profile_falls_back_to_question():
  # conftest points cwd and home at an empty tmp dir
  assert get_placeholder_style() is PlaceholderStyle.QUESTION
  assert get_strict_args() is False


def test_unknown_style_raises_value_error():
  """
  Passing an unknown style name must raise a ValueError,
  listing the available styles.
  """
  with pytest.raises(ValueError) as excinfo:
    get_placeholder_style("percent")

  msg = str(excinfo.value).lower()
  assert "unknown placeholder style" in msg
  for name in get_available_style_names():
    assert name in msg


def test_strict_args_env_wins_over_profile(monkeypatch):
  from sqlweave.config import profiles as profiles_mod

  monkeypatch.setattr(
    profiles_mod,
    "load_profile",
    lambda *args, **kwargs: DummyProfile("question", strict_args=True),
  )
  assert get_strict_args() is True

  monkeypatch.setenv("SQLWEAVE_STRICT_ARGS", "no")
  assert get_strict_args() is False


def test_statement_builder_from_config(monkeypatch):
  monkeypatch.setenv("SQLWEAVE_PLACEHOLDER_STYLE", "dollar")
  monkeypatch.setenv("SQLWEAVE_STRICT_ARGS", "1")

  builder = StatementBuilder.from_config()
  assert builder.placeholder_style is PlaceholderStyle.DOLLAR
  assert builder.strict is True

  sql, args = builder.select("*").from_("users").where("id = ?", 7).to_sql()
  assert sql == "SELECT * FROM users WHERE id = $1"
  assert args == [7]
