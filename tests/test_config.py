# sparkle — HTML template rendering for web applications
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for sparkle.config."""

from __future__ import annotations

import pytest

from sparkle.config import (
    Config,
    with_asset_dir,
    with_asset_version,
    with_cache,
    with_default_layout,
    with_delimiters,
    with_development,
    with_funcs,
    with_i18n,
    with_template_dir,
)
from sparkle.errors import ConfigError
from sparkle.i18n import Translator


def _apply(*options):
    cfg = Config()
    for opt in options:
        opt(cfg)
    return cfg


class TestDefaults:
    def test_default_values(self):
        cfg = Config()
        assert cfg.delimiters == ("{{", "}}")
        assert cfg.template_dir == "templates"
        assert cfg.asset_dir == "assets"
        assert cfg.enable_cache is True
        assert cfg.development is False
        assert cfg.funcs == {}
        assert cfg.i18n is None

    def test_funcs_not_shared_between_instances(self):
        a, b = Config(), Config()
        a.funcs["x"] = len
        assert b.funcs == {}


class TestOptions:
    def test_each_option_sets_its_field(self, tmp_path):
        cfg = _apply(
            with_development(True),
            with_template_dir(tmp_path),
            with_asset_dir("/static"),
            with_delimiters("[[", "]]"),
            with_asset_version("abc"),
            with_default_layout("base.html"),
            with_cache(False),
        )
        assert cfg.development is True
        assert cfg.template_dir == str(tmp_path)
        assert cfg.asset_dir == "/static"
        assert cfg.delimiters == ("[[", "]]")
        assert cfg.asset_version == "abc"
        assert cfg.default_layout == "base.html"
        assert cfg.enable_cache is False

    def test_last_option_wins(self):
        cfg = _apply(with_default_layout("a.html"), with_default_layout("b.html"))
        assert cfg.default_layout == "b.html"

    def test_with_funcs_merges(self):
        cfg = _apply(
            with_funcs({"a": len, "b": str}),
            with_funcs({"b": repr, "c": int}),
        )
        assert cfg.funcs == {"a": len, "b": repr, "c": int}

    def test_with_i18n_installs_translator(self):
        cfg = _apply(with_i18n("de", {"de": {"hi": "Hallo"}}))
        assert isinstance(cfg.i18n, Translator)
        assert cfg.i18n.default_lang == "de"
        assert cfg.i18n.current_language() == "de"
        assert cfg.i18n.translate("hi") == "Hallo"


class TestValidate:
    def test_valid(self, tmp_path):
        Config(template_dir=str(tmp_path)).validate()

    def test_empty_delimiters_allowed(self, tmp_path):
        Config(template_dir=str(tmp_path), delimiters=("", "")).validate()

    @pytest.mark.parametrize("pair", [("[[", ""), ("", "]]")])
    def test_half_empty_delimiters_rejected(self, tmp_path, pair):
        with pytest.raises(ConfigError, match="both be set or both be empty"):
            Config(template_dir=str(tmp_path), delimiters=pair).validate()

    @pytest.mark.parametrize("pair", [("{%", "%}"), ("{#", "#}")])
    def test_reserved_delimiters_rejected(self, tmp_path, pair):
        with pytest.raises(ConfigError, match="clashes with Jinja2"):
            Config(template_dir=str(tmp_path), delimiters=pair).validate()

    def test_malformed_delimiters_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="pair of strings"):
            Config(template_dir=str(tmp_path), delimiters=("[[",)).validate()

    def test_missing_template_dir(self, tmp_path):
        with pytest.raises(ConfigError, match="template directory not found"):
            Config(template_dir=str(tmp_path / "nope")).validate()

    def test_empty_template_dir(self):
        with pytest.raises(ConfigError, match="must not be empty"):
            Config(template_dir="").validate()

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            Config(template_dir="").validate()
