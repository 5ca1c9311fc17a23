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

"""Jinja2-based HTML template engine for web applications.

Parses a glob of template files once (or before every render in
development mode) and renders them by name, optionally inside a layout.
Ships helper functions for safe strings, inline dicts, versioned asset
paths and translations.

Usage::

    from sparkle import sparkle, with_template_dir, with_i18n

    engine = sparkle(
        "*.html",
        with_template_dir("templates"),
        with_i18n("en", {"en": {"hello": "Hello %s"}, "de": {"hello": "Hallo %s"}}),
    ).create_engine()
    html = engine.render_to_string("greet.html", {"name": "Ada"}, lang="de")
"""

from sparkle.base import TemplateConfig, TemplateEngine
from sparkle.config import (
    Config,
    Option,
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
from sparkle.engine import HTMLTemplate, RenderData, Sparkle, sparkle
from sparkle.errors import (
    ConfigError,
    DictArgumentCountError,
    DictKeyTypeError,
    EngineNotInitializedError,
    HelperError,
    SparkleError,
    TemplateNotFoundError,
    TemplateParseError,
    TemplateReloadError,
    TemplateValidationError,
)
from sparkle.funcs import safe_html, safe_js, safe_url
from sparkle.i18n import Translator

__all__ = [
    "Config",
    "ConfigError",
    "DictArgumentCountError",
    "DictKeyTypeError",
    "EngineNotInitializedError",
    "HTMLTemplate",
    "HelperError",
    "Option",
    "RenderData",
    "Sparkle",
    "SparkleError",
    "TemplateConfig",
    "TemplateEngine",
    "TemplateNotFoundError",
    "TemplateParseError",
    "TemplateReloadError",
    "TemplateValidationError",
    "Translator",
    "safe_html",
    "safe_js",
    "safe_url",
    "sparkle",
    "with_asset_dir",
    "with_asset_version",
    "with_cache",
    "with_default_layout",
    "with_delimiters",
    "with_development",
    "with_funcs",
    "with_i18n",
    "with_template_dir",
]
