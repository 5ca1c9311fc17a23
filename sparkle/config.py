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

"""Engine configuration and functional options.

A :class:`Config` starts from defaults and is adjusted by a sequence of
options, each a plain callable that mutates one field::

    cfg = Config()
    for opt in (with_development(True), with_template_dir("views")):
        opt(cfg)
    cfg.validate()

Options applied later win when two of them write the same field.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sparkle.errors import ConfigError
from sparkle.i18n import Translator

DEFAULT_DELIMITERS = ("{{", "}}")

# Jinja2 block and comment openers; the variable opener must differ from both.
RESERVED_DELIMITERS = ("{%", "{#")


@dataclass
class Config:
    """Settings consumed when the template set is built."""

    funcs: dict[str, Callable[..., Any]] = field(default_factory=dict)
    delimiters: tuple[str, str] = DEFAULT_DELIMITERS
    development: bool = False
    asset_version: str = ""
    default_layout: str = ""
    enable_cache: bool = True
    template_dir: str = "templates"
    asset_dir: str = "assets"
    i18n: Translator | None = None

    def validate(self) -> None:
        """Reject configurations that could never build an engine.

        Raises :class:`~sparkle.errors.ConfigError`.
        """
        if len(self.delimiters) != 2 or not all(
            isinstance(d, str) for d in self.delimiters
        ):
            raise ConfigError(
                f"delimiters must be a (left, right) pair of strings, got {self.delimiters!r}"
            )
        left, right = self.delimiters
        if bool(left) != bool(right):
            raise ConfigError(
                f"delimiters must both be set or both be empty, got {left!r} and {right!r}"
            )
        if left in RESERVED_DELIMITERS:
            raise ConfigError(
                f"left delimiter {left!r} clashes with Jinja2 block or comment syntax"
            )
        if not self.template_dir:
            raise ConfigError("template directory must not be empty")
        if not Path(self.template_dir).is_dir():
            raise ConfigError(f"template directory not found: {self.template_dir}")


Option = Callable[[Config], None]


def with_development(dev: bool) -> Option:
    """Enable development mode (re-parse all templates before every render)."""
    def apply(c: Config) -> None:
        c.development = dev
    return apply


def with_template_dir(directory: str | Path) -> Option:
    """Set the directory the glob pattern is resolved against."""
    def apply(c: Config) -> None:
        c.template_dir = str(directory)
    return apply


def with_asset_dir(directory: str) -> Option:
    """Set the prefix used by the ``asset`` helper.  Empty disables it."""
    def apply(c: Config) -> None:
        c.asset_dir = directory
    return apply


def with_funcs(funcs: Mapping[str, Callable[..., Any]]) -> Option:
    """Add custom template functions, overriding same-named built-ins."""
    def apply(c: Config) -> None:
        if c.funcs is None:
            c.funcs = {}
        c.funcs.update(funcs)
    return apply


def with_delimiters(left: str, right: str) -> Option:
    """Set the variable delimiters (for example ``[[`` and ``]]``)."""
    def apply(c: Config) -> None:
        c.delimiters = (left, right)
    return apply


def with_asset_version(version: str) -> Option:
    """Set the ``?v=`` value appended to asset paths outside development mode."""
    def apply(c: Config) -> None:
        c.asset_version = version
    return apply


def with_default_layout(layout: str) -> Option:
    """Set the layout used by ``render_with_layout`` when none is given."""
    def apply(c: Config) -> None:
        c.default_layout = layout
    return apply


def with_cache(enable: bool) -> Option:
    """Enable or disable Jinja2's compiled-template cache."""
    def apply(c: Config) -> None:
        c.enable_cache = enable
    return apply


def with_i18n(
    default_lang: str,
    translations: Mapping[str, Mapping[str, str]],
) -> Option:
    """Install a :class:`~sparkle.i18n.Translator` and its template helpers."""
    def apply(c: Config) -> None:
        c.i18n = Translator(default_lang, translations)
    return apply
