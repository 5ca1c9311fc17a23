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

"""Parse a glob of template files into an immutable :class:`TemplateSet`.

Every file matching ``<template_dir>/<pattern>`` is read and compiled up
front and registered under its base name, so ``templates/pages/home.html``
is rendered as ``"home.html"``.  A syntax error in any file fails the whole
build.

A set is never modified once built.  Layout rendering works on a
:meth:`TemplateSet.clone`, which may receive extra templates via
:meth:`TemplateSet.add`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from types import CodeType
from typing import TYPE_CHECKING, Any

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
)

from sparkle.errors import TemplateParseError, TemplateValidationError
from sparkle.funcs import build_funcs

if TYPE_CHECKING:
    from sparkle.config import Config

logger = logging.getLogger(__name__)


class _TemplateSetLoader(BaseLoader):
    """Jinja2 loader serving templates that were compiled at build time.

    ``{% include %}``, ``{% extends %}`` and ``{% import %}`` resolve
    against the same set, without touching the filesystem again.
    """

    def __init__(
        self,
        sources: dict[str, tuple[str, str]],
        codes: dict[str, CodeType],
    ) -> None:
        self.sources = sources
        self.codes = codes

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, Callable[[], bool]]:
        try:
            source, filename = self.sources[template]
        except KeyError:
            raise TemplateNotFound(template) from None
        return source, filename, lambda: True

    def list_templates(self) -> list[str]:
        return list(self.sources)

    def load(
        self,
        environment: Environment,
        name: str,
        globals: Mapping[str, Any] | None = None,
    ) -> Template:
        code = self.codes.get(name)
        if code is None:
            raise TemplateNotFound(name)
        if globals is None:
            globals = {}
        return environment.template_class.from_code(environment, code, globals)


class TemplateSet:
    """Named collection of compiled templates sharing one environment.

    Args:
        environment: Jinja2 environment the templates were compiled with.
            Its loader is replaced by one serving this set.
        sources: ``name -> (source, filename)``.
        codes: ``name -> compiled code``.
        frozen: Refuse :meth:`add`.  Sets returned by
            :func:`build_template_set` are frozen, clones are not.
    """

    def __init__(
        self,
        environment: Environment,
        sources: dict[str, tuple[str, str]],
        codes: dict[str, CodeType],
        *,
        frozen: bool = True,
    ) -> None:
        self.environment = environment
        self._sources = sources
        self._codes = codes
        self._frozen = frozen
        environment.loader = _TemplateSetLoader(sources, codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, name: object) -> bool:
        return name in self._codes

    def names(self) -> list[str]:
        """Template names in parse order."""
        return list(self._codes)

    def lookup(self, name: str) -> Template | None:
        if name not in self._codes:
            return None
        return self.environment.get_template(name)

    def clone(self) -> TemplateSet:
        """Return an unfrozen copy backed by an overlay environment."""
        return TemplateSet(
            self.environment.overlay(),
            dict(self._sources),
            dict(self._codes),
            frozen=False,
        )

    def add(self, name: str, source: str) -> None:
        """Compile *source* and register it as *name*.

        Raises :class:`RuntimeError` on a frozen set and
        :class:`jinja2.TemplateSyntaxError` for invalid source.
        """
        if self._frozen:
            raise RuntimeError(f"cannot add {name!r} to a frozen template set")
        filename = f"<{name}>"
        self._codes[name] = self.environment.compile(source, name, filename)
        self._sources[name] = (source, filename)

    def execute(self, name: str, context: Mapping[str, Any], sink: Any) -> None:
        """Render *name* with *context*, writing chunks to ``sink.write``."""
        template = self.lookup(name)
        if template is None:
            raise TemplateNotFound(name)
        for chunk in template.generate(context):
            sink.write(chunk)


def create_environment(config: Config) -> Environment:
    """Jinja2 environment with the configured delimiters and helpers."""
    options: dict[str, Any] = {
        "autoescape": True,
        "keep_trailing_newline": True,
        "undefined": StrictUndefined,
    }
    left, right = config.delimiters
    if left and right:
        options["variable_start_string"] = left
        options["variable_end_string"] = right
    if not config.enable_cache:
        options["cache_size"] = 0

    env = Environment(**options)
    env.globals.update(build_funcs(config))
    return env


def build_template_set(config: Config, pattern: str) -> TemplateSet:
    """Parse every file matching ``config.template_dir / pattern``.

    Raises :class:`~sparkle.errors.TemplateParseError` when nothing
    matches or any file cannot be read or compiled.
    """
    base = Path(config.template_dir)
    full_pattern = base / pattern
    try:
        paths = sorted(p for p in base.glob(pattern) if p.is_file())
    except (ValueError, NotImplementedError) as exc:
        raise TemplateParseError(f"invalid template pattern {pattern!r}: {exc}") from exc
    if not paths:
        raise TemplateParseError(f"pattern matches no files: {str(full_pattern)!r}")

    env = create_environment(config)
    sources: dict[str, tuple[str, str]] = {}
    codes: dict[str, CodeType] = {}
    for path in paths:
        name = path.name
        try:
            source = path.read_text(encoding="utf-8")
            codes[name] = env.compile(source, name, str(path))
        except OSError as exc:
            raise TemplateParseError(f"cannot read template {path}: {exc}") from exc
        except TemplateSyntaxError as exc:
            raise TemplateParseError(
                f"syntax error in {path} line {exc.lineno}: {exc.message}"
            ) from exc
        sources[name] = (source, str(path))

    logger.info("Parsed %d template(s) from %s", len(codes), full_pattern)
    return TemplateSet(env, sources, codes)


def validate_template_set(tset: TemplateSet | None) -> None:
    """Sanity-check a freshly built set.

    Raises :class:`~sparkle.errors.TemplateValidationError`.
    """
    if tset is None or len(tset) == 0:
        raise TemplateValidationError("no templates loaded")

    try:
        tset.clone()
    except Exception as exc:
        raise TemplateValidationError(f"template clone failed: {exc}") from exc

    for name in tset.names():
        try:
            template = tset.lookup(name)
        except TemplateNotFound:
            template = None
        if template is None or template.root_render_func is None:
            raise TemplateValidationError(f"template {name} has nil root")
