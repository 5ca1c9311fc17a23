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

"""HTML template engine built on Jinja2.

Usage::

    from sparkle import sparkle, with_template_dir, with_default_layout

    engine = sparkle(
        "*.html",
        with_template_dir("templates"),
        with_default_layout("base.html"),
    ).create_engine()

    engine.render(response, "greet.html", {"Name": "Ada"})
    engine.render_with_layout(response, RenderData(view="profile.html", data=user))

In development mode every render re-parses all template files first, so
edits show up on the next request.  Otherwise the templates parsed by
:meth:`Sparkle.create_engine` are used for the lifetime of the engine.
"""

from __future__ import annotations

import io
import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sparkle.base import TemplateConfig, TemplateEngine, Writer
from sparkle.config import Config, Option
from sparkle.errors import (
    ConfigError,
    EngineNotInitializedError,
    TemplateNotFoundError,
    TemplateParseError,
    TemplateReloadError,
    TemplateValidationError,
)
from sparkle.funcs import LANG_SCOPE_VAR
from sparkle.i18n import LanguageScope
from sparkle.loader import TemplateSet, build_template_set, validate_template_set

logger = logging.getLogger(__name__)

#: Name of the template synthesised around the view in layout rendering.
CONTENT_TEMPLATE = "content"


@dataclass
class RenderData:
    """Request for :meth:`HTMLTemplate.render_with_layout`.

    The layout includes the view with ``{% include "content" %}``.
    """

    view: str
    layout: str = ""
    data: Any = None
    lang: str | None = None


class HTMLTemplate(TemplateEngine):
    """Thread-safe renderer over a parsed :class:`TemplateSet`."""

    def __init__(self, config: Config, pattern: str, tset: TemplateSet | None) -> None:
        self.config = config
        self.pattern = pattern
        self._tset = tset
        self._lock = threading.Lock()
        self.last_loaded: datetime | None = datetime.now(tz=UTC) if tset is not None else None

    # --- rendering ----------------------------------------------------------

    def render(
        self,
        sink: Writer,
        name: str,
        data: Any = None,
        *,
        lang: str | None = None,
    ) -> None:
        """Render template *name* with *data* into *sink*.

        *lang* selects the translation language for this render only.

        Raises :class:`TemplateReloadError` (development mode) or
        :class:`TemplateNotFoundError` before anything is written.  Errors
        raised while executing the template propagate unchanged.
        """
        start = time.perf_counter()
        if self.config.development:
            self.reload()

        tset = self._snapshot()
        if name not in tset:
            raise TemplateNotFoundError(name)

        try:
            tset.execute(name, self._context(data, lang), sink)
        finally:
            if self.config.development:
                logger.debug(
                    "Template %s rendered in %.2f ms",
                    name, (time.perf_counter() - start) * 1000,
                )

    def render_with_layout(self, sink: Writer, render_data: RenderData) -> None:
        """Render ``render_data.view`` inside a layout template.

        Falls back to the configured default layout, and to a plain
        :meth:`render` of the view when there is no layout at all.  The
        layout runs on a clone of the template set with an extra
        ``"content"`` template, so the engine's own set is left untouched.
        """
        layout = render_data.layout or self.config.default_layout
        if not layout:
            self.render(sink, render_data.view, render_data.data, lang=render_data.lang)
            return

        if self.config.development:
            self.reload()

        base = self._snapshot()
        for name in (layout, render_data.view):
            if name not in base:
                raise TemplateNotFoundError(name)

        tset = base.clone()
        tset.add(CONTENT_TEMPLATE, f"{{% include {render_data.view!r} %}}")
        tset.execute(layout, self._context(render_data.data, render_data.lang), sink)

    def render_to_string(self, name: str, data: Any = None, *, lang: str | None = None) -> str:
        """Render *name* and return the output as a string."""
        buf = io.StringIO()
        self.render(buf, name, data, lang=lang)
        return buf.getvalue()

    def _context(self, data: Any, lang: str | None) -> dict[str, Any]:
        # Mappings become template variables; anything else is exposed as ``data``.
        if data is None:
            context: dict[str, Any] = {}
        elif isinstance(data, Mapping):
            context = dict(data)
        else:
            context = {"data": data}

        if self.config.i18n is not None:
            context[LANG_SCOPE_VAR] = LanguageScope.for_render(self.config.i18n, lang)
        return context

    # --- template set -------------------------------------------------------

    def reload(self) -> None:
        """Re-parse all template files and replace the current set.

        On failure the current set is kept and :class:`TemplateReloadError`
        is raised.
        """
        with self._lock:
            try:
                tset = build_template_set(self.config, self.pattern)
            except TemplateParseError as exc:
                logger.warning("Template reload failed: %s", exc)
                raise TemplateReloadError(f"failed to reload templates: {exc}") from exc
            self._tset = tset
            self.last_loaded = datetime.now(tz=UTC)
        logger.debug("Reloaded %d template(s)", len(tset))

    def _snapshot(self) -> TemplateSet:
        with self._lock:
            tset = self._tset
        if tset is None:
            raise EngineNotInitializedError("template engine not initialized")
        return tset

    def validate(self) -> None:
        with self._lock:
            tset = self._tset
        validate_template_set(tset)

    def template_names(self) -> list[str]:
        """Names of all parsed templates, in parse order."""
        return self._snapshot().names()

    def has_template(self, name: str) -> bool:
        with self._lock:
            tset = self._tset
        return tset is not None and name in tset


class Sparkle(TemplateConfig):
    """Engine descriptor returned by :func:`sparkle`."""

    def __init__(self, pattern: str, config: Config) -> None:
        self.pattern = pattern
        self.config = config

    def create_engine(self) -> HTMLTemplate:
        """Parse the templates and return a validated engine.

        Raises :class:`TemplateParseError` or :class:`TemplateValidationError`.
        """
        tset = build_template_set(self.config, self.pattern)
        engine = HTMLTemplate(self.config, self.pattern, tset)
        try:
            engine.validate()
        except TemplateValidationError as exc:
            raise TemplateValidationError(f"template validation failed: {exc}") from exc
        return engine


def sparkle(pattern: str, *options: Option) -> Sparkle:
    """Apply *options* to the default :class:`Config` and return a descriptor.

    Raises :class:`ConfigError` for an empty pattern or invalid configuration.
    """
    if not pattern:
        raise ConfigError("template pattern must not be empty")

    config = Config()
    for opt in options:
        opt(config)
    config.validate()
    return Sparkle(pattern, config)
