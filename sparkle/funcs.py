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

"""Helper functions available inside templates.

Built-in helpers:

* ``safe_html``, ``safe_url``, ``safe_js``: mark a string as safe so
  autoescaping leaves it alone.  They do not sanitise anything.
* ``dict``: build a mapping from alternating keys and values, e.g.
  ``{% set card = dict("title", page.title, "user", user) %}``.
* ``partial``: placeholder, renders nothing.  Use ``{% include %}``.
* ``t``, ``set_lang``, ``current_lang``: only when i18n is configured.
* ``asset``: only when an asset directory is configured.

Functions passed via :func:`~sparkle.config.with_funcs` are merged last
and replace built-ins of the same name.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from jinja2 import pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from sparkle.errors import DictArgumentCountError, DictKeyTypeError
from sparkle.i18n import LanguageScope, Translator

if TYPE_CHECKING:
    from sparkle.config import Config

logger = logging.getLogger(__name__)

#: Context variable holding the :class:`LanguageScope` of the current render.
LANG_SCOPE_VAR = "_sparkle_lang_scope"

ASSET_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def safe_html(s: str) -> Markup:
    return Markup(s)


def safe_url(s: str) -> Markup:
    return Markup(s)


def safe_js(s: str) -> Markup:
    return Markup(s)


def make_dict(*values: Any) -> dict[str, Any]:
    """Build a dict from ``key1, value1, key2, value2, ...``.

    Raises :class:`DictArgumentCountError` for an odd number of values and
    :class:`DictKeyTypeError` when a key is not a string.
    """
    if len(values) % 2 != 0:
        raise DictArgumentCountError(
            f"invalid dict call: expected an even number of arguments, got {len(values)}"
        )
    result: dict[str, Any] = {}
    for i in range(0, len(values), 2):
        key = values[i]
        if not isinstance(key, str):
            raise DictKeyTypeError(
                f"dict keys must be strings, got {type(key).__name__} at position {i}"
            )
        result[key] = values[i + 1]
    return result


def partial(name: str, data: Any = None) -> Markup:
    # Not implemented: always renders empty output.
    logger.debug("partial(%r) called; partial is a no-op, use {%% include %%}", name)
    return Markup("")


def asset_path(config: Config, name: str) -> str:
    """Join *name* onto the asset directory and add a cache-busting query."""
    path = posixpath.normpath(posixpath.join(config.asset_dir, name))
    if config.development:
        return f"{path}?v={datetime.now().strftime(ASSET_TIMESTAMP_FORMAT)}"
    if config.asset_version:
        return f"{path}?v={config.asset_version}"
    return path


def _scope(ctx: Context) -> LanguageScope | None:
    scope = ctx.get(LANG_SCOPE_VAR)
    return scope if isinstance(scope, LanguageScope) else None


def i18n_funcs(translator: Translator) -> dict[str, Callable[..., Any]]:
    """Return the ``t``, ``set_lang`` and ``current_lang`` helpers.

    Inside a render ``t`` and ``current_lang`` use the render's
    :class:`LanguageScope`; outside one (e.g. a macro imported without
    context) they fall back to the translator's current language.
    ``set_lang`` updates both the scope and the translator, so the new
    language also holds for later renders.
    """

    @pass_context
    def t(ctx: Context, key: str, *args: Any) -> str:
        scope = _scope(ctx)
        return translator.translate(key, *args, lang=scope.lang if scope else None)

    @pass_context
    def set_lang(ctx: Context, lang: str) -> str:
        translator.set_language(lang)
        scope = _scope(ctx)
        if scope is not None:
            scope.lang = lang
        return ""

    @pass_context
    def current_lang(ctx: Context) -> str:
        scope = _scope(ctx)
        if scope is not None:
            return scope.lang
        return translator.current_language()

    return {"t": t, "set_lang": set_lang, "current_lang": current_lang}


def build_funcs(config: Config) -> dict[str, Callable[..., Any]]:
    """Merge built-in, i18n, asset and user-supplied helpers."""
    funcs: dict[str, Callable[..., Any]] = {
        "safe_html": safe_html,
        "safe_url": safe_url,
        "safe_js": safe_js,
        "dict": make_dict,
        "partial": partial,
    }

    if config.i18n is not None:
        funcs.update(i18n_funcs(config.i18n))

    if config.asset_dir:
        funcs["asset"] = lambda name: asset_path(config, name)

    funcs.update(config.funcs or {})
    return funcs
