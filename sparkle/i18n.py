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

"""Translation table for the ``t``/``set_lang``/``current_lang`` helpers.

Lookups never fail: an unknown language or an unknown key both return the
key itself, so a missing translation shows up in the page instead of
breaking the render.

The table keeps a process-wide *current language*, changed by
:meth:`Translator.set_language` or the ``set_lang`` helper.  Each render
works on its own :class:`LanguageScope`, seeded from the language
requested for that render (``lang=``) or from the current language, so an
explicit per-request language never leaks into other renders.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class Translator:
    """Mapping of language tag -> message key -> format string.

    Args:
        default_lang: Language used when no current language is set.
        translations: ``{"en": {"hello": "Hello %s"}, "de": {...}}``.
    """

    def __init__(
        self,
        default_lang: str,
        translations: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self.default_lang = default_lang
        self.translations: dict[str, dict[str, str]] = {
            lang: dict(messages) for lang, messages in (translations or {}).items()
        }
        self._current_lang = default_lang
        self._lock = threading.Lock()

    def translate(self, key: str, *args: object, lang: str | None = None) -> str:
        """Return the translation of *key*, formatted with *args*.

        *lang* overrides the current language for this lookup only.
        """
        if not lang:
            lang = self.current_language() or self.default_lang

        messages = self.translations.get(lang)
        if messages is None:
            return key
        message = messages.get(key)
        if message is None:
            return key

        if args:
            try:
                return message % args
            except (TypeError, ValueError):
                logger.warning(
                    "Cannot format translation %r (%s) with %d argument(s)",
                    key, lang, len(args),
                )
                return message
        return message

    def set_language(self, lang: str) -> None:
        with self._lock:
            self._current_lang = lang

    def current_language(self) -> str:
        with self._lock:
            return self._current_lang

    def languages(self) -> list[str]:
        """Return the configured language tags."""
        return list(self.translations)


@dataclass
class LanguageScope:
    """Language state for a single render."""

    lang: str

    @classmethod
    def for_render(cls, translator: Translator, lang: str | None = None) -> LanguageScope:
        return cls(lang or translator.current_language() or translator.default_lang)
