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

"""Template engine contract expected by the web framework.

The framework builds an engine once from a :class:`TemplateConfig` and
then asks the resulting :class:`TemplateEngine` to render named templates
into the response body.  Routing, response writing and mapping errors to
HTTP status codes stay with the framework.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol


class Writer(Protocol):
    """Anything with a text ``write`` method (response body, ``io.StringIO``)."""

    def write(self, s: str, /) -> Any: ...


class TemplateEngine(ABC):
    """Renders a named template into a writer."""

    @abstractmethod
    def render(self, sink: Writer, name: str, data: Any = None) -> None:
        """Render *name* with *data*, writing the output to *sink*."""


class TemplateConfig(ABC):
    """Factory producing a ready-to-use :class:`TemplateEngine`."""

    @abstractmethod
    def create_engine(self) -> TemplateEngine:
        """Build the engine.  Raises on any construction error."""
