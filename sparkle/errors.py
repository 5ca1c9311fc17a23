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

"""Exception hierarchy for sparkle."""

from __future__ import annotations


class SparkleError(Exception):
    """Base class for all sparkle errors."""


class ConfigError(SparkleError, ValueError):
    """Raised when the assembled configuration is invalid."""


class TemplateParseError(SparkleError):
    """Raised when template files cannot be found, read or parsed."""


class TemplateValidationError(SparkleError):
    """Raised when a parsed template set fails its sanity checks."""


class TemplateReloadError(SparkleError):
    """Raised when a development-mode reload fails."""


class EngineNotInitializedError(SparkleError):
    """Raised when rendering is attempted without a template set."""


class TemplateNotFoundError(SparkleError, LookupError):
    """Raised when a named template is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"template {name} not found")
        self.name = name


class HelperError(SparkleError):
    """Base class for errors raised by template helper functions."""


class DictArgumentCountError(HelperError, TypeError):
    """``dict`` helper called with an odd number of arguments."""


class DictKeyTypeError(HelperError, TypeError):
    """``dict`` helper called with a non-string key."""
