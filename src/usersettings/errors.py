"""Exception classes and the parse result used by the settings store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


class SettingsError(Exception):
    """Base class for errors raised by the settings store."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not a valid JSON document.

    The offending path is kept on the exception and named in the message.
    The file itself is left untouched.
    """

    def __init__(
        self, path: Path, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with the file that failed to parse.

        Args:
            path: Settings file that could not be parsed
            original_error: The decoding error that was caught
        """
        super().__init__(
            f'Error parsing settings file "{path}". It does not seem to be valid JSON.'
        )
        self.path = path
        self.original_error = original_error


@dataclass(frozen=True)
class ParseResult:
    """Either a parsed settings document or the error explaining why not."""

    path: Path
    document: Optional[Dict[str, Any]] = None
    error: Optional[SettingsParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Dict[str, Any]:
        """Return the document, raising the parse error if there is one."""
        if self.error is not None:
            raise self.error
        assert self.document is not None
        return self.document


def parse_settings(text: str, path: Path) -> ParseResult:
    """Parse settings file content read from ``path``.

    Args:
        text: Raw file content
        path: Where the content came from, used in error messages

    Returns:
        ParseResult holding the document, or a SettingsParseError
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return ParseResult(path, error=SettingsParseError(path, exc))
    if not isinstance(data, dict):
        return ParseResult(path, error=SettingsParseError(path))
    return ParseResult(path, document=data)
