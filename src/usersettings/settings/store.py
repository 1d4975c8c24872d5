"""JSON settings file with an in-memory cache."""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union

from usersettings.constants import JSON_INDENT
from usersettings.errors import parse_settings
from usersettings.paths import PathResolver

Settings = Dict[str, Any]
PathArg = Optional[Union[str, os.PathLike]]

logger: Final = logging.getLogger(__name__)


class SettingsStore:
    """Load, write and merge the user settings document.

    The store keeps one cached copy of the document. While the cache is
    populated, ``load()`` answers from memory unless ``ignore_cache`` is set,
    even when a different ``path`` is passed. Writes always replace the cache.

    There is no locking. Concurrent tasks (or processes) writing the same file
    race, and the last completed write wins on disk and in the cache.

    Examples:
        store = SettingsStore()
        await store.merge({"theme": "dark"})
        settings = await store.load()
    """

    def __init__(self, resolver: PathResolver | None = None) -> None:
        self.resolver = resolver or PathResolver()
        self._cache: Settings | None = None

    @property
    def cached(self) -> Settings | None:
        """Copy of the cached document, without any I/O."""
        if self._cache is None:
            return None
        return copy.deepcopy(self._cache)

    async def load(self, path: PathArg = None, ignore_cache: bool = False) -> Settings | None:
        """Return the settings document.

        Args:
            path: Settings file (default: resolved settings file path)
            ignore_cache: Read from disk even if a cached copy exists

        Returns:
            The document, or None if the settings file does not exist

        Raises:
            SettingsParseError: If the file is not a JSON object
            OSError: If the file exists but cannot be read
        """
        if self._cache is not None and not ignore_cache:
            logger.debug("Settings served from cache")
            return copy.deepcopy(self._cache)

        settings_path = self.resolver.resolve(path)
        if not await asyncio.to_thread(self._probe, settings_path):
            logger.debug("No settings file at %s", settings_path)
            return None

        text = await asyncio.to_thread(self._read, settings_path)
        document = parse_settings(text, settings_path).unwrap()
        logger.debug("Settings loaded from %s", settings_path)
        self._cache = document
        return copy.deepcopy(document)

    async def write(self, settings: Mapping[str, Any] | None, path: PathArg = None) -> Settings:
        """Replace the settings file with ``settings``.

        Only the immediate parent folder is created when missing; if its own
        parent is missing too the write fails with ``FileNotFoundError``.
        The file is overwritten in place, so a crash mid-write can leave it
        truncated.

        Args:
            settings: Document to write (None writes an empty document)
            path: Settings file (default: resolved settings file path)

        Returns:
            The written document
        """
        if settings is None:
            settings = {}
        settings_path = self.resolver.resolve(path)

        folder = settings_path.parent
        if not await asyncio.to_thread(self._probe, folder):
            logger.debug("Creating settings folder %s", folder)
            await asyncio.to_thread(self._mkdir, folder)

        text = json.dumps(settings, indent=JSON_INDENT, ensure_ascii=False)
        await asyncio.to_thread(self._write, settings_path, text)
        logger.debug("Settings written to %s", settings_path)

        self._cache = json.loads(text)
        return dict(settings)

    async def merge(self, partial: Mapping[str, Any], path: PathArg = None) -> Settings:
        """Overwrite top-level keys of the stored document with ``partial``.

        Nested values are replaced, not merged. A missing settings file is
        treated as an empty document.
        """
        current = await self.load(path)
        if current is None:
            current = {}
        current.update(partial)
        return await self.write(current, path)

    # ---- filesystem primitives (run in worker threads) ----
    @staticmethod
    def _probe(path: Path) -> bool:
        # Any probe failure counts as "does not exist"
        return os.access(path, os.F_OK)

    @staticmethod
    def _read(path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _mkdir(path: Path) -> None:
        path.mkdir()

    @staticmethod
    def _write(path: Path, text: str) -> None:
        path.write_text(text, encoding="utf-8")
