"""Canonical on-disk locations of the user settings.

Resolution order for the settings file:

1. an explicit path passed by the caller
2. the data folder override variable, used as the folder itself
3. the platform home directory variable joined with the settings subfolder
4. the current working directory joined with the settings subfolder

Everything here is computed from an injected environment mapping, so the
resolver never touches the filesystem or the real process environment.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from usersettings.config import StoreOptions
from usersettings.constants import POSIX_HOME_ENV, WINDOWS_HOME_ENV

CWD_SOURCE = "cwd"


@dataclass(frozen=True)
class OverrideSource:
    """Environment variable that can supply the data folder.

    ``append_subfolder`` is False for sources naming the data folder itself
    and True for sources naming the directory the subfolder lives in.
    """

    name: str
    variable: str
    append_subfolder: bool


class PathResolver:
    """Compute settings, data folder and extension paths."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        platform: str | None = None,
        cwd: Callable[[], Path] | None = None,
        options: StoreOptions | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            env: Environment to read overrides from (default: ``os.environ``)
            platform: Platform identifier (default: ``sys.platform``)
            cwd: Provider of the fallback directory (default: ``Path.cwd``)
            options: Folder and variable names
        """
        self.env: Mapping[str, str] = os.environ if env is None else env
        self.platform = platform or sys.platform
        self._cwd = cwd or Path.cwd
        self.options = options or StoreOptions()

    @property
    def home_variable(self) -> str:
        """Name of the home directory variable on this platform."""
        if self.platform.startswith("win"):
            return WINDOWS_HOME_ENV
        return POSIX_HOME_ENV

    def override_sources(self) -> tuple[OverrideSource, ...]:
        """Data folder sources, highest precedence first."""
        return (
            OverrideSource("data-folder", self.options.data_folder_env, append_subfolder=False),
            OverrideSource("home", self.home_variable, append_subfolder=True),
        )

    def user_home(self) -> Path:
        """Return the user's home directory, or the cwd if it is not set."""
        home = self.env.get(self.home_variable)
        if home is None:
            return self._cwd()
        return Path(home)

    def _resolve_data_folder(self) -> tuple[str, Path]:
        for source in self.override_sources():
            value = self.env.get(source.variable)
            if value is None:
                continue
            folder = Path(value)
            if source.append_subfolder:
                folder = folder / self.options.settings_subfolder
            return source.name, folder
        return CWD_SOURCE, self._cwd() / self.options.settings_subfolder

    def data_folder_path(self) -> Path:
        """Return the folder holding the settings file and extensions."""
        return self._resolve_data_folder()[1]

    def data_folder_source(self) -> str:
        """Return the name of the source the data folder was taken from."""
        return self._resolve_data_folder()[0]

    def settings_file_path(self) -> Path:
        return self.data_folder_path() / self.options.settings_file_name

    def custom_extensions_path(self) -> Path:
        return self.data_folder_path() / self.options.extensions_subdirectory

    def resolve(self, path: str | os.PathLike[str] | None = None) -> Path:
        """Return ``path`` if given, otherwise the derived settings file path."""
        if path is not None:
            return Path(path)
        return self.settings_file_path()
