"""User settings store - settings file, cache, paths and encryption key."""

__version__ = "0.1.0"

from .config import StoreOptions
from .errors import ParseResult, SettingsError, SettingsParseError
from .paths import OverrideSource, PathResolver
from .settings import KeyProvisioner, Settings, SettingsStore

__all__ = [
    "KeyProvisioner",
    "OverrideSource",
    "ParseResult",
    "PathResolver",
    "Settings",
    "SettingsError",
    "SettingsParseError",
    "SettingsStore",
    "StoreOptions",
]
