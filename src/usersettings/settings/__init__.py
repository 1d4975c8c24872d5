"""Settings document storage and encryption key provisioning.

This package provides:
- SettingsStore: load/write/merge of the JSON settings file with a cache
- KeyProvisioner: creation and lookup of the credentials encryption key
"""

from .keys import KeyProvisioner
from .store import Settings, SettingsStore

__all__ = ["KeyProvisioner", "Settings", "SettingsStore"]
