"""Encryption key provisioning for stored credentials."""

from __future__ import annotations

import base64
import logging
import secrets
from collections.abc import Callable
from typing import Final

from usersettings.constants import ENCRYPTION_KEY_FIELD
from usersettings.settings.store import PathArg, Settings, SettingsStore

logger: Final = logging.getLogger(__name__)


class KeyProvisioner:
    """Make sure an encryption key exists and report which one is in effect.

    A key persisted in the settings file is never replaced. The environment
    override only changes what ``effective_key()`` returns; the settings file
    is not read or written while it is set.
    """

    def __init__(
        self,
        store: SettingsStore | None = None,
        token_source: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        """Initialize the provisioner.

        Args:
            store: Settings store holding the key
            token_source: Returns the given number of random bytes
        """
        self.store = store or SettingsStore()
        self._token_source = token_source

    @property
    def override_variable(self) -> str:
        return self.store.resolver.options.encryption_key_env

    def generate_key(self) -> str:
        """Return a new base64 encoded random key."""
        raw = self._token_source(self.store.resolver.options.key_bytes)
        return base64.b64encode(raw).decode("ascii")

    async def ensure_key(self, path: PathArg = None) -> Settings:
        """Create the settings with an encryption key if there is none yet.

        Args:
            path: Settings file (default: resolved settings file path)

        Returns:
            The settings document containing the key
        """
        settings = await self.store.load(path)
        if settings is not None and settings.get(ENCRYPTION_KEY_FIELD) is not None:
            return settings
        if settings is None:
            settings = {}

        settings[ENCRYPTION_KEY_FIELD] = self.generate_key()
        settings = await self.store.write(settings, path)
        logger.info(
            "Encryption key generated and saved to %s", self.store.resolver.resolve(path)
        )
        return settings

    async def effective_key(self, path: PathArg = None) -> str | None:
        """Return the key credentials should be encrypted with.

        Returns:
            The override value if set, else the persisted key, else None
        """
        override = self.store.resolver.env.get(self.override_variable)
        if override is not None:
            logger.debug("Encryption key taken from %s", self.override_variable)
            return override

        settings = await self.store.load(path)
        if settings is None:
            return None
        return settings.get(ENCRYPTION_KEY_FIELD)

    def key_from_environment(self) -> bool:
        """Whether ``effective_key()`` is answered by the environment."""
        return self.override_variable in self.store.resolver.env
