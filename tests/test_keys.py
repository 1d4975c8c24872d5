import base64
from pathlib import Path
from unittest.mock import patch

import pytest

from usersettings.paths import PathResolver
from usersettings.settings import KeyProvisioner, SettingsStore


@pytest.mark.asyncio
async def test_ensure_key_generates_24_byte_key(provisioner: KeyProvisioner, home: Path) -> None:
    settings = await provisioner.ensure_key()
    key = settings["encryptionKey"]
    assert len(base64.b64decode(key)) == 24
    assert (home / ".usersettings" / "config").exists()


@pytest.mark.asyncio
async def test_ensure_key_is_idempotent(provisioner: KeyProvisioner) -> None:
    store = provisioner.store
    with patch.object(store, "_write", wraps=store._write) as write:
        first = await provisioner.ensure_key()
        second = await provisioner.ensure_key()
    assert first["encryptionKey"] == second["encryptionKey"]
    assert write.call_count == 1


@pytest.mark.asyncio
async def test_ensure_key_keeps_persisted_key(resolver: PathResolver) -> None:
    await SettingsStore(resolver).write({"encryptionKey": "persisted", "other": 1})

    provisioner = KeyProvisioner(SettingsStore(resolver))
    with patch.object(provisioner.store, "_write") as write:
        settings = await provisioner.ensure_key()
    write.assert_not_called()
    assert settings == {"encryptionKey": "persisted", "other": 1}


@pytest.mark.asyncio
async def test_ensure_key_adds_key_to_existing_settings(resolver: PathResolver) -> None:
    await SettingsStore(resolver).write({"theme": "dark"})

    provisioner = KeyProvisioner(SettingsStore(resolver), token_source=lambda n: b"\x00" * n)
    settings = await provisioner.ensure_key()
    expected_key = base64.b64encode(b"\x00" * 24).decode("ascii")
    assert settings == {"theme": "dark", "encryptionKey": expected_key}
    assert await provisioner.store.load(ignore_cache=True) == settings


@pytest.mark.asyncio
async def test_ensure_key_with_explicit_path(provisioner: KeyProvisioner, tmp_path: Path) -> None:
    path = tmp_path / "explicit" / "settings.json"
    settings = await provisioner.ensure_key(path)
    assert path.exists()
    assert settings["encryptionKey"]


@pytest.mark.asyncio
async def test_effective_key_none_without_settings(provisioner: KeyProvisioner) -> None:
    assert await provisioner.effective_key() is None


@pytest.mark.asyncio
async def test_effective_key_none_without_key(provisioner: KeyProvisioner) -> None:
    await provisioner.store.write({"theme": "dark"})
    assert await provisioner.effective_key() is None


@pytest.mark.asyncio
async def test_effective_key_reads_persisted_key(provisioner: KeyProvisioner) -> None:
    settings = await provisioner.ensure_key()
    assert await provisioner.effective_key() == settings["encryptionKey"]
    assert provisioner.key_from_environment() is False


@pytest.mark.asyncio
async def test_environment_override_leaves_persisted_key(tmp_path: Path) -> None:
    env = {"HOME": str(tmp_path), "USERSETTINGS_ENCRYPTION_KEY": "X"}
    store = SettingsStore(PathResolver(env=env, platform="linux"))
    await store.write({"encryptionKey": "Y"})

    provisioner = KeyProvisioner(store)
    with patch.object(store, "load", wraps=store.load) as load:
        assert await provisioner.effective_key() == "X"
    load.assert_not_called()
    assert provisioner.key_from_environment() is True

    assert await store.load(ignore_cache=True) == {"encryptionKey": "Y"}


def test_generate_key_uses_token_source() -> None:
    calls: list[int] = []

    def token_source(n: int) -> bytes:
        calls.append(n)
        return b"\xff" * n

    provisioner = KeyProvisioner(SettingsStore(PathResolver(env={})), token_source=token_source)
    assert provisioner.generate_key() == base64.b64encode(b"\xff" * 24).decode("ascii")
    assert calls == [24]
