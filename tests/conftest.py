import pytest
from pathlib import Path
from usersettings.paths import PathResolver
from usersettings.settings import KeyProvisioner, SettingsStore


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def env(home: Path) -> dict[str, str]:
    """Synthetic environment with only a POSIX home directory."""
    return {"HOME": str(home)}


@pytest.fixture
def resolver(env: dict[str, str], tmp_path: Path) -> PathResolver:
    return PathResolver(env=env, platform="linux", cwd=lambda: tmp_path / "cwd")


@pytest.fixture
def store(resolver: PathResolver) -> SettingsStore:
    return SettingsStore(resolver)


@pytest.fixture
def provisioner(store: SettingsStore) -> KeyProvisioner:
    return KeyProvisioner(store)
