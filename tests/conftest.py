# erpsync Test Fixtures
# Pytest fixtures for erpsync tests

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from erpsync.config.defaults import get_default_config
from erpsync.config.schema import ErpSyncConfig
from erpsync.sync.catalog import EntityCatalog
from erpsync.sync.executor import SyncExecutor


class RecordingGateway:
    """
    Fake EntityGateway.

    Records every call. Responses and failures can be set per entity key;
    anything not configured answers with a plain success envelope.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.responses: dict[str, Any] = {}
        self.failures: dict[str, Exception] = {}

    def _respond(self, entity_key: str) -> Any:
        if entity_key in self.failures:
            raise self.failures[entity_key]
        return self.responses.get(entity_key, {"status": "success", "message": "", "data": None})

    def import_entity(self, entity_key: str, *, mode: str, dry_run: bool) -> Any:
        self.calls.append(("import", entity_key, mode, dry_run))
        return self._respond(entity_key)

    def delete_entity(self, entity_key: str) -> Any:
        self.calls.append(("delete", entity_key))
        return self._respond(entity_key)

    @property
    def called_keys(self) -> list[str]:
        return [call[1] for call in self.calls]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ERPSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def sample_config(temp_home: Path) -> dict:
    """Create sample configuration dict (entities come from the defaults)."""
    return {
        "connection": {
            "base_url": "https://erp.test/api/",
            "company": "acme",
            "timeout": 5,
        },
        "odoo": {
            "enabled": True,
            "url": "https://odoo.test",
            "database": "acme_db",
            "username": "admin",
            "password": "secret",
        },
        "output": {
            "verbose": False,
            "colored": False,
            "history_file": str(temp_home / ".config" / "erpsync" / "history.yaml"),
            "history_limit": 5,
        },
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file at the default location."""
    config_dir = temp_home / ".config" / "erpsync"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def default_config() -> ErpSyncConfig:
    """Validated default configuration."""
    return ErpSyncConfig.model_validate(get_default_config())


@pytest.fixture
def catalog(default_config: ErpSyncConfig) -> EntityCatalog:
    """Catalog of the 26 default entities."""
    return EntityCatalog.from_config(default_config)


@pytest.fixture
def gateway() -> RecordingGateway:
    """Recording fake gateway."""
    return RecordingGateway()


@pytest.fixture
def executor(catalog: EntityCatalog, gateway: RecordingGateway) -> SyncExecutor:
    """Executor over the default catalog and the fake gateway."""
    return SyncExecutor(catalog, gateway)
