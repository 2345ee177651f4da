# erpsync Configuration Loader
# Load, save, and manage YAML configuration files

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from erpsync.config.defaults import generate_default_config, get_default_config
from erpsync.config.schema import ErpSyncConfig
from erpsync.errors import CatalogError
from erpsync.utils.paths import atomic_write, ensure_dir


def get_config_dir() -> Path:
    """Get the erpsync configuration directory."""
    return Path.home() / ".config" / "erpsync"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    env_path = os.environ.get("ERPSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> ErpSyncConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        ErpSyncConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}\nRun 'erpsync config init' to create one.")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return ErpSyncConfig.model_validate(_merge_with_defaults(data))


def save_config(config: ErpSyncConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    data = config.model_dump(exclude_none=True, mode="json")
    atomic_write(config_path, yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    return config_path


def ensure_config_exists(config_path: Optional[Path] = None, *, overwrite: bool = False) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating the commented default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists() and not overwrite:
        return config_path, False

    ensure_dir(config_path.parent)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file, including its entity dependency graph.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    from erpsync.sync.catalog import EntityCatalog

    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]

    if not isinstance(data, dict):
        return False, ["Configuration root must be a mapping"]

    try:
        config = ErpSyncConfig.model_validate(_merge_with_defaults(data))
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    errors: list[str] = []
    if "connection" not in data:
        errors.append("Missing 'connection' section")

    try:
        EntityCatalog.from_config(config)
    except CatalogError as e:
        errors.append(f"entities: {e}")

    return len(errors) == 0, errors


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = get_default_config()

    for section in ("connection", "odoo", "output"):
        if section in data and data[section]:
            result[section] = {**result[section], **data[section]}

    if "entities" in data and data["entities"]:
        # Keep default entities, update with user values; new keys go last
        for key, entity_data in data["entities"].items():
            if key in result["entities"]:
                result["entities"][key] = {**result["entities"][key], **(entity_data or {})}
            else:
                result["entities"][key] = entity_data

    return result
