# erpsync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from erpsync.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from erpsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from erpsync.config.schema import (
    ConnectionConfig,
    EntityConfig,
    ErpSyncConfig,
    OdooConfig,
    OutputConfig,
)

__all__ = [
    # Schema
    "ErpSyncConfig",
    "ConnectionConfig",
    "OdooConfig",
    "EntityConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "get_default_config",
    "generate_default_config",
]
