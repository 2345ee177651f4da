# erpsync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ConnectionConfig(BaseModel):
    """REST backend settings used by the Odoo client."""

    base_url: str = Field(description="Base URL of the dashboard API (without company segment)")
    company: str = Field(description="Company name used as the first path segment")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    import_endpoint: str = Field(default="import_{entity}.php", description="Import endpoint template")
    delete_endpoint: str = Field(default="delete_data.php", description="Delete endpoint")
    test_endpoint: str = Field(default="test_connection.php", description="Connection test endpoint")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so path segments can be joined with '/'."""
        return v.rstrip("/")

    @field_validator("import_endpoint")
    @classmethod
    def require_entity_placeholder(cls, v: str) -> str:
        """The import endpoint must contain the {entity} placeholder."""
        if "{entity}" not in v:
            raise ValueError("import_endpoint must contain '{entity}'")
        return v


class OdooConfig(BaseModel):
    """Odoo integration switch and credentials for the connection test."""

    enabled: bool = Field(default=False, description="Whether the Odoo integration is enabled")
    url: str = Field(default="", description="Odoo server URL")
    database: str = Field(default="", description="Odoo database name")
    username: str = Field(default="", description="Odoo username")
    password: str = Field(default="", description="Odoo password")

    @property
    def has_credentials(self) -> bool:
        """Check that all connection fields are filled in."""
        return all((self.url, self.database, self.username, self.password))


class EntityConfig(BaseModel):
    """Configuration for a single importable entity."""

    label: str = Field(description="Human-readable label")
    description: str = Field(default="", description="What the import brings in")
    enabled: bool = Field(default=True, description="Whether this entity can be selected")
    depends_on: list[str] = Field(default_factory=list, description="Entities that must be imported first")


class OutputConfig(BaseModel):
    """Output and history configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    history_file: str | None = Field(default=None, description="Path to run history file")
    history_limit: int = Field(default=20, ge=1, description="Number of runs kept in history")

    @field_validator("history_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class ErpSyncConfig(BaseModel):
    """Root configuration model for erpsync."""

    connection: ConnectionConfig = Field(description="Backend connection settings")
    odoo: OdooConfig = Field(default_factory=OdooConfig, description="Odoo integration settings")
    entities: dict[str, EntityConfig] = Field(default_factory=dict, description="Entity catalog in declaration order")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def get_enabled_entities(self) -> dict[str, EntityConfig]:
        """Return only enabled entities."""
        return {key: entity for key, entity in self.entities.items() if entity.enabled}

    def get_entity(self, key: str) -> EntityConfig | None:
        """Get an entity by key."""
        return self.entities.get(key)
