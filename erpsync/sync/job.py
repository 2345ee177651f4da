# erpsync Sync Job
# Job definition, modes, and the progress side channel

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class JobMode(str, Enum):
    """What a job does with the selected entities."""

    IMPORT = "import"
    DELETE = "delete"


class ImportMode(str, Enum):
    """Import semantics passed through to the remote call."""

    UPDATE = "update"  # merge into existing records
    REPLACE = "replace"  # overwrite existing records


@dataclass(frozen=True)
class SyncJob:
    """
    One operator-initiated run over a chosen subset of entities.

    Immutable once created; build it from a SelectionModel with to_job().
    """

    selected_keys: frozenset[str]
    mode: JobMode
    import_mode: ImportMode = ImportMode.UPDATE
    dry_run: bool = False

    @property
    def is_import(self) -> bool:
        """Check if this is an import job."""
        return self.mode == JobMode.IMPORT

    @property
    def is_empty(self) -> bool:
        """Check if nothing was selected."""
        return not self.selected_keys


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted before each entity's remote call."""

    current_index: int  # 1-based
    total: int
    current_entity_label: str
    entity_key: str


class ProgressReporter(Protocol):
    """Callback sink for progress events. Its return value is ignored."""

    def __call__(self, event: ProgressEvent) -> None: ...
