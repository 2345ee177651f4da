# erpsync Selection Model
# Operator selection of entities and import mode for one job

from erpsync.sync.catalog import EntityCatalog
from erpsync.sync.job import ImportMode, JobMode, SyncJob


class SelectionModel:
    """
    Which entities the operator has chosen, and the import mode.

    Create one instance per job so import and delete selections never
    leak into each other. Pure state holder, no I/O.
    """

    def __init__(self, catalog: EntityCatalog, import_mode: ImportMode = ImportMode.UPDATE):
        self.catalog = catalog
        self._selected: set[str] = set()
        self._import_mode = ImportMode(import_mode)

    @property
    def selected_keys(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def import_mode(self) -> ImportMode:
        return self._import_mode

    def selected_count(self) -> int:
        return len(self._selected)

    def is_selected(self, key: str) -> bool:
        return key in self._selected

    def _is_selectable(self, key: str) -> bool:
        """Unknown keys raise; disabled entities are simply not selectable."""
        descriptor = self.catalog.get(key)
        if descriptor is None:
            raise KeyError(f"Entity '{key}' not found")
        return descriptor.enabled

    def toggle(self, key: str) -> None:
        """
        Add or remove an entity. No-op for disabled entities.

        Raises:
            KeyError: If the entity is not in the catalog.
        """
        if not self._is_selectable(key):
            return
        if key in self._selected:
            self._selected.remove(key)
        else:
            self._selected.add(key)

    def select(self, *keys: str) -> None:
        """Add entities; disabled ones are ignored."""
        for key in keys:
            if self._is_selectable(key):
                self._selected.add(key)

    def select_all(self) -> None:
        """Select every enabled entity."""
        self._selected = set(self.catalog.enabled_keys())

    def clear(self) -> None:
        self._selected.clear()

    def set_mode(self, mode: ImportMode | str) -> None:
        """
        Set the import mode.

        Raises:
            ValueError: If mode is not 'update' or 'replace'.
        """
        self._import_mode = ImportMode(mode)

    def to_job(self, mode: JobMode | str, *, dry_run: bool = False) -> SyncJob:
        """Snapshot the selection into an immutable job."""
        return SyncJob(
            selected_keys=self.selected_keys,
            mode=JobMode(mode),
            import_mode=self._import_mode,
            dry_run=dry_run,
        )
