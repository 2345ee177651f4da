# erpsync Sync Executor
# Runs import and delete jobs entity by entity in dependency order

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional, Protocol

from erpsync.errors import EmptySelectionError, SelectionError
from erpsync.sync.catalog import EntityCatalog
from erpsync.sync.job import JobMode, ProgressEvent, ProgressReporter, SyncJob
from erpsync.sync.result import SyncResult


class EntityGateway(Protocol):
    """The remote import/delete calls, one entity at a time."""

    def import_entity(self, entity_key: str, *, mode: str, dry_run: bool) -> Mapping[str, Any]: ...

    def delete_entity(self, entity_key: str) -> Mapping[str, Any]: ...


def validate_job(job: SyncJob, catalog: EntityCatalog) -> None:
    """
    Check a job before running it.

    Raises:
        EmptySelectionError: If nothing is selected.
        KeyError: If a selected key is not in the catalog.
        SelectionError: If a selected entity is disabled.
    """
    if job.is_empty:
        raise EmptySelectionError()

    for key in sorted(job.selected_keys):
        descriptor = catalog.get(key)
        if descriptor is None:
            raise KeyError(f"Entity '{key}' not found")
        if not descriptor.enabled:
            raise SelectionError(f"Entity '{key}' is disabled")


class SyncExecutor:
    """
    Sequential job runner.

    Entities are processed one at a time in catalog order because later
    entities reference records created (or still referenced) by earlier
    ones. A failing entity is recorded as an error result and the loop
    moves on; nothing from a remote call escapes run().
    """

    def __init__(self, catalog: EntityCatalog, gateway: EntityGateway):
        """
        Initialize executor.

        Args:
            catalog: Entity catalog that defines the order.
            gateway: Remote import/delete calls.
        """
        self.catalog = catalog
        self.gateway = gateway

    def resolve_order(self, job: SyncJob) -> list[str]:
        """Selected keys in execution order for the job's mode."""
        if job.mode == JobMode.IMPORT:
            ordered = [d.key for d in self.catalog.list_import_order()]
        else:
            ordered = self.catalog.list_delete_order()
        return [key for key in ordered if key in job.selected_keys]

    def iter_run(self, job: SyncJob) -> Iterator[ProgressEvent | SyncResult]:
        """
        Run a job as a stream of steps.

        For each entity a ProgressEvent is yielded before its remote call
        and the SyncResult after it. The remote call for an entity is only
        issued once the consumer asks for the next step. An empty selection
        yields nothing.

        Selected keys that are unknown or disabled get an error result
        after the ordered entities, without a remote call or progress event.
        Use validate_job to reject such jobs up front.
        """
        if job.is_empty:
            return

        order = self.resolve_order(job)
        total = len(order)

        for index, key in enumerate(order, start=1):
            label = self.catalog.label_for(key)
            yield ProgressEvent(
                current_index=index,
                total=total,
                current_entity_label=label,
                entity_key=key,
            )
            yield self._run_entity(job, key, label)

        for key in sorted(job.selected_keys.difference(order)):
            descriptor = self.catalog.get(key)
            if descriptor is None:
                yield SyncResult.from_error(key, key, f"Entity '{key}' not found")
            else:
                yield SyncResult.from_error(key, descriptor.label, f"Entity '{key}' is disabled")

    def run(self, job: SyncJob, on_progress: Optional[ProgressReporter] = None) -> list[SyncResult]:
        """
        Run a job to completion.

        Args:
            job: The job to run.
            on_progress: Called before each entity's remote call.

        Returns:
            One result per selected entity, in execution order, followed by
            error results for unknown or disabled keys. Empty when nothing
            was selected (no remote call is made).
        """
        results: list[SyncResult] = []

        for step in self.iter_run(job):
            if isinstance(step, ProgressEvent):
                if on_progress is not None:
                    on_progress(step)
            else:
                results.append(step)

        return results

    def _run_entity(self, job: SyncJob, key: str, label: str) -> SyncResult:
        """Issue one remote call and convert its outcome into a result."""
        if job.mode == JobMode.IMPORT:
            success_message = "Imported successfully"
            error_message = f"Failed to import {key}"
        else:
            success_message = "Deleted successfully"
            error_message = f"Failed to delete {key}"

        try:
            if job.mode == JobMode.IMPORT:
                envelope = self.gateway.import_entity(key, mode=job.import_mode.value, dry_run=job.dry_run)
            else:
                envelope = self.gateway.delete_entity(key)

            if not isinstance(envelope, Mapping):
                return SyncResult.from_error(key, label, f"Unexpected response type: {type(envelope).__name__}")

            return SyncResult.from_envelope(
                key,
                label,
                envelope,
                success_message=success_message,
                error_message=error_message,
            )
        except Exception as e:
            return SyncResult.from_error(key, label, str(e) or error_message)
