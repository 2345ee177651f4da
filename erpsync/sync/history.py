# erpsync Run History
# Persistent record of completed import and delete jobs

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from erpsync.sync.job import SyncJob
from erpsync.sync.result import SyncResult, summarize
from erpsync.utils.paths import atomic_write


@dataclass
class RunRecord:
    """One completed job."""

    mode: str
    started_at: str  # ISO format datetime
    finished_at: str  # ISO format datetime
    import_mode: Optional[str] = None
    dry_run: bool = False
    results: list[SyncResult] = field(default_factory=list)

    @property
    def classification(self) -> str:
        return summarize(self.results).classification.value

    @classmethod
    def from_job(
        cls,
        job: SyncJob,
        results: list[SyncResult],
        started_at: datetime,
        finished_at: Optional[datetime] = None,
    ) -> "RunRecord":
        """Create a record for a finished job."""
        return cls(
            mode=job.mode.value,
            started_at=started_at.isoformat(timespec="seconds"),
            finished_at=(finished_at or datetime.now()).isoformat(timespec="seconds"),
            import_mode=job.import_mode.value if job.is_import else None,
            dry_run=job.dry_run,
            results=list(results),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        summary = summarize(self.results)
        data: dict[str, Any] = {
            "mode": self.mode,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }
        if self.import_mode:
            data["import_mode"] = self.import_mode
        if self.dry_run:
            data["dry_run"] = True
        data["classification"] = summary.classification.value
        data["success_count"] = summary.success_count
        data["error_count"] = summary.error_count
        data["results"] = [result.to_dict() for result in self.results]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunRecord":
        """Create from dictionary."""
        return cls(
            mode=str(data.get("mode") or ""),
            started_at=str(data.get("started_at") or ""),
            finished_at=str(data.get("finished_at") or ""),
            import_mode=str(data["import_mode"]) if data.get("import_mode") else None,
            dry_run=bool(data.get("dry_run", False)),
            results=[SyncResult.from_dict(r) for r in data.get("results") or []],
        )


class HistoryManager:
    """
    Manages the run history file.

    Newest runs first, trimmed to a fixed number of entries.
    """

    def __init__(self, history_path: Optional[Path] = None, *, limit: int = 20):
        """
        Initialize history manager.

        Args:
            history_path: Path to history file. Defaults to ~/.config/erpsync/history.yaml
            limit: Maximum number of runs kept.
        """
        if history_path is None:
            history_path = Path.home() / ".config" / "erpsync" / "history.yaml"
        self.history_path = history_path
        self.limit = limit
        self._runs: Optional[list[RunRecord]] = None

    @property
    def runs(self) -> list[RunRecord]:
        """Recorded runs, newest first, loading if necessary."""
        if self._runs is None:
            self._runs = self.load()
        return self._runs

    def load(self) -> list[RunRecord]:
        """
        Load runs from file.

        A missing, empty or unreadable file means no history. Individual
        records that cannot be read back (unknown status, wrong types) are
        skipped so one hand-edited entry doesn't hide the rest.
        """
        if not self.history_path.exists():
            return []

        try:
            with open(self.history_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError:
            return []

        if not isinstance(data, dict):
            return []

        raw_runs = data.get("runs") or []
        if not isinstance(raw_runs, list):
            return []

        runs = []
        for raw in raw_runs:
            if not isinstance(raw, dict):
                continue
            try:
                runs.append(RunRecord.from_dict(raw))
            except (ValueError, TypeError, KeyError, AttributeError):
                continue
        return runs

    def save(self) -> None:
        """Write runs to file."""
        data = {"version": "1.0", "runs": [run.to_dict() for run in self.runs]}
        atomic_write(
            self.history_path,
            yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
        )

    def record(self, run: RunRecord) -> RunRecord:
        """Prepend a run, trim to the limit, and save."""
        self._runs = [run, *self.runs][: self.limit]
        self.save()
        return run

    def latest(self, count: Optional[int] = None) -> list[RunRecord]:
        """Most recent runs, newest first."""
        if count is None:
            return list(self.runs)
        return self.runs[:count]

    def clear(self) -> None:
        """Drop all recorded runs."""
        self._runs = []
        self.save()
