# erpsync Sync Results
# Per-entity results, item-level issues, and job summaries

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Optional


class ResultStatus(str, Enum):
    """Entity-level outcome."""

    SUCCESS = "success"
    ERROR = "error"


class ItemAction(str, Enum):
    """Item-level issue kinds reported by the backend."""

    FAILED = "failed"
    SKIPPED = "skipped"


class Classification(str, Enum):
    """Overall tone of a job."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


@dataclass(frozen=True)
class ItemIssue:
    """A failed or skipped record inside an entity sync."""

    id: Any
    action: ItemAction
    name: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"id": self.id, "action": self.action.value}
        if self.name is not None:
            data["name"] = self.name
        if self.reason is not None:
            data["reason"] = self.reason
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["ItemIssue"]:
        """
        Create from a backend detail entry.

        Returns None for entries that are not failures or skips
        (created/updated records). The backend reports failures with
        'error' and skips with 'reason'; both land in reason.
        """
        try:
            action = ItemAction(data.get("action"))
        except ValueError:
            return None

        reason = data.get("reason") or data.get("error")
        name = data.get("name")
        return cls(
            id=data.get("id"),
            action=action,
            name=str(name) if name not in (None, "") else None,
            reason=str(reason) if reason not in (None, "") else None,
        )


@dataclass(frozen=True)
class SyncResultDetail:
    """Nested detail of an entity result."""

    items: tuple[ItemIssue, ...] = ()
    skipped_log: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.skipped_log

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "items": [item.to_dict() for item in self.items],
            "skipped_log": list(self.skipped_log),
        }

    @classmethod
    def from_data(cls, data: Optional[Mapping[str, Any]]) -> Optional["SyncResultDetail"]:
        """Build from a backend 'data' payload, or None when it carries no issues."""
        if not isinstance(data, Mapping):
            return None

        items = []
        for entry in data.get("details") or []:
            if isinstance(entry, Mapping):
                issue = ItemIssue.from_dict(entry)
                if issue is not None:
                    items.append(issue)

        skipped_log = tuple(str(line) for line in data.get("skipped_orders_log") or [])

        detail = cls(items=tuple(items), skipped_log=skipped_log)
        return None if detail.is_empty else detail

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SyncResultDetail":
        """Create from dictionary produced by to_dict()."""
        items = []
        for entry in data.get("items") or []:
            issue = ItemIssue.from_dict(entry)
            if issue is not None:
                items.append(issue)
        return cls(items=tuple(items), skipped_log=tuple(str(line) for line in data.get("skipped_log") or []))


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one entity in one job. Recorded once, never mutated."""

    entity_key: str
    label: str
    status: ResultStatus
    message: str
    detail: Optional[SyncResultDetail] = field(default=None)

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @classmethod
    def from_error(cls, entity_key: str, label: str, message: str) -> "SyncResult":
        """Entity-level failure."""
        return cls(entity_key=entity_key, label=label, status=ResultStatus.ERROR, message=message)

    @classmethod
    def from_envelope(
        cls,
        entity_key: str,
        label: str,
        envelope: Mapping[str, Any],
        *,
        success_message: str,
        error_message: str,
    ) -> "SyncResult":
        """
        Wrap a backend response envelope.

        A status other than 'success' is an entity-level failure, the same
        as a raised error. Item-level issues are kept either way.
        """
        message = envelope.get("message") or ""
        detail = SyncResultDetail.from_data(envelope.get("data"))

        if envelope.get("status") == ResultStatus.SUCCESS.value:
            status = ResultStatus.SUCCESS
            message = message or success_message
        else:
            status = ResultStatus.ERROR
            message = message or error_message

        return cls(entity_key=entity_key, label=label, status=status, message=str(message), detail=detail)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the history file."""
        data: dict[str, Any] = {
            "entity": self.entity_key,
            "label": self.label,
            "status": self.status.value,
            "message": self.message,
        }
        if self.detail is not None:
            data["detail"] = self.detail.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SyncResult":
        """Create from dictionary produced by to_dict()."""
        detail_data = data.get("detail")
        return cls(
            entity_key=str(data.get("entity") or ""),
            label=str(data.get("label") or ""),
            status=ResultStatus(data.get("status", ResultStatus.ERROR.value)),
            message=str(data.get("message") or ""),
            detail=SyncResultDetail.from_dict(detail_data) if detail_data else None,
        )


@dataclass(frozen=True)
class JobSummary:
    """Counts derived from a results list."""

    success_count: int
    error_count: int
    total: int

    @property
    def classification(self) -> Classification:
        if self.error_count == 0:
            return Classification.SUCCESS
        if self.success_count == 0 and self.total > 0:
            return Classification.ERROR
        return Classification.PARTIAL


class ItemIssues(NamedTuple):
    """Item-level issues of one entity, partitioned by action."""

    failed: list[ItemIssue]
    skipped: list[ItemIssue]


def summarize(results: Iterable[SyncResult]) -> JobSummary:
    """Fold per-entity results into a summary. Pure."""
    success_count = 0
    error_count = 0
    total = 0
    for result in results:
        total += 1
        if result.status == ResultStatus.SUCCESS:
            success_count += 1
        elif result.status == ResultStatus.ERROR:
            error_count += 1
    return JobSummary(success_count=success_count, error_count=error_count, total=total)


def extract_item_issues(result: SyncResult) -> ItemIssues:
    """Failed and skipped items of an entity result, in reported order."""
    if result.detail is None:
        return ItemIssues(failed=[], skipped=[])

    failed = [item for item in result.detail.items if item.action == ItemAction.FAILED]
    skipped = [item for item in result.detail.items if item.action == ItemAction.SKIPPED]
    return ItemIssues(failed=failed, skipped=skipped)
