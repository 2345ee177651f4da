# erpsync Sync Module
# Entity catalog, selection, job execution and results

from erpsync.sync.catalog import EntityCatalog, EntityDefinition, EntityDescriptor
from erpsync.sync.executor import EntityGateway, SyncExecutor, validate_job
from erpsync.sync.history import HistoryManager, RunRecord
from erpsync.sync.job import ImportMode, JobMode, ProgressEvent, ProgressReporter, SyncJob
from erpsync.sync.result import (
    Classification,
    ItemAction,
    ItemIssue,
    ItemIssues,
    JobSummary,
    ResultStatus,
    SyncResult,
    SyncResultDetail,
    extract_item_issues,
    summarize,
)
from erpsync.sync.selection import SelectionModel

__all__ = [
    # Catalog
    "EntityCatalog",
    "EntityDefinition",
    "EntityDescriptor",
    # Selection
    "SelectionModel",
    # Job
    "SyncJob",
    "JobMode",
    "ImportMode",
    "ProgressEvent",
    "ProgressReporter",
    # Executor
    "SyncExecutor",
    "EntityGateway",
    "validate_job",
    # Results
    "SyncResult",
    "SyncResultDetail",
    "ResultStatus",
    "ItemIssue",
    "ItemAction",
    "ItemIssues",
    "JobSummary",
    "Classification",
    "summarize",
    "extract_item_issues",
    # History
    "HistoryManager",
    "RunRecord",
]
