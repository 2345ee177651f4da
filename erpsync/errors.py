# erpsync Errors
# Exception hierarchy shared by catalog, selection, executor and client


class ErpSyncError(Exception):
    """Base class for erpsync errors."""


class CatalogError(ErpSyncError):
    """The entity catalog is inconsistent (unknown dependency, cycle, duplicate key)."""


class SelectionError(ErpSyncError):
    """A job selection refers to an entity that cannot be processed."""


class EmptySelectionError(SelectionError):
    """No entity was selected for a job."""

    def __init__(self, message: str = "No entities selected"):
        super().__init__(message)


class RemoteError(ErpSyncError):
    """The ERP backend call failed or returned an error envelope."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
