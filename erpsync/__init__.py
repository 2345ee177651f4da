"""erpsync - bulk import and delete of Odoo ERP data.

Imports business entities (countries, clients, products, invoices,
orders, safes, ...) from Odoo through a REST backend in dependency
order, and deletes them again in the exact reverse order.
"""

__version__ = "1.0.0"
__author__ = "Equitania Software GmbH"
__email__ = "info@equitania.de"

__all__ = [
    "__version__",
    "EntityCatalog",
    "SelectionModel",
    "SyncExecutor",
    "SyncJob",
    "SyncResult",
    "JobMode",
    "ImportMode",
    "OdooClient",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "OdooClient":
        from erpsync.client import OdooClient

        return OdooClient
    if name in ("EntityCatalog", "SelectionModel", "SyncExecutor", "SyncJob", "SyncResult", "JobMode", "ImportMode"):
        from erpsync import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
