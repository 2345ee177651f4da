# erpsync Utilities Module
# Helper functions for path handling and file writes

from erpsync.utils.paths import atomic_write, ensure_dir, expand_path

__all__ = [
    "expand_path",
    "ensure_dir",
    "atomic_write",
]
