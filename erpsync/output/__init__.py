# erpsync Output Module
# Rich console output and progress display

from erpsync.output.console import Console, ProgressDisplay, create_console

__all__ = [
    "Console",
    "ProgressDisplay",
    "create_console",
]
