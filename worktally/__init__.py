"""worktally: task timing and estimation statistics."""

__version__ = "0.1.0"
