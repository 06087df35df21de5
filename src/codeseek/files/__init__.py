"""Workspace file access - tree snapshots and content fetches."""

from codeseek.files.ops import LocalWorkspace, validate_path_in_workspace

__all__ = ["LocalWorkspace", "validate_path_in_workspace"]
