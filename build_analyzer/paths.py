"""Path normalization shared by the build result views."""

from __future__ import annotations

import os


def normalize_path(path: str) -> str:
    """Return *path* absolute, with ``.``/``..`` collapsed and native separators.

    Backslashes are converted first so Windows-style item specs such as
    ``..\\Lib\\Lib.csproj`` resolve on every platform.
    """
    return os.path.normpath(os.path.abspath(path.replace("\\", os.sep)))


def resolve_relative(base_directory: str, path: str) -> str:
    """Resolve *path* against *base_directory* and normalize the result."""
    return normalize_path(os.path.join(base_directory, path.replace("\\", os.sep)))
