"""Filesystem utilities for scaffolder actions.

Components:
    resolve_safe_child_path: Resolves a path inside a root directory, refusing escapes.
    DirectorySerializer: Serializes a directory tree into SerializedFile records,
        keeping dangling symlinks and reading with bounded concurrency.

Example:
    ```python
    from scaffolder_actions.utils import serialize_directory_contents

    async def snapshot(workspace: str):
        return await serialize_directory_contents(workspace, glob_patterns=["src/**", "!**/*.log"])
    ```
"""

from .paths import resolve_safe_child_path
from .serializer import DirectorySerializer, is_executable, serialize_directory_contents

__all__ = ["DirectorySerializer", "is_executable", "resolve_safe_child_path", "serialize_directory_contents"]
