"""Safe path resolution inside a root directory."""

import os
from pathlib import Path

from scaffolder_actions.core.exceptions import PathSafetyError


def resolve_safe_child_path(base: str | Path, path: str | Path) -> Path:
    """
    Resolve ``path`` against ``base`` and make sure the result stays inside ``base``.

    The resolution is lexical: ``..`` segments are collapsed but symbolic links
    are not followed, so a link inside the root resolves to its own location.

    Args:
        base: Root directory
        path: Path relative to ``base``

    Returns:
        Absolute path of ``path`` within ``base``

    Raises:
        PathSafetyError: When the resolved path is outside ``base``
    """
    base_path = Path(os.path.abspath(base))
    target = Path(os.path.normpath(os.path.join(base_path, path)))
    if target != base_path and base_path not in target.parents:
        raise PathSafetyError(str(base), str(path))
    return target
