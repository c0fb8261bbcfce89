"""Recursive listing of files under a local folder."""

import logging
import os
from typing import List, Set

from .errors import FilesystemError

logger = logging.getLogger(__name__)


def list_files(root: str) -> List[str]:
    """List every regular file under ``root``, recursing into subfolders.

    Directories are traversed but never returned. Symlinked folders are
    followed, each real folder at most once. The listing is sorted by folder
    then file name and fully materialized before returning, so callers can
    fan out over a fixed batch.

    Args:
        root: Folder to list

    Returns:
        Paths of all files, each prefixed with ``root``

    Raises:
        FilesystemError: If ``root`` or any subfolder cannot be read
    """
    if not os.path.isdir(root):
        raise FilesystemError(root, 'list', 'Path does not exist or is not a directory')

    def _raise(error: OSError) -> None:
        raise FilesystemError(error.filename or root, 'list', error.strerror or str(error)) from error

    files: List[str] = []
    visited: Set[str] = set()
    for current, dirs, filenames in os.walk(root, onerror=_raise, followlinks=True):
        real_path = os.path.realpath(current)
        if real_path in visited:
            # Symlink cycle or a folder reachable twice
            dirs[:] = []
            continue
        visited.add(real_path)

        dirs.sort()
        for filename in sorted(filenames):
            files.append(os.path.join(current, filename))

    logger.debug(f"Found {len(files)} file(s) under {root}")
    return files
