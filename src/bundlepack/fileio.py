"""File writing helpers: replace files atomically so readers never see half a file."""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional


def backup_path_for(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".bak")


@contextmanager
def replacing(path: Path, suffix: Optional[str] = None) -> Iterator[Path]:
    """
    Yield a temporary path next to ``path``; rename it over ``path`` on success.

    The temporary file is removed if the block raises. The parent directory
    must already exist.
    """
    fd, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=suffix or ".tmp"
    )
    os.close(fd)
    temp_path = Path(temp_name)
    try:
        yield temp_path
        # Preserve permissions if possible
        if path.exists():
            shutil.copymode(path, temp_path)
        else:
            # mkstemp creates 0600 files; new files get the usual umask mode
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(temp_path, 0o666 & ~umask)
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def atomic_write_with_backup(path: Path, data: bytes, backup: bool = True) -> None:
    """Write file atomically, optionally creating a backup if it exists."""
    if path.exists() and backup:
        shutil.copy2(path, backup_path_for(path))

    with replacing(path) as temp_path:
        temp_path.write_bytes(data)
