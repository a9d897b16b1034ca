"""
Bundle archive writers.

``JarArchiver`` is the default: a zip container with a
``META-INF/MANIFEST.MF`` first entry. Archives are written to a temporary
file and renamed into place, so a failed run leaves no partial bundle.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Protocol, Tuple, Type, Union, runtime_checkable

from bundlepack import __version__
from bundlepack.errors import ArchiveError
from bundlepack.fileio import replacing

logger = logging.getLogger(__name__)

MANIFEST_NAME = "META-INF/MANIFEST.MF"


@runtime_checkable
class Archiver(Protocol):
    def add_file(self, path: Path, name: str) -> None:
        ...

    def create_archive(self, destination: Path) -> Path:
        ...


class ZipArchiver:
    """Deflated zip archive built from a list of files."""

    extension = "zip"

    def __init__(self):
        self._files: List[Tuple[Path, str]] = []

    @property
    def names(self) -> List[str]:
        return [name for _, name in self._files]

    def add_file(self, path: Union[str, Path], name: str) -> None:
        if name in self.names:
            logger.debug("Skipping duplicate archive entry %s", name)
            return
        self._files.append((Path(path), name))

    def _write_extra(self, archive: zipfile.ZipFile) -> None:
        """Hook for format-specific leading entries."""

    def create_archive(self, destination: Union[str, Path]) -> Path:
        """
        Write all added files into ``destination``.

        Raises:
            ArchiveError: If the archive cannot be written
        """
        destination = Path(destination)
        if not destination.parent.is_dir():
            raise ArchiveError(f"Output directory {destination.parent} does not exist")

        try:
            with replacing(destination) as temp_path:
                with zipfile.ZipFile(temp_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                    self._write_extra(archive)
                    for path, name in self._files:
                        archive.write(path, arcname=name)
        except (OSError, zipfile.BadZipFile, ValueError) as exc:
            raise ArchiveError(f"Unable to create archive {destination}: {exc}") from exc

        logger.debug("Wrote %d entries to %s", len(self._files), destination)
        return destination


class JarArchiver(ZipArchiver):
    """Zip archive with a jar manifest."""

    extension = "jar"

    def __init__(self, created_by: str = f"bundlepack {__version__}"):
        super().__init__()
        self.created_by = created_by

    def _write_extra(self, archive: zipfile.ZipFile) -> None:
        manifest = f"Manifest-Version: 1.0\r\nCreated-By: {self.created_by}\r\n\r\n"
        archive.writestr(MANIFEST_NAME, manifest)


_ARCHIVERS: Dict[str, Type[ZipArchiver]] = {
    "jar": JarArchiver,
    "zip": ZipArchiver,
}


def archiver_for(archive_format: str) -> Type[ZipArchiver]:
    """Archiver class for ``jar`` or ``zip``."""
    try:
        return _ARCHIVERS[archive_format]
    except KeyError:
        raise ValueError(
            f"Unknown archive format '{archive_format}'. Must be one of: {sorted(_ARCHIVERS)}"
        ) from None
