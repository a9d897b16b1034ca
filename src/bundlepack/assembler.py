"""
Bundle assembly.

Collects the descriptor and its companion files into one archive named
``<finalName>-bundle.<ext>``. Sources and javadoc archives are expected for
everything but ``pom`` packaging; their absence is reported as a warning and
never stops the bundle from being written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from bundlepack.archive import Archiver, archiver_for
from bundlepack.descriptor import DescriptorDocument
from bundlepack.models import ArtifactCoordinate, BundleManifest, BundleResult
from bundlepack.prompt import Prompter
from bundlepack.selector import select_project_files

logger = logging.getLogger(__name__)

DESCRIPTOR_NAME = "pom.xml"

SOURCES_MISSING = "Sources not included in upload bundle."
JAVADOC_MISSING = "Javadoc not included in upload bundle."


def bundle_file_name(final_name: str, extension: str) -> str:
    return f"{final_name}-bundle.{extension}"


def companion_warnings(packaging: Optional[str], final_name: str, names: List[str]) -> List[str]:
    """Warnings for missing sources/javadoc archives among ``names``."""
    if packaging == "pom":
        return []

    sources_found = any(name.endswith(f"{final_name}-sources.jar") for name in names)
    javadoc_found = f"{final_name}-javadoc.jar" in names

    warnings = []
    if not sources_found:
        warnings.append(SOURCES_MISSING)
    if not javadoc_found:
        warnings.append(JAVADOC_MISSING)
    return warnings


class BundleAssembler:
    """Writes the upload bundle for a validated descriptor."""

    def __init__(
        self,
        prompter: Prompter,
        archiver_factory: Optional[Callable[[], Archiver]] = None,
        batch_mode: bool = False,
        archive_format: str = "jar",
    ):
        self.prompter = prompter
        self.batch_mode = batch_mode
        self.archive_format = archive_format
        self.archiver_factory = archiver_factory or archiver_for(archive_format)

    def build_manifest(self, document: DescriptorDocument, final_name: str) -> BundleManifest:
        manifest = BundleManifest()
        manifest.add(document.path, DESCRIPTOR_NAME)

        files = select_project_files(
            document.path.parent,
            final_name,
            document.path,
            self.prompter,
            batch_mode=self.batch_mode,
        )
        for path in files:
            manifest.add(path, path.name)

        manifest.freeze()
        return manifest

    def assemble(
        self,
        document: DescriptorDocument,
        coordinate: ArtifactCoordinate,
        output_dir: Path,
    ) -> BundleResult:
        """
        Write the bundle archive.

        Raises:
            ArchiveError: If the archive cannot be created
        """
        final_name = document.model.final_name(coordinate)
        manifest = self.build_manifest(document, final_name)

        warnings = companion_warnings(document.model.packaging, final_name, manifest.names[1:])
        for message in warnings:
            logger.warning(message)

        archiver = self.archiver_factory()
        for entry in manifest:
            archiver.add_file(entry.source, entry.name)

        bundle_path = Path(output_dir) / bundle_file_name(final_name, self.archive_format)
        archiver.create_archive(bundle_path)
        logger.info("Created bundle %s with %d files", bundle_path, len(manifest))

        return BundleResult(
            coordinate=coordinate,
            descriptor_path=document.path,
            bundle_path=bundle_path,
            final_name=final_name,
            entries=manifest.names,
            warnings=warnings,
        )
