"""
Descriptor validation and repair.

An upload bundle needs a descriptor with packaging, name, description, url
and at least one license. Missing values are defaulted or asked for, one
field at a time, in that order; values already present are never touched.
"""

from __future__ import annotations

import logging

from bundlepack.descriptor import DescriptorDocument
from bundlepack.models import License, ProjectDescriptor
from bundlepack.prompt import Prompter

logger = logging.getLogger(__name__)

DEFAULT_PACKAGING = "jar"


class DescriptorEditor:
    """Fills in missing mandatory descriptor fields."""

    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    def repair(self, descriptor: ProjectDescriptor, artifact_id: str) -> bool:
        """
        Fill in every unset mandatory field.

        Args:
            descriptor: Descriptor to repair in place
            artifact_id: Fallback project name

        Returns:
            True if anything was changed
        """
        dirty = False

        if descriptor.packaging is None:
            descriptor.packaging = DEFAULT_PACKAGING
            logger.info("Packaging is missing, using '%s'", DEFAULT_PACKAGING)
            dirty = True

        if descriptor.name is None:
            name = self.prompter.ask(
                "name",
                "Project name is missing, please type the project name",
                default=artifact_id,
            )
            descriptor.name = name.strip() or artifact_id
            dirty = True

        if descriptor.description is None:
            descriptor.description = self.prompter.ask(
                "description",
                "Project description is missing, please type the project description",
            ).strip()
            dirty = True

        if descriptor.url is None:
            descriptor.url = self.prompter.ask(
                "url",
                "Project URL is missing, please type the project URL",
            ).strip()
            dirty = True

        if not descriptor.licenses:
            name = self.prompter.ask(
                "license.name",
                "License name is missing, please type the license name",
            )
            url = self.prompter.ask(
                "license.url",
                "License URL is missing, please type the license URL",
            )
            descriptor.licenses.append(License(name=name.strip(), url=url.strip()))
            dirty = True

        return dirty


def validate_descriptor(
    document: DescriptorDocument,
    prompter: Prompter,
    artifact_id: str,
    atomic: bool = True,
    backup: bool = False,
) -> bool:
    """
    Repair a loaded descriptor and rewrite its file if anything changed.

    Returns:
        True if the descriptor file was rewritten

    Raises:
        InputError: If a prompt cannot be answered
        BundleIOError: If the rewrite fails
    """
    dirty = DescriptorEditor(prompter).repair(document.model, artifact_id)
    if dirty:
        document.write(atomic=atomic, backup=backup)
    else:
        logger.debug("Descriptor %s is complete, not rewriting", document.path)
    return dirty
