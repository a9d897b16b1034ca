"""Read the artifact coordinate, prompting for whatever was not supplied."""

from __future__ import annotations

import logging
from typing import Optional

from bundlepack.errors import InputError
from bundlepack.models import ArtifactCoordinate
from bundlepack.prompt import Prompter

logger = logging.getLogger(__name__)


def resolve_coordinate(
    prompter: Prompter,
    group_id: Optional[str] = None,
    artifact_id: Optional[str] = None,
    version: Optional[str] = None,
) -> ArtifactCoordinate:
    """
    Complete a coordinate from supplied values and prompts.

    Missing parts are asked for in groupId, artifactId, version order.

    Raises:
        InputError: If the input cannot be read or an answer is empty
    """
    values = {"groupId": group_id, "artifactId": artifact_id, "version": version}

    for key, value in values.items():
        if value is None:
            value = prompter.ask(key, key)
        value = value.strip()
        if not value:
            raise InputError(f"No value supplied for {key}")
        values[key] = value

    coordinate = ArtifactCoordinate(**values)
    logger.debug("Resolved coordinate %s", coordinate.id)
    return coordinate
