"""
Artifact lookup against a local repository.

The local repository uses the Maven 2 layout::

    <repository>/<groupId with dots as slashes>/<artifactId>/<version>/
        <artifactId>-<version>.pom
        <artifactId>-<version>.jar
        <artifactId>-<version>-sources.jar
        ...

Only the descriptor (``.pom``) is resolved; its directory holds the
companion files the assembler picks up.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from bundlepack.errors import BundlePackError, NotFoundError, ResolutionError
from bundlepack.models import ArtifactCoordinate

logger = logging.getLogger(__name__)

_FORBIDDEN = re.compile(r"[\s/\\:]")


@runtime_checkable
class ArtifactResolver(Protocol):
    """Resolves a coordinate to the local path of its descriptor."""

    def resolve(self, coordinate: ArtifactCoordinate) -> Path:
        ...


class LocalRepositoryResolver:
    """Resolver over a Maven 2 layout directory tree."""

    def __init__(self, repository_dir: Union[str, Path]):
        self.repository_dir = Path(repository_dir)

    def path_of(self, coordinate: ArtifactCoordinate, extension: str = "pom") -> Path:
        """Repository path for the coordinate's file with the given extension."""
        return (
            self.repository_dir.joinpath(*coordinate.group_id.split("."))
            / coordinate.artifact_id
            / coordinate.version
            / f"{coordinate.artifact_id}-{coordinate.version}.{extension}"
        )

    def resolve(self, coordinate: ArtifactCoordinate) -> Path:
        """
        Return the absolute path of the coordinate's descriptor.

        Raises:
            ResolutionError: If the coordinate is malformed or the repository unusable
            NotFoundError: If the descriptor is not in the repository
        """
        _check_coordinate(coordinate)

        try:
            if not self.repository_dir.is_dir():
                raise ResolutionError(
                    f"Unable to resolve artifact {coordinate.project_id}: "
                    f"local repository {self.repository_dir} does not exist"
                )
            path = self.path_of(coordinate)
            if not path.is_file():
                raise NotFoundError(
                    f"Artifact {coordinate.project_id} not found in local repository "
                    f"(expected {path})"
                )
            return path.resolve()
        except OSError as exc:
            raise ResolutionError(
                f"Unable to resolve artifact {coordinate.project_id}: {exc}"
            ) from exc


def _check_coordinate(coordinate: ArtifactCoordinate) -> None:
    for label, value in (
        ("groupId", coordinate.group_id),
        ("artifactId", coordinate.artifact_id),
        ("version", coordinate.version),
    ):
        # empty dot segments cover "..", leading and trailing dots
        if not value or _FORBIDDEN.search(value) or "" in value.split("."):
            raise ResolutionError(
                f"Unable to resolve artifact {coordinate.project_id}: invalid {label} '{value}'"
            )


def locate_artifact(resolver: ArtifactResolver, coordinate: ArtifactCoordinate) -> Path:
    """
    Resolve a coordinate, failing fast when it cannot be found.

    NotFoundError and ResolutionError pass through unchanged; anything else
    the resolver raises is reported as a ResolutionError.
    """
    logger.debug("Resolving %s", coordinate.project_id)
    try:
        path = resolver.resolve(coordinate)
    except BundlePackError:
        raise
    except Exception as exc:
        raise ResolutionError(
            f"Unable to resolve artifact {coordinate.project_id}: {exc}"
        ) from exc

    path = Path(path).absolute()
    logger.debug("Resolved %s to %s", coordinate.project_id, path)
    return path
