"""
Pydantic models for artifacts, project descriptors and bundle contents.

ArtifactCoordinate is immutable once resolved. ProjectDescriptor is the
mutable view of the project descriptor document that the editor repairs;
unset fields are ``None``, while an element that is present but empty in the
document loads as ``""`` and counts as set.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# Mandatory descriptor fields, in the order the editor repairs them.
MANDATORY_FIELDS = ("packaging", "name", "description", "url", "licenses")


class ArtifactCoordinate(BaseModel):
    """groupId/artifactId/version identifying one artifact."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    group_id: str = Field(..., alias="groupId")
    artifact_id: str = Field(..., alias="artifactId")
    version: str

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def project_id(self) -> str:
        """Id of the descriptor artifact (type ``pom``) for this coordinate."""
        return f"{self.group_id}:{self.artifact_id}:pom:{self.version}"

    def __str__(self) -> str:
        return self.id


class License(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None


class BuildSpec(BaseModel):
    final_name: Optional[str] = Field(None, alias="finalName")

    model_config = ConfigDict(populate_by_name=True)


class ParentSpec(BaseModel):
    group_id: Optional[str] = Field(None, alias="groupId")
    artifact_id: Optional[str] = Field(None, alias="artifactId")
    version: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ProjectDescriptor(BaseModel):
    """Fields of the project descriptor the packer reads or repairs."""

    model_config = ConfigDict(populate_by_name=True)

    group_id: Optional[str] = Field(None, alias="groupId")
    artifact_id: Optional[str] = Field(None, alias="artifactId")
    version: Optional[str] = None
    packaging: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    licenses: List[License] = Field(default_factory=list)
    build: Optional[BuildSpec] = None
    parent: Optional[ParentSpec] = None

    @property
    def effective_group_id(self) -> Optional[str]:
        if self.group_id is not None:
            return self.group_id
        return self.parent.group_id if self.parent else None

    @property
    def effective_version(self) -> Optional[str]:
        if self.version is not None:
            return self.version
        return self.parent.version if self.parent else None

    def missing_fields(self) -> List[str]:
        """Unset mandatory fields, in repair order."""
        missing = [
            field for field in MANDATORY_FIELDS[:-1]
            if getattr(self, field) is None
        ]
        if not self.licenses:
            missing.append("licenses")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def final_name(self, coordinate: ArtifactCoordinate) -> str:
        """
        Base name of the artifact files and of the bundle.

        ``build.finalName`` when declared, otherwise ``artifactId-version``.
        """
        if self.build is not None and self.build.final_name:
            return self.build.final_name
        artifact_id = self.artifact_id or coordinate.artifact_id
        version = self.effective_version or coordinate.version
        return f"{artifact_id}-{version}"


class BundleEntry(BaseModel):
    """One member of the bundle archive."""

    model_config = ConfigDict(frozen=True)

    source: Path
    name: str


class BundleManifest(BaseModel):
    """Ordered set of archive members, keyed by member name."""

    entries: List[BundleEntry] = Field(default_factory=list)
    _frozen: bool = PrivateAttr(default=False)

    def add(self, source: Path, name: str) -> bool:
        """Add a member. Returns False if the name is already taken."""
        if self._frozen:
            raise RuntimeError("bundle manifest is frozen")
        if name in self.names:
            return False
        self.entries.append(BundleEntry(source=Path(source), name=name))
        return True

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


class PipelineStage(str, Enum):
    """Pipeline progress. BUNDLE_WRITTEN and FAILED are terminal."""

    START = "start"
    INPUT_RESOLVED = "input_resolved"
    ARTIFACT_LOCATED = "artifact_located"
    DESCRIPTOR_VALIDATED = "descriptor_validated"
    BUNDLE_WRITTEN = "bundle_written"
    FAILED = "failed"


class BundleResult(BaseModel):
    """Outcome of a successful pack run."""

    coordinate: ArtifactCoordinate
    descriptor_path: Path
    bundle_path: Path
    final_name: str
    entries: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    descriptor_rewritten: bool = False
