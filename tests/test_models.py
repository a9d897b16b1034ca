"""
Tests for bundlepack Pydantic models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bundlepack.models import (
    ArtifactCoordinate,
    BuildSpec,
    BundleManifest,
    License,
    ParentSpec,
    PipelineStage,
    ProjectDescriptor,
)


@pytest.fixture
def coordinate():
    return ArtifactCoordinate(group_id="com.x", artifact_id="foo", version="1.0")


class TestArtifactCoordinate:
    def test_ids(self, coordinate):
        assert coordinate.id == "com.x:foo:1.0"
        assert coordinate.project_id == "com.x:foo:pom:1.0"
        assert str(coordinate) == "com.x:foo:1.0"

    def test_accepts_camel_case_aliases(self):
        coordinate = ArtifactCoordinate(groupId="com.x", artifactId="foo", version="1.0")
        assert coordinate.group_id == "com.x"
        assert coordinate.artifact_id == "foo"

    def test_is_immutable(self, coordinate):
        with pytest.raises(ValidationError):
            coordinate.version = "2.0"

    def test_requires_all_parts(self):
        with pytest.raises(ValidationError):
            ArtifactCoordinate(group_id="com.x", artifact_id="foo")


class TestProjectDescriptor:
    def test_missing_fields_in_repair_order(self):
        descriptor = ProjectDescriptor(artifact_id="foo")
        assert descriptor.missing_fields() == [
            "packaging", "name", "description", "url", "licenses",
        ]
        assert not descriptor.is_complete

    def test_empty_string_counts_as_set(self):
        descriptor = ProjectDescriptor(
            packaging="jar",
            name="",
            description="",
            url="",
            licenses=[License(name="", url="")],
        )
        assert descriptor.missing_fields() == []
        assert descriptor.is_complete

    def test_final_name_from_build(self, coordinate):
        descriptor = ProjectDescriptor(build=BuildSpec(final_name="foo-1.0"))
        assert descriptor.final_name(coordinate) == "foo-1.0"

    def test_final_name_defaults_to_artifact_and_version(self, coordinate):
        descriptor = ProjectDescriptor(artifact_id="foo", version="1.0")
        assert descriptor.final_name(coordinate) == "foo-1.0"

    def test_final_name_ignores_build_without_final_name(self, coordinate):
        descriptor = ProjectDescriptor(artifact_id="foo", version="1.0", build=BuildSpec())
        assert descriptor.final_name(coordinate) == "foo-1.0"

    def test_final_name_uses_parent_version(self, coordinate):
        descriptor = ProjectDescriptor(
            artifact_id="foo",
            parent=ParentSpec(group_id="com.x", artifact_id="parent", version="1.0"),
        )
        assert descriptor.effective_version == "1.0"
        assert descriptor.effective_group_id == "com.x"
        assert descriptor.final_name(coordinate) == "foo-1.0"

    def test_final_name_falls_back_to_coordinate(self, coordinate):
        assert ProjectDescriptor().final_name(coordinate) == "foo-1.0"


class TestBundleManifest:
    def test_keeps_insertion_order(self):
        manifest = BundleManifest()
        manifest.add(Path("/r/foo-1.0.pom"), "pom.xml")
        manifest.add(Path("/r/foo-1.0.jar"), "foo-1.0.jar")
        assert manifest.names == ["pom.xml", "foo-1.0.jar"]
        assert len(manifest) == 2
        assert [entry.source for entry in manifest] == [
            Path("/r/foo-1.0.pom"), Path("/r/foo-1.0.jar"),
        ]

    def test_rejects_duplicate_names(self):
        manifest = BundleManifest()
        assert manifest.add(Path("/a/x.jar"), "x.jar") is True
        assert manifest.add(Path("/b/x.jar"), "x.jar") is False
        assert len(manifest) == 1
        assert manifest.entries[0].source == Path("/a/x.jar")

    def test_frozen_manifest_cannot_grow(self):
        manifest = BundleManifest()
        manifest.add(Path("/a/x.jar"), "x.jar")
        manifest.freeze()
        assert manifest.frozen
        with pytest.raises(RuntimeError):
            manifest.add(Path("/a/y.jar"), "y.jar")


def test_pipeline_stages():
    assert PipelineStage("bundle_written") is PipelineStage.BUNDLE_WRITTEN
    assert PipelineStage.FAILED.value == "failed"
