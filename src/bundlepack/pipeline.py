"""
The bundle-pack pipeline.

Four stages run strictly in order, each feeding the next:

    START -> INPUT_RESOLVED -> ARTIFACT_LOCATED -> DESCRIPTOR_VALIDATED -> BUNDLE_WRITTEN

A failure in any stage moves the pipeline to FAILED and re-raises the
original error. Each stage runs in its own OTel span under a
``bundle.pack`` root span; without an SDK configured these are no-ops.

Usage:
    pipeline = BundlePackPipeline(
        resolver=LocalRepositoryResolver("~/.m2/repository"),
        prompter=ConsolePrompter(),
        output_dir=Path("."),
    )
    result = pipeline.run(group_id="com.example", artifact_id="lib", version="1.0")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from opentelemetry import trace

from bundlepack.assembler import BundleAssembler
from bundlepack.descriptor import load_descriptor
from bundlepack.editor import validate_descriptor
from bundlepack.inputs import resolve_coordinate
from bundlepack.models import BundleResult, PipelineStage
from bundlepack.prompt import Prompter
from bundlepack.resolver import ArtifactResolver, locate_artifact

logger = logging.getLogger(__name__)


class BundlePackPipeline:
    """Resolves, validates and packs one artifact."""

    def __init__(
        self,
        resolver: ArtifactResolver,
        prompter: Prompter,
        output_dir: Union[str, Path] = ".",
        batch_mode: bool = False,
        archive_format: str = "jar",
        atomic_rewrite: bool = True,
        backup_descriptor: bool = False,
        tracer_name: str = "bundlepack.pipeline",
    ):
        self.resolver = resolver
        self.prompter = prompter
        self.output_dir = Path(output_dir)
        self.batch_mode = batch_mode
        self.atomic_rewrite = atomic_rewrite
        self.backup_descriptor = backup_descriptor
        self.assembler = BundleAssembler(
            prompter, batch_mode=batch_mode, archive_format=archive_format
        )
        self.tracer = trace.get_tracer(tracer_name)
        self.stage = PipelineStage.START

    def _advance(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def run(
        self,
        group_id: Optional[str] = None,
        artifact_id: Optional[str] = None,
        version: Optional[str] = None,
    ) -> BundleResult:
        """
        Run every stage and return the written bundle.

        Raises:
            BundlePackError: The first stage failure, unchanged
        """
        self.stage = PipelineStage.START
        try:
            with self.tracer.start_as_current_span("bundle.pack") as root:
                root.set_attribute("bundle.batch_mode", self.batch_mode)
                result = self._run_stages(root, group_id, artifact_id, version)
        except Exception:
            self._advance(PipelineStage.FAILED)
            raise
        return result

    def _run_stages(
        self,
        root: trace.Span,
        group_id: Optional[str],
        artifact_id: Optional[str],
        version: Optional[str],
    ) -> BundleResult:
        with self.tracer.start_as_current_span("bundle.input"):
            coordinate = resolve_coordinate(self.prompter, group_id, artifact_id, version)
        root.set_attribute("artifact.group_id", coordinate.group_id)
        root.set_attribute("artifact.artifact_id", coordinate.artifact_id)
        root.set_attribute("artifact.version", coordinate.version)
        self._advance(PipelineStage.INPUT_RESOLVED)

        with self.tracer.start_as_current_span("bundle.locate") as span:
            descriptor_path = locate_artifact(self.resolver, coordinate)
            span.set_attribute("artifact.path", str(descriptor_path))
        self._advance(PipelineStage.ARTIFACT_LOCATED)

        with self.tracer.start_as_current_span("bundle.descriptor") as span:
            document = load_descriptor(descriptor_path)
            rewritten = validate_descriptor(
                document,
                self.prompter,
                coordinate.artifact_id,
                atomic=self.atomic_rewrite,
                backup=self.backup_descriptor,
            )
            span.set_attribute("descriptor.rewritten", rewritten)
        self._advance(PipelineStage.DESCRIPTOR_VALIDATED)

        with self.tracer.start_as_current_span("bundle.assemble") as span:
            result = self.assembler.assemble(document, coordinate, self.output_dir)
            span.set_attribute("bundle.path", str(result.bundle_path))
            span.set_attribute("bundle.entry_count", len(result.entries))
            span.set_attribute("bundle.warning_count", len(result.warnings))
        self._advance(PipelineStage.BUNDLE_WRITTEN)

        result.descriptor_rewritten = rewritten
        return result
