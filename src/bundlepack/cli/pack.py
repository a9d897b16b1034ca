"""
CLI command for ``bundlepack pack`` - write an upload bundle.

Packs an artifact already available in the local repository into a bundle
for an upload request. The artifact's descriptor must be in the local
repository; missing mandatory fields are asked for interactively (or
defaulted in batch mode) and written back before packing.

Usage::

    bundlepack pack --group-id com.example --artifact-id lib --version 1.0
    bundlepack pack -B --answers answers.yaml --basedir out/
"""

import click

from bundlepack.cli._common import config_file_option, load_config, repository_option
from bundlepack.pipeline import BundlePackPipeline
from bundlepack.prompt import ConsolePrompter, ScriptedPrompter
from bundlepack.resolver import LocalRepositoryResolver


@click.command()
@click.option("--group-id", "-g", default=None, help="GroupId of the artifact (prompted if absent).")
@click.option("--artifact-id", "-a", default=None, help="ArtifactId of the artifact (prompted if absent).")
@click.option("--version", "-v", "version", default=None, help="Version of the artifact (prompted if absent).")
@click.option(
    "--basedir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory where the bundle is created (default: current directory).",
)
@repository_option
@click.option("--batch-mode", "-B", is_flag=True, help="Never prompt; use defaults for missing values.")
@click.option(
    "--answers",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with pre-supplied answers to prompts.",
)
@click.option(
    "--archive-format",
    type=click.Choice(["jar", "zip"]),
    default=None,
    help="Bundle archive format (default: jar).",
)
@click.option("--no-atomic", is_flag=True, help="Overwrite the descriptor in place instead of temp file + rename.")
@click.option("--backup", is_flag=True, help="Keep a .bak copy of a rewritten descriptor.")
@config_file_option
@click.option("--log-level", type=click.Choice(["debug", "info", "warning", "error"]), default=None)
@click.option("--log-format", type=click.Choice(["text", "json"]), default=None)
def pack(
    group_id,
    artifact_id,
    version,
    basedir,
    local_repository,
    batch_mode,
    answers,
    archive_format,
    no_atomic,
    backup,
    config_file,
    log_level,
    log_format,
):
    """Pack a locally installed artifact into an upload bundle."""
    config = load_config(
        config_file,
        basedir=basedir,
        local_repository=local_repository,
        interactive_mode=False if batch_mode else None,
        archive_format=archive_format,
        atomic_rewrite=False if no_atomic else None,
        backup_descriptor=True if backup else None,
        log_level=log_level,
        log_format=log_format,
    )

    prompter = ConsolePrompter(batch_mode=config.batch_mode)
    if answers:
        prompter = ScriptedPrompter.from_yaml(answers, fallback=prompter)

    pipeline = BundlePackPipeline(
        resolver=LocalRepositoryResolver(config.get_repository_path()),
        prompter=prompter,
        output_dir=config.get_output_dir(),
        batch_mode=config.batch_mode,
        archive_format=config.archive_format,
        atomic_rewrite=config.atomic_rewrite,
        backup_descriptor=config.backup_descriptor,
    )
    result = pipeline.run(group_id=group_id, artifact_id=artifact_id, version=version)

    if result.descriptor_rewritten:
        click.echo(f"Descriptor updated: {result.descriptor_path}")
    click.echo(click.style(f"Bundle written: {result.bundle_path}", fg="green"))
