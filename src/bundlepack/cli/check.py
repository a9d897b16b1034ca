"""
CLI command for ``bundlepack check`` - read-only descriptor report.

Resolves the artifact and lists the mandatory descriptor fields that
``bundlepack pack`` would ask for, without prompting or writing anything.

Usage::

    bundlepack check -g com.example -a lib -v 1.0
    bundlepack check -g com.example -a lib -v 1.0 --format json
"""

import json as _json

import click

from bundlepack.assembler import bundle_file_name
from bundlepack.cli._common import config_file_option, load_config, repository_option
from bundlepack.descriptor import load_descriptor
from bundlepack.models import ArtifactCoordinate
from bundlepack.resolver import LocalRepositoryResolver, locate_artifact


@click.command()
@click.option("--group-id", "-g", required=True, help="GroupId of the artifact.")
@click.option("--artifact-id", "-a", required=True, help="ArtifactId of the artifact.")
@click.option("--version", "-v", "version", required=True, help="Version of the artifact.")
@repository_option
@config_file_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
def check(group_id, artifact_id, version, local_repository, config_file, output_format):
    """Report missing mandatory fields in an artifact's descriptor."""
    config = load_config(config_file, local_repository=local_repository)

    coordinate = ArtifactCoordinate(group_id=group_id, artifact_id=artifact_id, version=version)
    path = locate_artifact(LocalRepositoryResolver(config.get_repository_path()), coordinate)
    model = load_descriptor(path).model
    missing = model.missing_fields()
    bundle = bundle_file_name(model.final_name(coordinate), config.archive_format)

    if output_format == "json":
        click.echo(_json.dumps({
            "artifact": coordinate.project_id,
            "descriptor": str(path),
            "missing": missing,
            "bundle": bundle,
        }, indent=2))
    else:
        click.echo(click.style(f"\n  {coordinate.project_id}", bold=True))
        click.echo(f"  descriptor: {path}")
        click.echo(f"  bundle:     {bundle}")
        if missing:
            for field in missing:
                click.echo(f"{click.style('  MISSING', fg='yellow')} {field}")
        else:
            click.echo(click.style("  Descriptor is complete.", fg="green"))
        click.echo()

    if missing:
        click.get_current_context().exit(1)
