"""
bundlepack CLI - Pack locally installed artifacts into upload bundles.

Commands:
    bundlepack pack     Validate an artifact's descriptor and write its upload bundle
    bundlepack check    Report missing mandatory descriptor fields
"""

import click

from bundlepack import __version__

from .check import check
from .pack import pack


@click.group()
@click.version_option(version=__version__, prog_name="bundlepack")
def main():
    """bundlepack - Upload bundles from a local artifact repository."""
    pass


main.add_command(pack)
main.add_command(check)


if __name__ == "__main__":
    main()
