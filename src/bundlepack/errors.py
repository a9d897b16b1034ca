"""
Error taxonomy for bundle packing.

Every failure aborts the run. The errors subclass ``click.ClickException`` so
the CLI reports them as ``Error: <message>`` with a non-zero exit status,
while library callers can still catch them individually.
"""

import click


class BundlePackError(click.ClickException):
    """Base class for all fatal bundle-pack failures."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InputError(BundlePackError):
    """The interactive input stream could not be read, or gave nothing usable."""


class NotFoundError(BundlePackError):
    """The requested artifact or descriptor is absent."""


class ResolutionError(BundlePackError):
    """Resolving a coordinate failed for a reason other than absence."""


class ParseError(BundlePackError):
    """The project descriptor is not a well-formed project document."""


class BundleIOError(BundlePackError):
    """Reading or writing the descriptor failed."""


class ArchiveError(BundlePackError):
    """The bundle archive could not be created."""
