"""Pick the files that accompany an artifact in its repository directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from bundlepack.prompt import Prompter

logger = logging.getLogger(__name__)


def select_project_files(
    directory: Path,
    final_name: str,
    descriptor_path: Optional[Path],
    prompter: Prompter,
    batch_mode: bool = False,
) -> List[Path]:
    """
    List the files in ``directory`` that belong to the artifact.

    A file belongs to it when its name starts with ``final_name``. The
    descriptor itself is left out since the bundle stores it under its
    canonical name, and so are bundles written by earlier runs. In batch
    mode every match is taken; otherwise each one is confirmed.
    """
    directory = Path(directory)
    bundle_prefix = f"{final_name}-bundle."
    skip = Path(descriptor_path).resolve() if descriptor_path is not None else None

    candidates = sorted(
        (
            path
            for path in directory.iterdir()
            if path.is_file()
            and path.name.startswith(final_name)
            and not path.name.startswith(bundle_prefix)
        ),
        key=lambda path: path.name,
    )

    selected: List[Path] = []
    for path in candidates:
        if skip is not None and path.resolve() == skip:
            continue
        if batch_mode or prompter.confirm(
            f"include:{path.name}",
            f"Include file '{path.name}' in bundle?",
            default=True,
        ):
            selected.append(path)
        else:
            logger.info("Excluding %s from bundle", path.name)

    return selected
