"""
Pytest configuration and fixtures for bundlepack tests.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import pytest

from bundlepack.config import reset_config


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from BUNDLEPACK_* variables, .env files and config."""
    for key in list(os.environ):
        if key.startswith("BUNDLEPACK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installed on the bundlepack logger."""
    yield
    logger = logging.getLogger("bundlepack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ============================================================================
# Repository Fixtures
# ============================================================================


POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"


def build_pom(
    group_id: str = "com.x",
    artifact_id: str = "foo",
    version: Optional[str] = "1.0",
    packaging: Optional[str] = "jar",
    name: Optional[str] = None,
    description: Optional[str] = None,
    url: Optional[str] = None,
    licenses: Sequence[Tuple[str, str]] = (),
    final_name: Optional[str] = None,
    namespace: bool = True,
) -> str:
    """POM text containing only the elements that are given."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if namespace:
        lines.append(
            f'<project xmlns="{POM_NAMESPACE}" '
            'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            f'xsi:schemaLocation="{POM_NAMESPACE} http://maven.apache.org/maven-v4_0_0.xsd">'
        )
    else:
        lines.append("<project>")
    lines.append("  <modelVersion>4.0.0</modelVersion>")
    lines.append(f"  <groupId>{group_id}</groupId>")
    lines.append(f"  <artifactId>{artifact_id}</artifactId>")
    for tag, value in (
        ("version", version),
        ("packaging", packaging),
        ("name", name),
        ("description", description),
        ("url", url),
    ):
        if value is not None:
            lines.append(f"  <{tag}>{value}</{tag}>")
    if licenses:
        lines.append("  <licenses>")
        for license_name, license_url in licenses:
            lines.append(
                f"    <license><name>{license_name}</name><url>{license_url}</url></license>"
            )
        lines.append("  </licenses>")
    if final_name is not None:
        lines.append(f"  <build><finalName>{final_name}</finalName></build>")
    lines.append("</project>")
    return "\n".join(lines) + "\n"


COMPLETE_POM_FIELDS = dict(
    name="Foo",
    description="The foo library",
    url="https://example.com/foo",
    licenses=[("Apache-2.0", "https://www.apache.org/licenses/LICENSE-2.0")],
)


@pytest.fixture
def local_repo(tmp_path) -> Path:
    """Empty local repository under a path containing a quote character."""
    repo = tmp_path / "quotedpath'test" / "repository"
    repo.mkdir(parents=True)
    return repo


@pytest.fixture
def output_dir(tmp_path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def install_artifact(local_repo) -> Callable[..., Path]:
    """
    Install an artifact into ``local_repo``.

    Returns the descriptor path. ``files`` names companion files to create
    next to it (their content is the file name).
    """

    def _install(
        group_id: str = "com.x",
        artifact_id: str = "foo",
        version: str = "1.0",
        pom: Optional[str] = None,
        files: Iterable[str] = (),
        **pom_fields,
    ) -> Path:
        directory = local_repo.joinpath(*group_id.split("."), artifact_id, version)
        directory.mkdir(parents=True, exist_ok=True)
        pom_path = directory / f"{artifact_id}-{version}.pom"
        if pom is None:
            pom = build_pom(group_id=group_id, artifact_id=artifact_id, version=version, **pom_fields)
        pom_path.write_text(pom, encoding="utf-8")
        for name in files:
            (directory / name).write_text(name, encoding="utf-8")
        return pom_path

    return _install


@pytest.fixture
def pom_factory() -> Callable[..., str]:
    return build_pom


@pytest.fixture
def complete_fields() -> Dict:
    return dict(COMPLETE_POM_FIELDS)
