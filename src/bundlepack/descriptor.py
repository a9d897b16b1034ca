"""
Project descriptor (POM) reading and writing.

The document is kept as an ElementTree so that a rewrite preserves
everything the packer does not model: other elements, comments (including
a license header ahead of <project>), the default Maven namespace and
``xsi:schemaLocation``. Only the fields of
ProjectDescriptor are synced back, and only by adding or updating
elements, never by removing them.

Usage:
    document = load_descriptor(path)
    document.model.description = "A library"
    document.write()
"""

from __future__ import annotations

import io
import logging
import shutil
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple, Union

from bundlepack.errors import BundleIOError, NotFoundError, ParseError
from bundlepack.fileio import atomic_write_with_backup, backup_path_for
from bundlepack.models import BuildSpec, License, ParentSpec, ProjectDescriptor

logger = logging.getLogger(__name__)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Canonical element order of a POM's top level, used to place new elements.
CANONICAL_ORDER = (
    "modelVersion",
    "parent",
    "groupId",
    "artifactId",
    "version",
    "packaging",
    "name",
    "description",
    "url",
    "inceptionYear",
    "organization",
    "licenses",
    "developers",
    "contributors",
    "mailingLists",
    "prerequisites",
    "modules",
    "scm",
    "issueManagement",
    "ciManagement",
    "distributionManagement",
    "properties",
    "dependencyManagement",
    "dependencies",
    "repositories",
    "pluginRepositories",
    "build",
    "reporting",
    "profiles",
)

_SCALAR_FIELDS = ("packaging", "name", "description", "url")

ET.register_namespace("xsi", XSI_NAMESPACE)


def _split_tag(tag: str) -> Tuple[str, str]:
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


class DescriptorDocument:
    """A parsed project descriptor bound to its file."""

    def __init__(
        self,
        path: Path,
        tree: ET.ElementTree,
        namespace: str,
        model: ProjectDescriptor,
        prolog: Optional[List[str]] = None,
        epilog: Optional[List[str]] = None,
    ):
        self.path = path
        self.tree = tree
        self.namespace = namespace
        self.model = model
        # comments before and after <project>, which ElementTree does not keep
        self.prolog = list(prolog or [])
        self.epilog = list(epilog or [])

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    def _q(self, tag: str) -> str:
        return f"{{{self.namespace}}}{tag}" if self.namespace else tag

    def _child(self, parent: ET.Element, tag: str) -> Optional[ET.Element]:
        return parent.find(self._q(tag))

    def _insert(self, tag: str) -> ET.Element:
        """Create a top-level element at its canonical position."""
        rank = CANONICAL_ORDER.index(tag)
        position = 0
        for index, child in enumerate(self.root):
            if not isinstance(child.tag, str):
                continue
            _, local = _split_tag(child.tag)
            if local in CANONICAL_ORDER and CANONICAL_ORDER.index(local) < rank:
                position = index + 1
        element = ET.Element(self._q(tag))
        self.root.insert(position, element)
        return element

    def sync(self) -> None:
        """Copy the model's editable fields into the XML tree."""
        for field in _SCALAR_FIELDS:
            value = getattr(self.model, field)
            if value is None:
                continue
            element = self._child(self.root, field)
            if element is None:
                element = self._insert(field)
            if (element.text or "").strip() != value:
                element.text = value

        licenses = self._child(self.root, "licenses")
        present = 0 if licenses is None else len(licenses.findall(self._q("license")))
        for license in self.model.licenses[present:]:
            if licenses is None:
                licenses = self._insert("licenses")
            element = ET.SubElement(licenses, self._q("license"))
            if license.name is not None:
                ET.SubElement(element, self._q("name")).text = license.name
            if license.url is not None:
                ET.SubElement(element, self._q("url")).text = license.url

    def to_bytes(self) -> bytes:
        """Serialize the (synced) tree as an indented UTF-8 XML document."""
        self.sync()
        if self.namespace:
            ET.register_namespace("", self.namespace)
        ET.indent(self.tree, space="  ")
        buffer = io.BytesIO()
        buffer.write(b"<?xml version='1.0' encoding='UTF-8'?>\n")
        for text in self.prolog:
            buffer.write(f"<!--{text}-->\n".encode("utf-8"))
        self.tree.write(buffer, encoding="UTF-8", xml_declaration=False)
        buffer.write(b"\n")
        for text in self.epilog:
            buffer.write(f"<!--{text}-->\n".encode("utf-8"))
        return buffer.getvalue()

    def write(self, atomic: bool = True, backup: bool = False) -> None:
        """
        Rewrite the descriptor file in place.

        Args:
            atomic: Write a temporary file and rename it over the original
            backup: Keep the previous content as ``<file>.bak``

        Raises:
            BundleIOError: If the file cannot be written
        """
        data = self.to_bytes()
        try:
            if atomic:
                atomic_write_with_backup(self.path, data, backup=backup)
            else:
                if backup and self.path.exists():
                    shutil.copy2(self.path, backup_path_for(self.path))
                self.path.write_bytes(data)
        except OSError as exc:
            raise BundleIOError(f"Unable to write POM at {self.path.absolute()}: {exc}") from exc
        logger.info("Rewrote %s", self.path)


def _text(parent: Optional[ET.Element], tag: str) -> Optional[str]:
    if parent is None:
        return None
    element = parent.find(tag)
    if element is None:
        return None
    return (element.text or "").strip()


def _read_model(root: ET.Element, namespace: str) -> ProjectDescriptor:
    def q(tag: str) -> str:
        return f"{{{namespace}}}{tag}" if namespace else tag

    licenses: List[License] = []
    licenses_element = root.find(q("licenses"))
    if licenses_element is not None:
        for element in licenses_element.findall(q("license")):
            licenses.append(License(name=_text(element, q("name")), url=_text(element, q("url"))))

    build = None
    build_element = root.find(q("build"))
    if build_element is not None:
        build = BuildSpec(final_name=_text(build_element, q("finalName")))

    parent = None
    parent_element = root.find(q("parent"))
    if parent_element is not None:
        parent = ParentSpec(
            group_id=_text(parent_element, q("groupId")),
            artifact_id=_text(parent_element, q("artifactId")),
            version=_text(parent_element, q("version")),
        )

    return ProjectDescriptor(
        group_id=_text(root, q("groupId")),
        artifact_id=_text(root, q("artifactId")),
        version=_text(root, q("version")),
        packaging=_text(root, q("packaging")),
        name=_text(root, q("name")),
        description=_text(root, q("description")),
        url=_text(root, q("url")),
        licenses=licenses,
        build=build,
        parent=parent,
    )


def _outer_comments(path: Path) -> Tuple[List[str], List[str]]:
    """Comments outside the root element, split into before and after it."""
    prolog: List[str] = []
    epilog: List[str] = []
    depth = 0
    seen_root = False
    for event, item in ET.iterparse(path, events=("start", "end", "comment")):
        if event == "start":
            depth += 1
            seen_root = True
        elif event == "end":
            depth -= 1
        elif depth == 0:
            (epilog if seen_root else prolog).append(item.text or "")
    return prolog, epilog


def load_descriptor(path: Union[str, Path]) -> DescriptorDocument:
    """
    Read a project descriptor.

    Raises:
        NotFoundError: If the file does not exist
        ParseError: If the file is not well-formed XML or not a project
        BundleIOError: If the file cannot be read
    """
    path = Path(path)
    location = path.absolute()
    try:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        tree = ET.parse(path, parser=parser)
        prolog, epilog = _outer_comments(path)
    except FileNotFoundError as exc:
        raise NotFoundError(f"Unable to read POM at {location}: {exc.strerror}") from exc
    except ET.ParseError as exc:
        raise ParseError(f"Unable to parse POM at {location}: {exc}") from exc
    except OSError as exc:
        raise BundleIOError(f"Unable to read POM at {location}: {exc}") from exc

    root = tree.getroot()
    namespace, local = _split_tag(root.tag)
    if local != "project":
        raise ParseError(
            f"Unable to parse POM at {location}: root element is <{local}>, expected <project>"
        )

    model = _read_model(root, namespace)
    logger.debug("Loaded descriptor %s (%s)", location, model.artifact_id)
    return DescriptorDocument(path, tree, namespace, model, prolog=prolog, epilog=epilog)
