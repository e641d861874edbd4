"""
scene_xml/doctype.py

Format dispatch for scene documents.

The first line of every scene file is a literal doctype marker that picks
one of two dialects:

    <!DOCTYPE SceneXML>     unified scene (curve_set, poisson_curve_set, mesh_set)
    <!DOCTYPE CurveSetXML>  legacy curve-only file with swapped axes and sides
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from scene_xml.errors import FormatError, SceneIOError

log = logging.getLogger(__name__)


class SceneFormat(Enum):
    """Dialect of a scene document."""
    UNIFIED = "SceneXML"
    LEGACY = "CurveSetXML"


DOCTYPES: Dict[str, SceneFormat] = {
    "<!DOCTYPE SceneXML>": SceneFormat.UNIFIED,
    "<!DOCTYPE CurveSetXML>": SceneFormat.LEGACY,
}

SCENE_ROOT_TAG = "scene"

_BOM = "\ufeff"


@dataclass
class SceneDocument:
    """A parsed document together with its dialect.

    Attributes:
        format: Dialect selected by the doctype line.
        root: Element that holds the scene attributes and collections.
    """
    format: SceneFormat
    root: ET.Element


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def format_for_doctype(line: str) -> Optional[SceneFormat]:
    """Return the dialect named by a doctype line, or ``None``."""
    return DOCTYPES.get(line)


def detect_scene_format(path: str, encoding: str = "utf-8") -> Optional[SceneFormat]:
    """Check which dialect a file declares without parsing it.

    Args:
        path: Path to the XML file.
        encoding: Text encoding of the file.

    Returns:
        The declared ``SceneFormat``, or ``None`` if the file cannot be read
        or its first line is not a recognized doctype.
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            line = f.readline()
    except (OSError, UnicodeDecodeError):
        return None
    return format_for_doctype(line.lstrip(_BOM).rstrip("\n"))


def load_scene_document(path: str, encoding: str = "utf-8") -> SceneDocument:
    """Read *path*, check its doctype and locate the scene root.

    The XML is parsed before the doctype is judged, so a malformed file
    always reports ``SceneIOError`` whatever its first line says.

    Raises:
        SceneIOError: The file cannot be opened or is not well-formed XML.
        FormatError: Unrecognized doctype, or no ``<scene>`` root in a
            unified document.
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except OSError as e:
        raise SceneIOError(f"Cannot load file: {path}") from e
    except UnicodeDecodeError as e:
        raise SceneIOError(f"Cannot load XML file: {path} ({e})") from e

    text = text.lstrip(_BOM)
    doc_type = _first_line(text)

    try:
        document_element = ET.fromstring(text)
    except ET.ParseError as e:
        raise SceneIOError(f"Cannot load XML file: {path} ({e})") from e

    scene_format = format_for_doctype(doc_type)
    if scene_format is None:
        raise FormatError(f"Unrecognized DOCTYPE in XML file {path}: {doc_type!r}")

    if scene_format is SceneFormat.UNIFIED and document_element.tag != SCENE_ROOT_TAG:
        raise FormatError(
            f"Cannot find <{SCENE_ROOT_TAG}> in XML file {path} (root is <{document_element.tag}>)"
        )

    log.debug("%s: %s document, root <%s>", path, scene_format.value, document_element.tag)
    return SceneDocument(format=scene_format, root=document_element)
