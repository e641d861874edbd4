"""
scene_xml/errors.py

Exceptions raised while reading a scene document.
"""

from __future__ import annotations


class SceneError(Exception):
    """Base class for every scene loading failure."""


class SceneIOError(SceneError, OSError):
    """The file cannot be opened, or its content is not well-formed XML."""


class FormatError(SceneError):
    """Unrecognized doctype line, or the mandatory root element is missing."""


class StructureError(SceneError):
    """Declared counts do not match the document content."""
