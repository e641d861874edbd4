"""
scene_xml package

Reader for diffusion curve, Poisson curve and gradient mesh scene files.
"""

from scene_xml.doctype import SceneFormat, detect_scene_format
from scene_xml.errors import FormatError, SceneError, SceneIOError, StructureError
from scene_xml.parser import parse_scene_file

__all__ = [
    "SceneFormat",
    "detect_scene_format",
    "SceneError",
    "SceneIOError",
    "FormatError",
    "StructureError",
    "parse_scene_file",
]
