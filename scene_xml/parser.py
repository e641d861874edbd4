"""
scene_xml/parser.py

Read a scene XML file into a ``models.Scene``.

Two dialects are supported (see ``scene_xml.doctype``):

- Unified ``SceneXML``: a ``<scene image_width=.. image_height=..>`` root
  with optional ``curve_set``, ``poisson_curve_set`` and ``mesh_set``
  children.
- Legacy ``CurveSetXML``: the root itself carries ``image_width``,
  ``image_height``, ``nb_curves`` and the ``<curve>`` children, with
  x/y, red/blue and left/right swapped.
"""

from __future__ import annotations

import logging

from models import Scene
from scene_xml.assemblers import read_diffusion_curves, read_gradient_meshes, read_poisson_curves
from scene_xml.attributes import query_int
from scene_xml.doctype import SceneFormat, load_scene_document

log = logging.getLogger(__name__)


def parse_scene_file(path: str, encoding: str = "utf-8") -> Scene:
    """Parse a scene XML file.

    Args:
        path: Path to the ``.xml`` file.
        encoding: Text encoding of the file.

    Returns:
        The fully built, immutable ``Scene``.

    Raises:
        SceneIOError: The file cannot be opened or is not well-formed XML.
        FormatError: Unrecognized doctype or missing root element.
        StructureError: Declared counts do not match the document content.
    """
    document = load_scene_document(path, encoding=encoding)
    root = document.root

    width = query_int(root, "image_width", 0)
    height = query_int(root, "image_height", 0)
    image_size = (width, height)

    diffusion_curves = ()
    poisson_curves = ()
    gradient_meshes = ()

    if document.format is SceneFormat.LEGACY:
        diffusion_curves = read_diffusion_curves(root, swap=True, image_size=image_size)
    else:
        curve_set = root.find("curve_set")
        if curve_set is not None:
            diffusion_curves = read_diffusion_curves(curve_set, swap=False, image_size=image_size)

        poisson_set = root.find("poisson_curve_set")
        if poisson_set is not None:
            poisson_curves = read_poisson_curves(poisson_set)

        mesh_set = root.find("mesh_set")
        if mesh_set is not None:
            gradient_meshes = read_gradient_meshes(mesh_set, image_size=image_size)

    log.info(
        "Loaded %s (%dx%d): %d diffusion curves, %d Poisson curves, %d gradient meshes",
        path, width, height, len(diffusion_curves), len(poisson_curves), len(gradient_meshes),
    )
    return Scene(
        width=width,
        height=height,
        diffusion_curves=diffusion_curves,
        poisson_curves=poisson_curves,
        gradient_meshes=gradient_meshes,
    )
