"""
scene_xml/attributes.py

Typed attribute queries on ``xml.etree.ElementTree`` elements.

A missing attribute yields the caller's default, so an absent value is
never confused with a parsed zero.  An attribute that is present but
cannot be parsed also yields the default and is logged.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Optional

log = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


def query_int(element: ET.Element, name: str, default: int = 0) -> int:
    """Read an integer attribute, or *default* if absent or malformed."""
    raw = element.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        log.warning("<%s %s=%r> is not an integer; using %d", element.tag, name, raw, default)
        return default


def query_float(element: ET.Element, name: str, default: float = 0.0) -> float:
    """Read a floating-point attribute, or *default* if absent or malformed."""
    raw = element.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        log.warning("<%s %s=%r> is not a number; using %g", element.tag, name, raw, default)
        return default


def query_bool(element: ET.Element, name: str, default: bool = False) -> bool:
    """Read a boolean attribute (``true``/``false``/``1``/``0``, any case)."""
    raw = element.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    log.warning("<%s %s=%r> is not a boolean; using %s", element.tag, name, raw, default)
    return default


def query_str(element: ET.Element, name: str, default: Optional[str] = None) -> Optional[str]:
    return element.get(name, default)
