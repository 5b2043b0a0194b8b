"""
Front matter handling.

A front-matter block is a line of exactly ``---`` at the very first character
of the document, a YAML mapping body, and a closing ``---`` line. A block
that fails to parse, or that does not hold a mapping, is treated as absent
and stays in the body as ordinary text.
"""
from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import logging
import re

import yaml

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def extract_front_matter(content: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Return ``(mapping, body)``. On any failure the mapping is None and body is the input."""
    m = FRONT_MATTER_RE.match(content)
    if not m:
        return None, content
    try:
        data = yaml.safe_load(m.group(1))
    except (yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning(f"Ignoring malformed front matter: {e}")
        return None, content
    if not isinstance(data, dict):
        logger.debug("Front matter block is not a mapping; treating as body text")
        return None, content
    return data, content[m.end():]


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_property(key: Any, value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value_str = ", ".join(_scalar(v) for v in value)
    elif isinstance(value, dict):
        value_str = repr(value)
    else:
        value_str = _scalar(value)
    return f"{key}:: {value_str}"


def format_properties(data: Dict[str, Any]) -> List[str]:
    return [format_property(k, v) for k, v in data.items()]
