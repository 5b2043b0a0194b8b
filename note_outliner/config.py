from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import yaml

from note_outliner.converter import Converter
from note_outliner.formatter import HierarchyFormatter
from note_outliner.linker import AnnotatorConfig, EntityAnnotator
from note_outliner.rules.load_rules import load_entity_patterns, load_outline_rules

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NOTE_OUTLINER_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "note_outliner.yml"


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """Load YAML settings. A missing or unreadable file yields an empty config."""
    config_file = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    if not config_file.exists():
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config {config_file}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_file}: expected a mapping")
        return {}
    return data


def build_converter(config: Optional[Dict[str, Any]] = None) -> Converter:
    config = config or {}
    rules = load_outline_rules(config.get("outline_rules"))
    patterns = load_entity_patterns(config.get("entities"))
    linker = EntityAnnotator(
        patterns,
        AnnotatorConfig(link_properties=bool(config.get("link_properties", False))),
    )
    return Converter(
        formatter=HierarchyFormatter(rules),
        linker=linker,
        link_entities=bool(config.get("link_entities", True)),
    )
