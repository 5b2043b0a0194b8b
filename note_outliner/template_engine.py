"""
Note templates.

Renders new outliner notes from the Jinja2 templates shipped in
``note_outliner/templates/``. Templates get three helpers:

- ``link(text)``      -> ``[[text]]``
- ``tag(text)``       -> ``#lower-hyphenated``
- ``property(k, v)``  -> ``k:: v``
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import re

from jinja2 import Environment, FileSystemLoader, TemplateError

from note_outliner.ir import ConversionResult

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
TEMPLATE_SUFFIX = ".md.j2"


def link(text: Any) -> str:
    return f"[[{text}]]"


def tag(text: Any) -> str:
    return "#" + re.sub(r"\s+", "-", str(text).strip().lower())


def prop(key: Any, value: Any) -> str:
    return f"{key}:: {value}"


class TemplateEngine:

    def __init__(self, templates_dir: str | Path | None = None):
        self.templates_dir = Path(templates_dir) if templates_dir else TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(link=link, tag=tag, property=prop)

    def available_templates(self) -> List[str]:
        return sorted(p.name[: -len(TEMPLATE_SUFFIX)] for p in self.templates_dir.glob(f"*{TEMPLATE_SUFFIX}"))

    def render(self, template_name: str, data: Optional[Dict[str, Any]] = None) -> str:
        filename = f"{template_name}{TEMPLATE_SUFFIX}"
        outside = "/" in template_name or "\\" in template_name or template_name.startswith(".")
        if outside or not (self.templates_dir / filename).is_file():
            raise FileNotFoundError(f"Template not found: {template_name}")
        return self.env.get_template(filename).render(**(data or {}))

    def create_from_template(
        self,
        template_name: str,
        output_path: str | Path,
        data: Optional[Dict[str, Any]] = None,
    ) -> ConversionResult:
        try:
            content = self.render(template_name, data)
            out = Path(output_path)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(content, encoding="utf-8")
        except (OSError, TemplateError) as e:
            logger.warning(f"Could not create {output_path} from {template_name}: {e}")
            return ConversionResult(success=False, file=template_name, error=str(e))
        return ConversionResult(success=True, file=template_name, output_path=str(output_path))
