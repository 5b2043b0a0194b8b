"""
Entity Annotator

Wraps known proper nouns in [[wikilinks]]. Categories are applied in the
order of the entity pack; each later category sees the links written by the
earlier ones and never links inside them, so annotating twice gives the
same text as annotating once.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging
import re

from note_outliner.rules.load_rules import EntityPattern, load_entity_patterns

logger = logging.getLogger(__name__)

WIKILINK_RE = re.compile(r"\[\[.*?\]\]")
MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
PROPERTY_LINE_RE = re.compile(r"^\w[\w ]*::.*$", re.MULTILINE)
OPEN_RUN_RE = re.compile(r"\[{3,}")
CLOSE_RUN_RE = re.compile(r"\]{3,}")

Span = Tuple[int, int]


@dataclass
class AnnotatorConfig:
    link_properties: bool = False


def _overlaps(start: int, end: int, spans: List[Span]) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)


def already_linked(content: str, start: int, end: int) -> bool:
    before = content[max(0, start - 2):start]
    after = content[end:end + 2]
    return before == "[[" or after == "]]"


def fix_bracket_runs(content: str) -> str:
    content = OPEN_RUN_RE.sub("[[", content)
    return CLOSE_RUN_RE.sub("]]", content)


class EntityAnnotator:

    def __init__(self, patterns: Optional[List[EntityPattern]] = None, config: Optional[AnnotatorConfig] = None):
        self.patterns = patterns if patterns is not None else load_entity_patterns()
        self.config = config or AnnotatorConfig()

    def _protected_spans(self, content: str) -> List[Span]:
        spans = [m.span() for m in WIKILINK_RE.finditer(content)]
        spans.extend(m.span() for m in MARKDOWN_LINK_RE.finditer(content))
        if not self.config.link_properties:
            spans.extend(m.span() for m in PROPERTY_LINE_RE.finditer(content))
        return spans

    def annotate(self, content: str) -> str:
        linked = content
        for entity in self.patterns:
            protected = self._protected_spans(linked)
            pieces: List[str] = []
            cursor = 0
            count = 0
            for m in entity.pattern.finditer(linked):
                start, end = m.span()
                if already_linked(linked, start, end) or _overlaps(start, end, protected):
                    continue
                pieces.append(linked[cursor:start])
                pieces.append(f"[[{m.group(0)}]]")
                cursor = end
                count += 1
            if count:
                pieces.append(linked[cursor:])
                linked = "".join(pieces)
                logger.debug(f"Linked {count} {entity.category} mention(s)")
        return fix_bracket_runs(linked)

    def find_entities(self, content: str) -> Dict[str, List[str]]:
        """Distinct entity mentions per category, in order of first appearance."""
        found: Dict[str, List[str]] = {}
        for entity in self.patterns:
            seen: List[str] = []
            for m in entity.pattern.finditer(content):
                if m.group(0) not in seen:
                    seen.append(m.group(0))
            if seen:
                found[entity.category] = seen
        return found


def add_links(content: str) -> str:
    return EntityAnnotator().annotate(content)
