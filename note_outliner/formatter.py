"""
Hierarchy Formatter

Rebuilds a note's hierarchy as outliner bullets. Every header, property,
list item and paragraph becomes one dash-prefixed line, indented with tabs
to the depth of the section it belongs to.

The only state is a FoldState threaded through a single pass over the lines:
- stack: one slot per open header level; depth of body lines is len(stack)
- in_list_section: set by a named list label ("Features:"), cleared by a
  header or a property line; bumps following bullets and paragraphs one level
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import logging

from note_outliner.classify import classify_line, split_lines
from note_outliner.frontmatter import extract_front_matter, format_properties
from note_outliner.ir import ClassifiedLine, FoldState, LineKind, OutputLine
from note_outliner.rules.load_rules import OutlineRules, load_outline_rules

logger = logging.getLogger(__name__)


class HierarchyFormatter:

    def __init__(self, rules: Optional[OutlineRules] = None):
        self.rules = rules or load_outline_rules()

    def format(self, content: str) -> List[OutputLine]:
        """Format a whole document, lifting its front matter into properties."""
        front_matter, body = extract_front_matter(content)
        return self.format_lines(split_lines(body), front_matter)

    def format_text(self, content: str) -> str:
        return render(self.format(content))

    def format_lines(
        self,
        lines: Iterable[str],
        front_matter: Optional[Dict[str, Any]] = None,
    ) -> List[OutputLine]:
        out: List[OutputLine] = []
        if front_matter is not None:
            for prop in format_properties(front_matter):
                out.append(OutputLine(0, prop, LineKind.PROPERTY))
            out.append(OutputLine(0, "", LineKind.BLANK))

        state = FoldState()
        for line in lines:
            classified = classify_line(line, self.rules)
            out.append(self._step(classified, state))
        return out

    def _step(self, line: ClassifiedLine, state: FoldState) -> OutputLine:
        kind = line.kind

        if kind is LineKind.BLANK:
            return OutputLine(0, "", kind)

        if kind is LineKind.HEADER:
            state.open_header(line.level)
            state.in_list_section = False
            return OutputLine(line.level - 1, f"- {'#' * line.level} {line.text}", kind)

        if kind is LineKind.LIST_SECTION:
            state.in_list_section = True
            logger.debug(f"List section {line.text!r} at depth {state.depth}")
            return OutputLine(state.depth, f"- {line.text}", kind)

        if kind is LineKind.PROPERTY:
            state.in_list_section = False
            return OutputLine(state.depth, f"- {line.text}", kind)

        base = state.depth + (1 if state.in_list_section else 0)
        if kind is LineKind.BULLET:
            # an empty bullet renders as a bare "-", no trailing space
            return OutputLine(base + line.leading_tabs, f"- {line.text}".rstrip(), kind)

        return OutputLine(base, f"- {line.text}", LineKind.PLAIN)


def render(lines: List[OutputLine]) -> str:
    return "\n".join(l.render() for l in lines)


def format_for_outliner(content: str, rules: Optional[OutlineRules] = None) -> str:
    return HierarchyFormatter(rules).format_text(content)
