from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class LineKind(str, Enum):
    BLANK = "blank"
    HEADER = "header"
    PROPERTY = "property"
    LIST_SECTION = "list_section"
    BULLET = "bullet"
    PLAIN = "plain"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    raw: str
    text: str = ""          # payload: header text, cleaned label, bullet content
    level: int = 0          # header level (number of '#')
    marker: str = ""        # '-' | '*' for bullets
    leading_tabs: int = 0   # author-authored nesting on bullets


@dataclass
class OutputLine:
    indent: int
    text: str               # includes the "- " prefix; empty for blank lines
    kind: LineKind = LineKind.PLAIN

    def render(self) -> str:
        if not self.text:
            return ""
        return "\t" * self.indent + self.text


@dataclass
class FoldState:
    """Running state of the formatter's single left-to-right pass."""
    stack: List[Optional[int]] = field(default_factory=list)
    in_list_section: bool = False

    @property
    def depth(self) -> int:
        return len(self.stack)

    def open_header(self, level: int) -> None:
        del self.stack[level - 1:]
        while len(self.stack) < level - 1:
            self.stack.append(None)
        self.stack.append(level)


@dataclass
class ValidationResult:
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ConversionResult:
    success: bool
    file: Optional[str] = None
    output_path: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
