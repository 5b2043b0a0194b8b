from __future__ import annotations
import re
from typing import List
from note_outliner.ir import ClassifiedLine, LineKind
from note_outliner.rules.load_rules import OutlineRules

HEADER_RE = re.compile(r"^(#+)\s+(.+)$")
PROPERTY_RE = re.compile(r"^([A-Za-z][A-Za-z0-9_\- ]*?):\s+(\S.*)$")
BULLET_RE = re.compile(r"^(\t*)[ \t]*([-*])(?:\s+(.*))?$")
_SINGLE_WORD_KEY = re.compile(r"^[A-Za-z][\w-]*$")


def split_lines(text: str) -> List[str]:
    """Split on LF only. A final newline adds no empty line; a trailing CR is dropped."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [l[:-1] if l.endswith("\r") else l for l in lines]


def clean_label(line: str) -> str:
    """'- Features::  ' -> 'Features:'"""
    label = line.strip()
    label = re.sub(r"^-\s*", "", label)
    label = re.sub(r":+\s*$", "", label)
    return f"{label}:"


def is_property_line(line: str, rules: OutlineRules) -> bool:
    stripped = line.strip()
    if "::" in stripped:
        return False
    m = PROPERTY_RE.match(stripped)
    if not m:
        return False
    key = m.group(1).strip()
    return bool(_SINGLE_WORD_KEY.match(key)) or rules.is_property_key(key)


def classify_line(line: str, rules: OutlineRules) -> ClassifiedLine:
    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)

    m = HEADER_RE.match(line.rstrip())
    if m:
        return ClassifiedLine(LineKind.HEADER, line, text=m.group(2).strip(), level=len(m.group(1)))

    if rules.is_list_section(line):
        return ClassifiedLine(LineKind.LIST_SECTION, line, text=clean_label(line))

    if is_property_line(line, rules):
        return ClassifiedLine(LineKind.PROPERTY, line, text=line.strip())

    m = BULLET_RE.match(line)
    if m:
        return ClassifiedLine(
            LineKind.BULLET, line,
            text=(m.group(3) or "").strip(),
            marker=m.group(2),
            leading_tabs=len(m.group(1)),
        )

    return ClassifiedLine(LineKind.PLAIN, line, text=line.strip())
