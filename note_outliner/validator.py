"""
Structure Validator

Checks converted outliner text for the shapes the converter is supposed to
produce. Each check is independent and returns (errors, warnings); errors
make a document invalid, warnings are style guidance only.
"""
from __future__ import annotations
from pathlib import Path
from typing import Callable, Dict, List, Tuple
import logging
import re

from note_outliner.classify import split_lines
from note_outliner.ir import ValidationResult

logger = logging.getLogger(__name__)

CheckOutput = Tuple[List[str], List[str]]

DOUBLE_COLON_PROPERTY_RE = re.compile(r"^\w+::")
SINGLE_COLON_PROPERTY_RE = re.compile(r"^\w+:\s")
RAW_HEADER_RE = re.compile(r"^\s*#+\s+\w")
BULLETED_HEADER_RE = re.compile(r"^\s*-\s*#+")
BULLET_RE = re.compile(r"^[ \t]*-")
MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def check_properties(lines: List[str]) -> CheckOutput:
    errors: List[str] = []
    warnings: List[str] = []

    has_properties = any(DOUBLE_COLON_PROPERTY_RE.match(l) for l in lines)
    if has_properties and not DOUBLE_COLON_PROPERTY_RE.match(lines[0]):
        warnings.append("Properties should be at the beginning of the file")

    for i, line in enumerate(lines, start=1):
        if SINGLE_COLON_PROPERTY_RE.match(line) and not DOUBLE_COLON_PROPERTY_RE.match(line):
            errors.append(f"Line {i}: Property should use '::' not ':'")
    return errors, warnings


def check_headers(lines: List[str]) -> CheckOutput:
    errors: List[str] = []
    for i, line in enumerate(lines, start=1):
        if RAW_HEADER_RE.match(line) and not BULLETED_HEADER_RE.match(line):
            errors.append(f"Line {i}: Header should be in bullet format (- # Header)")
    return errors, []


def check_bullets(lines: List[str]) -> CheckOutput:
    content_lines = [l for l in lines if l.strip() and not DOUBLE_COLON_PROPERTY_RE.match(l)]
    non_bullet = [l for l in content_lines if not BULLET_RE.match(l)]
    if non_bullet:
        return [], [f"{len(non_bullet)} lines without bullet points found"]
    return [], []


def check_links(content: str) -> CheckOutput:
    errors: List[str] = []
    warnings: List[str] = []
    if "[[[" in content:
        errors.append("Triple brackets found - possible linking error")
    if "]]]" in content:
        errors.append("Triple closing brackets found - possible linking error")
    if MARKDOWN_LINK_RE.search(content):
        warnings.append("Markdown-style links found - consider using [[wikilinks]]")
    return errors, warnings


CHECKS: Dict[str, Callable[[str], CheckOutput]] = {
    "properties": lambda content: check_properties(split_lines(content)),
    "headers": lambda content: check_headers(split_lines(content)),
    "bullets": lambda content: check_bullets(split_lines(content)),
    "links": check_links,
}


class StructureValidator:

    def validate(self, content: str) -> ValidationResult:
        errors: List[str] = []
        warnings: List[str] = []
        if content:
            for check in CHECKS.values():
                e, w = check(content)
                errors.extend(e)
                warnings.extend(w)
        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def validate_file(self, file_path: str | Path) -> ValidationResult:
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {file_path}: {e}")
            return ValidationResult(valid=False, errors=[f"Failed to read file: {e}"], file=str(file_path))
        result = self.validate(content)
        result.file = str(file_path)
        return result

    def validate_directory(self, dir_path: str | Path, pattern: str = "**/*.md") -> List[ValidationResult]:
        files = sorted(Path(dir_path).glob(pattern))
        logger.info(f"Validating {len(files)} file(s) under {dir_path}")
        return [self.validate_file(f) for f in files if f.is_file()]


def aggregate(results: List[ValidationResult]) -> ValidationResult:
    """Fold per-document results into one, prefixing messages with the file name."""
    total = ValidationResult()
    for r in results:
        prefix = f"{r.file}: " if r.file else ""
        total.errors.extend(prefix + e for e in r.errors)
        total.warnings.extend(prefix + w for w in r.warnings)
    total.valid = not total.errors
    return total


def validate(content: str) -> ValidationResult:
    return StructureValidator().validate(content)
