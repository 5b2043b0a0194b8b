from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import logging

from note_outliner.formatter import HierarchyFormatter
from note_outliner.ir import ConversionResult
from note_outliner.linker import EntityAnnotator

logger = logging.getLogger(__name__)


class Converter:
    """Runs formatter then annotator over notes on disk, one document at a time."""

    def __init__(
        self,
        formatter: Optional[HierarchyFormatter] = None,
        linker: Optional[EntityAnnotator] = None,
        link_entities: bool = True,
    ):
        self.formatter = formatter or HierarchyFormatter()
        self.linker = linker or EntityAnnotator()
        self.link_entities = link_entities

    def convert_text(self, content: str) -> str:
        formatted = self.formatter.format_text(content)
        if not self.link_entities:
            return formatted
        return self.linker.annotate(formatted)

    def convert_file(self, input_path: str | Path, output_path: str | Path | None = None) -> ConversionResult:
        output_path = Path(output_path or input_path)
        try:
            content = Path(input_path).read_text(encoding="utf-8")
            converted = self.convert_text(content)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(converted + "\n" if converted else "", encoding="utf-8")
        except Exception as e:
            logger.warning(f"Failed to convert {input_path}: {e}")
            return ConversionResult(success=False, file=str(input_path), error=str(e))
        logger.debug(f"Converted {input_path} -> {output_path}")
        return ConversionResult(success=True, file=str(input_path), output_path=str(output_path))

    def convert_directory(
        self,
        dir_path: str | Path,
        output_dir: str | Path | None = None,
        pattern: str = "**/*.md",
    ) -> List[ConversionResult]:
        src = Path(dir_path)
        dest = Path(output_dir) if output_dir else src
        files = sorted(f for f in src.glob(pattern) if f.is_file())
        logger.info(f"Converting {len(files)} file(s) from {src} to {dest}")

        results: List[ConversionResult] = []
        for f in files:
            results.append(self.convert_file(f, dest / f.relative_to(src)))

        failed = sum(1 for r in results if not r.success)
        if failed:
            logger.warning(f"{failed} of {len(results)} file(s) failed to convert")
        return results

    def dry_run(self, input_path: str | Path) -> str:
        try:
            content = Path(input_path).read_text(encoding="utf-8")
            return self.convert_text(content)
        except Exception as e:
            logger.warning(f"Dry run failed for {input_path}: {e}")
            return f"Error: {e}"
