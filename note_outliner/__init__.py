"""
Note Outliner

Converts markdown notes (with optional YAML front matter) into outliner
bullets and links known entities as [[wikilinks]].

Stages:
1. HierarchyFormatter - headers, properties, list sections and paragraphs
   become tab-indented bullets
2. EntityAnnotator - known names become [[links]]
3. StructureValidator - checks the converted text
"""
from note_outliner.formatter import HierarchyFormatter, format_for_outliner
from note_outliner.linker import EntityAnnotator, AnnotatorConfig, add_links
from note_outliner.validator import StructureValidator, aggregate, validate
from note_outliner.converter import Converter
from note_outliner.ir import ConversionResult, OutputLine, ValidationResult

__all__ = [
    "HierarchyFormatter",
    "format_for_outliner",
    "EntityAnnotator",
    "AnnotatorConfig",
    "add_links",
    "StructureValidator",
    "aggregate",
    "validate",
    "Converter",
    "ConversionResult",
    "OutputLine",
    "ValidationResult",
]
