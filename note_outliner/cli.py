from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

from note_outliner.config import build_converter, load_config
from note_outliner.report import render_txt, results_payload, write_json
from note_outliner.template_engine import TemplateEngine
from note_outliner.validator import StructureValidator


def _emit(args, payload) -> None:
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(render_txt(payload))
    if args.report:
        write_json(args.report, payload)


def _parse_assignments(items: List[str]) -> Dict[str, object]:
    data: Dict[str, object] = {}
    for item in items or []:
        if "=" not in item:
            raise ValueError(f"Expected key=value, got: {item}")
        key, value = item.split("=", 1)
        key = key.strip()
        # repeated keys build a list (features, hooks, ...)
        if key in data:
            prev = data[key]
            data[key] = (prev if isinstance(prev, list) else [prev]) + [value]
        else:
            data[key] = value
    return data


def _cmd_convert(args, config) -> int:
    converter = build_converter(config)
    path = Path(args.path)
    if path.is_dir():
        results = converter.convert_directory(path, args.out, pattern=config.get("pattern", "**/*.md"))
    else:
        out = Path(args.out) / path.name if args.out else None
        results = [converter.convert_file(path, out)]
    _emit(args, results_payload(conversions=results))
    return 0 if all(r.success for r in results) else 1


def _cmd_validate(args, config) -> int:
    validator = StructureValidator()
    path = Path(args.path)
    if path.is_dir():
        results = validator.validate_directory(path, pattern=config.get("pattern", "**/*.md"))
    else:
        results = [validator.validate_file(path)]
    _emit(args, results_payload(validations=results))
    return 0 if all(r.valid for r in results) else 1


def _cmd_dry_run(args, config) -> int:
    text = build_converter(config).dry_run(args.path)
    if text.startswith("Error: "):
        print(text, file=sys.stderr)
        return 1
    print(text)
    return 0


def _cmd_new(args, config) -> int:
    engine = TemplateEngine(config.get("templates_dir"))
    try:
        data = _parse_assignments(args.set)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    result = engine.create_from_template(args.template, args.output, data)
    _emit(args, results_payload(conversions=[result]))
    return 0 if result.success else 1


def _cmd_templates(args, config) -> int:
    for name in TemplateEngine(config.get("templates_dir")).available_templates():
        print(name)
    return 0


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="note-outline",
        description="Convert markdown notes into outliner bullets with entity links",
    )
    ap.add_argument("--config", help="Path to YAML config (or set NOTE_OUTLINER_CONFIG)")
    ap.add_argument("--json", action="store_true", help="Print results as JSON")
    ap.add_argument("--report", help="Also write the JSON report to this path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", help="Convert a note or a directory of notes")
    p.add_argument("path", help="Markdown file or directory")
    p.add_argument("--out", default=None, help="Output directory (default: in place)")
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("validate", help="Check converted notes for structural problems")
    p.add_argument("path", help="Markdown file or directory")
    p.set_defaults(func=_cmd_validate)

    p = sub.add_parser("dry-run", help="Print the converted text without writing")
    p.add_argument("path", help="Markdown file")
    p.set_defaults(func=_cmd_dry_run)

    p = sub.add_parser("new", help="Create a note from a template")
    p.add_argument("template", help="Template name (see 'templates')")
    p.add_argument("output", help="Path of the note to create")
    p.add_argument("--set", action="append", metavar="KEY=VALUE", help="Template value; repeat a key for lists")
    p.set_defaults(func=_cmd_new)

    p = sub.add_parser("templates", help="List available templates")
    p.set_defaults(func=_cmd_templates)

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
