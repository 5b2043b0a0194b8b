from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import json

from note_outliner.ir import ConversionResult, ValidationResult
from note_outliner.validator import aggregate


def results_payload(
    conversions: Optional[List[ConversionResult]] = None,
    validations: Optional[List[ValidationResult]] = None,
) -> Dict[str, Any]:
    conversions = conversions or []
    validations = validations or []
    payload: Dict[str, Any] = {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "stats": {
            "converted": sum(1 for c in conversions if c.success),
            "conversion_failures": sum(1 for c in conversions if not c.success),
            "validated": len(validations),
            "invalid": sum(1 for v in validations if not v.valid),
        },
        "conversions": [c.to_dict() for c in conversions],
        "validations": [v.to_dict() for v in validations],
    }
    if validations:
        payload["aggregate"] = aggregate(validations).to_dict()
    return payload


def write_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def render_txt(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append(f"Outline Report - {payload.get('timestamp_utc')}")
    lines.append("")
    stats = payload.get("stats", {})
    lines.append("Stats")
    for k, v in stats.items():
        lines.append(f"- {k}: {v}")
    lines.append("")

    conversions = payload.get("conversions", []) or []
    if conversions:
        lines.append("Conversions")
        for c in conversions:
            if c["success"]:
                lines.append(f"- OK   {c['file']} -> {c['output_path']}")
            else:
                lines.append(f"- FAIL {c['file']}: {c['error']}")
        lines.append("")

    validations = payload.get("validations", []) or []
    if validations:
        lines.append("Validation")
        for v in validations:
            status = "valid" if v["valid"] else "INVALID"
            lines.append(f"- {v['file'] or '<text>'}: {status}")
            for e in v["errors"][:40]:
                lines.append(f"    [ERROR] {e}")
            if len(v["errors"]) > 40:
                lines.append(f"    ... plus {len(v['errors'])-40} more.")
            for w in v["warnings"]:
                lines.append(f"    [WARNING] {w}")
    return "\n".join(lines)
