from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern
import re
import yaml

RULES_DIR = Path(__file__).parent
DEFAULT_OUTLINE_RULES = RULES_DIR / "outline_rules.yml"
DEFAULT_ENTITIES = RULES_DIR / "entities.yml"


@dataclass
class EntityPattern:
    category: str
    pattern: Pattern[str]


@dataclass
class OutlineRules:
    list_sections: List[Pattern[str]] = field(default_factory=list)
    property_keys: List[str] = field(default_factory=list)

    def is_list_section(self, line: str) -> bool:
        stripped = line.strip()
        return any(p.match(stripped) for p in self.list_sections)

    def is_property_key(self, key: str) -> bool:
        return key.strip().lower() in self.property_keys


def load_rule_pack(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _label_regex(label: str) -> Pattern[str]:
    optional_plural = label.endswith("?")
    name = label.rstrip("?").strip()
    body = re.escape(name).replace(r"\ ", r"\s+")
    if optional_plural:
        body += "?"
    return re.compile(rf"^-?\s*{body}:+\s*$", re.IGNORECASE)


def _alternation(names: List[str], patterns: List[str]) -> Optional[Pattern[str]]:
    # longest first, so "Lord Krolus" wins over a shorter prefix
    parts = [re.escape(n) for n in sorted(set(names), key=len, reverse=True)]
    parts.extend(patterns)
    if not parts:
        return None
    return re.compile(r"\b(?:" + "|".join(parts) + r")\b", re.IGNORECASE)


def load_outline_rules(path: str | Path | None = None) -> OutlineRules:
    pack = load_rule_pack(path or DEFAULT_OUTLINE_RULES)
    return OutlineRules(
        list_sections=[_label_regex(str(s)) for s in pack.get("list_sections", []) or []],
        property_keys=[str(k).strip().lower() for k in pack.get("property_keys", []) or []],
    )


def load_entity_patterns(path: str | Path | None = None) -> List[EntityPattern]:
    pack = load_rule_pack(path or DEFAULT_ENTITIES)
    out: List[EntityPattern] = []
    for cat in pack.get("categories", []) or []:
        names = [str(n) for n in cat.get("names", []) or []]
        patterns = [str(p) for p in cat.get("patterns", []) or []]
        rx = _alternation(names, patterns)
        if rx is None:
            continue
        out.append(EntityPattern(category=str(cat.get("name", "general")), pattern=rx))
    return out
