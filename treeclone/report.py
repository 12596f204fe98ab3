"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from typing import Any

from .contracts import REPORT_SCHEMA_VERSION
from .groups import Instance, MatchGroup


def _format_meta_text_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "(none)"
    text = str(value).strip()
    return text if text else "(none)"


def _encode_instance(instance: Instance) -> dict[str, Any]:
    return {
        "path": instance.path,
        "start_line": instance.start_line,
        "end_line": instance.end_line,
        "code": instance.code,
    }


def _line_count(instance: Instance) -> int:
    return instance.end_line - instance.start_line + 1


def to_json_report(
    groups: Sequence[MatchGroup], meta: Mapping[str, object] | None = None
) -> str:
    meta_payload = dict(meta or {})
    meta_payload["report_schema_version"] = REPORT_SCHEMA_VERSION
    payload = {
        "meta": meta_payload,
        "groups": [
            {
                "id": group.id,
                "size": group.size,
                "instances": [_encode_instance(inst) for inst in group.instances],
            }
            for group in groups
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def to_text(groups: Sequence[MatchGroup]) -> str:
    out: list[str] = []
    for i, group in enumerate(groups):
        out.append(
            f"\n=== Clone group #{i + 1} "
            f"(count={len(group.instances)}, nodes={group.size}) ==="
        )
        out.append(f"id: {group.id}")
        for inst in group.instances:
            out.append(f"- {inst.path}:{inst.start_line}-{inst.end_line}")
            out.extend(f"    {line}" for line in inst.code.split("\n"))
    return "\n".join(out).strip() + "\n" if out else ""


def to_text_report(
    groups: Sequence[MatchGroup], meta: Mapping[str, object] | None = None
) -> str:
    meta_payload = dict(meta or {})
    lines = [
        "REPORT METADATA",
        f"Report schema version: {REPORT_SCHEMA_VERSION}",
        "TreeClone version: "
        f"{_format_meta_text_value(meta_payload.get('treeclone_version'))}",
        "Python version: "
        f"{_format_meta_text_value(meta_payload.get('python_version'))}",
        f"Threshold: {_format_meta_text_value(meta_payload.get('threshold'))}",
        "Min instances: "
        f"{_format_meta_text_value(meta_payload.get('min_instances'))}",
        "Match identifiers: "
        f"{_format_meta_text_value(meta_payload.get('match_identifiers'))}",
        "Match literals: "
        f"{_format_meta_text_value(meta_payload.get('match_literals'))}",
        "Ignore pattern: "
        f"{_format_meta_text_value(meta_payload.get('ignore_pattern'))}",
        f"Files found: {_format_meta_text_value(meta_payload.get('files_found'))}",
        "Files analyzed: "
        f"{_format_meta_text_value(meta_payload.get('files_analyzed'))}",
        "Files skipped: "
        f"{_format_meta_text_value(meta_payload.get('files_skipped'))}",
        "",
        f"CLONE GROUPS (groups={len(groups)})",
    ]
    body = to_text(groups).rstrip()
    lines.append(body if body else "(none)")
    return "\n".join(lines).rstrip() + "\n"


def to_xml_report(groups: Sequence[MatchGroup]) -> str:
    """Serialize groups in the PMD CPD duplication format."""
    root = ET.Element("pmd-cpd")
    for group in groups:
        first = group.instances[0]
        duplication = ET.SubElement(
            root,
            "duplication",
            {
                "id": group.id,
                "lines": str(_line_count(first)),
                "tokens": str(group.size),
            },
        )
        for inst in group.instances:
            ET.SubElement(
                duplication,
                "file",
                {
                    "path": inst.path,
                    "line": str(inst.start_line),
                    "endline": str(inst.end_line),
                },
            )
        fragment = ET.SubElement(duplication, "codefragment")
        fragment.text = first.code
    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
