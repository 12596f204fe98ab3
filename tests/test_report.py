from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Callable

from treeclone.contracts import REPORT_SCHEMA_VERSION
from treeclone.groups import Instance, MatchGroup
from treeclone.report import to_json_report, to_text_report, to_xml_report


def _groups() -> list[MatchGroup]:
    return [
        MatchGroup(
            id="abc123",
            size=12,
            instances=(
                Instance("a.py", 2, 3, "x = 1\nreturn x"),
                Instance("b.py", 5, 6, "x = 1\nreturn x"),
            ),
        ),
        MatchGroup(
            id="def456",
            size=40,
            instances=(
                Instance("c.js", 1, 1, 'if (a < b && c) { s = "é"; }'),
                Instance("d.js", 9, 9, 'if (a < b && c) { s = "é"; }'),
            ),
        ),
    ]


def test_json_report_shape() -> None:
    payload = json.loads(to_json_report(_groups(), {"threshold": 30}))
    assert payload["meta"] == {
        "threshold": 30,
        "report_schema_version": REPORT_SCHEMA_VERSION,
    }
    first = payload["groups"][0]
    assert first["id"] == "abc123"
    assert first["size"] == 12
    assert first["instances"][1] == {
        "path": "b.py",
        "start_line": 5,
        "end_line": 6,
        "code": "x = 1\nreturn x",
    }


def test_json_report_keeps_unicode() -> None:
    assert "é" in to_json_report(_groups())


def test_json_report_empty() -> None:
    payload = json.loads(to_json_report([]))
    assert payload["groups"] == []


def test_text_report_lists_groups(
    report_meta_factory: Callable[..., dict[str, object]],
) -> None:
    text = to_text_report(_groups(), report_meta_factory(treeclone_version="1.0.0"))
    assert "TreeClone version: 1.0.0" in text
    assert "Threshold: 30" in text
    assert "Ignore pattern: (none)" in text
    assert "Files skipped: 1" in text
    assert "CLONE GROUPS (groups=2)" in text
    assert "=== Clone group #1 (count=2, nodes=12) ===" in text
    assert "- a.py:2-3" in text
    assert "    return x" in text
    assert text.endswith("\n")


def test_text_report_without_groups() -> None:
    text = to_text_report([], {"match_identifiers": True})
    assert "Match identifiers: true" in text
    assert "CLONE GROUPS (groups=0)\n(none)" in text


def test_xml_report_escapes_code() -> None:
    xml = to_xml_report(_groups())
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "a &lt; b &amp;&amp; c" in xml

    root = ET.fromstring(xml.split("\n", 1)[1])
    assert root.tag == "pmd-cpd"
    dups = root.findall("duplication")
    assert [d.get("tokens") for d in dups] == ["12", "40"]
    assert dups[0].get("lines") == "2"
    files = dups[1].findall("file")
    assert [(f.get("path"), f.get("line"), f.get("endline")) for f in files] == [
        ("c.js", "1", "1"),
        ("d.js", "9", "9"),
    ]
    assert dups[1].findtext("codefragment") == 'if (a < b && c) { s = "é"; }'
