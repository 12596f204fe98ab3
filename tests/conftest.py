from __future__ import annotations

from collections.abc import Callable

import pytest

from treeclone.contracts import REPORT_SCHEMA_VERSION

ReportMetaFactory = Callable[..., dict[str, object]]


@pytest.fixture
def report_meta_factory() -> ReportMetaFactory:
    def _make(**overrides: object) -> dict[str, object]:
        meta: dict[str, object] = {
            "report_schema_version": REPORT_SCHEMA_VERSION,
            "treeclone_version": "0.1.0",
            "python_version": "3.13",
            "threshold": 30,
            "min_instances": 2,
            "match_identifiers": True,
            "match_literals": True,
            "ignore_pattern": None,
            "files_found": 4,
            "files_analyzed": 3,
            "files_skipped": 1,
        }
        meta.update(overrides)
        return meta

    return _make
