from __future__ import annotations

import json
from pathlib import Path

import pytest

import treeclone.config as config_mod
from treeclone.config import (
    DEFAULT_MIN_INSTANCES,
    DEFAULT_THRESHOLD,
    DEFAULT_TRUNCATE_LENGTH,
    DetectionConfig,
    load_rc_file,
)
from treeclone.errors import ValidationError


def _write_rc(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), "utf-8")
    return path


def test_defaults() -> None:
    cfg = DetectionConfig()
    assert cfg.threshold == DEFAULT_THRESHOLD == 30
    assert cfg.min_instances == DEFAULT_MIN_INSTANCES == 2
    assert cfg.truncate_length == DEFAULT_TRUNCATE_LENGTH == 100
    assert cfg.match_identifiers is True
    assert cfg.match_literals is True
    assert cfg.ignore_pattern is None
    assert not cfg.is_ignored("anything.py")


@pytest.mark.parametrize(
    ("options", "message"),
    [
        ({"threshold": 0}, "threshold"),
        ({"min_instances": 1}, "min_instances"),
        ({"truncate_length": -1}, "truncate_length"),
        ({"ignore_pattern": "("}, "Invalid ignore pattern"),
    ],
    ids=["threshold", "min_instances", "truncate", "regex"],
)
def test_invalid_config_rejected(options: dict[str, object], message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        DetectionConfig(**options)  # type: ignore[arg-type]


def test_ignore_pattern_searches_path() -> None:
    cfg = DetectionConfig(ignore_pattern=r"(^|/)vendor/")
    assert cfg.is_ignored("/repo/vendor/lib.js")
    assert not cfg.is_ignored("/repo/src/vendored.js")


def test_load_rc_file_maps_keys(tmp_path: Path) -> None:
    rc = _write_rc(
        tmp_path / ".treeclonerc",
        {
            "threshold": 40,
            "min_instances": 3,
            "identifiers": False,
            "literals": False,
            "ignore": "test",
            "truncate": 0,
        },
    )
    assert load_rc_file(rc) == {
        "threshold": 40,
        "min_instances": 3,
        "match_identifiers": False,
        "match_literals": False,
        "ignore_pattern": "test",
        "truncate_length": 0,
    }


def test_load_rc_file_unknown_key(tmp_path: Path) -> None:
    rc = _write_rc(tmp_path / ".treeclonerc", {"treshold": 10})
    with pytest.raises(ValidationError, match="Unknown keys"):
        load_rc_file(rc)


@pytest.mark.parametrize(
    "payload",
    [{"threshold": "10"}, {"threshold": True}, {"identifiers": 1}],
    ids=["str_for_int", "bool_for_int", "int_for_bool"],
)
def test_load_rc_file_type_checks(tmp_path: Path, payload: object) -> None:
    rc = _write_rc(tmp_path / ".treeclonerc", payload)
    with pytest.raises(ValidationError, match="must be"):
        load_rc_file(rc)


def test_load_rc_file_not_object(tmp_path: Path) -> None:
    rc = _write_rc(tmp_path / ".treeclonerc", [1, 2])
    with pytest.raises(ValidationError, match="must hold an object"):
        load_rc_file(rc)


def test_load_rc_file_corrupted(tmp_path: Path) -> None:
    rc = tmp_path / ".treeclonerc"
    rc.write_text("{not json", "utf-8")
    with pytest.raises(ValidationError, match="Corrupted"):
        load_rc_file(rc)


def test_load_rc_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="Cannot stat"):
        load_rc_file(tmp_path / "missing.json")


def test_load_rc_file_too_large(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    rc = _write_rc(tmp_path / ".treeclonerc", {"threshold": 10})
    monkeypatch.setattr(config_mod, "MAX_RC_FILE_SIZE", 4)
    with pytest.raises(ValidationError, match="too large"):
        load_rc_file(rc)
