import os
import runpy
import subprocess
import sys
from pathlib import Path

import pytest


def test_cli_module_runs_as_script() -> None:
    root_dir = Path(__file__).parents[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(root_dir) + os.pathsep + env.get("PYTHONPATH", "")
    result = subprocess.run(
        [sys.executable, "-m", "treeclone.cli", "--help"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0
    assert "--no-identifiers" in result.stdout


def test_cli_main_guard_runpy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delitem(sys.modules, "treeclone.cli", raising=False)
    monkeypatch.setattr(sys, "argv", ["treeclone", "--version"])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("treeclone.cli", run_name="__main__")
    assert exc.value.code == 0
