"""Tests for runnable regwire examples."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"


def _run_example(relative_path: str, module_name: str, monkeypatch: pytest.MonkeyPatch) -> None:
    spec = importlib.util.spec_from_file_location(module_name, EXAMPLES_DIR / relative_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, module_name, module)
    spec.loader.exec_module(module)
    module.main()


def test_ex01_scan_and_register(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    _run_example(
        "ex01_registration/ex01_scan_and_register.py",
        "regwire_example_scan_and_register",
        monkeypatch,
    )

    assert capsys.readouterr().out.splitlines() == [
        "IRepo -> Repo (SINGLETON)",
        "ISvc -> Svc (TRANSIENT)",
        "ITestable -> Svc (TRANSIENT)",
        "resource_registered=True",
        "options_registered=True",
        "unregistered_skipped=True",
    ]
