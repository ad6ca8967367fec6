"""Shared pytest fixtures for regwire tests."""

from __future__ import annotations

import importlib
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from regwire import ServiceCollection

MakeModule = Callable[..., ModuleType]
WritePackage = Callable[[str, dict[str, str]], Path]


@pytest.fixture()
def services() -> ServiceCollection:
    """Empty service collection."""
    return ServiceCollection()


@pytest.fixture()
def make_module(monkeypatch: pytest.MonkeyPatch) -> MakeModule:
    """Build an in-memory module owning the given classes, in the given order."""

    def _move(cls: type[Any], name: str) -> None:
        cls.__module__ = name
        for value in vars(cls).values():
            if isinstance(value, type) and value.__qualname__ == f"{cls.__qualname__}.{value.__name__}":
                _move(value, name)

    def _make(name: str, *classes: type[Any]) -> ModuleType:
        module = ModuleType(name)
        for cls in classes:
            _move(cls, name)
            setattr(module, cls.__name__, cls)
        monkeypatch.setitem(sys.modules, name, module)
        return module

    return _make


@pytest.fixture()
def write_package(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[WritePackage, None, None]:
    """Write source files under an importable directory and forget them afterwards."""
    monkeypatch.syspath_prepend(str(tmp_path))
    roots: list[str] = []

    def _write(root: str, files: dict[str, str]) -> Path:
        roots.append(root)
        for relative_path, source in files.items():
            path = tmp_path / root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)
        importlib.invalidate_caches()
        return tmp_path / root

    yield _write

    for name in list(sys.modules):
        if name.split(".", 1)[0] in roots:
            del sys.modules[name]
