from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from types import ModuleType
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Start-up configuration for one registration pass.

    Attributes:
        modules: Modules to scan, as module objects or dotted names.
        packages: Dotted package names. Each package and all of its
            submodules are scanned.
        include_private: Scan classes whose names start with an underscore.

    Public classes nested in scanned classes are scanned too. When both
    ``modules`` and ``packages`` are empty the scanner uses
    ``discover_first_party_packages()``. Any iterable is accepted for
    ``modules`` and ``packages``; both are stored as tuples.
    """

    modules: tuple[ModuleType | str, ...] = ()
    packages: tuple[str, ...] = ()
    include_private: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", tuple(self.modules))
        object.__setattr__(self, "packages", tuple(self.packages))

    @property
    def is_empty(self) -> bool:
        return not self.modules and not self.packages


def _project_directory(distribution: metadata.Distribution) -> Path | None:
    """Return the local source directory of a distribution installed from one."""
    raw = distribution.read_text("direct_url.json")
    if not raw:
        return None
    direct_url: dict[str, Any] = json.loads(raw)
    if "dir_info" not in direct_url:
        return None
    parsed = urlparse(direct_url.get("url", ""))
    if parsed.scheme != "file":
        return None
    return Path(url2pathname(parsed.path))


def _source_packages(project_directory: Path) -> list[str]:
    source_root = project_directory / "src"
    if not source_root.is_dir():
        source_root = project_directory
    if not source_root.is_dir():
        return []
    return sorted(
        child.name
        for child in source_root.iterdir()
        if child.is_dir() and child.name.isidentifier() and (child / "__init__.py").is_file()
    )


def _top_level_names(distribution: metadata.Distribution) -> list[str]:
    top_level = distribution.read_text("top_level.txt") or ""
    return [line.strip() for line in top_level.splitlines() if line.strip()]


def discover_first_party_packages(path: Iterable[str] | None = None) -> tuple[str, ...]:
    """Return top-level packages of distributions installed from a local project.

    A distribution counts as first-party when its PEP 610 ``direct_url.json``
    points at a local directory (``pip install -e .`` or ``pip install .``).
    Third-party libraries installed from an index are excluded.

    Editable installs record only a ``.pth`` file, so packages are read from
    the project directory itself (its ``src/`` folder when present), merged
    with ``top_level.txt`` and the installed-files mapping.

    Args:
        path: Directories searched for distributions. Defaults to ``sys.path``.

    """
    if path is None:
        distributions = metadata.distributions()
        installed_files = metadata.packages_distributions()
    else:
        distributions = metadata.distributions(path=list(path))
        installed_files = {}

    found: dict[str, None] = {}
    for distribution in distributions:
        project_directory = _project_directory(distribution)
        if project_directory is None:
            continue
        name = distribution.metadata["Name"]
        names = [
            *_source_packages(project_directory),
            *_top_level_names(distribution),
            *(top for top, owners in installed_files.items() if name in owners),
        ]
        for top_level in names:
            if not top_level.startswith("_"):
                found[top_level] = None

    packages = tuple(sorted(found))
    logger.debug("Discovered first-party packages: %s", packages)
    return packages


__all__ = ["ScanConfig", "discover_first_party_packages"]
