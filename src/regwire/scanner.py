from __future__ import annotations

import importlib
import logging
import pkgutil
from collections.abc import Iterator
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from regwire._internal.type_checks import declared_contracts, is_runtime_class
from regwire.config import ScanConfig, discover_first_party_packages
from regwire.exceptions import RegWireModuleLoadError, RegWireNoFirstPartyModulesError
from regwire.markers import RegistrationMetadata, get_registration_metadata, is_resource_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CandidateType:
    """A public class discovered in a scanned module."""

    implementation: type[Any]
    contracts: tuple[Any, ...]
    metadata: RegistrationMetadata | None
    is_resource: bool = False


class ModuleScanner:
    """Import first-party modules and enumerate their public classes.

    The scanner holds no state between passes. ``load_modules`` imports every
    configured module before anything is yielded, so a broken module aborts
    the pass before the first registration.
    """

    def __init__(self, config: ScanConfig | None = None) -> None:
        self._config = config or ScanConfig()

    def load_modules(self) -> list[ModuleType]:
        """Import all configured modules in order, without duplicates.

        Raises:
            RegWireModuleLoadError: If any module or package fails to import.
                All failing names are reported together.

        """
        loaded: list[ModuleType] = []
        seen: set[str] = set()
        failed: list[str] = []
        first_error: BaseException | None = None

        def _remember(module: ModuleType) -> None:
            if module.__name__ not in seen:
                seen.add(module.__name__)
                loaded.append(module)

        for module_or_name in self._module_sources():
            if isinstance(module_or_name, ModuleType):
                _remember(module_or_name)
                continue
            try:
                _remember(importlib.import_module(module_or_name))
            except Exception as exc:  # noqa: BLE001
                failed.append(module_or_name)
                first_error = first_error or exc

        for package_name in self._package_sources():
            try:
                package = importlib.import_module(package_name)
            except Exception as exc:  # noqa: BLE001
                failed.append(package_name)
                first_error = first_error or exc
                continue
            _remember(package)
            for name in self._walk_submodule_names(package, failed):
                try:
                    _remember(importlib.import_module(name))
                except Exception as exc:  # noqa: BLE001
                    failed.append(name)
                    first_error = first_error or exc

        if failed:
            raise RegWireModuleLoadError(list(dict.fromkeys(failed))) from first_error

        logger.debug("Loaded %d module(s) for scanning", len(loaded))
        return loaded

    def iter_candidates(self, modules: list[ModuleType] | None = None) -> Iterator[CandidateType]:
        """Yield public classes in module order, then declaration order."""
        if modules is None:
            modules = self.load_modules()
        for module in modules:
            yield from self._iter_module_candidates(module)

    def _module_sources(self) -> tuple[ModuleType | str, ...]:
        return self._config.modules

    def _package_sources(self) -> tuple[str, ...]:
        if self._config.is_empty:
            packages = discover_first_party_packages()
            if not packages:
                raise RegWireNoFirstPartyModulesError
            return packages
        return self._config.packages

    def _walk_submodule_names(self, package: ModuleType, failed: list[str]) -> list[str]:
        search_path = getattr(package, "__path__", None)
        if search_path is None:
            return []

        def _on_error(name: str) -> None:
            failed.append(name)

        return [
            module_info.name
            for module_info in pkgutil.walk_packages(
                search_path,
                prefix=f"{package.__name__}.",
                onerror=_on_error,
            )
        ]

    def _iter_module_candidates(self, module: ModuleType) -> Iterator[CandidateType]:
        seen: set[int] = set()
        yield from self._iter_namespace_candidates(vars(module), module.__name__, "", seen)

    def _iter_namespace_candidates(
        self,
        namespace: dict[str, Any],
        module_name: str,
        qualname_prefix: str,
        seen: set[int],
    ) -> Iterator[CandidateType]:
        for value in list(namespace.values()):
            if not is_runtime_class(value) or id(value) in seen:
                continue
            if value.__module__ != module_name:
                continue
            # Nested classes only where they are defined, not where they are aliased.
            if qualname_prefix and value.__qualname__ != f"{qualname_prefix}{value.__name__}":
                continue
            if value.__name__.startswith("_") and not self._config.include_private:
                continue
            seen.add(id(value))
            yield CandidateType(
                implementation=value,
                contracts=declared_contracts(value),
                metadata=get_registration_metadata(value),
                is_resource=is_resource_target(value),
            )
            yield from self._iter_namespace_candidates(
                vars(value),
                module_name,
                f"{value.__qualname__}.",
                seen,
            )


__all__ = ["CandidateType", "ModuleScanner"]
