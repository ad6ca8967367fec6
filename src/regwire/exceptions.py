from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class RegWireError(Exception):
    """Represent a base class for all regwire-specific failures.

    Every error raised by a registration pass is fatal at start-up. Catch this
    type only to report the failure before exiting.
    """


class RegWireInvalidRegistrationError(RegWireError):
    """Signal an invalid registration annotation.

    Raised by ``register_service``, ``service`` and ``register_resource`` when
    a class is annotated twice or when explicit contracts are not classes.
    """


class RegWireModuleLoadError(RegWireError):
    """Signal that one or more first-party modules cannot be imported.

    Raised by ``ModuleScanner.load_modules`` before any candidate type is
    produced, so the container never receives a partial registration table.

    Typical fixes include correcting the dotted module names passed in
    ``ScanConfig`` or fixing the import-time error chained as ``__cause__``.
    """

    def __init__(self, module_names: Sequence[str]) -> None:
        self.module_names = tuple(module_names)
        joined = ", ".join(repr(name) for name in self.module_names)
        super().__init__(f"Failed to load first-party module(s): {joined}.")


class RegWireNoFirstPartyModulesError(RegWireModuleLoadError):
    """Signal that no first-party package was found to scan.

    Raised by ``ModuleScanner.load_modules`` when neither modules nor packages
    are configured and ``discover_first_party_packages`` finds nothing.

    Typical fixes include installing the project with ``pip install -e .``
    or passing the packages explicitly in ``ScanConfig``.
    """

    def __init__(self) -> None:
        self.module_names = ()
        RegWireError.__init__(
            self,
            "No first-party package was discovered; pass modules or packages to scan explicitly.",
        )


class RegWireAmbiguousEntryPointError(RegWireError):
    """Signal that the generic registration entry point is not unique.

    Raised by ``GenericRegistrar`` when zero or more than one public function
    on the owner namespace takes the collection as its first parameter and is
    generic over exactly one type.
    """

    def __init__(self, owner: Any, candidates: Sequence[str]) -> None:
        self.owner = owner
        self.candidates = tuple(candidates)
        owner_name = getattr(owner, "__qualname__", None) or getattr(owner, "__name__", repr(owner))
        if not self.candidates:
            msg = f"No generic registration entry point found on {owner_name!r}."
        else:
            listed = ", ".join(self.candidates)
            msg = f"Ambiguous generic registration entry point on {owner_name!r}: {listed}."
        super().__init__(msg)


class RegWireUnknownLifecycleError(RegWireError):
    """Signal a lifecycle value outside the ``Lifecycle`` enumeration.

    Raised by ``LifetimeBinder.bind`` instead of falling back to a default
    registration primitive.
    """

    def __init__(self, lifecycle: object) -> None:
        self.lifecycle = lifecycle
        super().__init__(f"Unknown lifecycle {lifecycle!r}.")
