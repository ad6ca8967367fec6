from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from regwire.lifecycle import InterfaceStrategy, Lifecycle
from regwire.scanner import CandidateType


@dataclass(frozen=True, slots=True)
class RegistrationEntry:
    """One container registration: ``contract`` resolves to ``implementation``."""

    contract: Any
    implementation: type[Any]
    lifecycle: Lifecycle


class ContractResolver:
    """Compute the registration entries for an annotated candidate type."""

    def resolve(self, candidate: CandidateType) -> tuple[RegistrationEntry, ...]:
        """Return entries for ``candidate`` in contract order.

        Explicit contracts replace the declared ones and bypass the strategy.
        A class without any contract is registered under itself. Duplicate
        contracts keep their first occurrence.

        Args:
            candidate: Candidate produced by ``ModuleScanner``.

        """
        metadata = candidate.metadata
        if metadata is None:
            return ()

        if metadata.contracts:
            contracts = _unique(metadata.contracts)
        else:
            contracts = _unique(candidate.contracts)
            if contracts and metadata.strategy is InterfaceStrategy.FIRST_ONLY:
                contracts = contracts[:1]

        if not contracts:
            contracts = (candidate.implementation,)

        return tuple(
            RegistrationEntry(
                contract=contract,
                implementation=candidate.implementation,
                lifecycle=metadata.lifecycle,
            )
            for contract in contracts
        )


def _unique(contracts: tuple[Any, ...]) -> tuple[Any, ...]:
    return tuple(dict.fromkeys(contracts))


__all__ = ["ContractResolver", "RegistrationEntry"]
