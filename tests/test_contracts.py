from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

import pytest

from regwire import (
    CandidateType,
    ContractResolver,
    InterfaceStrategy,
    Lifecycle,
    RegistrationEntry,
    RegistrationMetadata,
)


class A(Protocol):
    def a(self) -> None: ...


class B(ABC):
    @abstractmethod
    def b(self) -> None: ...


class C:
    pass


class D:
    pass


class T(A, B):
    def a(self) -> None:
        pass

    def b(self) -> None:
        pass


def _candidate(
    implementation: type[Any],
    contracts: tuple[type[Any], ...],
    metadata: RegistrationMetadata | None,
) -> CandidateType:
    return CandidateType(implementation=implementation, contracts=contracts, metadata=metadata)


@pytest.fixture()
def resolver() -> ContractResolver:
    return ContractResolver()


def test_candidate_without_metadata_produces_no_entries(resolver: ContractResolver) -> None:
    assert resolver.resolve(_candidate(T, (A, B), None)) == ()


@pytest.mark.parametrize("strategy", list(InterfaceStrategy))
@pytest.mark.parametrize("lifecycle", list(Lifecycle))
def test_class_without_contracts_registers_under_itself(
    resolver: ContractResolver,
    strategy: InterfaceStrategy,
    lifecycle: Lifecycle,
) -> None:
    metadata = RegistrationMetadata(lifecycle=lifecycle, strategy=strategy)

    assert resolver.resolve(_candidate(C, (), metadata)) == (RegistrationEntry(C, C, lifecycle),)


def test_first_only_registers_under_first_declared_contract(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(lifecycle=Lifecycle.SCOPED, strategy=InterfaceStrategy.FIRST_ONLY)

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert entries == (RegistrationEntry(A, T, Lifecycle.SCOPED),)


def test_all_interfaces_registers_under_every_declared_contract(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(
        lifecycle=Lifecycle.TRANSIENT,
        strategy=InterfaceStrategy.ALL_INTERFACES,
    )

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert entries == (
        RegistrationEntry(A, T, Lifecycle.TRANSIENT),
        RegistrationEntry(B, T, Lifecycle.TRANSIENT),
    )


def test_duplicate_declared_contracts_keep_first_occurrence(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(strategy=InterfaceStrategy.ALL_INTERFACES)

    entries = resolver.resolve(_candidate(T, (A, B, A), metadata))

    assert [entry.contract for entry in entries] == [A, B]


@pytest.mark.parametrize("strategy", list(InterfaceStrategy))
def test_explicit_contracts_override_declared_contracts(
    resolver: ContractResolver,
    strategy: InterfaceStrategy,
) -> None:
    metadata = RegistrationMetadata(
        lifecycle=Lifecycle.SINGLETON,
        strategy=strategy,
        contracts=(C, D),
    )

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert entries == (
        RegistrationEntry(C, T, Lifecycle.SINGLETON),
        RegistrationEntry(D, T, Lifecycle.SINGLETON),
    )


def test_duplicate_explicit_contracts_are_removed(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(contracts=(C, C, D))

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert [entry.contract for entry in entries] == [C, D]


def test_explicit_contracts_may_include_the_class_itself(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(contracts=(T, A))

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert [entry.contract for entry in entries] == [T, A]


def test_all_entries_share_one_lifecycle(resolver: ContractResolver) -> None:
    metadata = RegistrationMetadata(
        lifecycle=Lifecycle.SCOPED,
        strategy=InterfaceStrategy.ALL_INTERFACES,
    )

    entries = resolver.resolve(_candidate(T, (A, B), metadata))

    assert {entry.lifecycle for entry in entries} == {Lifecycle.SCOPED}
    assert {entry.implementation for entry in entries} == {T}
