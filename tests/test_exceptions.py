"""Tests for custom exception hierarchy."""

from __future__ import annotations

import pytest

from regwire import (
    RegWireAmbiguousEntryPointError,
    RegWireError,
    RegWireInvalidRegistrationError,
    RegWireModuleLoadError,
    RegWireUnknownLifecycleError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        RegWireAmbiguousEntryPointError,
        RegWireInvalidRegistrationError,
        RegWireModuleLoadError,
        RegWireUnknownLifecycleError,
    ],
)
def test_all_errors_derive_from_base(error_type: type[Exception]) -> None:
    assert issubclass(error_type, RegWireError)


class TestRegWireModuleLoadError:
    def test_lists_every_module(self) -> None:
        error = RegWireModuleLoadError(["app.first", "app.second"])

        assert error.module_names == ("app.first", "app.second")
        assert str(error) == "Failed to load first-party module(s): 'app.first', 'app.second'."


class TestRegWireAmbiguousEntryPointError:
    def test_message_names_owner_and_candidates(self) -> None:
        class Owner:
            pass

        error = RegWireAmbiguousEntryPointError(Owner, ["Owner.add_a", "Owner.add_b"])

        assert error.owner is Owner
        assert error.candidates == ("Owner.add_a", "Owner.add_b")
        assert "Owner.add_a, Owner.add_b" in str(error)
        assert "Ambiguous" in str(error)

    def test_message_for_missing_entry_point(self) -> None:
        error = RegWireAmbiguousEntryPointError(object, [])

        assert str(error) == "No generic registration entry point found on 'object'."


class TestRegWireUnknownLifecycleError:
    def test_keeps_offending_value(self) -> None:
        error = RegWireUnknownLifecycleError("pooled")

        assert error.lifecycle == "pooled"
        assert str(error) == "Unknown lifecycle 'pooled'."
