from __future__ import annotations

import logging

from regwire.contracts import RegistrationEntry
from regwire.exceptions import RegWireUnknownLifecycleError
from regwire.lifecycle import Lifecycle
from regwire.services import HostContainer

logger = logging.getLogger(__name__)


class LifetimeBinder:
    """Dispatch registration entries to the matching host container primitive."""

    def check(self, entry: RegistrationEntry) -> None:
        """Reject an entry whose lifecycle has no registration primitive.

        Raises:
            RegWireUnknownLifecycleError: If ``entry.lifecycle`` is not a
                ``Lifecycle`` member.

        """
        if not isinstance(entry.lifecycle, Lifecycle):
            raise RegWireUnknownLifecycleError(entry.lifecycle)

    def bind(self, services: HostContainer, entry: RegistrationEntry) -> None:
        """Write one entry into ``services``.

        Raises:
            RegWireUnknownLifecycleError: If ``entry.lifecycle`` is not a
                ``Lifecycle`` member.

        """
        lifecycle = entry.lifecycle
        if lifecycle is Lifecycle.TRANSIENT:
            services.add_transient(entry.contract, entry.implementation)
        elif lifecycle is Lifecycle.SCOPED:
            services.add_scoped(entry.contract, entry.implementation)
        elif lifecycle is Lifecycle.SINGLETON:
            services.add_singleton(entry.contract, entry.implementation)
        else:
            raise RegWireUnknownLifecycleError(lifecycle)

        logger.debug(
            "Registered %r -> %s (%s)",
            entry.contract,
            entry.implementation.__qualname__,
            lifecycle.name,
        )


__all__ = ["LifetimeBinder"]
