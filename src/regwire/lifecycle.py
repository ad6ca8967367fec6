from __future__ import annotations

from enum import Enum, auto


class Lifecycle(Enum):
    """Defines how long a registered implementation instance is reused."""

    TRANSIENT = auto()
    """A new instance is created every time the service is requested."""

    SCOPED = auto()
    """Instance is shared within one unit of work, different across units."""

    SINGLETON = auto()
    """A single instance is shared for the lifetime of the process."""


class InterfaceStrategy(Enum):
    """Selects which derived contracts a service is registered under."""

    FIRST_ONLY = auto()
    """Register under the first declared contract only."""

    ALL_INTERFACES = auto()
    """Register under every declared contract."""
