"""
Registry mapping process names to factories.

The simulator driver owns one registry, populates it at start-up and looks
processes up by name while reading process definitions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, overload

from .adsorption import Adsorption
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .base import Process

    ProcessFactory = Callable[[], Process]

logger = logging.getLogger(__name__)


class ProcessRegistry:
    """Name -> factory lookup for process kinds."""

    def __init__(self) -> None:
        self._factories: dict[str, ProcessFactory] = {}

    @classmethod
    def with_defaults(cls) -> ProcessRegistry:
        """
        Create a registry holding the built-in process kinds.

        Returns:
            Populated registry.
        """
        registry = cls()
        registry.register(Adsorption.name, Adsorption)
        return registry

    @overload
    def register(self, name: str) -> Callable[[ProcessFactory], ProcessFactory]: ...

    @overload
    def register(self, name: str, factory: ProcessFactory) -> ProcessFactory: ...

    def register(self, name, factory=None):
        """
        Register a process factory under a name.

        Can be called directly or used as a class decorator::

            @registry.register("Adsorption")
            class Adsorption(Process): ...

        Args:
            name: Process name as written in process definitions.
            factory: Zero-argument callable returning a new process.

        Raises:
            ConfigurationError: If the name is already registered.
        """
        if factory is None:
            return lambda f: self.register(name, f)

        if name in self._factories:
            raise ConfigurationError(f"Process {name!r} is already registered")
        self._factories[name] = factory
        logger.debug(f"Registered process {name!r}")
        return factory

    def create(self, name: str) -> Process:
        """
        Create a new, uninitialized process.

        Args:
            name: Registered process name.

        Returns:
            Fresh process instance.

        Raises:
            ConfigurationError: If the name is unknown.
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown process {name!r}. Registered: {self.names()}"
            ) from None
        return factory()

    def names(self) -> list[str]:
        """Registered process names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        """String representation."""
        return f"ProcessRegistry({self.names()})"
