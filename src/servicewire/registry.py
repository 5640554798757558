"""
Binding registry: storage and lookup of service bindings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from .bindings import Binding
from .errors import RegistrationError, UnknownServiceError

logger = logging.getLogger(__name__)


class BindingRegistry:
    """Holds bindings by name, in registration order."""

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}
        self._revision = 0

    def register(self, binding: Binding) -> None:
        """
        Add a binding to the registry.

        A binding registered under an existing name replaces the old one
        and keeps its original registration position.

        Raises:
            RegistrationError: If the name is not a non-empty string or the
                service is not callable
        """
        if not isinstance(binding.name, str) or not binding.name:
            raise RegistrationError("Register must be called with string parameter 'name'")
        if not callable(binding.service):
            raise RegistrationError("Register must be called with function parameter 'service'")

        if binding.name in self._bindings:
            logger.debug("Replacing binding %s", binding.name)
        self._bindings[binding.name] = binding
        self._revision += 1
        logger.debug("Registered %s", binding)

    def lookup(self, name: str) -> Binding | None:
        """Get a binding by name."""
        return self._bindings.get(name)

    def lookup_by_service(self, service: Any) -> Binding:
        """
        Find the binding whose service is the given constructor.

        Raises:
            UnknownServiceError: If no binding uses this service
        """
        for binding in self._bindings.values():
            if binding.service is service:
                return binding

        service_name = getattr(service, "__name__", str(service))
        raise UnknownServiceError(f"Could not find service: {service_name}", service)

    def all_names(self) -> list[str]:
        """Get all registered names in registration order."""
        return list(self._bindings)

    def index_of(self, name: str) -> int:
        """Position of a name in registration order, or len(self) if unregistered."""
        for index, key in enumerate(self._bindings):
            if key == name:
                return index
        return len(self._bindings)

    @property
    def revision(self) -> int:
        """Counter bumped by every registration."""
        return self._revision

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(list(self._bindings.values()))
