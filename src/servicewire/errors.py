"""
Exceptions raised by the servicewire container.
"""

from __future__ import annotations

from typing import Any


class ServiceWireError(Exception):
    """Base class for all container errors."""


class RegistrationError(ServiceWireError):
    """Raised when a binding is registered without a valid name or service."""


class UnknownServiceError(ServiceWireError, LookupError):
    """Raised when a service name or constructor has no binding."""

    def __init__(self, message: str, name: Any = None):
        self.name = name
        super().__init__(message)

    @classmethod
    def for_operation(cls, operation: str, name: str) -> UnknownServiceError:
        return cls(f"{operation} was called for undefined service '{name}'.", name)


class InvalidParameterError(ServiceWireError, ValueError):
    """Raised when a parameter value is rejected by its validator."""

    def __init__(self, parameter: str, service: str, message: str | None = None):
        self.parameter = parameter
        self.service = service
        super().__init__(message or f"Invalid parameter '{parameter}' passed to {service}.")


class CircularDependencyError(ServiceWireError):
    """Raised when a cyclic chain of required services is detected."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        cycle_str = " -> ".join(cycle)
        super().__init__(f"Circular dependency detected: {cycle_str}")


class DuplicateInstanceError(ServiceWireError):
    """Raised when an instance is registered twice under the same name."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"Service {name} already has a registered instance")


class DuplicateTestDefinitionError(DuplicateInstanceError):
    """Raised when a test double is registered twice under the same name."""

    def __init__(self, name: str):
        super().__init__(name, f"Service {name} already has a test definition")


class UnexpectedCallError(ServiceWireError, AssertionError):
    """Raised by mock test doubles when any of their members is called."""
