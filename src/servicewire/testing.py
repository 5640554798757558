"""
Test doubles for services registered in a Container.

``FakeContainer`` builds a real instance of the service under test while every
service it requires is replaced by a stand-in whose members come from the
test double policy.

Example:
    ```python
    fake = FakeContainer(container)
    fake.test_double_policy = mock_behavior

    foo = fake.load(Foo)
    foo._bar.save()  # raises UnexpectedCallError
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from types import SimpleNamespace
from typing import Any

from .container import Container
from .errors import DuplicateTestDefinitionError, UnexpectedCallError, UnknownServiceError
from .events import notifier_name

logger = logging.getLogger(__name__)

TestDoublePolicy = Callable[[str, str], Callable[..., Any]]


def stub_behavior(dependency_name: str, member_name: str) -> Callable[..., Any]:  # noqa: ARG001
    """Policy whose members accept any call and return None."""

    def stub(*args: Any, **kwargs: Any) -> None:  # noqa: ARG001
        return None

    return stub


def mock_behavior(dependency_name: str, member_name: str) -> Callable[..., Any]:
    """Policy whose members fail on any call."""

    def mock(*args: Any, **kwargs: Any) -> Any:
        raise UnexpectedCallError(
            f"Unexpected call to {dependency_name}.{member_name}()"
            f" with {len(args) + len(kwargs)} parameters"
        )

    return mock


class FakeContainer:
    """Loads services with their dependencies replaced by test doubles."""

    def __init__(self, container: Container, policy: TestDoublePolicy = stub_behavior):
        self._container = container
        self._preloaded: dict[str, Any] = {}
        self._included: set[str] = set()
        self.test_double_policy = policy

    def load(self, service: Any, *values: Any) -> Any:
        """
        Load a service, replacing all dependencies with test doubles.

        Args:
            service: The service constructor
            *values: Parameter values by position; missing ones are set to None
        """
        binding = self._container.registry.lookup_by_service(service)
        result = binding.service()

        for dependency in binding.requires:
            if dependency in self._included:
                real = self._container.registry.lookup(dependency)
                if real is None:
                    raise UnknownServiceError(f"Could not find service: {dependency}", dependency)
                setattr(result, dependency, self.load(real.service))
            else:
                setattr(result, dependency, self.load_test_double(dependency))

        for i, parameter in enumerate(binding.parameters):
            setattr(result, parameter.name, values[i] if i < len(values) else None)

        for event in binding.event_source:
            name = notifier_name(event)
            setattr(result, name, self.test_double_policy(binding.friendly_name, name))

        return result

    def load_test_double(self, name_or_service: str | Any) -> Any:
        """
        Get the test double used for a dependency.

        The same double is returned for every call with the same service.

        Raises:
            UnknownServiceError: If the service is not registered
        """
        name = name_or_service
        if not isinstance(name_or_service, str):
            name = self._container.registry.lookup_by_service(name_or_service).name

        if name in self._preloaded:
            return self._preloaded[name]

        original = self._container.find_instance(name)
        if original is None:
            original = self._container.find_singleton(name)
        if original is None:
            binding = self._container.registry.lookup(name)
            if binding is None:
                raise UnknownServiceError(f"FakeContainer could not find service: {name}", name)
            original = binding.service()

        double = self.clone_as_test_double(original, name)
        self._preloaded[name] = double
        return double

    def include_real(self, services: str | Iterable[str]) -> _IncludeReal:
        """
        List services that should be loaded as real dependencies.

        Returns:
            An object whose ``load`` works like ``FakeContainer.load``
        """
        if isinstance(services, str):
            services = [services]
        return _IncludeReal(self, set(services))

    def register_instance(self, name: str, instance: Any) -> None:
        """
        Use an object as the test double for a service.

        Raises:
            DuplicateTestDefinitionError: If the service already has a test double
        """
        if name in self._preloaded:
            raise DuplicateTestDefinitionError(name)
        self._preloaded[name] = instance

    def clone_as_test_double(self, obj: Any, name: str) -> SimpleNamespace:
        """Create a stand-in with a policy double for every member of obj except dunders."""
        members = [member for member in dir(obj) if not member.startswith("__")]
        logger.debug("Replacing %d member(s) of %s", len(members), name)
        return SimpleNamespace(**{m: self.test_double_policy(name, m) for m in members})


class _IncludeReal:
    def __init__(self, fake: FakeContainer, services: set[str]):
        self._fake = fake
        self._services = services

    def load(self, service: Any, *values: Any) -> Any:
        self._fake._included = self._services
        try:
            return self._fake.load(service, *values)
        finally:
            self._fake._included = set()
