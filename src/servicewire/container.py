"""
Container - registers bindings, resolves services and wires events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .bindings import UNSET, Binding, Parameter, as_names
from .errors import CircularDependencyError, DuplicateInstanceError, UnknownServiceError
from .events import EventBroker, notifier_name
from .graph import DependencyGrapher
from .parameters import match_parameters, validate_parameter
from .registry import BindingRegistry

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container and event broker.

    Services are registered by name with the names of the services they
    require, their configuration parameters, their lifetime and the events
    they raise or listen to. ``load`` builds a service, assigns every required
    service and parameter as an attribute and wires its events.

    Example:
        ```python
        container = Container()
        container.register("_bar", Bar)
        container.register("_foo", Foo, requires=["_bar"])

        foo = container.load("_foo")
        assert isinstance(foo._bar, Bar)
        ```
    """

    def __init__(self, detect_cycles: bool = True):
        """
        Create a new, empty Container.

        Args:
            detect_cycles: Raise CircularDependencyError when loading a service
                whose required services form a cycle. When False, a cycle
                recurses until Python raises RecursionError.
        """
        self._registry = BindingRegistry()
        self._broker = EventBroker()
        self._singletons: dict[str, Any] = {}
        self._instances: dict[str, Any] = {}
        self._configured: dict[str, dict[str, Any]] = {}
        self._detect_cycles = detect_cycles
        self._loading: list[str] = []
        self._pending_subscriptions: list[tuple[str, Any]] = []
        self._new_singletons: list[str] = []

    def register(
        self,
        name: str,
        service: Callable[[], Any],
        requires: Iterable[str] = (),
        parameters: Iterable[Parameter | str] = (),
        singleton: bool = False,
        event_source: Iterable[str] = (),
        event_listener: Iterable[str] = (),
    ) -> Binding:
        """
        Register a service under a name.

        Registering the same name again replaces the earlier binding.

        Raises:
            RegistrationError: If name is not a non-empty string or service is not callable
        """
        binding = Binding(
            name=name,
            service=service,
            requires=as_names(requires),
            parameters=tuple(Parameter.coerce(p) for p in parameters),
            singleton=singleton,
            event_source=as_names(event_source),
            event_listener=as_names(event_listener),
        )
        self.register_binding(binding)
        return binding

    def register_binding(self, binding: Binding) -> None:
        """Register a prebuilt Binding."""
        self._registry.register(binding)

    def make(self, name: str) -> BindingBuilder:
        """Create a binding builder for the given service name."""
        return BindingBuilder(self, name)

    def register_instance(self, name: str, instance: Any) -> None:
        """
        Bind a name directly to an existing object.

        Raises:
            DuplicateInstanceError: If the name already has a registered instance
        """
        if name in self._instances:
            raise DuplicateInstanceError(name)
        self._instances[name] = instance
        logger.debug("Registered instance for %s", name)

    def configure(self, name: str, *values: Any) -> None:
        """
        Set parameter values used by later calls to ``load``.

        Values are matched to the declared parameters in order. Instances
        that were already created are not changed.

        Raises:
            UnknownServiceError: If the service is not registered
            InvalidParameterError: If a value is rejected by its parameter's validator
        """
        binding = self._registry.lookup(name)
        if binding is None:
            raise UnknownServiceError.for_operation("Configure", name)

        matched = match_parameters(binding.parameters, values, name)
        self._configured.setdefault(name, {}).update(matched)
        logger.debug("Configured %s with %s", name, list(matched))

    def load(self, name: str, *values: Any) -> Any:
        """
        Resolve a service and return a fully wired instance.

        Args:
            name: The service name
            *values: Parameter values, overriding configured values by position

        Raises:
            UnknownServiceError: If the service or one of its requirements is not registered
            InvalidParameterError: If a parameter value is rejected
            CircularDependencyError: If the required services form a cycle
        """
        if name in self._instances:
            return self._instances[name]

        binding = self._registry.lookup(name)
        if binding is None:
            raise UnknownServiceError.for_operation("Load", name)

        if binding.singleton and name in self._singletons:
            logger.debug("Returning cached singleton %s", name)
            return self._singletons[name]

        if self._detect_cycles and name in self._loading:
            cycle = self._loading[self._loading.index(name) :] + [name]
            raise CircularDependencyError(cycle)

        outermost = not self._loading
        if outermost:
            self._pending_subscriptions = []
            self._new_singletons = []

        self._loading.append(name)
        try:
            instance = self._create_instance(binding, values)
        except Exception:
            if outermost:
                self._discard_pending()
            raise
        finally:
            self._loading.pop()

        if binding.singleton:
            self._singletons[name] = instance
            self._new_singletons.append(name)
        if outermost:
            self._commit_pending()
        return instance

    def _commit_pending(self) -> None:
        """Subscribe the listeners built by a load that completed."""
        for event, listener in self._pending_subscriptions:
            self._broker.subscribe(event, listener)
        self._pending_subscriptions = []
        self._new_singletons = []

    def _discard_pending(self) -> None:
        """Drop the listeners and singletons built by a load that failed."""
        for name in self._new_singletons:
            del self._singletons[name]
        logger.debug(
            "Discarded %d singleton(s) and %d subscription(s) after failed load",
            len(self._new_singletons),
            len(self._pending_subscriptions),
        )
        self._pending_subscriptions = []
        self._new_singletons = []

    def _create_instance(self, binding: Binding, values: Sequence[Any]) -> Any:
        """Create an instance of a binding and wire it."""
        parameter_values = self._parameter_values(binding, values)

        instance = binding.service()
        logger.debug("Created %s", binding)

        for dependency in binding.requires:
            setattr(instance, dependency, self.load(dependency))

        for parameter_name, value in parameter_values.items():
            setattr(instance, parameter_name, None if value is UNSET else value)

        for event in binding.event_source:
            setattr(instance, notifier_name(event), self._broker.notifier(event))

        # subscribed once the outermost load completes
        for event in binding.event_listener:
            self._pending_subscriptions.append((event, instance))

        return instance

    def _parameter_values(self, binding: Binding, values: Sequence[Any]) -> dict[str, Any]:
        """Pick and validate the value of each parameter: passed, configured or unset."""
        passed = match_parameters(binding.parameters, values, binding.name)
        configured = self._configured.get(binding.name, {})

        result: dict[str, Any] = {}
        for parameter in binding.parameters:
            if parameter.name in passed:
                result[parameter.name] = passed[parameter.name]
            else:
                value = configured.get(parameter.name, UNSET)
                result[parameter.name] = validate_parameter(parameter, value, binding.name)
        return result

    def notify_event(self, event: str, args: Sequence[Any] | None = None) -> None:
        """Dispatch an event to every subscribed listener."""
        self._broker.notify(event, args)

    @property
    def registry(self) -> BindingRegistry:
        """The registry holding this container's bindings."""
        return self._registry

    @property
    def broker(self) -> EventBroker:
        """The event broker owned by this container."""
        return self._broker

    def lookup(self, name: str) -> Binding | None:
        """Get the binding registered under a name."""
        return self._registry.lookup(name)

    def registered_services(self) -> list[str]:
        """Get all registered service names in registration order."""
        return self._registry.all_names()

    def find_singleton(self, name: str) -> Any | None:
        """Get a singleton instance if it has been created."""
        return self._singletons.get(name)

    def find_instance(self, name: str) -> Any | None:
        """Get an instance registered with ``register_instance``."""
        return self._instances.get(name)

    def grapher(self) -> DependencyGrapher:
        """Create a dependency grapher over the current bindings."""
        return DependencyGrapher(self._registry)


class BindingBuilder:
    """Builder for registering a binding with a fluent API."""

    def __init__(self, container: Container, name: str):
        self._container = container
        self._name = name
        self._requires: list[str] = []
        self._parameters: list[Parameter] = []
        self._singleton = False
        self._event_source: list[str] = []
        self._event_listener: list[str] = []

    def requires(self, *names: str) -> BindingBuilder:
        """Add required services."""
        self._requires.extend(names)
        return self

    def parameters(self, *parameters: Parameter | str) -> BindingBuilder:
        """Add configuration parameters."""
        self._parameters.extend(Parameter.coerce(p) for p in parameters)
        return self

    def singleton(self) -> BindingBuilder:
        """Share a single instance for every load."""
        self._singleton = True
        return self

    def raises(self, *events: str) -> BindingBuilder:
        """Declare events this service raises."""
        self._event_source.extend(events)
        return self

    def listens(self, *events: str) -> BindingBuilder:
        """Declare events this service handles."""
        self._event_listener.extend(events)
        return self

    def using(self, service: Callable[[], Any]) -> Binding:
        """Bind to a class or factory and register the binding."""
        return self._container.register(
            self._name,
            service,
            requires=self._requires,
            parameters=self._parameters,
            singleton=self._singleton,
            event_source=self._event_source,
            event_listener=self._event_listener,
        )
