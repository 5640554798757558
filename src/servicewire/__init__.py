"""
servicewire - a small dependency injection container with an event broker.

This library provides:
- Named bindings with required services, parameters and lifetimes
- Validation of configured and passed parameter values
- Wiring of event sources to event listeners
- Deterministic, dependency-weighted ordering of the binding graph
- GraphViz rendering and test doubles for registered services
"""

from .bindings import UNSET, Binding, Parameter
from .container import BindingBuilder, Container
from .errors import (
    CircularDependencyError,
    DuplicateInstanceError,
    DuplicateTestDefinitionError,
    InvalidParameterError,
    RegistrationError,
    ServiceWireError,
    UnexpectedCallError,
    UnknownServiceError,
)
from .events import EventBroker, handler_name, notifier_name
from .graph import DependencyGrapher
from .graphviz import GraphVizFormatter
from .registry import BindingRegistry

__all__ = [
    "UNSET",
    "Binding",
    "BindingBuilder",
    "BindingRegistry",
    "CircularDependencyError",
    "Container",
    "DependencyGrapher",
    "DuplicateInstanceError",
    "DuplicateTestDefinitionError",
    "EventBroker",
    "GraphVizFormatter",
    "InvalidParameterError",
    "Parameter",
    "RegistrationError",
    "ServiceWireError",
    "UnexpectedCallError",
    "UnknownServiceError",
    "handler_name",
    "notifier_name",
]
