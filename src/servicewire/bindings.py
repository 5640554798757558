"""
Binding definitions and parameter specs for servicewire.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


class _Unset:
    """Marker for a parameter that has no value."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Parameter:
    """A named configuration parameter with an optional validator."""

    name: str
    validator: Callable[[Any], bool] | None = field(default=None, compare=False)

    def accepts(self, value: Any) -> bool:
        """Check a candidate value against the validator."""
        if self.validator is None:
            return True
        return bool(self.validator(value))

    @classmethod
    def of_type(cls, name: str, *types: type) -> Parameter:
        """Create a parameter that only accepts instances of the given types."""

        def check(value: Any) -> bool:
            # bool is an int subclass but never a valid number
            if isinstance(value, bool) and bool not in types:
                return False
            return isinstance(value, types)

        return cls(name, check)

    @classmethod
    def coerce(
        cls, declaration: Parameter | str | tuple[Any, ...] | Mapping[str, Any]
    ) -> Parameter:
        """Normalize a parameter declaration into a Parameter."""
        if isinstance(declaration, Parameter):
            return declaration
        if isinstance(declaration, str):
            return cls(declaration)
        if isinstance(declaration, Mapping):
            return cls(declaration["name"], declaration.get("validator"))
        if isinstance(declaration, tuple) and len(declaration) == 2:
            return cls(declaration[0], declaration[1])
        raise TypeError(f"Cannot use {declaration!r} as a parameter declaration")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Binding:
    """The registered recipe for constructing and wiring one named service."""

    name: str
    service: Callable[[], Any]
    requires: tuple[str, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    singleton: bool = False
    event_source: tuple[str, ...] = ()
    event_listener: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "requires", as_names(self.requires))
        object.__setattr__(
            self, "parameters", tuple(Parameter.coerce(p) for p in self.parameters)
        )
        object.__setattr__(self, "event_source", _unique(as_names(self.event_source)))
        object.__setattr__(self, "event_listener", _unique(as_names(self.event_listener)))

    @property
    def friendly_name(self) -> str:
        """Name without leading underscores, for display."""
        return self.name.lstrip("_") or self.name

    def __str__(self) -> str:
        service_name = getattr(self.service, "__name__", str(self.service))
        lifetime = "singleton" if self.singleton else "transient"
        return f"{self.name} -> {service_name} ({lifetime})"


def as_names(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))
