"""
Dependency Injection Container
Binds interfaces to implementations so callers depend on contracts only.
"""

import inspect
import typing
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar('T')


class ServiceLifetime:
    """Service lifetime constants."""
    SINGLETON = 'singleton'
    TRANSIENT = 'transient'


class Binding:
    """Represents a binding between interface and a way to build it."""

    def __init__(
        self,
        interface: type,
        implementation: type | None,
        lifetime: str,
        factory: Callable[["DIContainer"], Any] | None = None,
    ):
        self.interface = interface
        self.implementation = implementation
        self.lifetime = lifetime
        self.factory = factory


class DIContainer:
    """
    Simple dependency injection container supporting:
    - Interface/implementation binding
    - Factory bindings (for decorators wrapping another implementation)
    - Singleton and transient lifetimes
    - Constructor injection
    - Circular dependency detection
    """

    def __init__(self):
        self._bindings: dict[str, Binding] = {}
        self._instances: dict[str, Any] = {}
        self._resolution_stack: list[str] = []

    def bind(
        self,
        interface: type[T],
        implementation: type[T],
        lifetime: str = ServiceLifetime.TRANSIENT,
    ) -> 'DIContainer':
        """
        Bind interface to implementation.

        Args:
            interface: Interface type to bind
            implementation: Implementation type
            lifetime: 'singleton' or 'transient'
        """
        key = self._get_type_key(interface)
        self._bindings[key] = Binding(interface, implementation, lifetime)
        self._instances.pop(key, None)
        return self

    def bind_factory(
        self,
        interface: type[T],
        factory: Callable[['DIContainer'], T],
        lifetime: str = ServiceLifetime.SINGLETON,
    ) -> 'DIContainer':
        """Bind interface to a factory receiving the container."""
        key = self._get_type_key(interface)
        self._bindings[key] = Binding(interface, None, lifetime, factory)
        self._instances.pop(key, None)
        return self

    def bind_instance(self, interface: type[T], instance: T) -> 'DIContainer':
        """Bind interface to a specific instance (singleton)."""
        key = self._get_type_key(interface)
        self._bindings[key] = Binding(interface, type(instance), ServiceLifetime.SINGLETON)
        self._instances[key] = instance
        return self

    def is_bound(self, interface: type) -> bool:
        return self._get_type_key(interface) in self._bindings

    def resolve(self, interface: type[T]) -> T:
        """Resolve an interface to its implementation."""
        key = self._get_type_key(interface)

        if key in self._resolution_stack:
            cycle = ' -> '.join(self._resolution_stack + [key])
            raise ValueError(f"Circular dependency detected: {cycle}")

        try:
            self._resolution_stack.append(key)
            return self._resolve_internal(interface, key)
        finally:
            self._resolution_stack.remove(key)

    def _resolve_internal(self, interface: type[T], key: str) -> T:
        """Internal resolution logic."""
        if key not in self._bindings:
            # Try to create directly if it's a concrete class
            if not inspect.isabstract(interface):
                return self._create_instance(interface)
            raise ValueError(f"No binding found for {interface.__name__}")

        binding = self._bindings[key]

        if binding.lifetime == ServiceLifetime.SINGLETON and key in self._instances:
            return self._instances[key]

        if binding.factory is not None:
            instance = binding.factory(self)
        else:
            instance = self._create_instance(binding.implementation)

        if binding.lifetime == ServiceLifetime.SINGLETON:
            self._instances[key] = instance

        return instance

    def _create_instance(self, cls: type[T]) -> T:
        """Create instance with constructor injection."""
        signature = inspect.signature(cls.__init__)
        hints = typing.get_type_hints(cls.__init__)
        parameters = {}

        for param_name, param in signature.parameters.items():
            if param_name == 'self' or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            # Parameters with defaults keep them
            if param.default is not inspect.Parameter.empty:
                continue

            annotation = hints.get(param_name)
            if annotation is None:
                raise ValueError(
                    f"Cannot inject parameter '{param_name}' of {cls.__name__}: missing annotation"
                )
            parameters[param_name] = self.resolve(annotation)

        return cls(**parameters)

    def _get_type_key(self, type_: type) -> str:
        """Get string key for type."""
        return f"{type_.__module__}.{type_.__qualname__}"
