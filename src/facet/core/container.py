"""Minimal DI container: register by type/key, resolve collaborators, build per-request objects."""
from __future__ import annotations

import inspect
import sys
from typing import Any, Callable, TypeVar, get_type_hints

T = TypeVar("T")


def _resolve_annotation(ann: str, cls: type[Any]) -> Any:
    """Resolve a string annotation (from __future__ annotations) to the actual class."""
    mod = sys.modules.get(cls.__module__)
    if mod is not None and hasattr(mod, ann):
        return getattr(mod, ann)
    return ann


def _instantiate_with_container(container: Container, cls: type[T], overrides: dict[str, Any]) -> T:
    """Create an instance of cls: overrides by parameter name, the rest resolved by annotation."""
    sig = inspect.signature(cls)
    try:
        hints = get_type_hints(cls.__init__)
    except (NameError, TypeError):
        hints = {}
    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if name == "self":
            continue
        if name in overrides:
            kwargs[name] = overrides[name]
            continue
        if param.annotation is inspect.Parameter.empty:
            continue
        ann = hints.get(name, param.annotation)
        if isinstance(ann, str):
            ann = _resolve_annotation(ann, cls)
        if param.default is not inspect.Parameter.empty and ann not in container:
            continue
        kwargs[name] = container.resolve(ann)
    return cls(**kwargs)


class Container:
    """
    Register by type (or key) and resolve via factory.
    Singletons live for the app; non-singletons (e.g. FileManager) are built on every resolve.
    """

    def __init__(self) -> None:
        self._registry: dict[type[Any] | str, Callable[[], Any]] = {}
        self._singletons: dict[type[Any] | str, Any] = {}
        self._singleton_keys: set[type[Any] | str] = set()

    def __contains__(self, key: object) -> bool:
        return key in self._registry

    def register(self, key: type[T] | type[Any] | str, factory: Callable[[], T], singleton: bool = True) -> None:
        """Register a factory for a type or string key."""
        self._registry[key] = factory
        self._singletons.pop(key, None)
        if singleton:
            self._singleton_keys.add(key)
        else:
            self._singleton_keys.discard(key)

    def register_instance(self, key: type[T] | type[Any] | str, instance: T) -> None:
        """Register a ready-made instance."""
        self._registry[key] = lambda: instance
        self._singletons[key] = instance
        self._singleton_keys.add(key)

    def resolve(self, key: type[T] | type[Any] | str) -> T:
        """Resolve an instance by type or key."""
        if key not in self._registry:
            raise KeyError(f"No registration for {key}")
        if key in self._singletons:
            return self._singletons[key]
        instance = self._registry[key]()
        if key in self._singleton_keys:
            self._singletons[key] = instance
        return instance

    def register_class(self, cls: type[T], singleton: bool = True) -> None:
        """Register a class: on resolve an instance is created with dependencies from the container."""
        self.register(key=cls, factory=lambda: _instantiate_with_container(self, cls, {}), singleton=singleton)

    def build(self, cls: type[T], **overrides: Any) -> T:
        """Create cls now, never cached: named overrides win (e.g. the request context)."""
        return _instantiate_with_container(self, cls, overrides)
