"""Name <-> variant registry shared by the activation, cost and optimizer families."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Generic, Iterable, Type, TypeVar

from .exceptions import UnimplementedError, UnknownNameError

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


class Registry(Generic[E, T]):
    """Map string names to enum variants and variants to implementations.

    ``shared`` registries hand out one instance per variant, which suits the
    stateless function objects referenced by many layers. Non-shared
    registries build a fresh instance on every :meth:`create` call.
    """

    def __init__(self, kind: str, variants: Type[E], *, shared: bool = False) -> None:
        self.kind = kind
        self.variants = variants
        self.shared = shared
        self._factories: Dict[E, Callable[[], T]] = {}
        self._instances: Dict[E, T] = {}

    def register(self, variant: E, factory: Callable[[], T]) -> None:
        self._factories[variant] = factory
        self._instances.pop(variant, None)

    def parse(self, name: str | E) -> E:
        """Return the variant named ``name``."""

        if isinstance(name, self.variants):
            return name
        for variant in self.variants:
            if variant.value == name:
                return variant
        raise UnknownNameError(f"unknown {self.kind} name {name!r}")

    def create(self, variant: str | E) -> T:
        """Return the implementation registered for ``variant``."""

        resolved = self.parse(variant)
        factory = self._factories.get(resolved)
        if factory is None:
            raise UnimplementedError(f"unimplemented {self.kind} {resolved.value!r}")
        if not self.shared:
            return factory()
        if resolved not in self._instances:
            self._instances[resolved] = factory()
        return self._instances[resolved]

    def names(self) -> Iterable[str]:
        return sorted(variant.value for variant in self._factories)


__all__ = ["Registry"]
