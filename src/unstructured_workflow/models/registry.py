"""Discriminator registries for polymorphic wire types.

Each registry maps a wire tag to the class that decodes it. Registration
happens at import time, so a duplicate tag fails as soon as the package is
imported rather than on the first unlucky decode.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from unstructured_workflow.errors import (
    DuplicateDiscriminatorError,
    RegistryError,
    UnknownVariantError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class VariantRegistry(Generic[T]):
    """A closed table of discriminator -> variant class."""

    def __init__(self, name: str):
        self.name = name
        self._factories: dict[str, T] = {}

    def add(self, discriminator: str, variant: T) -> T:
        """Register ``variant`` under ``discriminator``.

        Raises:
            DuplicateDiscriminatorError: if the tag is already taken.
        """
        existing = self._factories.get(discriminator)
        if existing is not None:
            raise DuplicateDiscriminatorError(
                f"{self.name} registry: discriminator {discriminator!r} maps to both "
                f"{existing.__name__} and {variant.__name__}",
                {"registry": self.name, "discriminator": discriminator},
            )
        self._factories[discriminator] = variant
        return variant

    def register(self, discriminator: str) -> Callable[[T], T]:
        """Decorator form of :meth:`add`."""

        def decorator(variant: T) -> T:
            return self.add(discriminator, variant)

        return decorator

    def lookup(self, discriminator: str) -> T:
        try:
            return self._factories[discriminator]
        except KeyError:
            raise UnknownVariantError(self.name, discriminator) from None

    def verify_covers(self, variants: list[type]) -> None:
        """Assert every class in ``variants`` has at least one registry entry."""
        registered = set(self._factories.values())
        missing = [v.__name__ for v in variants if v not in registered]
        if missing:
            raise RegistryError(
                f"{self.name} registry is missing variants: {', '.join(sorted(missing))}",
                {"registry": self.name, "missing": missing},
            )
        logger.debug("%s registry covers %d variants", self.name, len(registered))

    def items(self) -> Iterator[tuple[str, T]]:
        return iter(self._factories.items())

    def __contains__(self, discriminator: object) -> bool:
        return discriminator in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"VariantRegistry({self.name!r}, {len(self)} variants)"
