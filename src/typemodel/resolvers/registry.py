"""ResolverRegistry — factory name -> resolver constructor.

Caller-supplied extensions are registered first and built-ins only fill the
names still free, so an extension can shadow any built-in strategy. Later
registrations of a taken name are ignored (first registration wins).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from typemodel.domain.errors import DocumentError
from typemodel.resolvers.builtin import BUILTIN_FACTORIES

logger = logging.getLogger(__name__)

ResolverFactory = Callable[..., Any]


class ResolverRegistry:
    """Name-keyed registry of resolver factories."""

    def __init__(
        self,
        extensions: Mapping[str, ResolverFactory] | None = None,
        *,
        include_builtins: bool = True,
    ) -> None:
        self._factories: dict[str, ResolverFactory] = {}
        for name, factory in (extensions or {}).items():
            self.register(name, factory)
        if include_builtins:
            for name, factory in BUILTIN_FACTORIES.items():
                self.register(name, factory)

    def register(self, name: str, factory: ResolverFactory) -> bool:
        """Register *factory* under *name* unless the name is taken.

        Returns True when the factory was installed.
        """
        if not callable(factory):
            msg = f"Resolver factory {name!r} must be callable"
            raise TypeError(msg)
        if name in self._factories:
            logger.debug("Resolver factory %s already registered; keeping the first", name)
            return False
        self._factories[name] = factory
        return True

    def get(self, name: str) -> ResolverFactory | None:
        return self._factories.get(name)

    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def resolve_reference(self, reference: Any) -> tuple[str, ResolverFactory, list[Any]] | None:
        """Match a factory reference from the document against the registry.

        A reference is either a bare factory name or a record whose first key
        naming a registered factory maps to the constructor argument list.
        Returns None when nothing matches.
        """
        if isinstance(reference, str):
            factory = self._factories.get(reference)
            if factory is None:
                return None
            return reference, factory, []
        if isinstance(reference, Mapping):
            for name, raw_args in reference.items():
                factory = self._factories.get(name)
                if factory is None:
                    continue
                return name, factory, _constructor_args(raw_args)
        return None

    def instantiate(self, reference: Any) -> Any | None:
        """Build the resolver a factory reference points at.

        Returns None for an absent or unknown reference so the caller can skip
        the enclosing registration.

        Raises:
            DocumentError: If the factory rejects the supplied arguments.
        """
        if reference is None:
            return None
        match = self.resolve_reference(reference)
        if match is None:
            logger.debug("Unknown resolver factory reference %r; skipping", reference)
            return None
        name, factory, args = match
        try:
            return factory(*args)
        except TypeError as exc:
            msg = f"Resolver factory {name!r} rejected arguments {args!r}: {exc}"
            raise DocumentError(msg) from exc


def _constructor_args(raw_args: Any) -> list[Any]:
    if raw_args is None:
        return []
    if isinstance(raw_args, Sequence) and not isinstance(raw_args, str):
        return list(raw_args)
    return [raw_args]
