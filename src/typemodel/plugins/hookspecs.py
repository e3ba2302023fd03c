"""Pluggy hook specifications for typemodel extensions.

One setup-time hook lets plugins contribute resolver factories, keyed by the
factory name documents refer to. A plugin factory shadows the built-in of the
same name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pluggy

PROJECT_NAME = "typemodel"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TypemodelHookSpec:
    """Hook specifications for the typemodel plugin system."""

    @hookspec
    def register_resolver_factories(self) -> dict[str, Callable[..., Any]] | None:
        """Return factory name -> resolver constructor mappings."""
