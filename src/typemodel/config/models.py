"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, typemodel.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel


class AssemblyConfig(BaseModel):
    """[assembly] section."""

    model_config = {"frozen": True}

    strict_references: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section.

    ``local_dir`` is resolved against the directory holding typemodel.toml.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".typemodel/plugins"
