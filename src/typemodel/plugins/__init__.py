"""Extension layer — resolver factory plugins via pluggy.

Discovery: entry_points (``typemodel.plugins``) plus single-file modules in a
local directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from typemodel.plugins.hookspecs import hookimpl
from typemodel.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
