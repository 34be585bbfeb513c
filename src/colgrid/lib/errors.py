"""Error taxonomy for layout, selection, and configuration failures.

Each class carries the process exit code the CLI uses and the category name
the MCP server reports, so both surfaces classify a failure the same way.
"""

from __future__ import annotations


class ColgridError(Exception):
    """Base class for every terminating colgrid failure."""

    exit_code: int = 1
    category: str = "colgrid"


class ConfigurationError(ColgridError, ValueError):
    """Mutually exclusive or out-of-range configuration values."""

    exit_code = 2
    category = "configuration"


class SelectionError(ColgridError):
    """Deriving a display string or group key from a record failed."""

    exit_code = 3
    category = "selection"


class LayoutError(ColgridError):
    """The resolved grid cannot display the cells it was given."""

    exit_code = 4
    category = "layout"
