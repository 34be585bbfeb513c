"""Core colgrid library exports."""

from colgrid.lib.errors import ColgridError, ConfigurationError, LayoutError, SelectionError
from colgrid.lib.layout import FillOrder, Group, LayoutConfig, render, render_groups

__all__ = [
    "ColgridError",
    "ConfigurationError",
    "FillOrder",
    "Group",
    "LayoutConfig",
    "LayoutError",
    "SelectionError",
    "render",
    "render_groups",
]
