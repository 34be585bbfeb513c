"""Column-layout engine for wide, multi-column text listings."""

__version__ = "0.1.0"
