"""Command-line surface for colgrid."""
