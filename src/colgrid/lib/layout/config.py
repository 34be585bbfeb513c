"""Layout sizing configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from colgrid.lib.errors import ConfigurationError


class FillOrder(StrEnum):
    COLUMN = "column"
    ROW = "row"


def parse_fill_order(value: FillOrder | str) -> FillOrder:
    """Resolve a fill order from its enum member or case-insensitive name."""

    if isinstance(value, FillOrder):
        return value
    normalized = value.strip().lower()
    try:
        return FillOrder(normalized)
    except ValueError:
        raise ConfigurationError(
            f"Invalid fill order {value!r}: expected one of "
            f"{sorted(order.value for order in FillOrder)}."
        ) from None


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Sizing knobs for one layout call.

    ``column_count`` selects CustomSize mode and cannot be combined with the
    AutoSize knobs ``max_column_count`` and ``min_row_count``.
    """

    column_count: int | None = None
    max_column_count: int | None = None
    min_row_count: int | None = None
    order: FillOrder = FillOrder.COLUMN
    display_width: int = 80
    column_gap: int = 1

    @property
    def auto_size(self) -> bool:
        return self.column_count is None

    def validate(self) -> LayoutConfig:
        """Raise ConfigurationError for invalid combinations; return self."""

        if self.column_count is not None:
            if self.max_column_count is not None:
                raise ConfigurationError(
                    "column_count cannot be combined with max_column_count."
                )
            if self.min_row_count is not None:
                raise ConfigurationError("column_count cannot be combined with min_row_count.")

        for name in ("column_count", "max_column_count", "min_row_count"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}.")
        if self.display_width <= 0:
            raise ConfigurationError(
                f"display_width must be a positive integer, got {self.display_width!r}."
            )
        if self.column_gap < 0:
            raise ConfigurationError(
                f"column_gap must not be negative, got {self.column_gap!r}."
            )
        return self
