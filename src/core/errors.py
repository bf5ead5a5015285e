"""Error taxonomy for the price and statement transformations.

Empty inputs are not errors: they degrade to empty / None results.
"""


class PriceDataError(ValueError):
    """Price data does not have the shape required for a computation."""


class DivisionUndefinedError(ZeroDivisionError):
    """Percentage change requested against a zero starting price."""

    def __init__(self, start: float, end: float) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"Percent change undefined for start price {start} (end price {end})"
        )
