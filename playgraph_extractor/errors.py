"""Exceptions raised by the reconstruction pipeline."""


class GraphDataError(ValueError):
    """A PlayGraph payload cannot be mapped to domain values."""


class StitchIntegrityError(RuntimeError):
    """The stitched cumulative series is not monotonic in games.

    Attributes:
        index: Position of the offending point in the stitched series
        previous: cum_game of the point before it
        current: cum_game of the offending point
    """

    def __init__(self, index: int, previous: float, current: float):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"cum_game went backwards at index {index}: {previous} -> {current}"
        )
