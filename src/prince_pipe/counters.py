"""
Tick counter for the pipeline scheduler.
"""


class CycleCounter:
    """
    Tracks the number of ticks (clock edges) applied to a pipeline.
    """

    def __init__(self):
        self._count = 0

    def increment(self, amount: int = 1) -> None:
        """Add ticks to the counter."""
        self._count += amount

    def reset(self) -> None:
        """Reset counter to zero."""
        self._count = 0

    @property
    def count(self) -> int:
        """Get current tick count."""
        return self._count

    def __repr__(self) -> str:
        return f"CycleCounter(count={self._count})"
