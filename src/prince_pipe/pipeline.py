"""
Latency-staged PRINCE pipeline.

One slot per stage; every tick all slots are rewritten from the previous
tick's snapshot:

- reset asserted:           every slot <- 0 (reset dominates enable)
- enable asserted:          slot 0 <- stage 0 program (input whitening
                            included) on the primary input;
                            slot k <- stage k program on old slot k-1
- neither:                  every slot <- 0 (in-flight blocks are dropped,
                            not held)

A block admitted with enable held for L consecutive ticks appears, output
whitened, at the pipeline output after the L-th tick.
"""

from __future__ import annotations

from .constants import BLOCK_BITS
from .counters import CycleCounter
from .keys import ExpandedKey, expand_key
from .rounds import RoundEngine, whiten_output
from .trace import TraceRecorder
from .utils import check_width


class PipelineScheduler:
    """
    Holds the stage slots and advances them once per tick.

    The stage programs are fixed at construction by RoundEngine; only the
    slot values change at runtime.
    """

    def __init__(
        self,
        stage_count: int,
        tracer: TraceRecorder | None = None,
    ):
        """
        Initialize the pipeline with all slots zero.

        Args:
            stage_count: Odd number of stages, >= 1
            tracer: Optional trace recorder for per-tick records

        Raises:
            ValueError: If stage_count is not a legal schedule length
        """
        self.engine = RoundEngine(stage_count)
        self.tracer = tracer
        self.cycle_counter = CycleCounter()
        self.keys: ExpandedKey = expand_key(0)

        self._slots = [0] * stage_count
        self._occupancy: list[int | None] = [None] * stage_count
        self._next_block_id = 0

    @property
    def stage_count(self) -> int:
        return self.engine.stage_count

    @property
    def slots(self) -> list[int]:
        """Copy of the current slot values, stage 0 first."""
        return list(self._slots)

    @property
    def occupancy(self) -> list[int | None]:
        """Admission id of the block held by each stage (None if empty)."""
        return list(self._occupancy)

    @property
    def tags(self) -> list[str]:
        """Label of the logical steps each stage evaluates."""
        return [stage.label for stage in self.engine.stages]

    @property
    def ticks(self) -> int:
        return self.cycle_counter.count

    @property
    def output(self) -> int:
        """Ciphertext derived from the last slot with the last-used keys."""
        return whiten_output(self._slots[-1], self.keys)

    def step(
        self,
        reset: bool,
        enable: bool,
        data_in: int,
        keys: ExpandedKey,
    ) -> None:
        """
        Advance the pipeline by one tick.

        Args:
            reset: Synchronous reset; zeros every slot
            enable: Advance the pipeline; when low every slot is zeroed
            data_in: 64-bit primary input admitted into stage 0
            keys: Expanded key for this tick
        """
        check_width(data_in, BLOCK_BITS, "Input block")
        self.keys = keys
        stage_count = self.stage_count

        if reset or not enable:
            new_slots = [0] * stage_count
            new_occupancy: list[int | None] = [None] * stage_count
        else:
            prev = self._slots
            new_slots = [self.engine.run_stage(0, data_in, keys)]
            for k in range(1, stage_count):
                new_slots.append(self.engine.run_stage(k, prev[k - 1], keys))

            new_occupancy = [self._next_block_id] + self._occupancy[:-1]
            self._next_block_id += 1

        self._slots = new_slots
        self._occupancy = new_occupancy
        self.cycle_counter.increment()

        if self.tracer:
            self.tracer.record(
                tick=self.cycle_counter.count,
                reset=bool(reset),
                enable=bool(enable),
                data_in=data_in,
                slots=list(new_slots),
                occupancy=list(new_occupancy),
                output=self.output,
            )

    def __repr__(self) -> str:
        return f"PipelineScheduler(stage_count={self.stage_count}, ticks={self.ticks})"
