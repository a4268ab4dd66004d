"""Core configuration and result structures for the pipelined PRINCE core."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .constants import FORWARD_ROUNDS, NUM_LOGICAL_STEPS
from .rounds import validate_stage_count


@dataclass
class PipelineConfig:
    """Construction-time configuration of a pipelined PRINCE instance.

    The stage count fixes the latency in ticks and the maximum number of
    blocks in flight. It is validated here so that an invalid instance is
    never created.
    """

    # Number of pipeline stages (odd, >= 1; above 11 adds pass-through stages)
    stage_count: int = 11

    # Clock frequency in Hz (for throughput/latency conversions)
    f_clk_hz: float = 200e6

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        validate_stage_count(self.stage_count)
        if self.f_clk_hz <= 0:
            raise ValueError(f"f_clk_hz must be positive, got {self.f_clk_hz}")

    @property
    def latency_cycles(self) -> int:
        """Ticks from admitting a block to its ciphertext appearing."""
        return self.stage_count

    @property
    def max_in_flight(self) -> int:
        """Blocks that can be in the pipeline at the same time."""
        return self.stage_count

    @property
    def steps_per_stage(self) -> int:
        """Logical steps fused into the longest stage (1 once L >= 11)."""
        if self.stage_count == 1:
            return NUM_LOGICAL_STEPS
        half = (self.stage_count - 1) // 2
        return math.ceil(len(FORWARD_ROUNDS) / half)


@dataclass
class Result:
    """Result of pushing one block through the pipeline."""

    # Core result
    plaintext: int
    ciphertext: int
    correct: bool
    error_detail: str = ""

    # Tick accounting
    stage_count: int = 0
    cycle_count_total: int = 0

    # Notes and warnings
    notes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_note(self, note: str) -> None:
        """Add an informational note."""
        self.notes.append(note)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "plaintext_hex": f"{self.plaintext:016x}",
            "ciphertext_hex": f"{self.ciphertext:016x}",
            "correct": self.correct,
            "error_detail": self.error_detail,
            "stage_count": self.stage_count,
            "cycle_count_total": self.cycle_count_total,
            "notes": self.notes,
            "warnings": self.warnings,
        }
