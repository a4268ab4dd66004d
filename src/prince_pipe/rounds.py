"""
PRINCE round functions and their distribution across pipeline stages.

Logical step sequence (11 steps):

  F1 F2 F3 F4 F5   MID   B6 B7 B8 B9 B10

- Forward round i:  S, then M, then XOR RC[i] ^ K1
- Middle step:      S, then M', then S^-1 (no key, self-inverse)
- Backward round i: XOR RC[i] ^ K1, then M^-1, then S^-1

Stage 0 additionally applies the input whitening (K0 ^ RC[0] ^ K1) before
its first step. The output whitening is applied by the cipher facade to the
last stage's slot, so it never occupies a stage.

Stage schedules for each legal stage count:

  L=1   [W F1..F5 MID B6..B10]
  L=3   [W F1..F5] [MID] [B6..B10]
  L=5   [W F1 F2 F3] [F4 F5] [MID] [B6 B7] [B8 B9 B10]
  ...
  L=11  [W F1] [F2] [F3] [F4] [F5] [MID] [B6] [B7] [B8] [B9] [B10]
  L=13  [W F1] [F2] [F3] [F4] [F5] [--] [MID] [--] [B6] [B7] [B8] [B9] [B10]

Beyond 11 stages each half is padded with pass-through stages next to the
middle step, so latency grows with L while the ciphertext does not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .constants import (
    BACKWARD_ROUNDS,
    FINAL_CONSTANT_INDEX,
    FORWARD_ROUNDS,
    ROUND_CONSTANTS,
)
from .keys import ExpandedKey
from .linear import inv_m_layer, m_layer, m_prime
from .sbox import inv_sub_nibbles, sub_nibbles


def whiten_input(block: int, keys: ExpandedKey) -> int:
    """Initial whitening: block ^ K0, then ^ RC[0] ^ K1 on entry to round 1."""
    return block ^ keys.k0 ^ ROUND_CONSTANTS[0] ^ keys.k1


def whiten_output(block: int, keys: ExpandedKey) -> int:
    """Final whitening: block ^ RC[11] ^ K1, then ^ K0'."""
    return block ^ ROUND_CONSTANTS[FINAL_CONSTANT_INDEX] ^ keys.k1 ^ keys.k0_prime


@dataclass(frozen=True)
class ForwardRound:
    """Forward round i (1..5)."""

    index: int

    def __post_init__(self) -> None:
        if self.index not in FORWARD_ROUNDS:
            raise ValueError(f"Forward round index must be 1..5, got {self.index}")

    @property
    def label(self) -> str:
        return f"F{self.index}"

    def apply(self, block: int, k1: int) -> int:
        return m_layer(sub_nibbles(block)) ^ ROUND_CONSTANTS[self.index] ^ k1


@dataclass(frozen=True)
class MiddleRound:
    """The involutive middle step S^-1 . M' . S."""

    @property
    def label(self) -> str:
        return "MID"

    def apply(self, block: int, k1: int) -> int:
        return inv_sub_nibbles(m_prime(sub_nibbles(block)))


@dataclass(frozen=True)
class BackwardRound:
    """Backward round i (6..10), the mirror of forward round 11 - i."""

    index: int

    def __post_init__(self) -> None:
        if self.index not in BACKWARD_ROUNDS:
            raise ValueError(f"Backward round index must be 6..10, got {self.index}")

    @property
    def label(self) -> str:
        return f"B{self.index}"

    def apply(self, block: int, k1: int) -> int:
        return inv_sub_nibbles(inv_m_layer(block ^ ROUND_CONSTANTS[self.index] ^ k1))


RoundStep = Union[ForwardRound, MiddleRound, BackwardRound]

LOGICAL_STEPS: tuple[RoundStep, ...] = (
    *(ForwardRound(i) for i in FORWARD_ROUNDS),
    MiddleRound(),
    *(BackwardRound(i) for i in BACKWARD_ROUNDS),
)

PASS_THROUGH_LABEL = "--"


@dataclass(frozen=True)
class StageProgram:
    """The fixed sequence of logical steps evaluated by one pipeline stage.

    A stage with no steps and no whitening is a pass-through register.
    """

    index: int
    steps: tuple[RoundStep, ...]
    whitens_input: bool = False

    @property
    def is_pass_through(self) -> bool:
        return not self.steps and not self.whitens_input

    @property
    def label(self) -> str:
        if self.is_pass_through:
            return PASS_THROUGH_LABEL
        labels = [step.label for step in self.steps]
        if self.whitens_input:
            labels.insert(0, "W")
        return "+".join(labels)

    def apply(self, block: int, keys: ExpandedKey) -> int:
        if self.whitens_input:
            block = whiten_input(block, keys)
        for step in self.steps:
            block = step.apply(block, keys.k1)
        return block


def validate_stage_count(stage_count: int) -> None:
    """
    Check that a stage count is a legal schedule length.

    Raises:
        ValueError: If stage_count is not an odd int >= 1
    """
    if not isinstance(stage_count, int) or isinstance(stage_count, bool):
        raise ValueError(f"stage_count must be an int, got {type(stage_count).__name__}")
    if stage_count < 1:
        raise ValueError(f"stage_count must be >= 1, got {stage_count}")
    if stage_count % 2 == 0:
        raise ValueError(f"stage_count must be odd, got {stage_count}")


def _split_evenly(items: tuple, parts: int) -> list[tuple]:
    """
    Split items into `parts` contiguous chunks; earlier chunks take the remainder.

    With more parts than items the trailing chunks are empty.
    """
    base, extra = divmod(len(items), parts)
    chunks = []
    start = 0
    for i in range(parts):
        size = base + (1 if i < extra else 0)
        chunks.append(items[start:start + size])
        start += size
    return chunks


def build_schedule(stage_count: int) -> list[StageProgram]:
    """
    Distribute the 11 logical steps over `stage_count` stages.

    The middle step sits alone in the centre stage (except for L=1) and
    the backward half mirrors the forward split, so the schedule stays
    symmetric about the involution. With more than 11 stages the extra
    stages are empty pass-throughs adjacent to the middle stage.

    Args:
        stage_count: Odd number of stages, >= 1

    Returns:
        One StageProgram per stage, stage 0 first
    """
    validate_stage_count(stage_count)

    if stage_count == 1:
        return [StageProgram(index=0, steps=LOGICAL_STEPS, whitens_input=True)]

    half = (stage_count - 1) // 2
    forward = LOGICAL_STEPS[:len(FORWARD_ROUNDS)]
    middle = LOGICAL_STEPS[len(FORWARD_ROUNDS)]
    backward = LOGICAL_STEPS[len(FORWARD_ROUNDS) + 1:]

    forward_chunks = _split_evenly(forward, half)
    sizes = [len(chunk) for chunk in reversed(forward_chunks)]

    backward_chunks = []
    start = 0
    for size in sizes:
        backward_chunks.append(backward[start:start + size])
        start += size

    chunks = forward_chunks + [(middle,)] + backward_chunks
    return [
        StageProgram(index=i, steps=tuple(chunk), whitens_input=(i == 0))
        for i, chunk in enumerate(chunks)
    ]


class RoundEngine:
    """
    Evaluates the stage programs of a fixed schedule.

    The engine is stateless apart from the schedule; slot state lives in the
    pipeline scheduler.
    """

    def __init__(self, stage_count: int):
        self.stages = build_schedule(stage_count)

    @property
    def stage_count(self) -> int:
        return len(self.stages)

    def run_stage(self, index: int, block: int, keys: ExpandedKey) -> int:
        """Evaluate stage `index` on one block."""
        return self.stages[index].apply(block, keys)

    def run_all(self, block: int, keys: ExpandedKey) -> int:
        """Evaluate every stage back to back (no output whitening)."""
        for stage in self.stages:
            block = stage.apply(block, keys)
        return block

    def __repr__(self) -> str:
        labels = " | ".join(stage.label for stage in self.stages)
        return f"RoundEngine([{labels}])"
