"""
Trace recording and pretty printing for pipelined PRINCE runs.

Contains:
- TraceRecorder: JSON Lines trace + compact per-tick verbose output
- print_header / print_result: shared formatting helpers
"""

import json
from typing import Any, TextIO

from .utils import block_to_hex


# ------------------------------------------------------------------
# Formatting helpers
# ------------------------------------------------------------------

def _fmt_pipe_occupancy(occupancy: list[int | None]) -> str:
    """Format pipeline occupancy as fixed-width string."""
    parts = []
    for i, block_id in enumerate(occupancy):
        if block_id is not None:
            parts.append(f"S{i}=b{block_id:02d}")
        else:
            parts.append(f"S{i}=---")
    return " ".join(parts)


def _fmt_slots(slots: list[int]) -> str:
    return " ".join(block_to_hex(s) for s in slots)


def _control_flags(reset: bool, enable: bool) -> str:
    if reset:
        return "RST"
    return "EN " if enable else "-- "


# ------------------------------------------------------------------
# TraceRecorder
# ------------------------------------------------------------------

class TraceRecorder:
    """
    Records and outputs per-tick traces of the pipeline.

    Supports:
    - JSON Lines file output  (always, when trace_file is set)
    - Compact verbose stdout   (one dashboard block per tick)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Tick entries (those carrying a "tick" field) also drive verbose
        stdout output.
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose and "tick" in kwargs:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        tick = record.get("tick", 0)
        flags = _control_flags(record.get("reset", False), record.get("enable", False))
        data_in = record.get("data_in", 0)
        output = record.get("output", 0)

        print(f"T{tick:04d} {flags} IN:{block_to_hex(data_in)}  OUT:{block_to_hex(output)}")
        if "slots" in record:
            print(f"  SLOTS: {_fmt_slots(record['slots'])}")
        if "occupancy" in record:
            print(f"  PIPE: {_fmt_pipe_occupancy(record['occupancy'])}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_schedule(labels: list[str]) -> None:
    """Print the stage programs of a schedule, one per line."""
    for i, label in enumerate(labels):
        print(f"  S{i}: {label}")


def print_result(ciphertext_hex: str, cycles: int, passed: bool = True) -> None:
    """Print final encryption result."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"Ciphertext: {ciphertext_hex}")
    print(f"Ticks: {cycles}")

    status = "PASS" if passed else "FAIL"
    marker = "[OK]" if passed else "[ERROR]"
    print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
