"""
Regression tests for trace output.

Verifies that:
- Ciphertext is unchanged with verbose tracing enabled
- Every tick produces a record and a dashboard block
- JSON Lines output carries the slot values
- Reset and disabled ticks are marked in the trace
"""

import contextlib
import io
import json

from prince_pipe.cipher import PrinceCipher
from prince_pipe.interfaces import PipelineConfig
from prince_pipe.trace import TraceRecorder, print_result, print_schedule
from prince_pipe.utils import block_to_hex, hex_to_int

KEY = "fedcba98765432100000000000000000"
PT = "0123456789abcdef"
CT = "ae25ad3ca8fa9ccf"


class TestVerboseTraceStructure:
    """Verify structural properties of the verbose trace."""

    def _run_verbose(self, stage_count=5):
        """Encrypt one block with verbose tracing and capture stdout."""
        tracer = TraceRecorder(verbose=True)
        cipher = PrinceCipher(
            PipelineConfig(stage_count=stage_count),
            key=hex_to_int(KEY, 128),
            tracer=tracer,
        )
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            ct = cipher.encrypt(hex_to_int(PT, 64))
        return ct, tracer, buf.getvalue()

    def test_ciphertext_unchanged(self):
        """Verbose tracing must not alter the ciphertext."""
        ct, _, _ = self._run_verbose()
        assert block_to_hex(ct) == CT

    def test_one_record_per_tick(self):
        """Reset tick plus L enabled ticks."""
        _, tracer, _ = self._run_verbose(stage_count=5)
        records = tracer.get_records()
        assert [r["tick"] for r in records] == [1, 2, 3, 4, 5, 6]

    def test_reset_tick_marked(self):
        """The first tick of encrypt() is a reset tick."""
        _, tracer, output = self._run_verbose()
        first = tracer.get_records()[0]
        assert first["reset"] is True
        assert first["slots"] == [0] * 5
        assert output.splitlines()[0].startswith("T0001 RST")

    def test_dashboard_lines(self):
        """Each tick prints its slots and stage occupancy."""
        _, _, output = self._run_verbose(stage_count=3)
        lines = output.splitlines()
        assert sum(1 for l in lines if l.startswith("  SLOTS:")) == 4
        assert sum(1 for l in lines if l.startswith("  PIPE:")) == 4
        assert "PIPE: S0=b00 S1=--- S2=---" in output
        assert "PIPE: S0=b02 S1=b01 S2=b00" in output

    def test_output_on_last_tick(self):
        """The final tick line shows the ciphertext."""
        _, _, output = self._run_verbose()
        tick_lines = [l for l in output.splitlines() if l.startswith("T")]
        assert tick_lines[-1].endswith(f"OUT:{CT}")

    def test_quiet_tracer_prints_nothing(self):
        """Without verbose, records are kept but nothing is printed."""
        tracer = TraceRecorder()
        cipher = PrinceCipher(PipelineConfig(stage_count=3), tracer=tracer)
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            cipher.encrypt(0)
        assert buf.getvalue() == ""
        assert len(tracer.get_records()) == 4


class TestJsonLinesTrace:
    """JSON Lines output."""

    def test_records_are_json(self):
        """Each line parses as a JSON object."""
        out = io.StringIO()
        tracer = TraceRecorder(trace_file=out)
        cipher = PrinceCipher(PipelineConfig(stage_count=3), tracer=tracer)
        cipher.encrypt(0)

        lines = out.getvalue().splitlines()
        assert len(lines) == 4
        records = [json.loads(line) for line in lines]
        assert records[-1]["enable"] is True
        assert records[-1]["output"] == cipher.output
        assert len(records[-1]["slots"]) == 3

    def test_disabled_tick_recorded(self):
        """A tick with enable low shows cleared slots."""
        out = io.StringIO()
        tracer = TraceRecorder(trace_file=out)
        cipher = PrinceCipher(PipelineConfig(stage_count=3), tracer=tracer)
        cipher.tick(0x1234, enable=True)
        cipher.tick(0x1234, enable=False)

        last = json.loads(out.getvalue().splitlines()[-1])
        assert last["enable"] is False
        assert last["slots"] == [0, 0, 0]
        assert last["occupancy"] == [None, None, None]

    def test_clear(self):
        """clear() drops stored records."""
        tracer = TraceRecorder()
        tracer.record(event="note")
        tracer.clear()
        assert tracer.get_records() == []


class TestSharedFormatting:
    """Shared print helpers."""

    def test_print_schedule(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            print_schedule(["W+F1", "MID"])
        assert buf.getvalue() == "  S0: W+F1\n  S1: MID\n"

    def test_print_result_fail(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            print_result("00" * 8, 11, passed=False)
        assert "Verification: [ERROR] FAIL" in buf.getvalue()
        assert "Ticks: 11" in buf.getvalue()
