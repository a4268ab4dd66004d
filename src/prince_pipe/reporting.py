"""Reporting functionality for pipelined PRINCE sweeps.

Generates CSV, JSON, and Markdown reports from metrics.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from tabulate import tabulate

from .metrics import FullMetrics


def export_to_csv(
    metrics_list: list[FullMetrics],
    output_path: str | Path,
) -> Path:
    """Export metrics to CSV file.

    Args:
        metrics_list: List of FullMetrics from a sweep
        output_path: Path to output CSV file

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if not metrics_list:
        with open(output_path, "w", newline="") as f:
            f.write("# No results\n")
        return output_path

    flat_dicts = [m.to_flat_dict() for m in metrics_list]
    fieldnames = list(flat_dicts[0].keys())

    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        for d in flat_dicts:
            writer.writerow(d)

    return output_path


def export_to_json(
    metrics_list: list[FullMetrics],
    output_path: str | Path,
    indent: int = 2,
) -> Path:
    """Export metrics to JSON file.

    Args:
        metrics_list: List of FullMetrics from a sweep
        output_path: Path to output JSON file
        indent: JSON indentation level

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "version": "1.0",
        "count": len(metrics_list),
        "results": [m.to_dict() for m in metrics_list],
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=indent, default=str)

    return output_path


def export_to_markdown(
    metrics_list: list[FullMetrics],
    output_path: str | Path,
    title: str = "PRINCE Pipeline Report",
) -> Path:
    """Export metrics to Markdown report.

    Args:
        metrics_list: List of FullMetrics from a sweep
        output_path: Path to output Markdown file
        title: Report title

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"Total configurations evaluated: {len(metrics_list)}")
    lines.append("")

    if not metrics_list:
        lines.append("No results to report.")
        with open(output_path, "w") as f:
            f.write("\n".join(lines))
        return output_path

    lines.append("## Summary Table")
    lines.append("")

    headers = [
        "Stages",
        "Steps/Stage",
        "Correct",
        "Latency (cycles)",
        "Latency (us)",
        "Tput (Gbps)",
        "Pipelined Tput (Gbps)",
        "Register Bits",
        "Area Proxy",
    ]
    lines.append("| " + " | ".join(headers) + " |")
    lines.append("| " + " | ".join(["---"] * len(headers)) + " |")

    for m in metrics_list:
        latency_us = m.performance.latency_seconds * 1e6
        row = [
            str(m.stage_count),
            str(m.steps_per_stage),
            "Yes" if m.correct else "**NO**",
            str(m.performance.latency_cycles),
            f"{latency_us:.3f}",
            f"{m.performance.throughput_gbps:.3f}",
            f"{m.performance.pipelined_throughput_gbps:.3f}",
            str(m.area.register_bits),
            f"{m.area.composite_area_proxy:.1f}",
        ]
        lines.append("| " + " | ".join(row) + " |")

    lines.append("")

    all_warnings: list[str] = []
    for m in metrics_list:
        all_warnings.extend(m.warnings)

    if all_warnings:
        lines.append("## Warnings")
        lines.append("")
        for w in sorted(set(all_warnings)):
            lines.append(f"- {w}")
        lines.append("")

    lines.append("## Notes")
    lines.append("")
    lines.append("- All ciphertexts validated against the unstaged golden reference")
    lines.append("- Steps/Stage is the number of logical rounds fused into the longest stage")
    lines.append("- Area proxy is a relative metric; actual area depends on technology")
    lines.append("")

    with open(output_path, "w") as f:
        f.write("\n".join(lines))

    return output_path


def format_results_table(metrics_list: list[FullMetrics]) -> str:
    """Format results as a table string for CLI output.

    Args:
        metrics_list: List of FullMetrics

    Returns:
        Formatted table string
    """
    if not metrics_list:
        return "No results."

    headers = ["Stages", "Steps/Stage", "Correct", "Latency", "Tput (Gbps)", "Pipelined (Gbps)", "Area"]
    rows = [
        [
            m.stage_count,
            m.steps_per_stage,
            "Yes" if m.correct else "No",
            m.performance.latency_cycles,
            f"{m.performance.throughput_gbps:.3f}",
            f"{m.performance.pipelined_throughput_gbps:.3f}",
            f"{m.area.composite_area_proxy:.1f}",
        ]
        for m in metrics_list
    ]
    return tabulate(rows, headers=headers, tablefmt="simple")


def print_single_result(metrics: FullMetrics) -> str:
    """Format a single result for detailed output.

    Args:
        metrics: FullMetrics instance

    Returns:
        Formatted string
    """
    lines = [
        f"Stages: {metrics.stage_count} (up to {metrics.steps_per_stage} logical steps per stage)",
        f"Clock Frequency: {metrics.f_clk_hz / 1e6:.1f} MHz",
        "",
        f"Correct: {'Yes' if metrics.correct else 'NO - MISMATCH'}",
        "",
        "Performance:",
        f"  Latency: {metrics.performance.latency_cycles} cycles ({metrics.performance.latency_seconds * 1e6:.3f} us)",
        f"  Throughput (single block): {metrics.performance.throughput_gbps:.3f} Gbps",
        f"  Throughput (streamed): {metrics.performance.pipelined_throughput_gbps:.3f} Gbps",
        "",
        "Area Proxies:",
        f"  S-boxes: {metrics.area.sbox_count}",
        f"  Register bits: {metrics.area.register_bits}",
        f"  Composite: {metrics.area.composite_area_proxy:.1f}",
    ]

    if metrics.notes:
        lines.append("")
        lines.append("Notes:")
        for note in metrics.notes:
            lines.append(f"  - {note}")

    if metrics.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in metrics.warnings:
            lines.append(f"  ! {warning}")

    return "\n".join(lines)
