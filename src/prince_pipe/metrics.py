"""Metric calculations for pipelined PRINCE configurations.

Provides latency, throughput, and area proxy calculations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import BLOCK_BITS
from .interfaces import PipelineConfig, Result
from .rounds import MiddleRound, build_schedule


@dataclass
class AreaProxyConfig:
    """Configuration for area proxy calculations.

    composite = alpha * sbox_area + beta * register_area
    """

    # Base area units per 4-bit S-box instance
    sbox_base_area: float = 10.0

    # Base area units per register bit
    register_bit_area: float = 1.0

    # Weights for composite score
    alpha: float = 1.0  # S-box weight
    beta: float = 0.1   # Register weight


@dataclass
class PerformanceMetrics:
    """Performance metrics for a configuration."""

    # Latency
    latency_cycles: int = 0
    latency_seconds: float = 0.0

    # Throughput with one block in flight at a time
    throughput_blocks_per_sec: float = 0.0
    throughput_gbps: float = 0.0

    # Throughput with a new block admitted every tick
    pipelined_throughput_blocks_per_sec: float = 0.0
    pipelined_throughput_gbps: float = 0.0
    initiation_interval: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "latency_cycles": self.latency_cycles,
            "latency_seconds": self.latency_seconds,
            "throughput_blocks_per_sec": self.throughput_blocks_per_sec,
            "throughput_gbps": self.throughput_gbps,
            "pipelined_throughput_blocks_per_sec": self.pipelined_throughput_blocks_per_sec,
            "pipelined_throughput_gbps": self.pipelined_throughput_gbps,
            "initiation_interval": self.initiation_interval,
        }


@dataclass
class AreaMetrics:
    """Area proxy metrics for a configuration."""

    sbox_area_proxy: float = 0.0
    register_area_proxy: float = 0.0
    composite_area_proxy: float = 0.0

    # Raw counts for reference
    sbox_count: int = 0
    register_bits: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sbox_area_proxy": self.sbox_area_proxy,
            "register_area_proxy": self.register_area_proxy,
            "composite_area_proxy": self.composite_area_proxy,
            "sbox_count": self.sbox_count,
            "register_bits": self.register_bits,
        }


@dataclass
class FullMetrics:
    """Complete metrics for a configuration."""

    stage_count: int = 0
    steps_per_stage: int = 0
    f_clk_hz: float = 0.0

    correct: bool = False
    cycle_count_total: int = 0

    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    area: AreaMetrics = field(default_factory=AreaMetrics)

    notes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "stage_count": self.stage_count,
            "steps_per_stage": self.steps_per_stage,
            "f_clk_hz": self.f_clk_hz,
            "correct": self.correct,
            "cycle_count_total": self.cycle_count_total,
            "performance": self.performance.to_dict(),
            "area": self.area.to_dict(),
            "notes": self.notes,
            "warnings": self.warnings,
        }

    def to_flat_dict(self) -> dict[str, Any]:
        """Convert to flattened dictionary for CSV export."""
        flat = {
            "stage_count": self.stage_count,
            "steps_per_stage": self.steps_per_stage,
            "f_clk_hz": self.f_clk_hz,
            "correct": self.correct,
            "cycle_count_total": self.cycle_count_total,
        }
        flat.update(self.performance.to_dict())
        flat.update(self.area.to_dict())
        return flat


def count_sbox_layers(stage_count: int) -> int:
    """
    Number of 16-nibble S-box layers instantiated by a schedule.

    Forward and backward rounds use one layer each; the middle step uses
    two (S and S^-1). The total is independent of how rounds are fused.
    """
    layers = 0
    for stage in build_schedule(stage_count):
        for step in stage.steps:
            layers += 2 if isinstance(step, MiddleRound) else 1
    return layers


def calculate_performance_metrics(
    config: PipelineConfig,
    result: Result | None = None,
) -> PerformanceMetrics:
    """Calculate performance metrics for a configuration.

    Args:
        config: Pipeline configuration with clock frequency
        result: Optional measured result; its tick count overrides the
            nominal latency

    Returns:
        PerformanceMetrics instance
    """
    cycles = result.cycle_count_total if result else config.latency_cycles
    f_clk = config.f_clk_hz

    latency_seconds = cycles / f_clk

    # One block at a time
    throughput_blocks = f_clk / cycles if cycles > 0 else 0.0
    throughput_gbps = throughput_blocks * BLOCK_BITS / 1e9

    # Fully streamed: one block per tick after the fill
    ii = 1
    pipelined_blocks = f_clk / ii
    pipelined_gbps = pipelined_blocks * BLOCK_BITS / 1e9

    return PerformanceMetrics(
        latency_cycles=cycles,
        latency_seconds=latency_seconds,
        throughput_blocks_per_sec=throughput_blocks,
        throughput_gbps=throughput_gbps,
        pipelined_throughput_blocks_per_sec=pipelined_blocks,
        pipelined_throughput_gbps=pipelined_gbps,
        initiation_interval=ii,
    )


def calculate_area_metrics(
    config: PipelineConfig,
    area_config: AreaProxyConfig | None = None,
) -> AreaMetrics:
    """Calculate area proxy metrics from configuration.

    Args:
        config: Pipeline configuration
        area_config: Optional area proxy configuration

    Returns:
        AreaMetrics instance
    """
    area_cfg = area_config or AreaProxyConfig()

    sbox_count = count_sbox_layers(config.stage_count) * 16
    sbox_area = sbox_count * area_cfg.sbox_base_area

    # One 64-bit slot per stage
    register_bits = BLOCK_BITS * config.stage_count
    register_area = register_bits * area_cfg.register_bit_area

    composite = area_cfg.alpha * sbox_area + area_cfg.beta * register_area

    return AreaMetrics(
        sbox_area_proxy=sbox_area,
        register_area_proxy=register_area,
        composite_area_proxy=composite,
        sbox_count=sbox_count,
        register_bits=register_bits,
    )


def calculate_full_metrics(
    config: PipelineConfig,
    result: Result | None = None,
    area_config: AreaProxyConfig | None = None,
) -> FullMetrics:
    """Calculate all metrics for a configuration.

    Args:
        config: Pipeline configuration
        result: Optional measured result
        area_config: Optional area proxy configuration

    Returns:
        FullMetrics instance
    """
    perf = calculate_performance_metrics(config, result)
    area = calculate_area_metrics(config, area_config)

    return FullMetrics(
        stage_count=config.stage_count,
        steps_per_stage=config.steps_per_stage,
        f_clk_hz=config.f_clk_hz,
        correct=result.correct if result else False,
        cycle_count_total=perf.latency_cycles,
        performance=perf,
        area=area,
        notes=result.notes.copy() if result else [],
        warnings=result.warnings.copy() if result else [],
    )
