"""Utilities for keeping fixed physics timesteps."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt

    def reset(self) -> None:
        self.last_time = time.perf_counter()


@dataclass
class FixedStepAccumulator:
    """Consumes accumulated real time in whole ``step`` slices.

    Leftover time below one step is carried to the next frame. A backlog
    larger than ``max_substeps`` steps is dropped after running the cap.
    """

    step: float
    max_substeps: int
    value: float = 0.0

    def __post_init__(self) -> None:
        if self.step <= 0.0:
            raise ValueError("step must be positive")
        if self.max_substeps <= 0:
            raise ValueError("max_substeps must be positive")

    def accrue(self, delta: float) -> None:
        if delta > 0.0:
            self.value += delta

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        steps = int(self.value // self.step)
        if steps > self.max_substeps:
            self.value = 0.0
            return self.max_substeps
        self.value -= steps * self.step
        return steps


__all__ = ["FixedStepAccumulator", "FrameTimer"]
