"""Simulation driver: generation counting, history and frame timing."""

from typing import Callable, Deque, Dict, Optional
from collections import deque
import time
import numpy as np

from .universe import Universe


class FrameStats:
    """Frames-per-second statistics over a sliding window of frames."""

    def __init__(self, window: int = 100, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._last_frame: Optional[float] = None
        self._fps: Deque[float] = deque(maxlen=window)

    def record(self) -> None:
        """Mark the end of a frame."""
        now = self._clock()
        if self._last_frame is not None and now > self._last_frame:
            self._fps.append(1.0 / (now - self._last_frame))
        self._last_frame = now

    def summary(self) -> Dict[str, float]:
        """Latest, mean, min and max fps over the window (zeros when empty)."""
        if not self._fps:
            return {"latest": 0.0, "mean": 0.0, "min": 0.0, "max": 0.0}

        frames = np.fromiter(self._fps, dtype=float)
        return {
            "latest": float(frames[-1]),
            "mean": float(frames.mean()),
            "min": float(frames.min()),
            "max": float(frames.max()),
        }


class Simulation:
    """Drives a universe forward and tracks what happened."""

    def __init__(self, universe: Universe) -> None:
        """Initialize the simulation.

        Args:
            universe: The universe to advance
        """
        self.universe = universe
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self.frames = FrameStats()

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Number of ticks since construction or the last reset."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.universe.population

    @property
    def population_history(self) -> list:
        """Population after each of the last 100 steps."""
        return list(self._population_history)

    def step(self, ticks: int = 1) -> None:
        """Advance the universe by ``ticks`` generations."""
        for _ in range(ticks):
            self.universe.tick()
            self._generation += 1
        self._update_population_history()

    def frame(self, ticks: int = 1) -> None:
        """Advance one rendered frame and record its timing."""
        self.step(ticks)
        self.frames.record()

    def reset_generation(self) -> None:
        """Restart counting from generation 0, keeping the current cells."""
        self._generation = 0
        self._population_history.clear()
        self.frames = FrameStats()
        self._update_population_history()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def benchmark(self, ticks: int) -> float:
        """Run ``ticks`` generations and return the mean seconds per tick.

        Raises:
            ValueError: If ticks is not positive
        """
        if ticks <= 0:
            raise ValueError(f"Benchmark needs a positive tick count, got {ticks}")

        start_time = time.perf_counter()
        self.step(ticks)
        return (time.perf_counter() - start_time) / ticks

    def get_statistics(self) -> Dict:
        """Get simulation statistics."""
        universe = self.universe
        return {
            "generation": self._generation,
            "population": self.population,
            "population_density": self.population / (universe.width * universe.height),
            "grid_size": universe.shape,
            "fps": self.frames.summary(),
        }
