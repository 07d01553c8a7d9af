"""Parzen-window smoothing of weighted one-dimensional samples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO, Tuple

from gridmapping.stat import sample_gaussian, sample_uniform_double


@dataclass
class DataPoint:
    """A sample position ``x`` and its weight ``y``."""

    x: float = 0.0
    y: float = 0.0


def _steps(start: float, stop: float, step: float) -> Iterator[float]:
    if not step > 0:
        raise ValueError(f"step must be positive, got {step}")
    x = start
    while x <= stop:
        yield x
        x += step


class DataSmoother:
    """A density built from weighted points with a Gaussian kernel of width ``parzen_window``."""

    def __init__(self, parzen_window: float):
        self.reset(parzen_window)

    def reset(self, parzen_window: float) -> None:
        """Drop all data and set a new kernel width."""
        self.data: List[DataPoint] = []
        self._cumulated: List[float] = []
        self._integral: Optional[float] = None
        self.parzen_window = parzen_window
        self.x_from = math.inf
        self.x_to = -math.inf
        self._last_step = 0.001

    def _require_data(self) -> None:
        if not self.data:
            raise ValueError("the smoother holds no data")

    def set_min_to_zero(self) -> None:
        """Shift all weights so that the smallest becomes zero."""
        minval = min((d.y for d in self.data), default=math.inf)
        for d in self.data:
            d.y -= minval
        self._cumulated = []

    def add(self, x: float, p: float) -> None:
        """Add a sample at ``x`` with weight ``p``."""
        self.data.append(DataPoint(x, p))
        self._integral = None
        reach = 3.0 * self.parzen_window
        self.x_from = min(self.x_from, x - reach)
        self.x_to = max(self.x_to, x + reach)
        self._cumulated = []

    def integrate(self, step: float) -> float:
        """Integrate the smoothed density over its support and remember the result."""
        self._last_step = step
        self._integral = self.integral(step, self.x_to)
        return self._integral

    def integral(self, step: float, x_to: float) -> float:
        """Integral of the smoothed density from the start of the support to ``x_to``."""
        return sum(self.smoothed_data(x) * step for x in _steps(self.x_from, x_to, step))

    def smoothed_data(self, x: float) -> float:
        """Value of the smoothed density at ``x``."""
        self._require_data()
        p = 0.0
        sum_y = 0.0
        for d in self.data:
            dist = abs(x - d.x)
            p += d.y * math.exp(-0.5 * (dist / self.parzen_window) ** 2)
            sum_y += d.y
        denom = math.sqrt(2.0 * math.pi) * sum_y * self.parzen_window
        return p * (1.0 / denom)

    def sample_numeric(self, step: float) -> float:
        """Draw a value by numerically inverting the smoothed distribution."""
        self._require_data()
        if self._integral is None or self._integral < 0 or step != self._last_step:
            self.integrate(step)
        r = sample_uniform_double(0.0, self._integral)
        total = 0.0
        for x in _steps(self.x_from, self.x_to, step):
            total += self.smoothed_data(x) * step
            if total > r:
                return x - 0.5 * step
        return self.x_to

    def _compute_cumulated(self) -> None:
        self._require_data()
        total = 0.0
        self._cumulated = []
        for d in self.data:
            total += d.y
            self._cumulated.append(total)

    def _pick(self) -> Tuple[List[float], float]:
        self._require_data()
        if not self._cumulated:
            self._compute_cumulated()
        return self._cumulated, self._cumulated[-1]

    def sample(self) -> float:
        """Draw a data point by weight and perturb it with the kernel."""
        cumulated, maxval = self._pick()
        r = sample_uniform_double(0.0, maxval)
        total = 0.0
        for d, c in zip(self.data, cumulated):
            total += c
            if total >= r:
                return d.x + sample_gaussian(self.parzen_window)
        raise RuntimeError("sampling failed; weights must not be negative")

    def sample_multiple(self, num: int) -> List[float]:
        """Draw ``num`` values as :meth:`sample` does, in one sorted pass."""
        cumulated, maxval = self._pick()
        randoms = sorted(sample_uniform_double(0.0, maxval) for _ in range(num))
        samples: List[float] = []
        total = 0.0
        j = 0
        for d, c in zip(self.data, cumulated):
            if j >= num:
                break
            total += c
            while j < num and total >= randoms[j]:
                samples.append(d.x + sample_gaussian(self.parzen_window))
                j += 1
        return samples

    def approx_gauss(self, step: float) -> Tuple[float, float]:
        """Mean and standard deviation of the smoothed density."""
        self._require_data()
        xs = list(_steps(self.x_from, self.x_to, step))
        values = [self.smoothed_data(x) for x in xs]
        total = sum(values)
        mean = sum(x * d for x, d in zip(xs, values)) / total
        var = sum((x - mean) ** 2 * d for x, d in zip(xs, values)) / total
        return mean, math.sqrt(var)

    @staticmethod
    def gauss(x: float, mean: float, sigma: float) -> float:
        """Normal density with ``mean`` and ``sigma`` at ``x``."""
        return 1.0 / (math.sqrt(2.0 * math.pi) * sigma) * math.exp(-0.5 * ((x - mean) / sigma) ** 2)

    def cramer_von_mises_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Sum of squared differences between the smoothed and normal cumulative curves."""
        p = 0.0
        sint = 0.0
        gint = 0.0
        for x in _steps(self.x_from, self.x_to, step):
            sint += self.smoothed_data(x) * step
            gint += self.gauss(x, mean, sigma) * step
            p += (sint - gint) ** 2
        return p

    def kld_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Kullback-Leibler divergence from the smoothed density to a normal one.

        Raises ValueError when the two integrate to masses more than 0.1 apart.
        """
        p = 0.0
        sd = 0.0
        sg = 0.0
        for x in _steps(self.x_from, self.x_to, step):
            d = 1e-10 + self.smoothed_data(x)
            g = 1e-10 + self.gauss(x, mean, sigma)
            sd += d
            sg += g
            p += d * math.log(d / g)
        sd *= step
        sg *= step
        if abs(sd - sg) > 0.1:
            raise ValueError(f"masses differ too much over the support: {sd} vs {sg}")
        return p * step

    def dump_data(self, fp: TextIO) -> None:
        """Write the raw samples as ``x y`` lines."""
        for d in self.data:
            fp.write("%f %f\n" % (d.x, d.y))

    def dump_smoothed_data(self, fp: TextIO, step: float) -> None:
        """Write the smoothed density as ``x value`` lines."""
        for x in _steps(self.x_from, self.x_to, step):
            fp.write("%f %f\n" % (x, self.smoothed_data(x)))