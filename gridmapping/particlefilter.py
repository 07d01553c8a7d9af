"""Weight handling, systematic resampling and evolution of particle sets."""

from __future__ import annotations

import copy
import math
import random
from typing import Any, Iterable, List, Sequence, Tuple


def to_normal_form(weights: Iterable[float]) -> Tuple[List[float], float]:
    """Turn log weights into raw weights scaled by the largest one.

    Returns the raw weights and the largest log weight.
    """
    values = [float(w) for w in weights]
    lmax = max(values, default=-math.inf)
    lmax = max(lmax, -1.7976931348623157e308)
    return [math.exp(w - lmax) for w in values], lmax


def to_log_form(weights: Iterable[float], lmax: float) -> List[float]:
    """Turn raw weights into log weights shifted by ``-lmax``."""
    return [math.log(float(w)) - lmax for w in weights]


def _systematic_indexes(weights: Sequence[float], nparticles: int) -> List[int]:
    total = sum(weights)
    n = nparticles if nparticles > 0 else len(weights)
    if n == 0:
        return []
    interval = total / n
    target = interval * random.random()
    indexes: List[int] = []
    cweight = 0.0
    for i, w in enumerate(weights):
        cweight += w
        while cweight > target and len(indexes) < n:
            indexes.append(i)
            target += interval
    # slots that rounding left unfilled keep index 0
    indexes.extend([0] * (n - len(indexes)))
    return indexes


def resample(weights: Iterable[float], nparticles: int = 0) -> List[int]:
    """Systematic resampling: indexes drawn in proportion to ``weights``.

    ``nparticles`` sets how many indexes are drawn; 0 keeps the input size.
    """
    return _systematic_indexes([float(w) for w in weights], nparticles)


def repeat_indexes(indexes: Sequence[int], particles: Sequence[Any]) -> List[Any]:
    """The particles picked by ``indexes``; both must be equally long."""
    if len(indexes) != len(particles):
        raise ValueError("indexes and particles differ in length")
    return [particles[i] for i in indexes]


def neff(weights: Iterable[float]) -> float:
    """Effective number of particles of unnormalised weights."""
    values = [float(w) for w in weights]
    total = sum(values)
    return 1.0 / sum((w / total) ** 2 for w in values)


def normalize(weights: Iterable[float]) -> List[float]:
    """The weights scaled to sum to one."""
    values = [float(w) for w in weights]
    total = sum(values)
    return [w / total for w in values]


def rle(values: Iterable[int]) -> List[Tuple[int, int]]:
    """Run-length encoding as (value, count) pairs."""
    runs: List[Tuple[int, int]] = []
    for value in values:
        value = int(value)
        if runs and runs[-1][0] == value:
            runs[-1] = (value, runs[-1][1] + 1)
        else:
            runs.append((value, 1))
    return runs


class UniformResampler:
    """Systematic resampler over particles that convert to their weight with ``float``."""

    def resample_indexes(self, weights: Sequence[Any], nparticles: int = 0) -> List[int]:
        """Indexes of the particles that survive resampling."""
        return _systematic_indexes([float(p) for p in weights], nparticles)

    def resample(self, particles: Sequence[Any], nparticles: int = 0) -> List[Any]:
        """Copies of the surviving particles, each with weight ``1/n``."""
        n = nparticles if nparticles > 0 else len(particles)
        if n == 0:
            return []
        uniform_weight = 1.0 / n
        weights = [float(p) for p in particles]
        interval = sum(weights) / n
        target = interval * random.random()
        resampled = []
        cweight = 0.0
        for particle, w in zip(particles, weights):
            cweight += w
            while cweight > target:
                clone = copy.copy(particle)
                clone.weight = uniform_weight
                resampled.append(clone)
                target += interval
        return resampled

    def neff(self, particles: Iterable[Any]) -> float:
        """Effective number of particles: (sum w)^2 / sum w^2."""
        weights = [float(p) for p in particles]
        return sum(weights) ** 2 / sum(w * w for w in weights)


class Evolver:
    """Moves every particle with ``evolution_model.evolve``."""

    def __init__(self, evolution_model: Any):
        self.evolution_model = evolution_model

    def evolve(self, particles: Iterable[Any]) -> List[Any]:
        """The evolved particles."""
        return [self.evolution_model.evolve(p) for p in particles]


class AuxiliaryEvolver:
    """Auxiliary particle filter step.

    Particles are first resampled by the likelihood of a preliminary
    evolution, then evolved; each weight is corrected by the ratio of the
    particle's likelihood to its preliminary one.
    """

    def __init__(self, evolution_model: Any, qualification_model: Any, likelihood_model: Any):
        self.evolution_model = evolution_model
        self.qualification_model = qualification_model
        self.likelihood_model = likelihood_model

    def evolve(self, particles: Sequence[Any]) -> List[Any]:
        """The resampled, evolved and reweighted particles."""
        observation_weights = [
            self.likelihood_model.likelihood(self.qualification_model.evolve(p))
            for p in particles
        ]
        indexes = UniformResampler().resample_indexes(observation_weights)
        result = []
        for i in indexes:
            source = particles[i]
            evolved = self.evolution_model.evolve(source)
            evolved.weight *= self.likelihood_model.likelihood(source) / observation_weights[i]
            result.append(evolved)
        return result