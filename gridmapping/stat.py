"""Random sampling and three-dimensional Gaussians over poses."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np

from gridmapping.geometry import OrientedPoint

_rng = random.Random()


def _nonzero_uniform() -> float:
    r = _rng.random()
    while r == 0.0:
        r = _rng.random()
    return r


def _polar_gaussian(sigma: float) -> float:
    while True:
        x1 = 2.0 * _nonzero_uniform() - 1.0
        x2 = 2.0 * _rng.random() - 1.0
        w = x1 * x1 + x2 * x2
        if 0.0 < w <= 1.0:
            return sigma * x2 * math.sqrt(-2.0 * math.log(w) / w)


def sample_gaussian(sigma: float, seed: int = 0) -> float:
    """Draw from a zero-mean normal with deviation ``sigma``; a nonzero seed reseeds first."""
    if seed != 0:
        _rng.seed(seed)
    if sigma == 0:
        return 0.0
    return _polar_gaussian(sigma)


def sample_uniform_double(min_value: float, max_value: float) -> float:
    """Draw uniformly from [min_value, max_value]."""
    return min_value + _rng.random() * (max_value - min_value)


def sample_uniform_int(max_value: int) -> int:
    """Draw an integer uniformly from [0, max_value)."""
    return int(max_value * _rng.random())


def eval_log_gaussian(sigma_square: float, delta: float) -> float:
    """Log density of a zero-mean normal with variance ``sigma_square`` at ``delta``."""
    if sigma_square <= 0:
        sigma_square = 1e-4
    return -0.5 * delta * delta / sigma_square - 0.5 * math.log(2 * math.pi * sigma_square)


@dataclass(frozen=True)
class Covariance3:
    """Symmetric 3x3 covariance over (x, y, theta)."""

    xx: float = 0.0
    yy: float = 0.0
    tt: float = 0.0
    xy: float = 0.0
    xt: float = 0.0
    yt: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Covariance3):
            return NotImplemented
        return Covariance3(
            self.xx + other.xx,
            self.yy + other.yy,
            self.tt + other.tt,
            self.xy + other.xy,
            self.xt + other.xt,
            self.yt + other.yt,
        )

    def as_matrix(self) -> np.ndarray:
        return np.array(
            [
                [self.xx, self.xy, self.xt],
                [self.xy, self.yy, self.yt],
                [self.xt, self.yt, self.tt],
            ]
        )


def _draw(variance: float) -> float:
    if not variance >= 0:
        return 0.0
    return sample_gaussian(math.sqrt(variance))


@dataclass(eq=False)
class EigenCovariance3:
    """A covariance in eigen form; eigenvectors are the columns of ``eigenvectors``."""

    eigenvalues: np.ndarray = field(default_factory=lambda: np.zeros(3))
    eigenvectors: np.ndarray = field(default_factory=lambda: np.eye(3))

    @classmethod
    def from_covariance(cls, cov: Covariance3) -> EigenCovariance3:
        values, vectors = np.linalg.eigh(cov.as_matrix())
        return cls(values, vectors)

    def rotate(self, angle: float) -> EigenCovariance3:
        """Rotate the covariance about the heading axis by ``angle``."""
        c, s = math.cos(angle), math.sin(angle)
        rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        return EigenCovariance3(np.array(self.eigenvalues, dtype=float), rot @ self.eigenvectors)

    def sample(self) -> OrientedPoint:
        """Draw a zero-mean pose with this covariance."""
        pnoise = np.array([_draw(float(v)) for v in self.eigenvalues])
        noise = self.eigenvectors @ pnoise
        theta = float(noise[2])
        return OrientedPoint(float(noise[0]), float(noise[1]), math.atan2(math.sin(theta), math.cos(theta)))


@dataclass(eq=False)
class Gaussian3:
    """A Gaussian over poses."""

    mean: OrientedPoint = field(default_factory=OrientedPoint)
    covariance: EigenCovariance3 = field(default_factory=EigenCovariance3)
    cov: Covariance3 = field(default_factory=Covariance3)

    def eval(self, p: OrientedPoint) -> float:
        """Log density at the pose ``p``."""
        dtheta = p.theta - self.mean.theta
        q = np.array(
            [p.x - self.mean.x, p.y - self.mean.y, math.atan2(math.sin(dtheta), math.cos(dtheta))]
        )
        projected = self.covariance.eigenvectors.T @ q
        return sum(
            eval_log_gaussian(float(e), float(v))
            for e, v in zip(self.covariance.eigenvalues, projected)
        )

    def compute_from_samples(
        self, poses: Iterable[OrientedPoint], weights: Optional[Iterable[float]] = None
    ) -> None:
        """Estimate mean and covariance from (optionally weighted) poses."""
        estimate = compute_gaussian_from_samples(poses, weights)
        self.mean = estimate.mean
        self.covariance = estimate.covariance
        self.cov = estimate.cov


def compute_gaussian_from_samples(
    poses: Iterable[OrientedPoint], weights: Optional[Iterable[float]] = None
) -> Gaussian3:
    """Estimate a Gaussian from poses.

    With weights the sums are normalised by the total weight; without them
    every pose counts once and the sums are divided by the count plus one.
    """
    poses = list(poses)
    if weights is None:
        weights = [1.0] * len(poses)
        wcum = len(poses) + 1.0
    else:
        weights = list(weights)
        if len(weights) != len(poses):
            raise ValueError("poses and weights differ in length")
        wcum = sum(weights)

    sx = sy = ss = sc = 0.0
    for p, w in zip(poses, weights):
        ss += w * math.sin(p.theta)
        sc += w * math.cos(p.theta)
        sx += w * p.x
        sy += w * p.y
    mean = OrientedPoint(sx / wcum, sy / wcum, math.atan2(ss / wcum, sc / wcum))

    xx = yy = tt = xy = yt = xt = 0.0
    for p, w in zip(poses, weights):
        dx, dy = p.x - mean.x, p.y - mean.y
        dt = p.theta - mean.theta
        dt = math.atan2(math.sin(dt), math.cos(dt))
        xx += w * dx * dx
        yy += w * dy * dy
        tt += w * dt * dt
        xy += w * dx * dy
        yt += w * dy * dt
        xt += w * dx * dt
    cov = Covariance3(xx / wcum, yy / wcum, tt / wcum, xy / wcum, xt / wcum, yt / wcum)
    return Gaussian3(mean=mean, covariance=EigenCovariance3.from_covariance(cov), cov=cov)