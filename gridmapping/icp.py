"""Closed-form alignment steps for sets of corresponding point pairs."""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from gridmapping.geometry import OrientedPoint, Point

PointPair = Tuple[Point, Point]


def _means(pairs: List[PointPair]) -> Tuple[Point, Point]:
    if not pairs:
        raise ValueError("at least one point pair is needed")
    scale = 1.0 / len(pairs)
    first = Point(sum(p.x for p, _ in pairs), sum(p.y for p, _ in pairs)) * scale
    second = Point(sum(q.x for _, q in pairs), sum(q.y for _, q in pairs)) * scale
    return first, second


def _finish(theta: float, mean: Tuple[Point, Point], pairs: List[PointPair]) -> Tuple[OrientedPoint, float]:
    first, second = mean
    s, c = math.sin(theta), math.cos(theta)
    result = OrientedPoint(
        second.x - (c * first.x - s * first.y),
        second.y - (s * first.x + c * first.y),
        theta,
    )
    error = 0.0
    for p, q in pairs:
        delta = Point(c * p.x - s * p.y + result.x - q.x, s * p.x + c * p.y + result.y - q.y)
        error += delta @ delta
    return result, error


def icp_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """One linear alignment step taking the first points onto the second.

    Returns the transform and the summed squared residual.
    """
    pairs = list(pairs)
    mean = _means(pairs)
    sxx = sxy = syx = syy = 0.0
    for p, q in pairs:
        a, b = p - mean[0], q - mean[1]
        sxx += a.x * b.x
        sxy += a.x * b.y
        syx += a.y * b.x
        syy += a.y * b.y
    theta = math.atan2(sxy - syx, sxx + sxy)
    return _finish(theta, mean, pairs)


def icp_nonlinear_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """One alignment step whose rotation averages the per-pair bearing changes.

    Returns the transform and the summed squared residual.
    """
    pairs = list(pairs)
    mean = _means(pairs)
    gain = math.sqrt(mean[0] @ mean[0])
    ms = mc = 0.0
    for p, q in pairs:
        a, b = p - mean[0], q - mean[1]
        dalpha = math.atan2(b.y, b.x) - math.atan2(a.y, a.x)
        ms += gain * math.sin(dalpha)
        mc += gain * math.cos(dalpha)
    return _finish(math.atan2(ms, mc), mean, pairs)