"""Robot motion expressed as forward, sideward and rotational displacement."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gridmapping.geometry import OrientedPoint


@dataclass
class FSRMovement:
    """A relative motion: forward ``f``, sideward ``s``, rotation ``r``."""

    f: float = 0.0
    s: float = 0.0
    r: float = 0.0

    def normalize(self) -> None:
        """Bring the rotation into [-pi, pi) in place."""
        self.r = OrientedPoint(theta=self.r).normalize().theta

    def invert(self) -> None:
        """Replace this motion by its inverse."""
        inverse = FSRMovement.invert_move(self)
        self.f, self.s, self.r = inverse.f, inverse.s, inverse.r

    def compose(self, move2: FSRMovement) -> None:
        """Append ``move2`` to this motion in place."""
        combined = FSRMovement.compose_moves(self, move2)
        self.f, self.s, self.r = combined.f, combined.s, combined.r

    def move(self, pt: OrientedPoint) -> OrientedPoint:
        """Apply this motion to the pose ``pt``."""
        return FSRMovement.move_point(pt, self)

    @staticmethod
    def move_point(pt: OrientedPoint, move1: FSRMovement) -> OrientedPoint:
        """Apply ``move1`` to the pose ``pt``."""
        c, s = math.cos(pt.theta), math.sin(pt.theta)
        return OrientedPoint(
            pt.x + move1.f * c - move1.s * s,
            pt.y + move1.f * s + move1.s * c,
            move1.r + pt.theta,
        ).normalize()

    @staticmethod
    def compose_moves(move1: FSRMovement, move2: FSRMovement) -> FSRMovement:
        """The motion equal to ``move1`` followed by ``move2``."""
        c, s = math.cos(move1.r), math.sin(move1.r)
        comp = FSRMovement(
            c * move2.f - s * move2.s + move1.f,
            s * move2.f + c * move2.s + move1.s,
            move1.r + move2.r,
        )
        comp.normalize()
        return comp

    @staticmethod
    def between_points(pt1: OrientedPoint, pt2: OrientedPoint) -> FSRMovement:
        """The motion that takes pose ``pt1`` to pose ``pt2``."""
        dx, dy = pt2.x - pt1.x, pt2.y - pt1.y
        c, s = math.cos(pt1.theta), math.sin(pt1.theta)
        move = FSRMovement(dy * s + dx * c, dy * c - dx * s, pt2.theta - pt1.theta)
        move.normalize()
        return move

    @staticmethod
    def invert_move(move1: FSRMovement) -> FSRMovement:
        """The motion that undoes ``move1``."""
        c, s = math.cos(move1.r), math.sin(move1.r)
        inverse = FSRMovement(-c * move1.f - s * move1.s, s * move1.f - c * move1.s, -move1.r)
        inverse.normalize()
        return inverse

    @staticmethod
    def frame_transformation(
        reference_pt_frame1: OrientedPoint,
        reference_pt_frame2: OrientedPoint,
        pt_frame1: OrientedPoint,
    ) -> OrientedPoint:
        """Map ``pt_frame1`` into the frame where the reference pose is ``reference_pt_frame2``."""
        zero = OrientedPoint()
        itrans_refp1 = FSRMovement.between_points(zero, reference_pt_frame1)
        itrans_refp1.invert()
        trans_refp2 = FSRMovement.between_points(zero, reference_pt_frame2)
        trans_pt = FSRMovement.between_points(zero, pt_frame1)
        tmp = FSRMovement.compose_moves(
            FSRMovement.compose_moves(trans_refp2, itrans_refp1), trans_pt
        )
        return tmp.move(zero)