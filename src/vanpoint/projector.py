## world-to-screen projection for vanpoint
## Copyright (c) 2026 vanpoint contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Projection of world points onto the screen.

===============
Overview
===============

A ``Projector`` wraps an immutable ``PerspectiveConfig`` and turns
world coordinates ``(x, y, z)`` into screen coordinates.  Every
operation is built from two primitives: the per-axis distance-to-ratio
mapping, which places a point on the segment from the zero point to a
vanishing point, and line/line intersection, which combines two such
placements into one screen point.

ground
------

``project_ground(x, z)`` places ``px`` toward the X vanishing point
and ``pz`` toward the Z vanishing point, and returns the intersection
of the line from the X vanishing point through ``pz`` with the line
from the Z vanishing point through ``px``.

two-point
---------

``project_two_point(x, y, z)`` projects the ground point and lifts it
vertically by ``rx * ry * y * y_factor``.  ``rx`` shrinks toward zero
as the ground point approaches the side vanishing point, and ``ry``
shrinks toward zero as it approaches the horizon, so heights diminish
with distance.  The side vanishing point is ``vanishing_z`` when the
ground point lies strictly on the same side of the vertical through
the zero point as ``vanishing_z``, and ``vanishing_x`` otherwise.
Exactly on that vertical ``rx`` is 1 for either choice.

three-point
-----------

``project_three_point(x, y, z)`` also places ``py`` toward the Y
vanishing point and applies the ground construction three times, once
per pair of axes.

Degenerate intersections are returned as ``None``.  Domain violations
are not detected here; see ``vanpoint.domain``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from vanpoint.config import PerspectiveConfig, ProjectionMode
from vanpoint.geom import ScreenPoint, lerp, line_line_intersect

logger = logging.getLogger(__name__)


class Projector:
    """Projects world points through a ``PerspectiveConfig``.

    ``mode`` overrides the procedure ``project()`` dispatches to; by
    default it is the configuration's own mode.  Instances hold no
    mutable state and may be shared between threads.
    """

    def __init__(self, config: PerspectiveConfig,
                 mode: Optional[ProjectionMode] = None):
        if not isinstance(config, PerspectiveConfig):
            raise ValueError('bad configuration passed to Projector: {!r}'.format(config))
        mode = config.mode if mode is None else ProjectionMode(mode)
        if mode is ProjectionMode.THREE_POINT and not config.is_three_point:
            raise ValueError('three-point projection needs a configuration with vanishing_y')
        self.__config = config
        self.__mode = mode

    @property
    def config(self) -> PerspectiveConfig:
        return self.__config

    @property
    def mode(self) -> ProjectionMode:
        return self.__mode

    def __repr__(self):
        return 'Projector({!r}, mode={})'.format(self.__config, self.__mode.value)

    ## intersection with the configured determinant tolerance
    def _lli(self, p1, p2, p3, p4):
        return line_line_intersect(p1, p2, p3, p4, self.__config.epsilon)

    def _ground_points(self, x, z):
        c = self.__config
        px = lerp(c.zero, c.vanishing_x, c.x.ratio(x))
        pz = lerp(c.zero, c.vanishing_z, c.z.ratio(z))
        return px, pz

    def project_ground(self, x: float, z: float) -> Optional[ScreenPoint]:
        """Project the ground-plane point ``(x, 0, z)``."""
        c = self.__config
        if x == 0 and z == 0:
            return c.zero
        px, pz = self._ground_points(x, z)
        p = self._lli(c.vanishing_x, pz, c.vanishing_z, px)
        if p is None:
            logger.debug('degenerate ground projection at x=%g z=%g', x, z)
        return p

    def project_two_point(self, x: float, y: float, z: float) -> Optional[ScreenPoint]:
        """Project ``(x, y, z)`` with two vanishing points, scaling the
        elevation ``y`` by the ground point's depth.
        """
        c = self.__config
        if x == 0 and y == 0 and z == 0:
            return c.zero
        ground = self.project_ground(x, z)
        if ground is None or y == 0:
            return ground

        zero = c.zero
        horizon = c.horizon_projection
        vp = c.vanishing_x
        if (ground[0] - zero[0]) * (c.vanishing_z[0] - zero[0]) > 0:
            vp = c.vanishing_z

        span = vp[0] - zero[0]
        if span == 0:
            logger.debug('side vanishing point %s is vertically above zero', vp)
            return None
        rx = (vp[0] - ground[0]) / span

        foot = self._lli(ground, (ground[0], ground[1] + 1.0), vp, zero)
        if foot is None or foot[1] == horizon[1]:
            logger.debug('no elevation reference for ground point %s', ground)
            return None
        ry = (ground[1] - horizon[1]) / (foot[1] - horizon[1])

        return (ground[0], ground[1] - rx * ry * y * c.y_factor)

    def project_three_point(self, x: float, y: float, z: float) -> Optional[ScreenPoint]:
        """Project ``(x, y, z)`` with three vanishing points."""
        c = self.__config
        if not c.is_three_point:
            raise ValueError('three-point projection needs a configuration with vanishing_y')
        if x == 0 and y == 0 and z == 0:
            return c.zero
        if y == 0:
            return self.project_ground(x, z)

        px, pz = self._ground_points(x, z)
        py = lerp(c.zero, c.vanishing_y, c.y.ratio(y))
        yz = self._lli(c.vanishing_y, pz, c.vanishing_z, py)
        xy = self._lli(c.vanishing_y, px, c.vanishing_x, py)
        if yz is None or xy is None:
            logger.debug('degenerate axis-pair construction at (%g, %g, %g)', x, y, z)
            return None
        p = self._lli(xy, c.vanishing_z, c.vanishing_x, yz)
        if p is None:
            logger.debug('degenerate three-point projection at (%g, %g, %g)', x, y, z)
        return p

    def project(self, p: Sequence[float]) -> Optional[ScreenPoint]:
        """Project the world point ``p`` with this projector's mode."""
        if len(p) != 3:
            raise ValueError('world points have three components, got {}'.format(p))
        x, y, z = p
        if self.__mode is ProjectionMode.GROUND:
            return self.project_ground(x, z)
        if self.__mode is ProjectionMode.THREE_POINT:
            return self.project_three_point(x, y, z)
        return self.project_two_point(x, y, z)

    def project_many(self, points: Iterable[Sequence[float]]) -> np.ndarray:
        """Project a batch of world points into an ``(n, 2)`` array.
        Rows whose projection is degenerate are filled with ``nan``.
        """
        pts = list(points)
        out = np.full((len(pts), 2), np.nan, dtype=float)
        for i, p in enumerate(pts):
            q = self.project(p)
            if q is not None:
                out[i] = q
        return out


__all__ = [
    "Projector",
    "ProjectionMode",
]
