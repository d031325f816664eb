## polyline approximation of projected world segments for vanpoint
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

"""Tessellation of world segments into screen polylines.

The projected image of a straight world segment is in general a
curve.  ``tessellate()`` approximates it by sampling the segment
evenly in world space and projecting every sample.  The number of
steps is ``max(1, min(max_steps, floor(length)))``, so long segments
that curve sharply can still look faceted; raise ``max_steps`` when
that matters.

Samples whose projection is degenerate are handled by policy:

``"skip"``
    leave the sample out (default)
``"abort"``
    abandon the polyline and return ``None``

Passing ``fallback`` substitutes that screen point instead, and takes
precedence over the policy.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from vanpoint.geom import ScreenPoint, WorldPoint, dist, lerp
from vanpoint.projector import Projector

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 10

_POLICIES = ("skip", "abort")


def step_count(p1: Sequence[float], p2: Sequence[float],
               max_steps: int = DEFAULT_MAX_STEPS) -> int:
    """Number of segments used to tessellate ``p1``-``p2``."""
    return max(1, min(max_steps, math.floor(dist(p1, p2))))


def tessellate(projector: Projector, p1: Sequence[float], p2: Sequence[float],
               max_steps: int = DEFAULT_MAX_STEPS,
               on_degenerate: str = "skip",
               fallback: Optional[ScreenPoint] = None) -> Optional[List[ScreenPoint]]:
    """Return the screen polyline approximating the world segment from
    ``p1`` to ``p2``, ordered from ``p1`` to ``p2``.
    """
    if on_degenerate not in _POLICIES:
        raise ValueError('unknown degenerate-sample policy: {}'.format(on_degenerate))
    if len(p1) != 3 or len(p2) != 3:
        raise ValueError('tessellate() needs two world points, got {} and {}'.format(p1, p2))

    steps = step_count(p1, p2, max_steps)
    out: List[ScreenPoint] = []
    for i in range(steps + 1):
        ## the last sample is p2 itself, not its rounded interpolation
        sample = tuple(p2) if i == steps else lerp(p1, p2, i / steps)
        q = projector.project(sample)
        if q is None:
            if fallback is not None:
                logger.debug('substituting fallback for degenerate sample %s', sample)
                q = fallback
            elif on_degenerate == "abort":
                logger.debug('aborting polyline %s -> %s at sample %s', p1, p2, sample)
                return None
            else:
                logger.debug('skipping degenerate sample %s', sample)
                continue
        out.append(q)
    return out


def tessellate_polygon(projector: Projector, vertices: Sequence[Sequence[float]],
                       closed: bool = True,
                       max_steps: int = DEFAULT_MAX_STEPS,
                       on_degenerate: str = "skip",
                       fallback: Optional[ScreenPoint] = None) -> Optional[List[ScreenPoint]]:
    """Tessellate every edge of a world polygon and join the edges
    into a single screen path.  The shared endpoint of consecutive
    edges appears once.  For a closed polygon the path ends where it
    started.
    """
    verts = list(vertices)
    if len(verts) < 2:
        raise ValueError('a polygon needs at least two vertices')
    edges = list(zip(verts, verts[1:]))
    if closed:
        edges.append((verts[-1], verts[0]))

    path: List[ScreenPoint] = []
    for a, b in edges:
        seg = tessellate(projector, a, b, max_steps, on_degenerate, fallback)
        if seg is None:
            return None
        if path and seg and path[-1] == seg[0]:
            seg = seg[1:]
        path.extend(seg)
    return path


def _ratio_positions(mapping, centre, extent, count):
    ## world positions whose ratios split [centre-extent, centre+extent]
    ## into equal screen-ratio steps
    if count == 1:
        return [centre]
    r0 = mapping.ratio(centre - extent)
    r1 = mapping.ratio(centre + extent)
    step = (r1 - r0) / (count - 1)
    return [mapping.distance(r0 + k * step) for k in range(count)]


def ground_grid(projector: Projector, extent: float, spacing: float = 1.0,
                origin: WorldPoint = (0.0, 0.0, 0.0),
                max_steps: int = DEFAULT_MAX_STEPS,
                even_ratios: bool = False) -> List[List[ScreenPoint]]:
    """Polylines of a square ground grid centred on ``origin``.

    Lines of constant ``x`` come first, then lines of constant ``z``,
    each running from ``-extent`` to ``+extent`` about the origin.
    ``spacing`` fixes the number of lines per axis.  By default they
    are evenly spaced in world units; with ``even_ratios`` the same
    number of lines is placed at evenly spaced ratios of each axis
    mapping, from ``-extent`` to ``+extent``, so that they fall at even
    steps along the segment toward the vanishing point.

    Degenerate samples are skipped, and lines left with fewer than two
    points are dropped.
    """
    if spacing <= 0:
        raise ValueError('grid spacing must be > 0, got {}'.format(spacing))
    ox, oy, oz = origin
    n = int(math.floor(extent / spacing))
    if even_ratios:
        config = projector.config
        xs = _ratio_positions(config.x, ox, extent, 2 * n + 1)
        zs = _ratio_positions(config.z, oz, extent, 2 * n + 1)
    else:
        xs = [ox + k * spacing for k in range(-n, n + 1)]
        zs = [oz + k * spacing for k in range(-n, n + 1)]

    lines: List[List[ScreenPoint]] = []
    for x in xs:
        seg = tessellate(projector, (x, oy, oz - extent), (x, oy, oz + extent), max_steps)
        if len(seg) > 1:
            lines.append(seg)
    for z in zs:
        seg = tessellate(projector, (ox - extent, oy, z), (ox + extent, oy, z), max_steps)
        if len(seg) > 1:
            lines.append(seg)
    logger.debug('ground grid: %d lines, even_ratios=%s', len(lines), even_ratios)
    return lines


__all__ = [
    "DEFAULT_MAX_STEPS",
    "step_count",
    "tessellate",
    "tessellate_polygon",
    "ground_grid",
]
