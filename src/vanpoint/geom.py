## foundational point and line operations for vanpoint
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

"""point and line primitives for **vanpoint**

====================
OVERVIEW
====================

The vanpoint.geom module provides the small amount of plain Euclidean
geometry the perspective mapping is built from: scalar and point
comparison within a tolerance, linear interpolation, distances, and the
intersection of two infinite lines in the screen plane.

points
======

Points are Python3 tuples of floats.  Screen points have two
components, ``(x, y)``, in device space.  World points have three
components, ``(x, y, z)``, where ``y`` is elevation and ``x`` and ``z``
span the ground plane.  Most functions here work on points of either
arity, as long as both arguments share it.

line/line intersection
======================

``line_line_intersect()`` is the only non-trivial numerical primitive
in the package.  It returns ``None`` rather than raising when the two
lines are parallel or coincident, so callers are forced to deal with
the no-intersection case explicitly.

"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

ScreenPoint = Tuple[float, float]
WorldPoint = Tuple[float, float, float]

## constants
epsilon = 0.000005

## operations on scalars
## ---------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))

def close(a, b, tol=epsilon):
    """ are two scalars the same within ``tol``
    """
    return abs(a - b) < tol

## operations on points
## --------------------

def point(*args) -> Tuple[float, ...]:
    """Make a point tuple out of two or three numbers, or out of a
    single sequence of two or three numbers.
    """
    if len(args) == 1 and isinstance(args[0], (tuple, list)):
        args = tuple(args[0])
    if len(args) not in (2, 3) or not all(isgoodnum(a) for a in args):
        raise ValueError('bad values passed to point(): {}'.format(args))
    return tuple(float(a) for a in args)

def ispoint(x):
    """ is it a two or three component point? """
    return isinstance(x, (tuple, list)) and len(x) in (2, 3) \
        and all(isgoodnum(a) for a in x)

def isfinitepoint(p):
    """ true if every component of ``p`` is a finite number """
    return all(math.isfinite(a) for a in p)

def add(a, b):
    """ component-wise ``a + b`` """
    if len(a) != len(b):
        raise ValueError('point arity mismatch: {} vs {}'.format(a, b))
    return tuple(x + y for x, y in zip(a, b))

def sub(a, b):
    """ component-wise ``a - b`` """
    if len(a) != len(b):
        raise ValueError('point arity mismatch: {} vs {}'.format(a, b))
    return tuple(x - y for x, y in zip(a, b))

def mag(a):
    """ compute the magnitude of vector ``a``"""
    return math.sqrt(sum(x * x for x in a))

def dist(a, b):
    """ compute the euclidean distance between two points ``a`` and ``b``"""
    return mag(sub(a, b))

def vclose(a, b, tol=epsilon):
    """ are two points the same within ``tol`` """
    return close(dist(a, b), 0.0, tol)

## Linear interpolation between two points.  Values 0 <= t <= 1 fall
## between a and b, values outside that interval fall on the line
## through a and b, outside the segment.
def lerp(a, b, t):
    """Linearly interpolate from point ``a`` (``t=0``) to point ``b``
    (``t=1``).  Works for points of any arity.
    """
    return tuple(x + t * (y - x) for x, y in zip(a, b))

## operations on lines
## -------------------

def line_line_intersect(p1: Sequence[float], p2: Sequence[float],
                        p3: Sequence[float], p4: Sequence[float],
                        epsilon: float = 0.0) -> Optional[ScreenPoint]:
    """Compute the intersection of the infinite line through ``p1``
    and ``p2`` with the infinite line through ``p3`` and ``p4``.

    Only the x and y components of each point are used.  Returns
    ``None`` if the lines are parallel or coincident, meaning the
    determinant has magnitude ``<= epsilon``.  With the default
    ``epsilon`` of zero only an exactly zero determinant is treated
    as degenerate.  A non-finite determinant, which arises when a
    defining point has run off to infinity, is also reported as
    ``None``.
    """

    x1, y1 = p1[0], p1[1]
    x2, y2 = p2[0], p2[1]
    x3, y3 = p3[0], p3[1]
    x4, y4 = p4[0], p4[1]

    d = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if not math.isfinite(d) or abs(d) <= epsilon:
        return None

    c12 = x1 * y2 - y1 * x2
    c34 = x3 * y4 - y3 * x4
    nx = c12 * (x3 - x4) - (x1 - x2) * c34
    ny = c12 * (y3 - y4) - (y1 - y2) * c34
    return (nx / d, ny / d)

def line_point_distance(p1, p2, p):
    """Perpendicular distance from point ``p`` to the infinite line
    through ``p1`` and ``p2`` in the XY plane.  If ``p1`` and ``p2``
    coincide this is the distance from ``p`` to ``p1``.
    """
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return math.hypot(p[0] - p1[0], p[1] - p1[1])
    return abs(dx * (p1[1] - p[1]) - dy * (p1[0] - p[0])) / length

def collinear_deviation(points: Iterable[Sequence[float]]) -> float:
    """Return the largest distance of any point from the line through
    the first and last points of ``points``.
    """
    pts = list(points)
    if len(pts) < 3:
        return 0.0
    first, last = pts[0], pts[-1]
    return max(line_point_distance(first, last, p) for p in pts[1:-1])

def iscollinear(points: Iterable[Sequence[float]], tol: float = epsilon) -> bool:
    """ true if all ``points`` lie within ``tol`` of a common line """
    return collinear_deviation(points) <= tol


__all__ = [
    "ScreenPoint",
    "WorldPoint",
    "epsilon",
    "isgoodnum",
    "close",
    "point",
    "ispoint",
    "isfinitepoint",
    "add",
    "sub",
    "mag",
    "dist",
    "vclose",
    "lerp",
    "line_line_intersect",
    "line_point_distance",
    "collinear_deviation",
    "iscollinear",
]
