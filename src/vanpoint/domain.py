## domain guarding by uniform scene translation for vanpoint
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

"""Keeping scenes inside the valid domain of the axis mappings.

The rational mapping with factor ``f`` is only meaningful for axis
values above ``-1/f``, and the ground plane adds one joint condition:
a point valid on both ground axes can still sit behind the viewer.
Nothing in the projector checks either.  The remedy offered here is to
move the whole scene with ``translate()`` by an offset chosen so that
no vertex reaches the singular region; ``in_domain()`` and
``out_of_domain()`` let a caller verify the result.

Geometry that straddles the singularity is not clipped or
re-tessellated at the boundary.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from vanpoint.config import PerspectiveConfig
from vanpoint.geom import WorldPoint


def translate(scene: Iterable[Sequence[float]],
              offset: Sequence[float]) -> List[WorldPoint]:
    """Return a new list with ``offset`` added to every world point of
    ``scene``, in the original order.
    """
    if len(offset) != 3:
        raise ValueError('offset must be a world point, got {}'.format(offset))
    ox, oy, oz = offset
    out: List[WorldPoint] = []
    for p in scene:
        if len(p) != 3:
            raise ValueError('scene contains a non-world point: {}'.format(p))
        out.append((p[0] + ox, p[1] + oy, p[2] + oz))
    return out


def in_domain(config: PerspectiveConfig, p: Sequence[float]) -> bool:
    """True if every axis of world point ``p`` lies strictly above the
    lower bound of its mapping, and its ground position lies in front
    of the viewer.

    The second condition, ``ratio_x * ratio_z < 1``, fails for points
    that are individually valid on each axis but jointly map onto (or
    past) the line at infinity; for the rational mapping it is
    ``1 + fx*x + fz*z > 0``.
    """
    x, y, z = p
    if not (config.x.contains(x) and config.z.contains(z)):
        return False
    if config.x.ratio(x) * config.z.ratio(z) >= 1.0:
        return False
    ## elevation only passes through an axis mapping in three-point mode
    return not config.is_three_point or config.y.contains(y)


def out_of_domain(config: PerspectiveConfig,
                  scene: Iterable[Sequence[float]]) -> List[int]:
    """Indices of the points of ``scene`` that are outside the domain."""
    return [i for i, p in enumerate(scene) if not in_domain(config, p)]


__all__ = [
    "translate",
    "in_domain",
    "out_of_domain",
]
