## per-axis distance-to-ratio mappings for vanpoint
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

"""Distance-to-ratio mappings.

Each world axis is mapped independently: a signed offset ``s`` along
the axis becomes a ratio that is used as the ``t`` of a linear
interpolation from the zero point toward that axis's vanishing point.
Both mappings send ``0`` to ``0`` and approach ``1`` as ``s`` grows
without bound.

``RATIONAL``
    ``1 - 1/(1 + f*s)``.  Singular at ``s = -1/f``.  Because it is a
    one-dimensional projective map, the ground-plane projection built
    on it is a homography, and straight world lines stay straight on
    screen.

``EXPONENTIAL``
    ``1 - base**(-s)`` with ``base = 1 + f`` unless given.  Defined
    everywhere but bends lines that are not parallel to an axis.

Neither mapping clamps its input.  Callers keep rational inputs above
``singularity()`` (see ``vanpoint.domain``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MappingKind(Enum):
    """Which distance-to-ratio formula an axis uses."""
    RATIONAL = "rational"
    EXPONENTIAL = "exponential"

    @classmethod
    def parse(cls, value) -> "MappingKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError('unknown mapping kind: {}'.format(value)) from None


def _base(factor, base):
    return 1.0 + factor if base is None else float(base)


def distance_to_ratio(s: float, factor: float,
                      kind: MappingKind = MappingKind.RATIONAL,
                      base: Optional[float] = None) -> float:
    """Map the signed axis offset ``s`` to an interpolation ratio.

    At the rational singularity itself ``-inf`` is returned, the limit
    approached from the valid side.  Past the singularity the result is
    the formula's value, which wraps around above 1.  An exponential
    mapping that overflows for very negative ``s`` also yields ``-inf``.
    """
    kind = MappingKind.parse(kind)
    if kind is MappingKind.RATIONAL:
        d = 1.0 + factor * s
        if d == 0.0:
            return -math.inf
        return 1.0 - 1.0 / d
    try:
        return 1.0 - _base(factor, base) ** (-s)
    except OverflowError:
        return -math.inf


def ratio_to_distance(r: float, factor: float,
                      kind: MappingKind = MappingKind.RATIONAL,
                      base: Optional[float] = None) -> float:
    """Inverse of ``distance_to_ratio()``: the axis offset whose ratio
    is ``r``.  Ratios of 1 or more lie at (or past) the vanishing point
    and map to ``inf``.
    """
    kind = MappingKind.parse(kind)
    if r >= 1.0:
        return math.inf
    if kind is MappingKind.RATIONAL:
        return (1.0 / (1.0 - r) - 1.0) / factor
    return -math.log(1.0 - r) / math.log(_base(factor, base))


def singularity(factor: float,
                kind: MappingKind = MappingKind.RATIONAL) -> float:
    """Lower bound of the valid domain of an axis mapping."""
    kind = MappingKind.parse(kind)
    if kind is MappingKind.RATIONAL:
        return -1.0 / factor
    return -math.inf


@dataclass(frozen=True)
class AxisMapping:
    """Immutable per-axis mapping parameters."""

    factor: float
    kind: MappingKind = MappingKind.RATIONAL
    base: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', MappingKind.parse(self.kind))

    def ratio(self, s: float) -> float:
        return distance_to_ratio(s, self.factor, self.kind, self.base)

    def distance(self, r: float) -> float:
        return ratio_to_distance(r, self.factor, self.kind, self.base)

    @property
    def lower_bound(self) -> float:
        return singularity(self.factor, self.kind)

    def contains(self, s: float) -> bool:
        """ true if ``s`` lies strictly inside the valid domain """
        return s > self.lower_bound


__all__ = [
    "MappingKind",
    "AxisMapping",
    "distance_to_ratio",
    "ratio_to_distance",
    "singularity",
]
