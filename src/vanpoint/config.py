## vanishing-point configuration for vanpoint
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

"""Immutable description of a curvilinear perspective.

A ``PerspectiveConfig`` holds the screen positions of the zero point
and of the two or three vanishing points, the per-axis mapping
parameters, and the scalar quantities derived from them once at
construction.  It is validated eagerly; an invalid configuration
raises ``ConfigurationError`` and never reaches the projector.

Configurations can be built in code, from a plain mapping with
``PerspectiveConfig.from_dict()``, or from a YAML file with
``load_config()``.

Environment Variables:
    VANPOINT_CONFIG: path of the YAML file ``load_config()`` reads
                     when no explicit path is given.

Example YAML::

    zero: [300, 400]
    vanishing_x: [650, 350]
    vanishing_z: [50, 350]
    vanishing_y: [300, 50]
    mapping: rational
    factors: {x: 0.25, z: 0.25, y: 0.125}
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from vanpoint.geom import ScreenPoint, epsilon, isgoodnum, point, sub
from vanpoint.mapping import AxisMapping, MappingKind

logger = logging.getLogger(__name__)

# Environment variable naming the default configuration file
VANPOINT_CONFIG = "VANPOINT_CONFIG"

DEFAULT_FACTOR = 0.25
DEFAULT_Y_FACTOR = 0.125
DEFAULT_Y_SCALE = 5.0


class ConfigurationError(ValueError):
    """Raised when a perspective configuration is invalid."""


class ProjectionMode(Enum):
    """Which projection procedure ``Projector.project()`` dispatches to."""
    GROUND = "ground"
    TWO_POINT = "two_point"
    THREE_POINT = "three_point"


def _screen_point(name, value) -> ScreenPoint:
    try:
        p = point(value)
    except (TypeError, ValueError):
        raise ConfigurationError('{} is not a point: {!r}'.format(name, value)) from None
    if len(p) != 2 or not all(math.isfinite(a) for a in p):
        raise ConfigurationError('{} must be a finite 2D point: {!r}'.format(name, value))
    return p


def _cross(o, a, b):
    ax, ay = sub(a, o)
    bx, by = sub(b, o)
    return ax * by - ay * bx


def _collinear(o, a, b):
    ## scale the tolerance by the spans involved so that the test does
    ## not depend on the size of the canvas
    ax, ay = sub(a, o)
    bx, by = sub(b, o)
    scale = math.hypot(ax, ay) * math.hypot(bx, by)
    return abs(_cross(o, a, b)) <= epsilon * scale


def _isfinitenum(n):
    return isgoodnum(n) and math.isfinite(n)


def _check_axis(name, mapping):
    if not isinstance(mapping, AxisMapping):
        raise ConfigurationError('{} mapping must be an AxisMapping, not {!r}'.format(name, mapping))
    f = mapping.factor
    if not _isfinitenum(f) or f <= 0:
        raise ConfigurationError('{} factor must be a finite number > 0, got {!r}'.format(name, f))
    b = mapping.base
    if b is not None and (not _isfinitenum(b) or b <= 1):
        raise ConfigurationError('{} base must be a finite number > 1, got {!r}'.format(name, b))


def _horizon_projection(zero, vx, vz) -> ScreenPoint:
    dx, dy = sub(vz, vx)
    zx, zy = sub(zero, vx)
    t = (zx * dx + zy * dy) / (dx * dx + dy * dy)
    return (vx[0] + t * dx, vx[1] + t * dy)


@dataclass(frozen=True)
class PerspectiveConfig:
    """Screen geometry and per-axis mappings of a perspective.

    ``x`` and ``z`` must share one ``MappingKind``; ``y`` may use its
    own kind and base.  ``y_scale`` is the world height that reads as
    eye level in two-point mode.  ``epsilon`` is the determinant
    tolerance used by every line intersection; zero means only exactly
    parallel lines are degenerate.
    """

    zero: ScreenPoint
    vanishing_x: ScreenPoint
    vanishing_z: ScreenPoint
    vanishing_y: Optional[ScreenPoint] = None
    x: AxisMapping = AxisMapping(DEFAULT_FACTOR)
    z: AxisMapping = AxisMapping(DEFAULT_FACTOR)
    y: AxisMapping = AxisMapping(DEFAULT_Y_FACTOR)
    y_scale: float = DEFAULT_Y_SCALE
    epsilon: float = 0.0

    horizon_projection: ScreenPoint = field(init=False, compare=False)
    height_pixel_span: float = field(init=False, compare=False)
    y_factor: float = field(init=False, compare=False)
    mode: ProjectionMode = field(init=False, compare=False)

    def __post_init__(self):
        zero = _screen_point('zero', self.zero)
        vx = _screen_point('vanishing_x', self.vanishing_x)
        vz = _screen_point('vanishing_z', self.vanishing_z)
        object.__setattr__(self, 'zero', zero)
        object.__setattr__(self, 'vanishing_x', vx)
        object.__setattr__(self, 'vanishing_z', vz)

        for name in ('x', 'z', 'y'):
            _check_axis(name, getattr(self, name))
        if self.x.kind is not self.z.kind:
            raise ConfigurationError('x and z must share a mapping kind, got {} and {}'.format(
                self.x.kind.value, self.z.kind.value))
        if not _isfinitenum(self.y_scale) or self.y_scale <= 0:
            raise ConfigurationError('y_scale must be a finite number > 0, got {!r}'.format(self.y_scale))
        if not _isfinitenum(self.epsilon) or self.epsilon < 0:
            raise ConfigurationError('epsilon must be a finite number >= 0, got {!r}'.format(self.epsilon))

        if vx == vz:
            raise ConfigurationError('vanishing_x and vanishing_z coincide at {}'.format(vx))
        if _collinear(zero, vx, vz):
            raise ConfigurationError('zero {} lies on the horizon through {} and {}'.format(zero, vx, vz))

        horizon = _horizon_projection(zero, vx, vz)
        span = zero[1] - horizon[1]
        if span == 0.0:
            raise ConfigurationError('zero {} has no vertical offset from the horizon'.format(zero))

        mode = ProjectionMode.TWO_POINT
        if self.vanishing_y is not None:
            vy = _screen_point('vanishing_y', self.vanishing_y)
            if _collinear(zero, vx, vy) or _collinear(zero, vz, vy):
                raise ConfigurationError(
                    'vanishing_y {} is collinear with zero and a ground vanishing point'.format(vy))
            object.__setattr__(self, 'vanishing_y', vy)
            mode = ProjectionMode.THREE_POINT

        object.__setattr__(self, 'horizon_projection', horizon)
        object.__setattr__(self, 'height_pixel_span', span)
        object.__setattr__(self, 'y_factor', span / self.y_scale)
        object.__setattr__(self, 'mode', mode)
        logger.debug('perspective %s: zero=%s horizon=%s span=%g y_factor=%g',
                     mode.value, zero, horizon, span, self.y_factor)

    @property
    def is_three_point(self) -> bool:
        return self.mode is ProjectionMode.THREE_POINT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerspectiveConfig":
        """Build a configuration from a plain mapping, as read from YAML."""
        if not isinstance(data, dict):
            raise ConfigurationError('configuration must be a mapping, not {}'.format(type(data).__name__))
        for key in ('zero', 'vanishing_x', 'vanishing_z'):
            if key not in data:
                raise ConfigurationError('configuration missing {}'.format(key))

        factors = data.get('factors') or {}
        if not isinstance(factors, dict):
            raise ConfigurationError('factors must be a mapping, not {!r}'.format(factors))
        try:
            kind = MappingKind.parse(data.get('mapping', MappingKind.RATIONAL))
            y_kind = MappingKind.parse(data.get('y_mapping', kind))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from None
        base = data.get('base')

        return cls(
            zero=data['zero'],
            vanishing_x=data['vanishing_x'],
            vanishing_z=data['vanishing_z'],
            vanishing_y=data.get('vanishing_y'),
            x=AxisMapping(factors.get('x', DEFAULT_FACTOR), kind, base),
            z=AxisMapping(factors.get('z', DEFAULT_FACTOR), kind, base),
            y=AxisMapping(factors.get('y', DEFAULT_Y_FACTOR), y_kind, data.get('y_base')),
            y_scale=data.get('y_scale', DEFAULT_Y_SCALE),
            epsilon=data.get('epsilon', 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Inverse of ``from_dict()``; plain lists and floats only."""
        data: Dict[str, Any] = {
            'zero': list(self.zero),
            'vanishing_x': list(self.vanishing_x),
            'vanishing_z': list(self.vanishing_z),
        }
        if self.vanishing_y is not None:
            data['vanishing_y'] = list(self.vanishing_y)
        data['mapping'] = self.x.kind.value
        data['factors'] = {'x': self.x.factor, 'z': self.z.factor, 'y': self.y.factor}
        if self.x.base is not None:
            data['base'] = self.x.base
        data['y_mapping'] = self.y.kind.value
        if self.y.base is not None:
            data['y_base'] = self.y.base
        data['y_scale'] = self.y_scale
        data['epsilon'] = self.epsilon
        return data


def load_config(path: Optional[Path | str] = None) -> PerspectiveConfig:
    """Load a ``PerspectiveConfig`` from a YAML file.

    If ``path`` is omitted the ``VANPOINT_CONFIG`` environment variable
    supplies it.
    """
    if path is None:
        path = os.environ.get(VANPOINT_CONFIG, '').strip()
        if not path:
            raise ConfigurationError('no configuration path given and {} is not set'.format(VANPOINT_CONFIG))
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"cannot parse {config_path}: {exc}") from exc
    logger.debug('loaded perspective configuration from %s', config_path)
    return PerspectiveConfig.from_dict(data)


def save_config(config: PerspectiveConfig, path: Path | str) -> None:
    """Write ``config`` as YAML, in the layout ``load_config()`` reads."""
    config_path = Path(path)
    with config_path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)


__all__ = [
    "VANPOINT_CONFIG",
    "DEFAULT_FACTOR",
    "DEFAULT_Y_FACTOR",
    "DEFAULT_Y_SCALE",
    "ConfigurationError",
    "ProjectionMode",
    "PerspectiveConfig",
    "load_config",
    "save_config",
]
