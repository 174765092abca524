"""Public package API for euclid2d, a 2D line relationship engine.

This facade provides a flat import surface on top of the internal
implementation package ``euclid2d.core``. Matplotlib is only imported when
the ``visualization`` namespace is first used, to keep ``import euclid2d``
light.

Example
-------
    from euclid2d import Line2D, classify, do_intersect, try_get_overlap

The deeper modules (``euclid2d.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import PackageNotFoundError as _NotInstalled
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("euclid2d")  # populated when installed
except _NotInstalled:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('euclid2d.core.constants')
_config = _imp('euclid2d.core.config')
_errors = _imp('euclid2d.core.errors')
_log = _imp('euclid2d.core.logging_utils')
_tolerance = _imp('euclid2d.core.tolerance')
_points = _imp('euclid2d.core.points')
_line = _imp('euclid2d.core.line2d')
_x = _imp('euclid2d.core.xline2d')
_rel = _imp('euclid2d.core.relations')
_vec = _imp('euclid2d.core.vectorized')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == '_m':  # unset slot, not yet loaded
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


visualization = _lazy_module('euclid2d.core.visualization')

# value types
Pt = _points.Pt
Vc = _points.Vc
UnitVc = _points.UnitVc
Rotation2D = _points.Rotation2D
HasDirection = _points.HasDirection
Line2D = _line.Line2D

# configuration, errors, logging
LineTolerances = _config.LineTolerances
FastTolerances = _config.FastTolerances
DEFAULT_TOLERANCES = _config.DEFAULT_TOLERANCES
DEFAULT_FAST_TOLERANCES = _config.DEFAULT_FAST_TOLERANCES
GeometryError = _errors.GeometryError
TooSmallError = _errors.TooSmallError
UnitizingError = _errors.UnitizingError
InvalidArgumentError = _errors.InvalidArgumentError
get_logger = _log.get_logger
configure_logging = _log.configure_logging

# engine result types
XKind = _x.XKind
XParam = _x.XParam
XPt = _x.XPt
XRayParam = _x.XRayParam
XRay = _x.XRay
ClParams = _x.ClParams
ClPts = _x.ClPts
XEnds = _x.XEnds

# relations between two lines
classify = _x.classify
get_intersection = _x.get_intersection
get_ray_intersection = _x.get_ray_intersection
get_ends_touching = _x.get_ends_touching
do_intersect = _rel.do_intersect
do_intersect_or_overlap = _rel.do_intersect_or_overlap
try_intersect = _rel.try_intersect
try_intersect_or_overlap = _rel.try_intersect_or_overlap
try_intersect_ray = _rel.try_intersect_ray
closest_points = _rel.closest_points
closest_parameters = _rel.closest_parameters
try_get_overlap = _rel.try_get_overlap
sq_distance_to_line = _rel.sq_distance_to_line
distance_to_line = _rel.distance_to_line
is_touching_end_of = _rel.is_touching_end_of
project_onto_ray_param = _rel.project_onto_ray_param
project_onto_ray = _rel.project_onto_ray
try_project_onto_line_param = _rel.try_project_onto_line_param
try_project_onto_line = _rel.try_project_onto_line

# Namespace submodules for exploratory users
constants = _const
tolerance = _tolerance
xline2d = _x
relations = _rel
vectorized = _vec

__all__ = [
    '__version__',
    # value types
    'Pt', 'Vc', 'UnitVc', 'Rotation2D', 'HasDirection', 'Line2D',
    # configuration, errors, logging
    'LineTolerances', 'FastTolerances', 'DEFAULT_TOLERANCES', 'DEFAULT_FAST_TOLERANCES',
    'GeometryError', 'TooSmallError', 'UnitizingError', 'InvalidArgumentError',
    'get_logger', 'configure_logging',
    # results
    'XKind', 'XParam', 'XPt', 'XRayParam', 'XRay', 'ClParams', 'ClPts', 'XEnds',
    # relations
    'classify', 'get_intersection', 'get_ray_intersection', 'get_ends_touching',
    'do_intersect', 'do_intersect_or_overlap', 'try_intersect', 'try_intersect_or_overlap',
    'try_intersect_ray', 'closest_points', 'closest_parameters', 'try_get_overlap',
    'sq_distance_to_line', 'distance_to_line', 'is_touching_end_of',
    'project_onto_ray_param', 'project_onto_ray', 'try_project_onto_line_param',
    'try_project_onto_line',
    # submodules / namespaces
    'constants', 'tolerance', 'xline2d', 'relations', 'vectorized', 'visualization',
]
