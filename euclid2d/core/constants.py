"""Central numerical tolerances for 2D line geometry.

Every threshold used by the line relationship engine is defined here so it
can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

import math

# Length tolerances
EPS_LENGTH: float = 1e-6           # segments shorter than this are degenerate
EPS_LENGTH_SQ: float = 1e-12       # squared form of EPS_LENGTH
EPS_TINY: float = 1e-12            # zero-length threshold for divisions / unitizing
EPS_TINY_SQ: float = 1e-24         # squared form of EPS_TINY

# Parameter range tolerances
EPS_PARAM: float = 1e-6            # slack on the finite [0, 1] parameter range
PARAM_LOWER: float = -EPS_PARAM
PARAM_UPPER: float = 1.0 + EPS_PARAM
RAY_PARAM_BOUND: float = 1e12      # practical infinity for ray parameters

# Distance tolerances
EPS_TOUCH_SQ: float = 1e-12        # squared distance for touching / degenerate fallbacks
EPS_COINCIDENT: float = 1e-6       # distance of coincident rays
EPS_COINCIDENT_SQ: float = 1e-9    # squared ray offset accepted for an overlap

# Cross / dot product tolerances
EPS_PARALLELOGRAM_AREA: float = 1e-6   # absolute area for the fast parallel tests
EPS_FAST_DOT: float = 1e-6             # minimum |dot| for the fast orientation tests
EPS_ORIENTATION_DOT: float = 1e-12     # minimum dot for matching orientation
EPS_AXIS_ALIGNED: float = 1e-9         # max off-axis component of an aligned line
EPS_UNIT: float = 1e-6                 # |len - 1| accepted for unit vectors and rotations

# Tangent ratios (cross / dot) of common angles
TAN_0_25: float = math.tan(math.radians(0.25))    # default parallel tolerance
TAN_45: float = 1.0
TAN_89_75: float = math.tan(math.radians(89.75))  # default perpendicular tolerance

__all__ = [
    'EPS_LENGTH',
    'EPS_LENGTH_SQ',
    'EPS_TINY',
    'EPS_TINY_SQ',
    'EPS_PARAM',
    'PARAM_LOWER',
    'PARAM_UPPER',
    'RAY_PARAM_BOUND',
    'EPS_TOUCH_SQ',
    'EPS_COINCIDENT',
    'EPS_COINCIDENT_SQ',
    'EPS_PARALLELOGRAM_AREA',
    'EPS_FAST_DOT',
    'EPS_ORIENTATION_DOT',
    'EPS_AXIS_ALIGNED',
    'EPS_UNIT',
    'TAN_0_25',
    'TAN_45',
    'TAN_89_75',
]
