"""
conway_core
===========

Conway polyhedron operators on Platonic seeds.

Layers:
    spec      - constants, error types, Polyhedron value, mesh contract
    builders  - key space, Builder (keyed face assembly), Platonic seeds
    operators - ambo / dual / kis, notation grammar, incidence matrices
    analysis  - face classification, topology checks, render prep, OFF export

Quick start:
    from conway_core import build_expression, classify_faces
    poly = build_expression("dkD")
    classes = classify_faces(poly)

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"conway_core requires Python >= 3.9, got {sys.version}")

# scipy version check (sparse matrix API, qhull)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"conway_core requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"conway_core requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from .spec import Polyhedron, TopologyError, VertexIndexExhausted, NotationError
from .builders import Builder, Platonic, build_seed
from .operators import (
    Ambo,
    Dual,
    Kis,
    ambo,
    dual,
    kis,
    apply,
    apply_iter,
    parse_notation,
    parse_expression,
    apply_notation,
    build_expression,
)
from .analysis import (
    classify_faces,
    verify_closed_manifold,
    assert_closed_manifold,
    build_render_mesh,
    write_off,
)
