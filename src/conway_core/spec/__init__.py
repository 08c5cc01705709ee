"""Constants, error types, Polyhedron value and mesh contract."""

from .constants import (
    EPS_ZERO,
    EPS_CLOSE,
    MANTISSA_BITS,
    MAX_VERTEX_COUNT,
    DEFAULT_APEX_SCALE,
    DEFAULT_EDGE_LENGTH,
    ATLAS_GRID,
    GOLDEN_RATIO,
    COMPLEX_SURFACE,
    FACES_PER_EDGE,
)
from .errors import TopologyError, VertexIndexExhausted, NotationError
from .structures import (
    Polyhedron,
    MeshContract,
    canonical_face,
    rotate_to_min,
    validate_mesh,
    create_mesh,
)
