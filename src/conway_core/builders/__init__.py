"""
Mesh construction - key space, Builder, Platonic seeds.

EXPORTS:
- Keys: SeedVertex, Midpoint, Centroid, midpoint (vertex keys);
        SeedFace, VertexFace, PyramidFace (face keys)
- Builder: keyed face assembler used by every operator
- Seeds: build_tetrahedron, build_cube, build_octahedron,
         build_dodecahedron, build_icosahedron, build_seed, Platonic
"""

from .keys import (
    VertexKey,
    SeedVertex,
    Midpoint,
    Centroid,
    midpoint,
    FaceKey,
    SeedFace,
    VertexFace,
    PyramidFace,
)
from .builder import Builder
from .seeds import (
    Platonic,
    build_seed,
    build_tetrahedron,
    build_cube,
    build_octahedron,
    build_dodecahedron,
    build_icosahedron,
)
