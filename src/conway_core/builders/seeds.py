"""
Platonic Seeds
==============

Starting meshes for operator chains, parameterized by edge length.

SEEDS INCLUDED:
    - Tetrahedron  (V=4,  E=6,  F=4)   symbol T
    - Cube         (V=8,  E=12, F=6)   symbol C
    - Octahedron   (V=6,  E=12, F=8)   symbol O
    - Dodecahedron (V=20, E=30, F=12)  symbol D
    - Icosahedron  (V=12, E=30, F=20)  symbol I

All are centred at the origin with every face wound counter-clockwise seen
from outside (outward normals). Each satisfies χ = V - E + F = 2.
"""

import math
from enum import Enum
from typing import Union

import numpy as np

from ..spec.constants import DEFAULT_EDGE_LENGTH, GOLDEN_RATIO, SQRT2, SQRT5
from ..spec.structures import Polyhedron


def _check_edge_length(edge_length: float) -> float:
    edge_length = float(edge_length)
    if not math.isfinite(edge_length) or edge_length <= 0:
        raise ValueError(f"edge_length must be finite and > 0, got {edge_length}")
    return edge_length


def build_tetrahedron(edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """
    Regular tetrahedron.

    Vertices at (±s, 0, -s/√2) and (0, ±s, s/√2) with s = L/2.
    """
    s = _check_edge_length(edge_length) / 2.0
    h = s / SQRT2
    vertices = np.array([
        [s, 0.0, -h],
        [-s, 0.0, -h],
        [0.0, s, h],
        [0.0, -s, h],
    ])
    faces = [
        [0, 1, 2],
        [0, 2, 3],
        [0, 3, 1],
        [1, 3, 2],
    ]
    return Polyhedron(vertices, faces)


def build_cube(edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """
    Cube with corners at (±L/2, ±L/2, ±L/2).

    Vertex i has coordinate signs from the bits of i: bit 2 → x, bit 1 → y,
    bit 0 → z (set bit = negative).
    """
    s = _check_edge_length(edge_length) / 2.0
    vertices = np.array([
        [s, s, s],
        [s, s, -s],
        [s, -s, s],
        [s, -s, -s],
        [-s, s, s],
        [-s, s, -s],
        [-s, -s, s],
        [-s, -s, -s],
    ])
    faces = [
        [0, 2, 3, 1],   # +x
        [4, 5, 7, 6],   # -x
        [0, 1, 5, 4],   # +y
        [2, 6, 7, 3],   # -y
        [0, 4, 6, 2],   # +z
        [1, 3, 7, 5],   # -z
    ]
    return Polyhedron(vertices, faces)


def build_octahedron(edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """Regular octahedron with vertices on the axes at ±L/√2."""
    s = _check_edge_length(edge_length) / SQRT2
    vertices = np.array([
        [s, 0.0, 0.0],
        [-s, 0.0, 0.0],
        [0.0, s, 0.0],
        [0.0, -s, 0.0],
        [0.0, 0.0, s],
        [0.0, 0.0, -s],
    ])
    faces = [
        [0, 2, 4],
        [0, 4, 3],
        [0, 3, 5],
        [0, 5, 2],
        [1, 4, 2],
        [1, 2, 5],
        [1, 5, 3],
        [1, 3, 4],
    ]
    return Polyhedron(vertices, faces)


def build_dodecahedron(edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """
    Regular dodecahedron.

    CONSTRUCTION:
        8 cube corners (±a, ±a, ±a) with a = L·φ/2
        12 vertices on the cyclic permutations of (0, ±b, ±L/2)
        with b = L·φ²/2, φ = golden ratio.
    """
    L = _check_edge_length(edge_length)
    a = L * (SQRT5 + 1.0) / 4.0
    b = L * (SQRT5 + 3.0) / 4.0
    c = L / 2.0
    vertices = np.array([
        [a, a, a],
        [a, a, -a],
        [a, -a, a],
        [a, -a, -a],
        [-a, a, a],
        [-a, a, -a],
        [-a, -a, a],
        [-a, -a, -a],
        [0.0, b, c],
        [0.0, b, -c],
        [0.0, -b, c],
        [0.0, -b, -c],
        [b, c, 0.0],
        [b, -c, 0.0],
        [-b, c, 0.0],
        [-b, -c, 0.0],
        [c, 0.0, b],
        [-c, 0.0, b],
        [c, 0.0, -b],
        [-c, 0.0, -b],
    ])
    faces = [
        [0, 8, 4, 17, 16],
        [0, 12, 1, 9, 8],
        [0, 16, 2, 13, 12],
        [1, 12, 13, 3, 18],
        [1, 18, 19, 5, 9],
        [2, 10, 11, 3, 13],
        [3, 11, 7, 19, 18],
        [4, 8, 9, 5, 14],
        [4, 14, 15, 6, 17],
        [5, 19, 7, 15, 14],
        [6, 10, 2, 16, 17],
        [6, 15, 7, 11, 10],
    ]
    return Polyhedron(vertices, faces)


def build_icosahedron(edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """Regular icosahedron on three orthogonal golden rectangles (±L/2, ±φL/2)."""
    s = _check_edge_length(edge_length) / 2.0
    p = GOLDEN_RATIO * s
    vertices = np.array([
        [-s, p, 0.0],
        [s, p, 0.0],
        [-s, -p, 0.0],
        [s, -p, 0.0],
        [0.0, -s, p],
        [0.0, s, p],
        [0.0, -s, -p],
        [0.0, s, -p],
        [p, 0.0, -s],
        [p, 0.0, s],
        [-p, 0.0, -s],
        [-p, 0.0, s],
    ])
    faces = [
        [0, 1, 7],
        [0, 5, 1],
        [0, 7, 10],
        [0, 10, 11],
        [0, 11, 5],
        [1, 5, 9],
        [1, 8, 7],
        [1, 9, 8],
        [2, 3, 4],
        [2, 4, 11],
        [2, 6, 3],
        [2, 10, 6],
        [2, 11, 10],
        [3, 6, 8],
        [3, 8, 9],
        [3, 9, 4],
        [4, 5, 11],
        [4, 9, 5],
        [6, 7, 8],
        [6, 10, 7],
    ]
    return Polyhedron(vertices, faces)


class Platonic(Enum):
    """The five Platonic seeds, keyed by their Conway notation symbol."""
    TETRAHEDRON = "T"
    CUBE = "C"
    OCTAHEDRON = "O"
    DODECAHEDRON = "D"
    ICOSAHEDRON = "I"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def polyhedron(self, edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
        return _BUILDERS[self](edge_length)

    @classmethod
    def lookup(cls, name_or_symbol: str) -> "Platonic":
        """Find a seed by symbol ("D") or name ("dodecahedron"), case-insensitive for names."""
        for platonic in cls:
            if name_or_symbol == platonic.symbol or name_or_symbol.lower() == platonic.name.lower():
                return platonic
        raise ValueError(f"Unknown seed {name_or_symbol!r}; expected one of "
                         f"{[p.symbol for p in cls]} or their names")

    def __str__(self) -> str:
        return self.display_name


_BUILDERS = {
    Platonic.TETRAHEDRON: build_tetrahedron,
    Platonic.CUBE: build_cube,
    Platonic.OCTAHEDRON: build_octahedron,
    Platonic.DODECAHEDRON: build_dodecahedron,
    Platonic.ICOSAHEDRON: build_icosahedron,
}


def build_seed(seed: Union[str, Platonic], edge_length: float = DEFAULT_EDGE_LENGTH) -> Polyhedron:
    """Build a seed from a Platonic member, its symbol, or its name."""
    if not isinstance(seed, Platonic):
        seed = Platonic.lookup(seed)
    return seed.polyhedron(edge_length)
