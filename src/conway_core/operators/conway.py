"""
Conway Operators
================

Pure functions Polyhedron → Polyhedron. Each walks the input faces/edges and
feeds keyed vertices and flags into a fresh Builder; build() assembles the
output faces.

OPERATORS:
    a  ambo   - vertices at edge midpoints; one face per input face (shrunk)
                and one per input vertex.               V' = E, F' = F + V
    d  dual   - vertices at face centroids; one face per input vertex.
                                                        V' = F, F' = V
    k  kis    - a pyramid on every (selected) face: n-gon → n triangles.
                                                        V' = V + F, F' = Σ n

CONTRACT:
    Input: closed, manifold, consistently wound mesh.
    Output: the same, wound the same way (outward stays outward).
    Input is never modified; the result shares no arrays with it.

Operator values (Ambo, Dual, Kis) are frozen dataclasses forming a closed
set. apply() dispatches over exactly that set.

REFERENCE: https://en.wikipedia.org/wiki/Conway_polyhedron_notation
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Union

import numpy as np

from ..builders.builder import Builder
from ..builders.keys import (
    Centroid,
    PyramidFace,
    SeedFace,
    SeedVertex,
    VertexFace,
    VertexKey,
    midpoint,
)
from ..spec.constants import DEFAULT_APEX_SCALE, EPS_ZERO
from ..spec.errors import TopologyError
from ..spec.structures import Polyhedron


# =============================================================================
# FACE GEOMETRY
# =============================================================================

def face_centroid(points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of the face's vertex positions."""
    return np.mean(points, axis=0)


def face_normal(points: np.ndarray) -> np.ndarray:
    """
    Unit normal of a polygon by Newell-style accumulation.

    Sums cross(p_k, p_{k+1}) over consecutive vertex pairs (including the
    wrap-around pair), with every vertex taken relative to the first one.
    Working relative to a vertex on the polygon reduces error for polygons
    far from the origin.

    Returns the zero vector for a degenerate (zero-area) polygon.
    """
    rel = points - points[0]
    n = np.cross(rel, np.roll(rel, -1, axis=0)).sum(axis=0)
    length = np.linalg.norm(n)
    if length < EPS_ZERO:
        return np.zeros(3)
    return n / length


def mean_distance(points: np.ndarray, center: np.ndarray) -> float:
    """Mean Euclidean distance from `center` to each point."""
    return float(np.mean(np.linalg.norm(points - center, axis=1)))


# =============================================================================
# OPERATOR VALUES
# =============================================================================

@dataclass(frozen=True)
class Ambo:
    """Rectification: truncate every vertex down to the edge midpoints."""

    @property
    def notation(self) -> str:
        return "a"


@dataclass(frozen=True)
class Dual:
    """Swap faces and vertices."""

    @property
    def notation(self) -> str:
        return "d"


@dataclass(frozen=True)
class Kis:
    """
    Raise a pyramid on faces (Kleetope): an n-gon becomes n triangles.

    Args:
        side_count: only faces with this many sides are affected (0 = all faces)
        apex_scale: apex height above the face centroid, as a multiple of the
                    mean centroid-to-vertex distance, along the outward normal.
                    Must be finite. 0 keeps the apex in the face plane.
    """
    side_count: int = 0
    apex_scale: float = DEFAULT_APEX_SCALE

    def __post_init__(self):
        if isinstance(self.side_count, bool) or not isinstance(self.side_count, (int, np.integer)):
            raise ValueError(f"side_count must be an int, got {self.side_count!r}")
        if self.side_count < 0:
            raise ValueError(f"side_count must be >= 0, got {self.side_count}")
        apex_scale = float(self.apex_scale)
        if math.isnan(apex_scale):
            raise ValueError("Apex scale must not be NaN.")
        if not math.isfinite(apex_scale):
            raise ValueError(f"Apex scale must be finite, got {apex_scale}.")
        object.__setattr__(self, 'side_count', int(self.side_count))
        object.__setattr__(self, 'apex_scale', apex_scale)

    @property
    def notation(self) -> str:
        return "k" if self.side_count == 0 else f"k{self.side_count}"

    def selects(self, face_size: int) -> bool:
        return self.side_count == 0 or self.side_count == face_size


Operator = Union[Ambo, Dual, Kis]


# =============================================================================
# ALGORITHMS
# =============================================================================

def ambo(poly: Polyhedron) -> Polyhedron:
    """
    Ambo operator.

    For every directed edge v1 → v2 of face f, with v3 the vertex after v2:
        - register Midpoint{v1, v2} at (p1 + p2) / 2 (once per undirected edge)
        - SeedFace(f):    m(v1,v2) → m(v2,v3)   (shrunk copy of f)
        - VertexFace(v2): m(v2,v3) → m(v1,v2)   (one edge of the vertex figure;
                                                 complete once every face at
                                                 v2 has contributed)

    TOPOLOGY:
        V' = E,  E' = 2E,  F' = F + V
    """
    builder = Builder()
    verts = poly.vertices

    for f_idx, face in enumerate(poly.faces):
        v1, v2 = face[-2], face[-1]
        for v3 in face:
            m12 = midpoint(v1, v2)
            m23 = midpoint(v2, v3)
            if not builder.has_vertex(m12):
                builder.add_vertex(m12, (verts[v1] + verts[v2]) / 2.0)

            builder.add_flag(SeedFace(f_idx), m12, m23)
            builder.add_flag(VertexFace(v2), m23, m12)
            v1, v2 = v2, v3

    return builder.build()


def dual(poly: Polyhedron) -> Polyhedron:
    """
    Dual operator.

    Pass 1: one Centroid(f) vertex per face, at the mean of its vertices.
    Pass 2: arrivals[v][u] = Centroid of the face containing edge u → v.
    Pass 3: for every edge v1 → v2 of face i, the face across that edge owns
            v2 → v1 and is arrivals[v1][v2]. Flag into VertexFace(v1):
                arrivals[v1][v2] → Centroid(i)
            which visits the faces around v1 in the same rotational sense as
            the input faces, so the dual is wound outward like its input.

    TOPOLOGY:
        V' = F,  E' = E,  F' = V
    """
    builder = Builder()

    for f_idx in range(poly.n_faces):
        builder.add_vertex(Centroid(f_idx), face_centroid(poly.face_vertices(f_idx)))

    arrivals: Dict[int, Dict[int, VertexKey]] = {v: {} for v in range(poly.n_vertices)}
    for f_idx, v1, v2 in poly.directed_edges():
        arrivals[v2][v1] = Centroid(f_idx)

    for f_idx, v1, v2 in poly.directed_edges():
        neighbour = arrivals[v1].get(v2)
        if neighbour is None:
            raise TopologyError(
                f"Edge {v1} → {v2} of face {f_idx} has no reverse edge {v2} → {v1}; "
                f"input mesh is not closed"
            )
        builder.add_flag(VertexFace(v1), neighbour, Centroid(f_idx))

    return builder.build()


def kis(poly: Polyhedron,
        side_count: int = 0,
        apex_scale: float = DEFAULT_APEX_SCALE) -> Polyhedron:
    """
    Kis operator.

    Input vertices keep their indices (registered first, in order).

    For every face f:
        - not selected (side_count != 0 and != len(f)): copied through
          unchanged into SeedFace(f)
        - selected: apex = centroid + normal · apex_scale · mean_distance,
          registered as Centroid(f); for every edge v1 → v2 three flags
          into PyramidFace(f, v1):  v1 → v2,  v2 → apex,  apex → v1

    TOPOLOGY (all faces selected):
        V' = V + F,  E' = 3E,  F' = 2E
    """
    op = Kis(side_count, apex_scale)
    builder = Builder()

    for i, position in enumerate(poly.vertices):
        builder.add_vertex(SeedVertex(i), position)

    for f_idx, face in enumerate(poly.faces):
        if not op.selects(len(face)):
            v1 = SeedVertex(face[-1])
            for index in face:
                v2 = SeedVertex(index)
                builder.add_flag(SeedFace(f_idx), v1, v2)
                v1 = v2
            continue

        points = poly.face_vertices(f_idx)
        center = face_centroid(points)
        normal = face_normal(points)
        apex = Centroid(f_idx)
        builder.add_vertex(apex, center + normal * (op.apex_scale * mean_distance(points, center)))

        v1 = SeedVertex(face[-1])
        for index in face:
            v2 = SeedVertex(index)
            pyramid = PyramidFace(f_idx, v1)
            builder.add_flag(pyramid, v1, v2)
            builder.add_flag(pyramid, v2, apex)
            builder.add_flag(pyramid, apex, v1)
            v1 = v2

    return builder.build()


# =============================================================================
# DISPATCH
# =============================================================================

def apply(poly: Polyhedron, operator: Operator) -> Polyhedron:
    """Apply one operator and return the resulting polyhedron."""
    if isinstance(operator, Ambo):
        return ambo(poly)
    if isinstance(operator, Dual):
        return dual(poly)
    if isinstance(operator, Kis):
        return kis(poly, operator.side_count, operator.apex_scale)
    raise TypeError(f"Unknown operator {operator!r}; expected Ambo, Dual or Kis")


def apply_iter(poly: Polyhedron, operators: Iterable[Operator]) -> Polyhedron:
    """Apply each operator in order (first element first)."""
    for op in operators:
        poly = apply(poly, op)
    return poly
