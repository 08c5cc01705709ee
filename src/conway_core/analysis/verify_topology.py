"""
Topology Verification Functions
===============================

Independent checks of the operator contract, built on the mesh dict
(Polyhedron.to_mesh_dict) and its incidence matrices rather than on the
Builder.

    verify_closed_manifold   - faces_per_edge = 2, winding consistent, χ
    assert_closed_manifold   - fail-fast version
    signed_volume            - > 0 iff faces are wound outward
    verify_convex_position   - every vertex is a convex hull vertex (scipy)
    face_multiset / same_combinatorics - order-free mesh comparison
"""

from collections import Counter
from typing import Dict, List, Tuple

import numpy as np
import scipy.sparse as sp
from scipy.spatial import ConvexHull

from ..operators.incidence import (
    assert_faces_per_edge,
    build_incidence_from_mesh,
    verify_consistent_winding,
    verify_faces_per_edge,
)
from ..spec.structures import Polyhedron, rotate_to_min

VOLUME_RTOL = 1e-9  # mesh volume vs qhull volume


def _surface_incidence(poly: Polyhedron) -> Tuple[dict, sp.csr_matrix]:
    """Contract-validated mesh dict of `poly` and its face-edge matrix d₁."""
    mesh = poly.to_mesh_dict()
    _, d1 = build_incidence_from_mesh(mesh)
    return mesh, d1


def _unused_vertices(mesh: dict) -> List[int]:
    used = set(v for face in mesh['F'] for v in face)
    return [v for v in range(mesh['n_V']) if v not in used]


def verify_closed_manifold(poly: Polyhedron) -> Dict:
    """
    Verify the operator contract: closed, manifold, consistently wound.

    Args:
        poly: mesh to check

    Returns:
        dict with verification results

    Raises:
        ValueError: if the faces violate the mesh contract itself
                    (repeated vertex within a face)
    """
    mesh, d1 = _surface_incidence(poly)

    fpe = verify_faces_per_edge(d1, mesh['faces_per_edge'])
    winding = verify_consistent_winding(d1)
    unused = _unused_vertices(mesh)

    chi = mesh['n_V'] - mesh['n_E'] + mesh['n_F']

    return {
        'valid': fpe['valid'] and winding['valid'] and not unused,
        'faces_per_edge': fpe,
        'winding_consistent': winding['valid'],
        'bad_winding_edges': winding['bad_edges'],
        'unused_vertices': unused,
        'V': mesh['n_V'],
        'E': mesh['n_E'],
        'F': mesh['n_F'],
        'euler': chi,
    }


def assert_closed_manifold(poly: Polyhedron, context: str = "") -> None:
    """
    Fail-fast version of verify_closed_manifold.

    Raises:
        ValueError: if the mesh violates the operator contract
    """
    mesh, d1 = _surface_incidence(poly)
    assert_faces_per_edge(d1, mesh['faces_per_edge'], context)

    ctx = f" [{context}]" if context else ""
    winding = verify_consistent_winding(d1)
    if not winding['valid']:
        raise ValueError(
            f"winding invariant violated{ctx}: "
            f"{len(winding['bad_edges'])} edges traversed twice in the same direction"
        )
    unused = _unused_vertices(mesh)
    if unused:
        raise ValueError(f"closed-manifold invariant violated{ctx}: unused vertices {unused}")


def signed_volume(poly: Polyhedron) -> float:
    """
    Enclosed volume by the divergence theorem over fan-triangulated faces.

    Positive when faces are wound counter-clockwise seen from outside.
    """
    total = 0.0
    verts = poly.vertices
    for face in poly.faces:
        a = verts[face[0]]
        b = verts[list(face[1:-1])]
        c = verts[list(face[2:])]
        total += float(np.sum(np.einsum('j,ij->i', a, np.cross(b, c))))
    return total / 6.0


def verify_convex_position(poly: Polyhedron) -> Dict:
    """
    Check that every vertex is a vertex of the convex hull and that the mesh
    encloses the hull's volume.

    Holds for Platonic seeds and their ambo/dual images; kis with a positive
    apex scale keeps convexity only for small enough scales.
    """
    hull = ConvexHull(poly.vertices)
    on_hull = set(int(v) for v in hull.vertices)
    off_hull = [v for v in range(poly.n_vertices) if v not in on_hull]
    volume = signed_volume(poly)
    volume_ok = bool(np.isclose(volume, hull.volume, rtol=VOLUME_RTOL))
    return {
        'convex': not off_hull and volume_ok,
        'off_hull_vertices': off_hull,
        'hull_volume': float(hull.volume),
        'mesh_volume': volume,
    }


# =============================================================================
# ORDER-FREE COMPARISON
# =============================================================================

def face_valence_histogram(poly: Polyhedron) -> Dict[int, int]:
    """{face size: number of faces}"""
    return dict(sorted(Counter(poly.face_valences()).items()))


def face_multiset(poly: Polyhedron) -> Counter:
    """Faces rotated to start at their minimum index (winding kept), as a multiset."""
    return Counter(rotate_to_min(face) for face in poly.faces)


def same_combinatorics(a: Polyhedron, b: Polyhedron) -> bool:
    """Same vertex count, face count and multiset of face valences."""
    return (a.n_vertices == b.n_vertices
            and a.n_faces == b.n_faces
            and face_valence_histogram(a) == face_valence_histogram(b))


def vertex_degrees(poly: Polyhedron) -> List[int]:
    """Number of faces around each vertex (= its degree on a closed surface)."""
    degrees = [0] * poly.n_vertices
    for face in poly.faces:
        for v in face:
            degrees[v] += 1
    return degrees


def edge_lengths(poly: Polyhedron) -> np.ndarray:
    """Length of every undirected edge, in poly.edges() order."""
    edges = np.asarray(poly.edges(), dtype=np.int64).reshape(-1, 2)
    return np.linalg.norm(poly.vertices[edges[:, 0]] - poly.vertices[edges[:, 1]], axis=1)


def summarize(poly: Polyhedron) -> Tuple[int, int, int, int]:
    """(V, E, F, χ)"""
    return poly.n_vertices, poly.n_edges, poly.n_faces, poly.euler_characteristic()
