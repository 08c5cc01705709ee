"""
Incidence Matrices
==================

Pure combinatorics - NO geometry.

DEFINITIONS:
    d₀: E × V  oriented edge-vertex incidence
    d₁: F × E  oriented face-edge incidence

PROPERTIES (closed, consistently wound surface):
    1. d₁d₀ = 0                 (ALWAYS - each vertex enters and leaves a face once)
    2. every column of d₁ has exactly 2 non-zeros (faces_per_edge = 2)
    3. every column of d₁ sums to 0 (neighbours traverse the shared edge
       in opposite directions)

Operators emit meshes through the Builder without ever forming these
matrices; they are the independent check that the output is well formed.

Matrices are scipy.sparse CSR: meshes after a few operator rounds have
thousands of faces and each row holds only a handful of entries.
"""

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
import scipy.sparse as sp


def build_d0(n_vertices: int, edges: List[Tuple[int, int]]) -> sp.csr_matrix:
    """
    Build d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v is the source of edge e
        d₀[e, v] = +1 if v is the target of edge e

    Convention: for edge (i, j) with i < j, i is source, j is target.

    Returns:
        d0: (E, V) sparse incidence matrix
    """
    E = len(edges)
    if E == 0:
        return sp.csr_matrix((0, n_vertices))
    rows = np.repeat(np.arange(E), 2)
    cols = np.asarray(edges, dtype=np.int64).reshape(-1)
    data = np.tile([-1.0, 1.0], E)
    return sp.csr_matrix((data, (rows, cols)), shape=(E, n_vertices))


def build_d1(edges: List[Tuple[int, int]],
             faces: Sequence[Sequence[int]]) -> sp.csr_matrix:
    """
    Build d₁: C¹ → C².

    DEFINITION:
        d₁[f, e] = +1 if face f traverses edge e = (i, j) as i → j
        d₁[f, e] = -1 if face f traverses it as j → i

    Returns:
        d1: (F, E) sparse incidence matrix

    FAIL-FAST:
        Raises ValueError if a face segment is not in the edge list or a
        face uses the same edge twice.
    """
    edge_dict = {}
    for e_idx, (i, j) in enumerate(edges):
        edge_dict[(i, j)] = (e_idx, +1)  # forward direction
        edge_dict[(j, i)] = (e_idx, -1)  # backward direction

    rows, cols, data = [], [], []
    for f_idx, face in enumerate(faces):
        n = len(face)
        used = set()
        for k in range(n):
            v1 = face[k]
            v2 = face[(k + 1) % n]
            if (v1, v2) not in edge_dict:
                raise ValueError(f"Face {f_idx} uses segment ({v1},{v2}) which is not in edge list. "
                                 f"Face vertices: {list(face)}")
            e_idx, sign = edge_dict[(v1, v2)]
            if e_idx in used:
                raise ValueError(f"Face {f_idx} uses edge {e_idx} twice. "
                                 f"This indicates an invalid face cycle. Face vertices: {list(face)}")
            used.add(e_idx)
            rows.append(f_idx)
            cols.append(e_idx)
            data.append(float(sign))

    return sp.csr_matrix((data, (rows, cols)), shape=(len(faces), len(edges)))


def build_incidence_matrices(n_vertices: int,
                             edges: List[Tuple[int, int]],
                             faces: Sequence[Sequence[int]]) -> Tuple[sp.csr_matrix, sp.csr_matrix]:
    """
    Build both incidence matrices d₀ and d₁ and verify exactness d₁d₀ = 0.

    Proof of exactness: (d₁d₀)[f, v] sums the two edges of face f that meet
    at v; one enters v (+1), the other leaves it (-1).
    """
    d0 = build_d0(n_vertices, edges)
    d1 = build_d1(edges, faces)

    d1d0 = d1 @ d0
    if d1d0.count_nonzero() != 0:
        raise ValueError(f"Exactness failed: ||d₁d₀|| = {np.sqrt(d1d0.multiply(d1d0).sum())}")

    return d0, d1


def build_incidence_from_mesh(mesh: dict) -> Tuple[sp.csr_matrix, sp.csr_matrix]:
    """Contract-aware wrapper: incidence matrices of a mesh dict (V, E, F)."""
    return build_incidence_matrices(len(mesh['V']), mesh['E'], mesh['F'])


# =============================================================================
# UNIVERSAL VERIFICATION HELPERS
# =============================================================================

def verify_faces_per_edge(d1: sp.spmatrix, k: int = 2) -> Dict[str, Any]:
    """
    Check that every edge has exactly k incident faces.

    For a closed 2-manifold k = 2.

    Returns:
        dict with:
            'valid': bool - all edges have exactly k faces
            'min': int - minimum faces per edge
            'max': int - maximum faces per edge
            'expected': int - k
            'histogram': dict - {count: n_edges_with_that_count}
    """
    faces_per_edge_actual = np.asarray(abs(d1).sum(axis=0)).ravel()
    if faces_per_edge_actual.size == 0:
        return {'valid': False, 'min': 0, 'max': 0, 'expected': k, 'histogram': {}}

    fpe_min = int(np.min(faces_per_edge_actual))
    fpe_max = int(np.max(faces_per_edge_actual))
    is_uniform = (fpe_min == fpe_max == k)

    unique, counts = np.unique(faces_per_edge_actual, return_counts=True)
    histogram = {int(u): int(c) for u, c in zip(unique, counts)}

    return {
        'valid': is_uniform,
        'min': fpe_min,
        'max': fpe_max,
        'expected': k,
        'histogram': histogram,
    }


def assert_faces_per_edge(d1: sp.spmatrix, k: int = 2, context: str = "") -> None:
    """
    Fail-fast version of verify_faces_per_edge.

    Raises:
        ValueError: if invariant violated
    """
    result = verify_faces_per_edge(d1, k)
    if not result['valid']:
        ctx = f" [{context}]" if context else ""
        raise ValueError(
            f"faces_per_edge invariant violated{ctx}: "
            f"expected all edges to have {k} faces, "
            f"got min={result['min']}, max={result['max']}. "
            f"Histogram: {result['histogram']}"
        )


def verify_consistent_winding(d1: sp.spmatrix) -> Dict[str, Any]:
    """
    Check that every edge is traversed once in each direction.

    Returns:
        dict with 'valid' and 'bad_edges' (indices whose column sum is non-zero)
    """
    col_sums = np.asarray(d1.sum(axis=0)).ravel()
    bad = np.nonzero(col_sums)[0]
    return {
        'valid': len(bad) == 0,
        'bad_edges': [int(e) for e in bad],
    }
