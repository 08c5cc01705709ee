"""
Face Classification
===================

Group faces into congruence classes so that congruent faces can share one
texture atlas cell.

SIGNATURE (per face):
    For every vertex t with cyclic neighbours p and n:
        |(p - t) × (n - t)|
    i.e. twice the area of the corner triangle at t. One value per vertex,
    including the two corners that wrap around the loop.

    Sorted ascending → invariant to starting vertex and winding direction.
    Which vertex carries which value is discarded; only the multiset counts.

QUANTIZATION:
    Each value keeps its sign, binary exponent and the top MANTISSA_BITS
    bits of its mantissa (truncated). Faces congruent up to ordinary
    rounding error produce identical signatures.

    Two faces are in the same class iff their quantized signatures are equal.
    Signatures of different length never compare equal, so faces with
    different vertex counts never share a class.

KNOWN COARSENESS:
    - Mirror images share a signature.
    - A value lying on a quantization boundary can split a class.
    - All faces with < 3 vertices share the empty signature.
"""

from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..spec.constants import MANTISSA_BITS
from ..spec.structures import Polyhedron

Signature = Tuple[Tuple[int, int, int], ...]


def truncate_mantissa(values, bits: int = MANTISSA_BITS) -> List[Tuple[int, int, int]]:
    """
    Quantize floats to `bits` significant bits.

    Each value x = ±m · 2^e with m in [0.5, 1) becomes
        (sign, e, floor(m · 2^bits))
    so the leading `bits` bits of the mantissa survive and the rest are
    dropped. Zero maps to (0, 0, 0).

    Args:
        values: scalar or array of finite floats
        bits: significant bits to keep (1..52)

    Returns:
        list of (sign, exponent, mantissa) integer triples
    """
    if not 1 <= bits <= 52:
        raise ValueError(f"bits must be in [1, 52], got {bits}")
    x = np.atleast_1d(np.asarray(values, dtype=float))
    if not np.all(np.isfinite(x)):
        raise ValueError(f"Cannot quantize non-finite values: {x[~np.isfinite(x)]}")

    m, e = np.frexp(x)
    sign = np.signbit(x) & (x != 0)
    mantissa = np.floor(np.abs(m) * (1 << bits)).astype(np.int64)
    return [(int(s), int(ex), int(q)) for s, ex, q in zip(sign, e, mantissa)]


def corner_magnitudes(points: np.ndarray) -> np.ndarray:
    """|(p - t) × (n - t)| for every vertex t of a closed polygon, in face order."""
    prev_pts = np.roll(points, 1, axis=0)
    next_pts = np.roll(points, -1, axis=0)
    return np.linalg.norm(np.cross(prev_pts - points, next_pts - points), axis=1)


def face_signature(points: np.ndarray, bits: int = MANTISSA_BITS) -> Signature:
    """Sorted, quantized corner magnitudes of one face (empty for < 3 points)."""
    points = np.asarray(points, dtype=float)
    if len(points) < 3:
        return ()
    crosses = np.sort(corner_magnitudes(points))
    return tuple(truncate_mantissa(crosses, bits))


def face_signatures(poly: Polyhedron, bits: int = MANTISSA_BITS) -> List[Signature]:
    return [face_signature(poly.face_vertices(i), bits) for i in range(poly.n_faces)]


def classify_signatures(signatures: Sequence[Signature]) -> List[int]:
    """Class id per signature; ids are assigned in first-seen order."""
    classes: Dict[Signature, int] = {}
    face_classes = []
    for sig in signatures:
        face_classes.append(classes.setdefault(sig, len(classes)))
    return face_classes


def classify_faces(poly: Polyhedron, bits: int = MANTISSA_BITS) -> List[int]:
    """
    Congruence class id for every face, in face order.

    Ids are dense, start at 0 and are numbered by first appearance. They are
    stable for one mesh, not comparable across meshes.
    """
    return classify_signatures(face_signatures(poly, bits))


def face_class_count(face_classes: Sequence[int]) -> int:
    """Number of distinct classes in a classify_faces() result."""
    return len(set(face_classes))
