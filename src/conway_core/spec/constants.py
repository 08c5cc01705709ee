"""
Global constants for conway_core
================================

All tolerances and magic numbers in ONE place.
"""

# Numerical tolerances
EPS_ZERO = 1e-12       # For "is this zero?"
EPS_CLOSE = 1e-10      # For "are these equal?" (positions derived from the same inputs)

# Face classification
MANTISSA_BITS = 7      # Significant bits kept when quantizing a signature value
# Two faces are congruent iff their quantized signatures match exactly.
# 7 bits ≈ 2 significant decimal digits: coarse enough to absorb rounding error
# accumulated over several operator applications, fine enough to separate
# faces of different shape on the meshes we generate.

# Builder index space
MAX_VERTEX_COUNT = 2**32 - 1   # Output indices are 32-bit unsigned (render index buffers)

# Operator defaults
DEFAULT_APEX_SCALE = 0.1       # kis apex height as a fraction of mean centroid distance
DEFAULT_EDGE_LENGTH = 2.0      # Seed edge length used by scripts and notation helpers

# Texture atlas
ATLAS_GRID = 8         # Atlas is ATLAS_GRID × ATLAS_GRID cells, one per face class
# Class ids >= ATLAS_GRID**2 fall outside [0, 1] texture space.

# Geometry constants (derived, not arbitrary)
SQRT2 = 1.4142135623730951
SQRT5 = 2.23606797749979
GOLDEN_RATIO = (1.0 + SQRT5) / 2.0

# Complex type constants
# Every mesh produced here is a closed 2-manifold: each edge bounds 2 faces.
COMPLEX_SURFACE = "surface"
FACES_PER_EDGE = {
    COMPLEX_SURFACE: 2,
}

# =============================================================================
# INCIDENCE CONVENTIONS
# =============================================================================
#
# BOUNDARY OPERATORS:
#   d₀: C⁰ → C¹  (V → E)     shape: (E, V)
#   d₁: C¹ → C²  (E → F)     shape: (F, E)
#
# Edge (i, j) is stored with i < j; i is its source, j its target.
#   d₁[f, e] = +1 if face f traverses edge e as i → j
#   d₁[f, e] = -1 if face f traverses edge e as j → i
#
# CLOSED, CONSISTENTLY WOUND SURFACE:
#   Every column of d₁ has exactly two non-zeros, +1 and -1.
#   Column sums vanish ⇔ adjacent faces traverse their shared edge in
#   opposite directions.
#
# EULER:
#   χ = V - E + F = 2 for every mesh reachable from a Platonic seed.
#
